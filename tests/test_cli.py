import sys

import pytest

from afaq_portal import cli


def test_help_prints_usage(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "_load_env", lambda: None)
    monkeypatch.setattr(sys, "argv", ["afaq-portal", "--help"])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 0
    assert "upload [--external]" in capsys.readouterr().out


def test_unknown_command_exits_with_error(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "_load_env", lambda: None)
    monkeypatch.setattr(sys, "argv", ["afaq-portal", "teleport"])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 1
    assert "Unknown command 'teleport'" in capsys.readouterr().err


def test_missing_base_url_exits(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "_load_env", lambda: None)
    monkeypatch.delenv("AFAQ_BASE_URL", raising=False)
    monkeypatch.setattr(sys, "argv", ["afaq-portal", "levels"])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 1
    assert "AFAQ_BASE_URL" in capsys.readouterr().err


def test_options_splits_flags_values_and_positionals() -> None:
    options, positionals = cli._options(
        ["--external", "a.png", "--folder", "plans", "b.png"],
        flags=("--external",),
        valued=("--folder",),
    )
    assert options == {"--external": True, "--folder": ["plans"]}
    assert positionals == ["a.png", "b.png"]

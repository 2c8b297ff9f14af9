import pytest

from afaq_portal.i18n import (
    LANGUAGES,
    TRANSLATIONS,
    LanguageContext,
    interpolate,
    normalize_language,
    translate,
)


def test_both_locales_define_the_same_keys() -> None:
    assert set(TRANSLATIONS["en"]) == set(TRANSLATIONS["ar"])


@pytest.mark.parametrize("locale", ["en", "ar"])
def test_every_value_is_non_empty(locale: str) -> None:
    empty = [key for key, value in TRANSLATIONS[locale].items() if not value.strip()]
    assert empty == []


def test_supported_languages() -> None:
    assert set(LANGUAGES) == {"en", "ar"}


def test_missing_key_returns_the_key() -> None:
    assert translate("no.such.key", "en") == "no.such.key"
    assert translate("no.such.key", "ar") == "no.such.key"


def test_unknown_locale_falls_back_to_english() -> None:
    assert translate("loading", "fr") == TRANSLATIONS["en"]["loading"]


def test_normalize_language() -> None:
    assert normalize_language("ar") == "ar"
    assert normalize_language("ar-SA") == "ar"
    assert normalize_language("EN") == "en"
    assert normalize_language("de") == "en"
    assert normalize_language(None) == "en"


def test_interpolate_replaces_known_placeholders() -> None:
    assert interpolate("{count} files uploaded successfully", {"count": 2}) == "2 files uploaded successfully"
    assert interpolate("Grades {min}-{max}", {"min": 1, "max": 3}) == "Grades 1-3"


def test_interpolate_leaves_unknown_placeholders() -> None:
    assert interpolate("Week {number}", {}) == "Week {number}"
    assert interpolate("Week {number}", {"number": None}) == "Week {number}"
    assert interpolate("no placeholders", {"x": 1}) == "no placeholders"


def test_interpolate_keeps_placeholder_for_empty_values() -> None:
    assert interpolate("Welcome back, {name}!", {"name": ""}) == "Welcome back, {name}!"
    assert interpolate("{count} lessons", {"count": 0}) == "0 lessons"


def test_context_translates_and_switches_direction() -> None:
    context = LanguageContext("en")
    assert context.direction == "ltr"
    assert context.t("upload.success.count", count=3) == "3 files uploaded successfully"

    context.set_language("ar")
    assert context.language == "ar"
    assert context.direction == "rtl"
    assert context.t("loading") == TRANSLATIONS["ar"]["loading"]


def test_toggle_and_subscribers() -> None:
    context = LanguageContext()
    seen: list[str] = []
    unsubscribe = context.subscribe(seen.append)

    assert context.toggle() == "ar"
    context.set_language("ar")  # unchanged, no notification
    assert context.toggle() == "en"
    assert seen == ["ar", "en"]

    unsubscribe()
    context.toggle()
    assert seen == ["ar", "en"]


def test_pick_prefers_arabic_only_when_present() -> None:
    context = LanguageContext("ar")
    assert context.pick("Bridge", "جسر") == "جسر"
    assert context.pick("Bridge", "") == "Bridge"
    context.set_language("en")
    assert context.pick("Bridge", "جسر") == "Bridge"

import pytest

from afaq_portal.animation import carousel_index, counter_value


@pytest.mark.parametrize(
    ("elapsed_ms", "expected"),
    [(0, 0), (15, 0), (16, 1), (1000, 62), (2000, 125), (5000, 125)],
)
def test_counter_reaches_target_after_duration(elapsed_ms: int, expected: int) -> None:
    assert counter_value(125, elapsed_ms) == expected


def test_counter_never_overshoots() -> None:
    assert counter_value(7, 1999) <= 7
    assert counter_value(7, 10_000) == 7


def test_counter_with_zero_target() -> None:
    assert counter_value(0, 500) == 0


def test_carousel_advances_every_interval() -> None:
    assert carousel_index(0, 3) == 0
    assert carousel_index(4999, 3) == 0
    assert carousel_index(5000, 3) == 1
    assert carousel_index(15000, 3) == 0
    assert carousel_index(1000, 0) == 0

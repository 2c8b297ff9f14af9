"""Counter and carousel animation as functions of elapsed time."""

COUNTER_DURATION_MS = 2000
COUNTER_TICK_MS = 16
CAROUSEL_INTERVAL_MS = 5000


def counter_value(
    target: int,
    elapsed_ms: float,
    duration_ms: int = COUNTER_DURATION_MS,
    tick_ms: int = COUNTER_TICK_MS,
) -> int:
    """Value displayed by a count-up animation after ``elapsed_ms``.

    The counter advances by ``target / (duration / tick)`` once per tick and
    snaps to ``target`` as soon as it would reach or pass it.
    """
    if target <= 0:
        return max(target, 0)
    if elapsed_ms <= 0:
        return 0
    ticks = int(elapsed_ms // tick_ms)
    increment = target / (duration_ms / tick_ms)
    current = increment * ticks
    if current >= target:
        return target
    return int(current)


def carousel_index(
    elapsed_ms: float, count: int, interval_ms: int = CAROUSEL_INTERVAL_MS
) -> int:
    """Index of the slide shown by an auto-advancing carousel."""
    if count <= 0:
        return 0
    return int(max(elapsed_ms, 0) // interval_ms) % count

import time
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


def wait_for_object(
    lookup: Callable[[], T | None],
    max_attempts: int = 40,
    poll_interval_seconds: float = 0.05,
) -> T | None:
    """Poll *lookup* until it returns a value or the attempts run out.

    Returns None on timeout; the caller decides whether that is fatal.
    """
    for attempt in range(max_attempts):
        value = lookup()
        if value is not None:
            return value
        if attempt + 1 < max_attempts:
            time.sleep(poll_interval_seconds)
    return None

# bounded retry policy shared by every completion call site
# attempts are counted, not timed; callers impose their own outer timeout

import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetriesExhausted(Exception):
    """no attempt produced an acceptable result"""

    def __init__(self, attempts: int, last_result: Any = None):
        super().__init__(f"No acceptable result after {attempts} attempts")
        self.attempts = attempts
        self.last_result = last_result


def non_empty_text(text: Any) -> bool:
    return isinstance(text, str) and bool(text.strip())


async def attempt(
    fn: Callable[[], Awaitable[T]],
    max_attempts: int,
    accept: Callable[[T], bool],
    label: str = "operation",
) -> T:
    """run fn up to max_attempts times, returning the first result accept() likes.
    exceptions from fn propagate unchanged; raises RetriesExhausted otherwise."""
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    result = None
    for number in range(1, max_attempts + 1):
        result = await fn()
        if accept(result):
            if number > 1:
                logger.info(f"{label} succeeded on attempt {number}/{max_attempts}")
            return result
        logger.warning(f"{label} attempt {number}/{max_attempts} returned an unacceptable result")

    raise RetriesExhausted(max_attempts, result)

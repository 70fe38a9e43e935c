import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from classify_api.core.models import AttemptOutcome

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]
Backoff = Callable[[int], float]


def linear_backoff(step_seconds: float) -> Backoff:
    """
    Delay grows by a fixed step per attempt: attempt 1 -> step, attempt 2 -> 2 * step.
    """

    def backoff(attempt: int) -> float:
        return step_seconds * attempt

    return backoff


async def retry_with_backoff(
    operation: Callable[[int], Awaitable[AttemptOutcome[T]]],
    max_attempts: int,
    backoff: Backoff,
    sleep: Sleep = asyncio.sleep,
    on_failure: Optional[Callable[[int, AttemptOutcome[T]], None]] = None,
) -> AttemptOutcome[T]:
    """
    Runs `operation` until it reports success or the attempts are exhausted.

    Args:
        operation: Coroutine factory receiving the 1-based attempt number.
        max_attempts (int): Upper bound on calls to `operation`.
        backoff: Maps the failed attempt number to a delay in seconds.
        sleep: Awaitable delay, replaceable in tests.
        on_failure: Called after every failed attempt, before any delay.

    Returns:
        AttemptOutcome: The first successful outcome, or the last failure.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    outcome: AttemptOutcome[T] = AttemptOutcome()
    for attempt in range(1, max_attempts + 1):
        outcome = await operation(attempt)
        if outcome.ok:
            return outcome

        if on_failure is not None:
            on_failure(attempt, outcome)

        if attempt < max_attempts:
            await sleep(backoff(attempt))

    return outcome

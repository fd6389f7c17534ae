"""Bounded retry of Result-returning operations.

Attempts run strictly one after another with no delay between them. The
first Ok wins; if every attempt fails, the errors are gathered, in attempt
order, into a single RetryError.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from fallible._config import get_config
from fallible._logging import get_logger
from fallible.errors import RetryError
from fallible.result import Err, Ok

__all__ = ['retry', 'retry_async']

log = get_logger(__name__)


def _attempt_budget(max_attempts: int | None) -> int:
    if max_attempts is None:
        return get_config().default_max_attempts
    if max_attempts < 0:
        msg = f'max_attempts must be >= 0, got {max_attempts}'
        raise ValueError(msg)
    return max_attempts


def _record[T](outcome: Ok[T] | Err[Any], attempt: int, budget: int, errors: list[Any]) -> Ok[T] | None:
    """Return the outcome if it is Ok, otherwise log and store its error."""
    match outcome:
        case Ok():
            if errors:
                log.debug('retry_succeeded', attempt=attempt, failures=len(errors))
            return outcome
        case Err(error=err):
            errors.append(err)
            log.debug('retry_attempt_failed', attempt=attempt, max_attempts=budget, error=err)
            return None
        case _:
            msg = f'retried operation must return Ok or Err, got {type(outcome).__name__}'
            raise TypeError(msg)


def _exhausted(budget: int, errors: list[Any]) -> Err[RetryError]:
    log.info('retry_exhausted', max_attempts=budget)
    return Err(RetryError(budget, errors))


def retry[T](
    fn: Callable[[], Ok[T] | Err[Any]],
    max_attempts: int | None = None,
) -> Ok[T] | Err[RetryError]:
    """Call fn until it returns Ok, at most max_attempts times.

    Args:
        fn: Zero-argument callable returning a Result.
        max_attempts: Attempt budget. None uses the configured default.
            Zero means fn is never called.

    Returns:
        The first Ok returned by fn, or Err(RetryError) holding every
        attempt's error in order.

    Raises:
        ValueError: If max_attempts is negative.
        TypeError: If fn returns something other than Ok or Err.

    Examples:
        >>> retry(lambda: Ok(1), 3)
        Ok(value=1)
        >>> retry(lambda: Err('no'), 2).error.errors
        ('no', 'no')
    """
    budget = _attempt_budget(max_attempts)
    errors: list[Any] = []
    for attempt in range(1, budget + 1):
        success = _record(fn(), attempt, budget, errors)
        if success is not None:
            return success
    return _exhausted(budget, errors)


async def retry_async[T](
    fn: Callable[[], Awaitable[Ok[T] | Err[Any]]],
    max_attempts: int | None = None,
) -> Ok[T] | Err[RetryError]:
    """Async counterpart of retry(); each attempt is awaited before the next starts.

    Args:
        fn: Zero-argument callable returning an awaitable Result.
        max_attempts: Attempt budget. None uses the configured default.

    Returns:
        The first Ok produced, or Err(RetryError) holding every attempt's error.
    """
    budget = _attempt_budget(max_attempts)
    errors: list[Any] = []
    for attempt in range(1, budget + 1):
        success = _record(await fn(), attempt, budget, errors)
        if success is not None:
            return success
    return _exhausted(budget, errors)

"""Error types raised or carried by fallible containers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

__all__ = [
    'RetryError',
    'ShapeError',
    'UnwrapError',
    'WrappedError',
    'as_exception',
]


class RetryError(Exception):
    """Every attempt of a retried operation failed.

    Carries the error of each failed attempt, in attempt order, as the
    exact objects the attempts returned.

    Attributes:
        name: Fixed identifier for this kind of failure.
        max_attempts: The attempt budget that was exhausted.
        errors: One error per failed attempt, oldest first.

    Examples:
        >>> err = RetryError(2, [ValueError('a'), ValueError('b')])
        >>> err.message
        'Failed after 2 attempts.'
        >>> len(err.errors)
        2
    """

    name = 'Result Retry Error'

    def __init__(self, max_attempts: int, errors: Iterable[Any] = ()) -> None:
        self.max_attempts = max_attempts
        self.errors: tuple[Any, ...] = tuple(errors)
        super().__init__(f'Failed after {max_attempts} attempts.')

    @property
    def message(self) -> str:
        """The human readable failure message."""
        return str(self)


class ShapeError(ValueError):
    """A raw shape did not describe exactly one container variant."""

    def __init__(self, kind: str, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f'Invalid {kind} shape: {detail}')


class UnwrapError(RuntimeError):
    """unwrap() was called on an empty Optional."""

    def __init__(self) -> None:
        super().__init__('Called unwrap on Nothing')


class WrappedError(Exception):
    """Generic exception standing in for a non-exception error payload.

    The message is ``str(payload)``; the original object stays reachable
    through ``payload``.
    """

    def __init__(self, payload: Any) -> None:
        self.payload = payload
        super().__init__(str(payload))


def as_exception(value: Any) -> BaseException:
    """Normalize an error payload into an exception.

    Exceptions are returned as-is so their type and identity survive.
    Anything else becomes a WrappedError whose message is the value's
    string form.

    Args:
        value: Any error payload.

    Returns:
        BaseException: ``value`` itself or a WrappedError around it.
    """
    if isinstance(value, BaseException):
        return value
    return WrappedError(value)

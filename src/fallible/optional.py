"""Optional type: Some[T] | Nothing for values that may be absent.

``Some(None)`` is a present value; absence is only ever the ``Nothing``
singleton.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, TypeIs

import msgspec
import wrapt

from fallible.errors import ShapeError, UnwrapError

if TYPE_CHECKING:
    from fallible.result import Err, Ok

__all__ = [
    'Nothing',
    'NothingType',
    'Optional',
    'Some',
    'from_',
    'from_async',
    'from_shape',
    'none',
    'some',
    'wrap',
    'wrap_async',
]


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Optional containing a value of type T.

    Examples:
        >>> Some(42).map(lambda x: x * 2)
        Some(value=84)
        >>> Some(None).is_some()
        True
    """

    type_tag: ClassVar[str] = 'Optional'

    value: T

    def __iter__(self) -> Iterator[T]:
        """Yield the contained value once.

        ``[value] = opt`` only unpacks Some; use ``next(iter(opt), None)``
        to get None in place of a missing value.
        """
        yield self.value

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True if the option is Some.

        After checking is_some(), the type checker knows the option is Some[T].
        """
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def value_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the default."""
        return self.value

    def map[U](self, fn: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            fn: Function to apply to the Some value.

        Returns:
            Some containing the result of applying fn to the value.
        """
        return Some(fn(self.value))

    def and_then[U](self, fn: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Apply a function that returns an Optional to the contained value.

        Args:
            fn: Function that takes T and returns Optional[U].

        Returns:
            The Optional returned by fn.
        """
        return fn(self.value)

    def or_else(self, _fn: Callable[[], Any]) -> Some[T]:
        """Return self unchanged since this is Some."""
        return self

    def match[R](self, *, on_some: Callable[[T], R], on_none: Callable[[], R]) -> R:  # noqa: ARG002
        """Call on_some with the contained value and return its result."""
        return on_some(self.value)

    def ok_or(self, _err: Any) -> Ok[T]:
        """Convert to Result, returning Ok(value)."""
        from fallible.result import Ok

        return Ok(self.value)

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Optional representing absence of a value.

    Use the ``Nothing`` singleton (or ``none()``) instead of instantiating
    directly; every instance compares equal anyway.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.value_or(0)
        0
    """

    type_tag: ClassVar[str] = 'Optional'

    def __iter__(self) -> Iterator[Any]:
        """Yield nothing.

        Unpacking Nothing into a fixed number of names raises ValueError;
        ``next(iter(opt), None)`` returns None instead.
        """
        return iter(())

    def is_some(self) -> TypeIs[Some[Any]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True since this is Nothing."""
        return True

    def value_or[T](self, default: T) -> T:
        """Return the default value since this is Nothing."""
        return default

    def map(self, _fn: Callable[[Any], Any]) -> NothingType:
        """Return Nothing since there's no value to map."""
        return self

    def and_then(self, _fn: Callable[[Any], Any]) -> NothingType:
        """Return Nothing since there's no value to bind."""
        return self

    def or_else[T](self, fn: Callable[[], Some[T] | NothingType]) -> Some[T] | NothingType:
        """Apply a recovery function since this is Nothing.

        Args:
            fn: Zero-argument function that returns a new Optional.

        Returns:
            The Optional returned by fn.
        """
        return fn()

    def match[R](self, *, on_some: Callable[[Any], R], on_none: Callable[[], R]) -> R:  # noqa: ARG002
        """Call on_none and return its result."""
        return on_none()

    def ok_or[E](self, err: E) -> Err[E]:
        """Convert to Result, returning Err(err)."""
        from fallible.result import Err

        return Err(err)

    def unwrap(self) -> Any:
        """Raise UnwrapError since there is no value."""
        raise UnwrapError


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


type Optional[T] = Some[T] | NothingType


def some[T](value: T) -> Some[T]:
    """Wrap a value, ``None`` included, in Some."""
    return Some(value)


def none() -> NothingType:
    """Return the Nothing singleton."""
    return Nothing


def _from_value[T](value: T | None) -> Some[T] | NothingType:
    return Nothing if value is None else Some(value)


def from_[T](fn: Callable[[], T | None]) -> Some[T] | NothingType:
    """Call fn and wrap a ``None`` return as Nothing, anything else as Some.

    Exceptions raised by fn propagate.

    Examples:
        >>> from_(lambda: {'a': 1}.get('a'))
        Some(value=1)
        >>> from_(lambda: {'a': 1}.get('b'))
        NothingType()
    """
    return _from_value(fn())


async def from_async[T](fn: Callable[[], Awaitable[T | None]]) -> Some[T] | NothingType:
    """Await fn() once and apply the from_() rule to the resolved value."""
    return _from_value(await fn())


class _OptionalShape(msgspec.Struct, forbid_unknown_fields=True):
    some: Any = msgspec.UNSET
    none: Any = msgspec.UNSET


def from_shape(shape: Mapping[str, Any]) -> Some[Any] | NothingType:
    """Build an Optional from a raw mapping with exactly one of 'some' / 'none'.

    The value under 'none' is ignored.

    Raises:
        ShapeError: If the mapping sets neither or both keys, has unknown
            keys, or is not a mapping at all.
    """
    try:
        raw = msgspec.convert(shape, _OptionalShape)
    except msgspec.ValidationError as exc:
        raise ShapeError('Optional', str(exc)) from exc

    has_some = raw.some is not msgspec.UNSET
    if has_some == (raw.none is not msgspec.UNSET):
        raise ShapeError('Optional', "exactly one of 'some' or 'none' must be set")
    return Some(raw.some) if has_some else Nothing


@wrapt.decorator
def wrap(
    wrapped: Callable[..., Any],
    instance: Any,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Some[Any] | NothingType:
    """Decorator turning a function that may return None into one returning Optional.

    Example:
        ```python
        @optional.wrap
        def find_user(name: str) -> User | None: ...

        find_user('ada').map(lambda u: u.email).value_or('')
        ```
    """
    return _from_value(wrapped(*args, **kwargs))


@wrapt.decorator
async def wrap_async(
    wrapped: Callable[..., Awaitable[Any]],
    instance: Any,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Some[Any] | NothingType:
    """Async counterpart of wrap()."""
    return _from_value(await wrapped(*args, **kwargs))

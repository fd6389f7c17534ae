"""Result type: Ok[T] | Err[E] for explicit error handling.

Factories:
    ok, error: build a variant directly.
    of, of_async: run a (possibly async) computation and capture its outcome.
    from_shape: validated construction from a raw ``{'ok': ...}`` or
        ``{'error': ...}`` mapping.
    wrap, wrap_async: decorators applying ``of`` semantics to a function.
    retry, retry_async: bounded retry of a Result-returning operation.

Example:
    ```python
    from fallible import result

    parsed = result.of(lambda: int('42'))
    parsed.map(lambda n: n + 1).value_or(0)  # 43

    result.of(lambda: int('nope')).is_error()  # True
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, NoReturn, TypeIs, overload

import msgspec
import wrapt

from fallible.errors import ShapeError, as_exception

if TYPE_CHECKING:
    from fallible.errors import RetryError
    from fallible.optional import NothingType, Some

__all__ = [
    'Err',
    'Ok',
    'Result',
    'error',
    'from_shape',
    'of',
    'of_async',
    'ok',
    'retry',
    'retry_async',
    'wrap',
    'wrap_async',
]


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> Ok(42).map(lambda x: x * 2)
        Ok(value=84)
        >>> list(Ok('a'))
        ['a']
    """

    type_tag: ClassVar[str] = 'Result'

    value: T

    def __iter__(self) -> Iterator[T]:
        """Yield the contained value once.

        ``[value] = res`` only unpacks Ok; use ``next(iter(res), None)``
        to get None in place of a missing value.
        """
        yield self.value

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok.

        After checking is_ok(), the type checker knows the result is Ok[T].
        """
        return True

    def is_error(self) -> TypeIs[Err[Any]]:
        """Return False since this is Ok."""
        return False

    def value_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the default."""
        return self.value

    def error_or[E](self, default: E) -> E:
        """Return the default since there is no error."""
        return default

    def map[U](self, fn: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            fn: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying fn to the value.
        """
        return Ok(fn(self.value))

    def map_err(self, _fn: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def and_then[U, E](self, fn: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Apply a function that returns a Result to the contained value.

        Also known as flatmap or bind.

        Args:
            fn: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by fn.
        """
        return fn(self.value)

    def or_else(self, _fn: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def match[R](self, *, on_ok: Callable[[T], R], on_error: Callable[[Any], R]) -> R:  # noqa: ARG002
        """Call on_ok with the contained value and return its result."""
        return on_ok(self.value)

    def to_optional(self) -> Some[T]:
        """Convert to Optional, returning Some(value)."""
        from fallible.optional import Some

        return Some(self.value)

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    Examples:
        >>> Err('boom').value_or(0)
        0
        >>> list(Err('boom'))
        []
    """

    type_tag: ClassVar[str] = 'Result'

    error: E

    def __iter__(self) -> Iterator[Any]:
        """Yield nothing.

        Unpacking an Err into a fixed number of names raises ValueError;
        ``next(iter(res), None)`` returns None instead.
        """
        return iter(())

    def is_ok(self) -> TypeIs[Ok[Any]]:
        """Return False since this is Err."""
        return False

    def is_error(self) -> TypeIs[Err[E]]:
        """Return True if the result is Err.

        After checking is_error(), the type checker knows the result is Err[E].
        """
        return True

    def value_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def error_or(self, default: E) -> E:  # noqa: ARG002
        """Return the contained error, ignoring the default."""
        return self.error

    def map(self, _fn: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, fn: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            fn: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(fn(self.error))

    def and_then(self, _fn: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def or_else[T, F](self, fn: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Apply a recovery function to the error.

        Args:
            fn: Function that takes the error and returns a new Result.

        Returns:
            The Result returned by fn.
        """
        return fn(self.error)

    def match[R](self, *, on_ok: Callable[[Any], R], on_error: Callable[[E], R]) -> R:  # noqa: ARG002
        """Call on_error with the contained error and return its result."""
        return on_error(self.error)

    def to_optional(self) -> NothingType:
        """Convert to Optional, returning Nothing since this is Err."""
        from fallible.optional import Nothing

        return Nothing

    def unwrap(self) -> NoReturn:
        """Raise the contained error.

        Non-exception errors are raised as a WrappedError carrying the
        original value.
        """
        raise as_exception(self.error)


type Result[T, E = Exception] = Ok[T] | Err[E]


def ok[T](value: T) -> Ok[T]:
    """Wrap a value, ``None`` included, in Ok."""
    return Ok(value)


def error[E](err: E) -> Err[E]:
    """Wrap an error in Err. The error is stored by reference."""
    return Err(err)


def of[T](fn: Callable[[], T]) -> Ok[T] | Err[Exception]:
    """Call fn and capture its outcome.

    Args:
        fn: Zero-argument callable.

    Returns:
        Ok with the return value, or Err with the raised exception itself.

    Examples:
        >>> of(lambda: 1 / 2)
        Ok(value=0.5)
        >>> of(lambda: 1 / 0).is_error()
        True
    """
    try:
        value = fn()
    except Exception as exc:
        return Err(exc)
    return Ok(value)


async def of_async[T](fn: Callable[[], Awaitable[T]]) -> Ok[T] | Err[Exception]:
    """Await fn() once and capture its outcome.

    Cancellation is not intercepted: CancelledError propagates to the caller.

    Args:
        fn: Zero-argument callable returning an awaitable.

    Returns:
        Ok with the resolved value, or Err with the raised exception itself.
    """
    try:
        value = await fn()
    except Exception as exc:
        return Err(exc)
    return Ok(value)


class _ResultShape(msgspec.Struct, forbid_unknown_fields=True):
    ok: Any = msgspec.UNSET
    error: Any = msgspec.UNSET


def from_shape(shape: Mapping[str, Any]) -> Ok[Any] | Err[Any]:
    """Build a Result from a raw mapping with exactly one of 'ok' / 'error'.

    Raises:
        ShapeError: If the mapping sets neither or both keys, has unknown
            keys, or is not a mapping at all.

    Examples:
        >>> from_shape({'ok': 1})
        Ok(value=1)
        >>> from_shape({})
        Traceback (most recent call last):
        ...
        fallible.errors.ShapeError: Invalid Result shape: exactly one of 'ok' or 'error' must be set
    """
    try:
        raw = msgspec.convert(shape, _ResultShape)
    except msgspec.ValidationError as exc:
        raise ShapeError('Result', str(exc)) from exc

    has_ok = raw.ok is not msgspec.UNSET
    if has_ok == (raw.error is not msgspec.UNSET):
        raise ShapeError('Result', "exactly one of 'ok' or 'error' must be set")
    return Ok(raw.ok) if has_ok else Err(raw.error)


@overload
def wrap[**P, T](func: Callable[P, T]) -> Callable[P, Ok[T] | Err[Exception]]: ...


@overload
def wrap[**P, T](
    func: None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, Ok[T] | Err[Any]]]: ...


def wrap[**P, T](
    func: Callable[P, T] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Decorator that returns Ok(value) or Err(exception) instead of raising.

    Can be used with or without arguments:
        @wrap
        def risky(): ...

        @wrap(exceptions=(ValueError, TypeError))
        def specific(): ...

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to catch. Defaults to (Exception,).

    Returns:
        A wrapped function that returns Result[T, E] instead of T.
    """
    catch = exceptions if exceptions is not None else (Exception,)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[T] | Err[Any]:
        try:
            value = wrapped(*args, **kwargs)
        except catch as exc:
            return Err(exc)
        return Ok(value)

    if func is not None:
        return wrapper(func)
    return wrapper


@overload
def wrap_async[**P, T](
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[Ok[T] | Err[Exception]]]: ...


@overload
def wrap_async[**P, T](
    func: None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[Ok[T] | Err[Any]]]]: ...


def wrap_async[**P, T](
    func: Callable[P, Awaitable[T]] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Async counterpart of wrap(): awaits the call once and captures the outcome.

    Args:
        func: The async function to wrap (when used without parentheses).
        exceptions: Tuple of exception types to catch. Defaults to (Exception,).

    Returns:
        A wrapped async function that returns Result[T, E] instead of T.
    """
    catch = exceptions if exceptions is not None else (Exception,)

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[T] | Err[Any]:
        try:
            value = await wrapped(*args, **kwargs)
        except catch as exc:
            return Err(exc)
        return Ok(value)

    if func is not None:
        return wrapper(func)
    return wrapper


def retry[T](
    fn: Callable[[], Ok[T] | Err[Any]],
    max_attempts: int | None = None,
) -> Ok[T] | Err[RetryError]:
    """Call fn until it returns Ok, at most max_attempts times.

    See ``fallible.retry.retry``.
    """
    from fallible.retry import retry as _retry

    return _retry(fn, max_attempts)


async def retry_async[T](
    fn: Callable[[], Awaitable[Ok[T] | Err[Any]]],
    max_attempts: int | None = None,
) -> Ok[T] | Err[RetryError]:
    """Async counterpart of retry(). See ``fallible.retry.retry_async``."""
    from fallible.retry import retry_async as _retry_async

    return await _retry_async(fn, max_attempts)

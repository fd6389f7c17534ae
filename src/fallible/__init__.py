"""fallible: Result and Optional containers for Python 3.13+.

Factory groups (preferred):
    from fallible import result, optional

    result.ok(1), result.error(exc), result.of(fn), await result.of_async(fn)
    result.retry(fn, 3)
    optional.some(1), optional.none(), optional.from_(fn), await optional.from_async(fn)

Flat imports:
    from fallible import Ok, Err, Result, Some, Nothing, Optional, RetryError
"""

from fallible import optional, result
from fallible._config import FallibleConfig, get_config, init
from fallible._logging import configure_logging, get_logger
from fallible.errors import (
    RetryError,
    ShapeError,
    UnwrapError,
    WrappedError,
    as_exception,
)
from fallible.optional import Nothing, NothingType, Optional, Some
from fallible.result import Err, Ok, Result
from fallible.retry import retry, retry_async

__all__ = [
    # Result types
    'Err',
    # Configuration
    'FallibleConfig',
    # Optional types
    'Nothing',
    'NothingType',
    'Ok',
    'Optional',
    'Result',
    # Errors
    'RetryError',
    'ShapeError',
    'Some',
    'UnwrapError',
    'WrappedError',
    'as_exception',
    # Logging
    'configure_logging',
    'get_config',
    'get_logger',
    'init',
    # Factory groups
    'optional',
    'result',
    # Retry
    'retry',
    'retry_async',
]

"""Package configuration: FallibleConfig, init() and get_config()."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from fallible._logging import configure_logging

__all__ = [
    'FallibleConfig',
    'get_config',
    'init',
]

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class FallibleConfig:
    """Configuration for fallible.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Render log events as JSON instead of console output.
        default_max_attempts: Attempt budget used by retry() when none is given.
    """

    log_level: str | None = None
    json_logs: bool = True
    default_max_attempts: int = 3


# Global configuration (set by init())
_config: FallibleConfig | None = None


def _detect_log_level() -> str | None:
    """Read FALLIBLE_LOG_LEVEL; unset or empty means silent."""
    level = os.environ.get('FALLIBLE_LOG_LEVEL', '').strip().upper()
    if not level:
        return None
    if not isinstance(logging.getLevelName(level), int):
        logging.getLogger(__name__).warning("Unknown FALLIBLE_LOG_LEVEL value '%s', logging stays silent", level)
        return None
    return level


def _detect_json_logs() -> bool:
    """Read FALLIBLE_JSON_LOGS, defaulting to JSON output."""
    raw = os.environ.get('FALLIBLE_JSON_LOGS', '').strip().lower()
    if raw in _FALSY:
        return False
    if raw and raw not in _TRUTHY:
        logging.getLogger(__name__).warning("Unknown FALLIBLE_JSON_LOGS value '%s', defaulting to JSON", raw)
    return True


def _detect_max_attempts() -> int:
    """Read FALLIBLE_MAX_ATTEMPTS, falling back to the dataclass default."""
    default = FallibleConfig.default_max_attempts
    raw = os.environ.get('FALLIBLE_MAX_ATTEMPTS', '').strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = -1
    if value < 0:
        logging.getLogger(__name__).warning("Invalid FALLIBLE_MAX_ATTEMPTS value '%s', defaulting to %d", raw, default)
        return default
    return value


def init(
    log_level: str | None = None,
    json_logs: bool | None = None,
    default_max_attempts: int | None = None,
) -> FallibleConfig:
    """Initialize fallible with the given configuration.

    Unset arguments are read from the environment (FALLIBLE_LOG_LEVEL,
    FALLIBLE_JSON_LOGS, FALLIBLE_MAX_ATTEMPTS).

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_logs: Emit JSON instead of console logs.
        default_max_attempts: Attempt budget for retry() calls without one.

    Returns:
        The FallibleConfig that was set.

    Raises:
        ValueError: If default_max_attempts is negative.

    Example:
        ```python
        import fallible

        fallible.init(log_level='DEBUG', default_max_attempts=5)
        ```
    """
    global _config  # noqa: PLW0603

    if default_max_attempts is None:
        default_max_attempts = _detect_max_attempts()
    elif default_max_attempts < 0:
        msg = f'default_max_attempts must be >= 0, got {default_max_attempts}'
        raise ValueError(msg)

    _config = FallibleConfig(
        log_level=log_level if log_level is not None else _detect_log_level(),
        json_logs=json_logs if json_logs is not None else _detect_json_logs(),
        default_max_attempts=default_max_attempts,
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_logs)

    return _config


def get_config() -> FallibleConfig:
    """Get the current configuration, initializing from the environment on first use.

    Returns:
        The current FallibleConfig.
    """
    if _config is None:
        return init()
    return _config

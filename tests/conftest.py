"""Pytest configuration and shared fixtures for fallible tests."""

import logging

import pytest


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from fallible import Ok

    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from fallible import Err

    return Err(ValueError('test error'))


@pytest.fixture
def sample_some():
    """Sample Some value for testing."""
    from fallible import Some

    return Some('hello')


@pytest.fixture
def sample_nothing():
    """Sample Nothing value for testing."""
    from fallible import Nothing

    return Nothing


@pytest.fixture
def fresh_config(monkeypatch):
    """Reset the global configuration and the package logger around a test."""
    from fallible import _config
    from fallible._logging import LOGGER_NAME, clear_log_hooks

    for var in ('FALLIBLE_LOG_LEVEL', 'FALLIBLE_JSON_LOGS', 'FALLIBLE_MAX_ATTEMPTS'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(_config, '_config', None)
    clear_log_hooks()

    package_logger = logging.getLogger(LOGGER_NAME)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    clear_log_hooks()
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate

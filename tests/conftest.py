"""Shared fixtures for capkit tests."""
import logging
import os

import pytest
import structlog

from capkit.config import reset_config_manager
from capkit.infrastructure.di import Composer
from capkit.infrastructure.registry import CapabilityRegistry, reset_capability_registry


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from CAPKIT_* variables, global singletons and logging setup."""
    for key in list(os.environ):
        if key.startswith("CAPKIT_"):
            monkeypatch.delenv(key, raising=False)

    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level

    reset_config_manager()
    reset_capability_registry()

    yield

    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()

    reset_config_manager()
    reset_capability_registry()


@pytest.fixture
def registry():
    """Empty last-wins registry."""
    return CapabilityRegistry()


@pytest.fixture
def composer(registry):
    return Composer(registry)

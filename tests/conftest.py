"""Shared test configuration and fixtures."""

import logging
import os
from collections.abc import Generator
from typing import Any

import pytest

from calendarparser.config.settings import ENV_PREFIX, reset_settings
from calendarparser.ics import ICSDataParser, ParserConfig


def pytest_configure(config: Any) -> None:
    """Register test markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "critical_path: Core functionality tests")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep settings, environment and package loggers independent between tests."""
    for key in list(os.environ):
        if key.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    reset_settings()

    yield

    reset_settings()
    package_logger = logging.getLogger("calendarparser")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def lenient_parser() -> ICSDataParser:
    """Parser that logs problems and keeps going."""
    return ICSDataParser(ParserConfig(halt_on_parse_errors=False))


@pytest.fixture
def strict_parser() -> ICSDataParser:
    """Parser that raises on the first problem."""
    return ICSDataParser(ParserConfig(halt_on_parse_errors=True))

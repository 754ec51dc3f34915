"""Pytest configuration for the Berlin Clock tests.

This module provides common fixtures and configuration for the test suite.
"""

import logging
from collections.abc import Generator

import pytest

from berlin_clock.cli.output import set_json_mode
from berlin_clock.utils.clock import FakeClock

# 2024-03-09 13:17:01 UTC
FIXED_TIMESTAMP = 1709990221.0


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests by directory and run unit tests before integration tests."""
    unit_tests = []
    integration_tests = []
    other_tests = []

    for item in items:
        test_path = str(item.path)
        if "/unit/" in test_path:
            unit_tests.append(item)
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            integration_tests.append(item)
            item.add_marker(pytest.mark.integration)
        else:
            other_tests.append(item)

    items[:] = unit_tests + integration_tests + other_tests


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Undo handler changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    set_json_mode(False)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock frozen at ``FIXED_TIMESTAMP``."""
    return FakeClock(FIXED_TIMESTAMP)

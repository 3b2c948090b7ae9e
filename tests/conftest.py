"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: tests against a live Jira site (local only)")


@pytest.fixture(autouse=True)
def reset_jirafield_logger() -> Iterator[None]:
    """Undo handlers/levels installed by setup_logging between tests."""
    logger = logging.getLogger("jirafield")
    yield
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)

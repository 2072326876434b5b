"""Shared fixtures for the daytime test suite."""

import logging
from collections.abc import Iterator

import pytest

# ``fake_clock`` and ``daytime_settings`` come from daytime's own pytest
# plugin.  pyproject.toml disables the installed entry point
# (``-p no:daytime``) so the plugin loads from here, after pytest-cov
# has started tracing the ``daytime`` package.
pytest_plugins = ["daytime.testing._plugin"]


def pytest_configure(config: pytest.Config) -> None:
    """Register the markers used by the suite."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture
def _restore_root_logger() -> Iterator[None]:
    """Undo ``configure_logging`` after tests of the CLI and formatters."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers
    root.setLevel(original_level)

"""Pytest plugin providing shared test fixtures for daytime.

Auto-registers ``fake_clock`` and ``daytime_settings`` fixtures for any test
suite that depends on daytime, via the ``pytest11`` entry point.

Imports are deferred into the fixture bodies so that daytime modules
are first imported while ``pytest-cov`` is tracing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from daytime._settings import Settings
    from daytime.testing._clock import FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    """FakeClock reading 2026-01-01 00:00:00."""
    from daytime.testing._clock import FakeClock

    return FakeClock()


@pytest.fixture
def daytime_settings() -> Settings:
    """Settings with model defaults, isolated from env and ``.env``."""
    from daytime.testing._settings import make_settings

    return make_settings()

"""Unit tests for daytime._clock — clock port and system adapter.

Test Techniques Used:
    - Specification-based Testing: Verifying ClockPort protocol
      contract
    - Protocol Conformance: isinstance checks for structural
      subtyping
"""

from __future__ import annotations

from datetime import datetime

from daytime._clock import ClockPort, SystemClock
from daytime.testing import FakeClock
from tests.fixtures.clock import FixedClock


class TestSystemClock:
    """Tests for SystemClock production implementation.

    Technique: Specification-based Testing — verifying public
    contract.
    """

    def test_satisfies_clock_port_protocol(self) -> None:
        """SystemClock is recognized as ClockPort."""
        assert isinstance(SystemClock(), ClockPort)

    def test_now_returns_naive_datetime(self) -> None:
        """now() returns a local, naive datetime."""
        result = SystemClock().now()
        assert isinstance(result, datetime)
        assert result.tzinfo is None


class TestClockPortProtocol:
    """Tests for ClockPort protocol definition.

    Technique: Protocol Conformance — structural subtyping checks.
    """

    def test_fake_clock_satisfies_protocol(self) -> None:
        assert isinstance(FakeClock(), ClockPort)

    def test_fixture_clock_satisfies_protocol(self) -> None:
        assert isinstance(FixedClock(datetime(2026, 1, 1)), ClockPort)

    def test_class_without_now_does_not_satisfy(self) -> None:
        """A class without now() does not satisfy ClockPort."""

        class NotAClock:
            pass

        assert not isinstance(NotAClock(), ClockPort)

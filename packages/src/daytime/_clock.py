"""Wall-clock port and system adapter.

Provides ClockPort (Protocol) and SystemClock for reading the current
local time of day.

Unlike a monotonic clock, a wall clock can jump (NTP, DST, manual
changes).  That is the point here: :meth:`Time.now` and the
``clock_resolvers`` render what a person would read off a clock face.
Tests inject a fixed clock for reproducible output.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Wall clock returning the current local date and time.

    Only the time-of-day portion of the result is used by daytime;
    date and tzinfo are ignored.
    """

    def now(self) -> datetime:
        """Return the current wall-clock reading."""
        ...


class SystemClock:
    """Production clock wrapping ``datetime.now()``.

    Satisfies :class:`ClockPort` via structural subtyping (PEP 544).

    Usage::

        clock = SystemClock()
        Time.now(clock)
    """

    def now(self) -> datetime:
        """Return the current local date and time."""
        return datetime.now()

"""Immutable time-of-day value type.

A :class:`Time` is a wall-clock reading with no date and no timezone,
precise to the microsecond::

    hour:minute:second.millisecond microsecond
     0-23  0-59   0-59      0-999       0-999

Internally every operation reduces to the *microsecond total* since
midnight, which always lies in ``[0, 86_399_999_999]``.  Arithmetic
never wraps past midnight; results outside that range raise
:class:`TimeRangeError`.  Callers needing wrap-around apply modular
arithmetic themselves::

    Time.from_microseconds((t.to_microseconds() + n) % MICROSECONDS_PER_DAY)

Durations are :class:`datetime.timedelta`, whose microsecond
resolution matches ours exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import ClassVar

from daytime._clock import ClockPort, SystemClock
from daytime._errors import InvalidFieldError, TimeRangeError
from daytime._formatter import ResolverRegistry, format_pattern, time_resolvers

logger = logging.getLogger(__name__)

MICROSECONDS_PER_MILLISECOND = 1_000
MICROSECONDS_PER_SECOND = 1_000_000
MICROSECONDS_PER_MINUTE = 60_000_000
MICROSECONDS_PER_HOUR = 3_600_000_000
MICROSECONDS_PER_DAY = 86_400_000_000

MILLISECONDS_PER_SECOND = 1_000
MILLISECONDS_PER_MINUTE = 60_000
MILLISECONDS_PER_HOUR = 3_600_000

_MAX_MICROSECONDS = MICROSECONDS_PER_DAY - 1
_ONE_MICROSECOND = timedelta(microseconds=1)

# (field, exclusive upper bound) in significance order
_FIELDS: tuple[tuple[str, int], ...] = (
    ("hour", 24),
    ("minute", 60),
    ("second", 60),
    ("millisecond", 1000),
    ("microsecond", 1000),
)


def _check_field(name: str, value: object, upper: int) -> None:
    # bool is an int subclass but never a meaningful clock field
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldError(name, value, 0, upper)
    if not 0 <= value < upper:
        raise InvalidFieldError(name, value, 0, upper)


def _duration_microseconds(duration: object) -> int:
    if not isinstance(duration, timedelta):
        msg = f"duration must be a timedelta, got {type(duration).__name__}"
        raise TypeError(msg)
    return duration // _ONE_MICROSECOND


@dataclass(frozen=True, slots=True, eq=False)
class Time:
    """A time of day, independent of date and timezone.

    Construction validates every field; there is no way to obtain an
    invalid instance.  Instances are immutable and hashable, ordered
    first by hour, then minute, second, millisecond and microsecond.

    Args:
        hour: 0-23.
        minute: 0-59.
        second: 0-59.
        millisecond: 0-999.
        microsecond: 0-999.

    Raises:
        InvalidFieldError: If a field is not an ``int`` or is out of
            range.  The error names the field and the value.

    Example::

        >>> t = Time(9, 5, 3)
        >>> str(t)
        '09:05:03.000000'
        >>> t.format("H:mm")
        '9:05'
    """

    MIN: ClassVar[Time]
    NOON: ClassVar[Time]
    MAX: ClassVar[Time]

    hour: int
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    microsecond: int = 0

    def __post_init__(self) -> None:
        for name, upper in _FIELDS:
            _check_field(name, getattr(self, name), upper)

    # -- Alternate constructors ----------------------------------------------

    @classmethod
    def from_microseconds(cls, value: int) -> Time:
        """Rebuild a time from a microsecond total since midnight.

        Raises:
            TimeRangeError: If *value* is outside ``[0, 86_399_999_999]``.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"value must be an int, got {type(value).__name__}"
            raise TypeError(msg)
        if not 0 <= value <= _MAX_MICROSECONDS:
            raise TimeRangeError(value, _MAX_MICROSECONDS)

        value, microsecond = divmod(value, 1000)
        value, millisecond = divmod(value, 1000)
        value, second = divmod(value, 60)
        hour, minute = divmod(value, 60)
        return cls(hour, minute, second, millisecond, microsecond)

    @classmethod
    def from_datetime(cls, value: datetime | time) -> Time:
        """Take the time of day from a ``datetime`` or ``datetime.time``.

        Date and tzinfo are discarded.
        """
        if not isinstance(value, (datetime, time)):
            msg = f"value must be a datetime or time, got {type(value).__name__}"
            raise TypeError(msg)
        millisecond, microsecond = divmod(value.microsecond, 1000)
        return cls(value.hour, value.minute, value.second, millisecond, microsecond)

    @classmethod
    def now(cls, clock: ClockPort | None = None) -> Time:
        """Return the current time of day read from *clock*.

        Defaults to :class:`SystemClock` (local time).
        """
        reading = (clock if clock is not None else SystemClock()).now()
        return cls.from_datetime(reading)

    # -- Conversions ---------------------------------------------------------

    def to_microseconds(self) -> int:
        """Microseconds since midnight."""
        return (
            self.hour * MICROSECONDS_PER_HOUR
            + self.minute * MICROSECONDS_PER_MINUTE
            + self.second * MICROSECONDS_PER_SECOND
            + self.millisecond * MICROSECONDS_PER_MILLISECOND
            + self.microsecond
        )

    def to_milliseconds(self) -> int:
        """Milliseconds since midnight; the microsecond field is dropped."""
        return (
            self.hour * MILLISECONDS_PER_HOUR
            + self.minute * MILLISECONDS_PER_MINUTE
            + self.second * MILLISECONDS_PER_SECOND
            + self.millisecond
        )

    def to_datetime_time(self) -> time:
        """Return the equivalent naive :class:`datetime.time`."""
        return time(
            self.hour,
            self.minute,
            self.second,
            self.millisecond * 1000 + self.microsecond,
        )

    # -- Arithmetic ----------------------------------------------------------

    def add(self, duration: timedelta) -> Time:
        """Return this time moved forward by *duration*.

        Raises:
            TimeRangeError: If the result would pass the end of the day
                (or, for a negative duration, its start).
            TypeError: If *duration* is not a ``timedelta``.
        """
        return self._adjust(_duration_microseconds(duration))

    def subtract(self, duration: timedelta) -> Time:
        """Return this time moved back by *duration*.

        Raises:
            TimeRangeError: If the result would precede midnight
                (or, for a negative duration, pass the end of the day).
            TypeError: If *duration* is not a ``timedelta``.
        """
        return self._adjust(-_duration_microseconds(duration))

    def _adjust(self, delta: int) -> Time:
        candidate = self.to_microseconds() + delta
        if not 0 <= candidate <= _MAX_MICROSECONDS:
            logger.debug("Rejected %s %+d µs: out of day range", self, delta)
            raise TimeRangeError(candidate, _MAX_MICROSECONDS)
        return Time.from_microseconds(candidate)

    def difference(self, other: Time) -> timedelta:
        """Signed span from *other* to this time.

        Positive when ``self`` is later than *other*.
        """
        if not isinstance(other, Time):
            msg = f"other must be a Time, got {type(other).__name__}"
            raise TypeError(msg)
        return timedelta(microseconds=self.to_microseconds() - other.to_microseconds())

    def __add__(self, other: object) -> Time:
        if not isinstance(other, timedelta):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: object) -> Time | timedelta:
        if isinstance(other, timedelta):
            return self.subtract(other)
        if isinstance(other, Time):
            return self.difference(other)
        return NotImplemented

    # -- Ordering ------------------------------------------------------------

    def _key(self) -> tuple[int, int, int, int, int]:
        return (self.hour, self.minute, self.second, self.millisecond, self.microsecond)

    def compare(self, other: Time) -> int:
        """Three-way comparison: -1, 0 or 1."""
        if not isinstance(other, Time):
            msg = f"cannot compare Time with {type(other).__name__}"
            raise TypeError(msg)
        mine, theirs = self._key(), other._key()
        return (mine > theirs) - (mine < theirs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        return hash(self.to_microseconds())

    # -- Rendering -----------------------------------------------------------

    def format(self, pattern: str = "", registry: ResolverRegistry | None = None) -> str:
        """Render this time according to *pattern*.

        By default the ``H``, ``m`` and ``s`` symbols read this
        instance's own fields.  Pass *registry* to use other resolvers,
        e.g. ``clock_resolvers(clock)`` to render the wall clock.

        Raises:
            UnknownSymbolError: If the pattern uses an unregistered letter.
            PatternSyntaxError: On an unterminated quoted literal.
        """
        if registry is None:
            registry = time_resolvers(lambda: self)
        return format_pattern(pattern, registry)

    def __str__(self) -> str:
        fraction = self.millisecond * 1000 + self.microsecond
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}.{fraction:06d}"


MIN = Time(0)
NOON = Time(12)
MAX = Time(23, 59, 59, 999, 999)

Time.MIN = MIN
Time.NOON = NOON
Time.MAX = MAX

"""Error taxonomy for daytime.

Every failure raised by the package derives from :class:`DaytimeError`
and carries a machine-readable ``error_type`` string, so callers can
branch on cause without string-matching messages.

Hierarchy::

    DaytimeError
    ├── InvalidFieldError      (also ValueError)     ← construction
    ├── TimeRangeError         (also OverflowError)  ← arithmetic
    ├── PatternSyntaxError     (also ValueError)     ← malformed quoting
    └── ConfigurationError                          ← resolver setup
        ├── UnknownSymbolError
        ├── DuplicateSymbolError
        └── InvalidSymbolError

The stdlib bases are kept so that code written against ``ValueError``
or ``OverflowError`` keeps working.
"""

from __future__ import annotations

from typing import ClassVar


class DaytimeError(Exception):
    """Base exception for all daytime errors."""

    error_type: ClassVar[str] = "error"


class InvalidFieldError(DaytimeError, ValueError):
    """A ``Time`` field is outside its legal half-open range.

    Attributes:
        field: Name of the offending field (``"hour"``, ``"minute"``, ...).
        value: The rejected value.
        lower: Inclusive lower bound of the field.
        upper: Exclusive upper bound of the field.
    """

    error_type: ClassVar[str] = "invalid_field"

    def __init__(self, field: str, value: object, lower: int, upper: int) -> None:
        self.field = field
        self.value = value
        self.lower = lower
        self.upper = upper
        super().__init__(
            f"Invalid {field}: {value!r}, {field} must be an integer "
            f"between {lower} and {upper - 1}"
        )


class TimeRangeError(DaytimeError, OverflowError):
    """Arithmetic would roll the time past midnight in either direction.

    Attributes:
        value: The candidate microsecond total that was rejected.
        direction: ``"overflow"`` when past the end of the day,
            ``"underflow"`` when before its start.
    """

    error_type: ClassVar[str] = "time_range"

    def __init__(self, value: int, upper: int) -> None:
        self.value = value
        self.direction = "underflow" if value < 0 else "overflow"
        super().__init__(
            f"Invalid resultant time: {value} microseconds ({self.direction}), "
            f"time must be between 0 and {upper} microseconds"
        )


class PatternSyntaxError(DaytimeError, ValueError):
    """A format pattern is malformed (e.g. an unterminated quote)."""

    error_type: ClassVar[str] = "pattern_syntax"

    def __init__(self, pattern: str, position: int, reason: str) -> None:
        self.pattern = pattern
        self.position = position
        super().__init__(f"{reason} at position {position} in pattern {pattern!r}")


class ConfigurationError(DaytimeError):
    """Formatter configuration problem."""

    error_type: ClassVar[str] = "configuration"


class UnknownSymbolError(ConfigurationError):
    """A pattern references a format letter with no registered resolver."""

    error_type: ClassVar[str] = "unknown_symbol"

    def __init__(self, symbol: str, pattern: str) -> None:
        self.symbol = symbol
        self.pattern = pattern
        super().__init__(
            f"No resolver found for symbol {symbol!r} in pattern {pattern!r}"
        )


class DuplicateSymbolError(ConfigurationError):
    """Two resolvers were registered under the same symbol."""

    error_type: ClassVar[str] = "duplicate_symbol"

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Resolver for symbol {symbol!r} registered twice")


class InvalidSymbolError(ConfigurationError):
    """A resolver symbol is not a single ASCII letter."""

    error_type: ClassVar[str] = "invalid_symbol"

    def __init__(self, symbol: object) -> None:
        self.symbol = symbol
        super().__init__(
            f"Resolver symbol must be a single ASCII letter, got {symbol!r}"
        )

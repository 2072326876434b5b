"""daytime.

An immutable, timezone-independent time-of-day value with arithmetic,
ordering, and symbol-pattern formatting.
"""

from importlib.metadata import PackageNotFoundError, version

from daytime._clock import ClockPort, SystemClock
from daytime._errors import (
    ConfigurationError,
    DaytimeError,
    DuplicateSymbolError,
    InvalidFieldError,
    InvalidSymbolError,
    PatternSyntaxError,
    TimeRangeError,
    UnknownSymbolError,
)
from daytime._formatter import (
    FormatResolver,
    ResolverRegistry,
    clock_resolvers,
    format_pattern,
    time_resolvers,
)
from daytime._logging import JsonFormatter, configure_logging
from daytime._settings import FormatSettings, LoggingSettings, Settings
from daytime._time import MAX, MIN, NOON, Time

try:
    # Prefer the generated version file (setuptools_scm at build time)
    from daytime._version import __version__
except ImportError:
    try:
        # Fallback to installed package metadata
        __version__ = version("daytime")
    except PackageNotFoundError:
        # Last resort fallback for editable installs without metadata
        __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Value type
    "MAX",
    "MIN",
    "NOON",
    "Time",
    # Formatting
    "FormatResolver",
    "ResolverRegistry",
    "clock_resolvers",
    "format_pattern",
    "time_resolvers",
    # Clock
    "ClockPort",
    "SystemClock",
    # Errors
    "ConfigurationError",
    "DaytimeError",
    "DuplicateSymbolError",
    "InvalidFieldError",
    "InvalidSymbolError",
    "PatternSyntaxError",
    "TimeRangeError",
    "UnknownSymbolError",
    # Logging
    "JsonFormatter",
    "configure_logging",
    # Settings
    "FormatSettings",
    "LoggingSettings",
    "Settings",
]

"""Symbol-driven pattern formatting.

A pattern is scanned for runs of one repeated ASCII letter (``HH``,
``m``, ``sss``).  Each run is handed to the :class:`FormatResolver`
registered under that letter, and the rendered fragment is spliced
back in place.  Everything else passes through verbatim.

Pattern grammar::

    HH:mm:ss        → 09:05:03
    H:m:s           → 9:5:3
    'at' HH.mm      → at 09.05     (quoted letters are literal)
    HH 'o''clock'   → 09 o'clock   ('' is one literal quote)

Built-in symbols:

    Symbol   Meaning                Presentation       Example
    ------   -------                ------------       -------
    H        hour in day (0~23)     (Number)           0
    m        minute in hour         (Number)           30
    s        second in minute       (Number)           55

A run of length 1 renders unpadded; a run of length *n* ≥ 2 renders
zero-padded to *n* digits.

Letters are reserved for symbols: an unquoted letter without a
registered resolver raises :class:`UnknownSymbolError` rather than
being copied through.

Registries are immutable.  Extend one with
:meth:`ResolverRegistry.extend`, which returns a new registry.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol

from daytime._clock import ClockPort
from daytime._errors import (
    DuplicateSymbolError,
    InvalidSymbolError,
    PatternSyntaxError,
    UnknownSymbolError,
)

logger = logging.getLogger(__name__)

_SYMBOL = re.compile(r"[A-Za-z]")
_RUN = re.compile(r"([A-Za-z])\1*")
_QUOTE = "'"

# ---------------------------------------------------------------------------
# Resolver model
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FormatResolver:
    """Rendering rule for one format letter.

    Args:
        symbol: A single ASCII letter.
        transform: Called with the matched run (e.g. ``"HH"``) and
            returns the rendered fragment.

    Raises:
        InvalidSymbolError: If *symbol* is not a single ASCII letter.
    """

    symbol: str
    transform: Callable[[str], str]

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, str) or not _SYMBOL.fullmatch(self.symbol):
            raise InvalidSymbolError(self.symbol)


class ResolverRegistry:
    """Immutable lookup table of resolvers keyed by symbol.

    Built once and passed explicitly to :func:`format_pattern`.  Safe
    for concurrent reads.

    Raises:
        DuplicateSymbolError: If two resolvers share a symbol.
    """

    __slots__ = ("_resolvers",)

    def __init__(self, resolvers: Iterable[FormatResolver] = ()) -> None:
        table: dict[str, FormatResolver] = {}
        for resolver in resolvers:
            if resolver.symbol in table:
                raise DuplicateSymbolError(resolver.symbol)
            table[resolver.symbol] = resolver
        self._resolvers: Mapping[str, FormatResolver] = MappingProxyType(table)
        logger.debug("Built resolver registry with symbols %r", self.symbols)

    @property
    def symbols(self) -> str:
        """Registered symbols in registration order."""
        return "".join(self._resolvers)

    def lookup(self, symbol: str, pattern: str = "") -> FormatResolver:
        """Return the resolver for *symbol*.

        Raises:
            UnknownSymbolError: If nothing is registered under *symbol*.
        """
        try:
            return self._resolvers[symbol]
        except KeyError:
            raise UnknownSymbolError(symbol, pattern) from None

    def extend(self, *resolvers: FormatResolver) -> ResolverRegistry:
        """Return a new registry with *resolvers* added after these."""
        return ResolverRegistry([*self._resolvers.values(), *resolvers])

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._resolvers

    def __iter__(self) -> Iterator[FormatResolver]:
        return iter(self._resolvers.values())

    def __len__(self) -> int:
        return len(self._resolvers)

    def __repr__(self) -> str:
        return f"ResolverRegistry(symbols={self.symbols!r})"


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Token:
    """One scanned piece of a pattern.

    ``is_symbol`` tokens are runs of one repeated letter; the others
    are literal text to copy verbatim.
    """

    text: str
    is_symbol: bool = False


def tokenize(pattern: str) -> Iterator[Token]:
    """Split *pattern* into symbol runs and literal text.

    Raises:
        PatternSyntaxError: On an unterminated quoted literal.
    """
    i = 0
    end = len(pattern)
    while i < end:
        char = pattern[i]
        if char == _QUOTE:
            literal, i = _read_quoted(pattern, i)
            yield Token(literal)
            continue
        run = _RUN.match(pattern, i)
        if run is not None:
            yield Token(run.group(0), is_symbol=True)
            i = run.end()
            continue
        yield Token(char)
        i += 1


def _read_quoted(pattern: str, start: int) -> tuple[str, int]:
    """Read a quoted section beginning at *start*.

    Returns the literal text and the index just past the section.
    """
    # '' outside a quoted section is one literal quote
    if pattern.startswith(_QUOTE * 2, start):
        return _QUOTE, start + 2

    chars: list[str] = []
    i = start + 1
    while i < len(pattern):
        if pattern[i] == _QUOTE:
            if pattern.startswith(_QUOTE * 2, i):
                chars.append(_QUOTE)
                i += 2
                continue
            return "".join(chars), i + 1
        chars.append(pattern[i])
        i += 1
    raise PatternSyntaxError(pattern, start, "Unterminated quoted literal")


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------


def format_pattern(pattern: str, registry: ResolverRegistry) -> str:
    """Render *pattern* using the resolvers in *registry*.

    Args:
        pattern: Format string, e.g. ``"HH:mm:ss"``.
        registry: Resolvers to dispatch symbol runs to.

    Returns:
        The pattern with every symbol run replaced by its rendering.

    Raises:
        UnknownSymbolError: If a run's letter has no resolver.
        PatternSyntaxError: On an unterminated quoted literal.
    """
    parts: list[str] = []
    for token in tokenize(pattern):
        if token.is_symbol:
            resolver = registry.lookup(token.text[0], pattern)
            parts.append(resolver.transform(token.text))
        else:
            parts.append(token.text)
    return "".join(parts)


# ---------------------------------------------------------------------------
# Built-in resolvers
# ---------------------------------------------------------------------------


class TimeFields(Protocol):
    """Anything exposing ``hour``, ``minute`` and ``second``.

    Satisfied by :class:`~daytime.Time` as well as
    :class:`datetime.datetime` and :class:`datetime.time`.
    """

    @property
    def hour(self) -> int: ...

    @property
    def minute(self) -> int: ...

    @property
    def second(self) -> int: ...


def render_number(value: int, token: str) -> str:
    """Render *value* unpadded for a 1-letter run, else zero-padded."""
    if len(token) == 1:
        return str(value)
    return str(value).zfill(len(token))


def time_resolvers(source: Callable[[], TimeFields]) -> ResolverRegistry:
    """Build the ``H``/``m``/``s`` registry reading fields from *source*.

    *source* is called once per symbol run, so a fixed value gives
    deterministic output.
    """
    return ResolverRegistry(
        [
            FormatResolver("H", lambda token: render_number(source().hour, token)),
            FormatResolver("m", lambda token: render_number(source().minute, token)),
            FormatResolver("s", lambda token: render_number(source().second, token)),
        ]
    )


def clock_resolvers(clock: ClockPort) -> ResolverRegistry:
    """Build the ``H``/``m``/``s`` registry reading the wall clock.

    Every symbol run takes its own reading, so a pattern rendered
    across a second boundary can mix readings.  Use
    ``Time.now(clock).format(pattern)`` for a single snapshot.
    """
    return time_resolvers(clock.now)

"""Command-line tool for daytime (Typer-based).

Provides :func:`build_cli` which constructs a Typer app exposing the
value type from a shell::

    $ daytime show 9,5,3
    09:05:03.000000
    $ daytime format 9,5,3 --pattern "H:mm"
    9:05
    $ daytime add 9,5,3 --minutes 10
    09:15:03.000000
    $ daytime diff 10 9,30
    1800000000

Times are entered as a comma separated field list
(``hour[,minute[,second[,millisecond[,microsecond]]]]``).

Global options (``--log-level``, ``--log-format``, ``--env-file``)
override :class:`~daytime._settings.Settings`.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import timedelta
from typing import Annotated, get_args

import typer
from pydantic import ValidationError

from daytime import __version__
from daytime._clock import ClockPort, SystemClock
from daytime._errors import ConfigurationError, DaytimeError, PatternSyntaxError
from daytime._logging import configure_logging
from daytime._settings import LoggingSettings, Settings
from daytime._time import Time

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_USAGE_ERROR = 2
EXIT_DOMAIN_ERROR = 3

# ---------------------------------------------------------------------------
# Allowed values (extracted from LoggingSettings Literal types)
# ---------------------------------------------------------------------------

_VALID_LOG_LEVELS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["level"].annotation,
)
_VALID_LOG_FORMATS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["format"].annotation,
)

_ONE_MICROSECOND = timedelta(microseconds=1)


@dataclass
class _State:
    """Per-invocation state handed from the callback to commands."""

    settings: Settings
    clock: ClockPort


def parse_time_fields(text: str) -> Time:
    """Build a :class:`Time` from ``"h[,m[,s[,ms[,us]]]]"``.

    Raises:
        typer.BadParameter: If the list is empty, too long, or holds
            a non-integer.
        InvalidFieldError: If a field is out of range.
    """
    parts = [part.strip() for part in text.split(",")]
    if not 1 <= len(parts) <= 5:
        raise typer.BadParameter(
            f"Expected 1 to 5 comma separated fields, got {len(parts)}: {text!r}"
        )
    try:
        fields = [int(part) for part in parts]
    except ValueError as exc:
        raise typer.BadParameter(f"Fields must be integers: {text!r}") from exc
    return Time(*fields)


def build_duration(
    *,
    hours: int = 0,
    minutes: int = 0,
    seconds: int = 0,
    milliseconds: int = 0,
    microseconds: int = 0,
) -> timedelta:
    """Combine the duration options of ``add``/``subtract``.

    Raises:
        typer.BadParameter: If the total exceeds what
            :class:`~datetime.timedelta` can hold.
    """
    try:
        return timedelta(
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            milliseconds=milliseconds,
            microseconds=microseconds,
        )
    except OverflowError as exc:
        raise typer.BadParameter(f"Duration out of range: {exc}") from exc


@contextlib.contextmanager
def _exit_on_error() -> Iterator[None]:
    """Map daytime errors to exit codes, logging the cause."""
    try:
        yield
    except (ConfigurationError, PatternSyntaxError) as exc:
        logger.error("Configuration error: %s", exc, exc_info=exc)
        raise typer.Exit(EXIT_CONFIG_ERROR) from exc
    except DaytimeError as exc:
        logger.error("%s: %s", exc.error_type, exc, exc_info=exc)
        raise typer.Exit(EXIT_DOMAIN_ERROR) from exc


def build_cli(
    settings_class: type[Settings] = Settings,
    clock: ClockPort | None = None,
) -> typer.Typer:
    """Construct the daytime Typer CLI.

    Args:
        settings_class: Settings model to load (tests pass an
            isolated subclass).
        clock: Wall clock for the ``now`` command.  Defaults to
            :class:`SystemClock`.

    Returns:
        A configured :class:`typer.Typer` ready to invoke.
    """
    cli = typer.Typer(
        help=f"daytime v{__version__}: time-of-day arithmetic and formatting",
    )
    resolved_clock: ClockPort = clock if clock is not None else SystemClock()

    # -- global options -------------------------------------------------------

    @cli.callback(invoke_without_command=True)
    def main(
        ctx: typer.Context,
        version_flag: Annotated[
            bool | None,
            typer.Option(
                "--version",
                is_eager=True,
                help="Show version and exit.",
            ),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Override log level."),
        ] = None,
        log_format: Annotated[
            str | None,
            typer.Option("--log-format", help="Override log format."),
        ] = None,
        env_file: Annotated[
            str,
            typer.Option("--env-file", help="Path to .env file."),
        ] = ".env",
    ) -> None:
        if version_flag:
            typer.echo(f"daytime v{__version__}")
            raise typer.Exit()

        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit()

        if log_level is not None and log_level.upper() not in _VALID_LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level '{log_level}'. "
                f"Choose from: {', '.join(_VALID_LOG_LEVELS)}",
                param_hint="'--log-level'",
            )

        if log_format is not None and log_format.lower() not in _VALID_LOG_FORMATS:
            raise typer.BadParameter(
                f"Invalid log format '{log_format}'. "
                f"Choose from: {', '.join(_VALID_LOG_FORMATS)}",
                param_hint="'--log-format'",
            )

        try:
            settings = settings_class(_env_file=env_file)  # type: ignore[call-arg]
        except ValidationError as exc:
            logger.error("Configuration error: %s", exc)
            raise typer.Exit(EXIT_CONFIG_ERROR) from exc

        if log_level is not None:
            settings.logging = settings.logging.model_copy(
                update={"level": log_level.upper()},
            )

        if log_format is not None:
            settings.logging = settings.logging.model_copy(
                update={"format": log_format.lower()},
            )

        configure_logging(settings.logging, version=__version__)
        ctx.obj = _State(settings=settings, clock=resolved_clock)

    # -- commands -------------------------------------------------------------

    @cli.command()
    def show(
        time: Annotated[str, typer.Argument(help="Time as h[,m[,s[,ms[,us]]]].")],
    ) -> None:
        """Print a time in HH:MM:SS.ffffff form."""
        with _exit_on_error():
            typer.echo(str(parse_time_fields(time)))

    @cli.command("format")
    def format_(
        ctx: typer.Context,
        time: Annotated[str, typer.Argument(help="Time as h[,m[,s[,ms[,us]]]].")],
        pattern: Annotated[
            str | None,
            typer.Option("--pattern", "-p", help="Format pattern, e.g. HH:mm."),
        ] = None,
    ) -> None:
        """Render a time with a symbol pattern."""
        state: _State = ctx.obj
        with _exit_on_error():
            value = parse_time_fields(time)
            effective = pattern if pattern is not None else state.settings.format.pattern
            typer.echo(value.format(effective))

    @cli.command()
    def now(
        ctx: typer.Context,
        pattern: Annotated[
            str | None,
            typer.Option("--pattern", "-p", help="Format pattern, e.g. HH:mm."),
        ] = None,
    ) -> None:
        """Render the current wall-clock time."""
        state: _State = ctx.obj
        with _exit_on_error():
            value = Time.now(state.clock)
            effective = pattern if pattern is not None else state.settings.format.pattern
            typer.echo(value.format(effective))

    def _shift(time: str, duration: timedelta, *, forward: bool) -> None:
        with _exit_on_error():
            value = parse_time_fields(time)
            result = value.add(duration) if forward else value.subtract(duration)
            logger.info("%s %s %s = %s", value, "+" if forward else "-", duration, result)
            typer.echo(str(result))

    @cli.command()
    def add(
        time: Annotated[str, typer.Argument(help="Time as h[,m[,s[,ms[,us]]]].")],
        hours: Annotated[int, typer.Option("--hours")] = 0,
        minutes: Annotated[int, typer.Option("--minutes")] = 0,
        seconds: Annotated[int, typer.Option("--seconds")] = 0,
        milliseconds: Annotated[int, typer.Option("--milliseconds")] = 0,
        microseconds: Annotated[int, typer.Option("--microseconds")] = 0,
    ) -> None:
        """Move a time forward; fails past midnight."""
        duration = build_duration(
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            milliseconds=milliseconds,
            microseconds=microseconds,
        )
        _shift(time, duration, forward=True)

    @cli.command()
    def subtract(
        time: Annotated[str, typer.Argument(help="Time as h[,m[,s[,ms[,us]]]].")],
        hours: Annotated[int, typer.Option("--hours")] = 0,
        minutes: Annotated[int, typer.Option("--minutes")] = 0,
        seconds: Annotated[int, typer.Option("--seconds")] = 0,
        milliseconds: Annotated[int, typer.Option("--milliseconds")] = 0,
        microseconds: Annotated[int, typer.Option("--microseconds")] = 0,
    ) -> None:
        """Move a time back; fails before midnight."""
        duration = build_duration(
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            milliseconds=milliseconds,
            microseconds=microseconds,
        )
        _shift(time, duration, forward=False)

    @cli.command()
    def diff(
        first: Annotated[str, typer.Argument(help="Later time, h[,m[,...]].")],
        second: Annotated[str, typer.Argument(help="Earlier time, h[,m[,...]].")],
    ) -> None:
        """Print FIRST - SECOND in microseconds (signed)."""
        with _exit_on_error():
            delta = parse_time_fields(first).difference(parse_time_fields(second))
            typer.echo(str(delta // _ONE_MICROSECOND))

    return cli


def main() -> None:
    """Console-script entry point."""
    build_cli()()

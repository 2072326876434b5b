"""Configuration via pydantic-settings.

Configuration is loaded from ``DAYTIME_``-prefixed environment
variables and/or a ``.env`` file.  Nested models use ``__`` as the
delimiter, e.g. ``DAYTIME_LOGGING__LEVEL=DEBUG``.

The core value type needs no configuration; these settings drive the
command-line tool:

* **Logging** — level, format, optional file sink, rotation.
* **Format** — the default pattern used when none is given.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from daytime._errors import DaytimeError
from daytime._formatter import tokenize

# -------------------------------------------------------------------
# Sub-models (BaseModel, nested into Settings via composition)
# -------------------------------------------------------------------


class LoggingSettings(BaseModel):
    """Logging configuration.

    When ``file`` is set, logs are also written to a rotating file
    (size-based rotation, ``backup_count`` generations kept).  When
    ``None``, logs go to stderr only.

    The ``format`` field selects the output format:

    - ``"text"`` (default) — human-readable timestamped lines.
    - ``"json"`` — one JSON object per line for log aggregators.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Root log level.",
    )
    format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format: 'json' lines or 'text' lines.",
    )
    file: str | None = Field(
        default=None,
        description="Optional log file path. ``None`` means stderr only.",
    )
    max_file_size_mb: Annotated[int, Field(ge=1)] = Field(
        default=10,
        description=(
            "Maximum log file size in megabytes before rotation. "
            "Only applies when ``file`` is set."
        ),
    )
    backup_count: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Number of rotated log files to keep.",
    )


class FormatSettings(BaseModel):
    """Pattern formatting defaults.

    Environment variables::

        DAYTIME_FORMAT__PATTERN="HH:mm"
    """

    pattern: str = Field(
        default="HH:mm:ss",
        description="Pattern used when a command is given no --pattern.",
    )

    @field_validator("pattern")
    @classmethod
    def _check_quoting(cls, value: str) -> str:
        # Symbols are only resolvable at render time; quoting is not.
        try:
            for _ in tokenize(value):
                pass
        except DaytimeError as exc:
            raise ValueError(str(exc)) from exc
        return value


# -------------------------------------------------------------------
# Root settings
# -------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings for the daytime command-line tool.

    Example ``.env``::

        DAYTIME_LOGGING__LEVEL=DEBUG
        DAYTIME_LOGGING__FORMAT=json
        DAYTIME_FORMAT__PATTERN=H:mm
    """

    model_config = SettingsConfigDict(
        env_prefix="DAYTIME_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    """``extra="ignore"`` lets a shared ``.env`` carry other tools'
    variables without failing validation."""

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration.",
    )
    format: FormatSettings = Field(
        default_factory=FormatSettings,
        description="Pattern formatting defaults.",
    )

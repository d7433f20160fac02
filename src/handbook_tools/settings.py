"""Environment-driven settings for the ``handbook`` CLI.

Per-handbook behaviour lives in ``.handbook.yml`` (see ``config.py``);
these settings cover the process: which handbook to inspect and how to log.

Environment variables use the ``HANDBOOK_`` prefix and may be placed in a
``.env`` file::

    HANDBOOK_ROOT=/srv/engineering-handbook
    HANDBOOK_LOG_LEVEL=DEBUG
    HANDBOOK_LOG_FORMAT=json
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HandbookSettings(BaseSettings):
    """Process-level settings.

    Fields
    ──────
    root         : Default handbook root when a command gets no ROOT argument
    config_file  : Explicit config file (overrides ``<root>/.handbook.yml``)
    log_level    : Structlog log level
    log_format   : ``console``, ``json`` or ``auto`` (json when stderr is not a tty)
    """

    model_config = SettingsConfigDict(
        env_prefix="HANDBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root: Path = Field(default=Path("."))
    config_file: Path | None = None
    log_level: str = "WARNING"
    log_format: Literal["console", "json", "auto"] = "auto"

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    @property
    def json_logs(self) -> bool | None:
        """Translate ``log_format`` for ``configure_logging``."""
        if self.log_format == "auto":
            return None
        return self.log_format == "json"

"""Logging configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ffhost.config._models._common import LogFormat, LogLevel


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
        max_bytes: Size in bytes at which the log file is rotated. Rotation is
            enabled only when backup_count is set too.
        backup_count: Number of rotated log files to keep.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    file: str = ""
    max_bytes: int | None = Field(default=None, ge=1)
    backup_count: int | None = Field(default=None, ge=0)

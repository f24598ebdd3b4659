"""Configuration models."""

from ._common import ConfigSource, ConfigSourceName, LogFormat, LogLevel
from ._config import Config
from ._logging import LoggingConfig
from ._provision import ExtractorName, ProvisionConfig
from ._supervisor import SupervisorConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "ExtractorName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ProvisionConfig",
    "SupervisorConfig",
]

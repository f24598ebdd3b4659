"""Layered configuration for ffhost.

Values come from built-in defaults, the project's ffhost.toml,
FFHOST_<SECTION>__<KEY> environment variables, and CLI overrides, in
increasing order of precedence.
"""

from ._defaults import DEFAULT_CONFIG
from ._discovery import discover_sources
from ._load import safe_load_config
from ._loader import deep_merge, parse_env_vars, parse_string_value, read_toml_file
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    ExtractorName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ProvisionConfig,
    SupervisorConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "ExtractorName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ProvisionConfig",
    "SupervisorConfig",
    "deep_merge",
    "discover_sources",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "safe_load_config",
]

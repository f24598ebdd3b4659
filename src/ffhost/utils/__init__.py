"""Shared utilities for ffhost."""

from ._logging import LogFormatType, create_logger, get_null_logger
from ._paths import (
    CONFIG_FILE_NAME,
    get_project_config_file,
    get_project_root,
    resolve_path,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "LogFormatType",
    "create_logger",
    "get_null_logger",
    "get_project_config_file",
    "get_project_root",
    "resolve_path",
]

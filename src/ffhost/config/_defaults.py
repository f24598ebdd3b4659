"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "text",
        "file": "",
    },
    "provision": {
        "root": "ffmpeg",
        "extractor": "native",
    },
    "supervisor": {
        "entry_point": "transcoder/server.py",
        "launcher": [],
        "cwd": "",
        "port": 3005,
        "restart_delay": 5.0,
        "shutdown_timeout": 5.0,
        "stdout_markers": ["Starting", "Error"],
        "ffmpeg_path": "",
        "supervised_marker": "TRANSCODER_SUPERVISED",
    },
}

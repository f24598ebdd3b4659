"""Configuration source discovery."""

from pathlib import Path
from typing import Any

from ffhost.config._defaults import DEFAULT_CONFIG
from ffhost.config._models._common import ConfigSource, ConfigSourceName
from ffhost.utils import get_project_config_file


def _file_exists(path: Path) -> bool:
    """Check if a file exists, treating permission errors as absent."""
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    *,
    project_root: Path | None = None,
    include_env: bool = True,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """Discover configuration sources.

    Returns sources ordered from highest to lowest precedence. File sources
    are returned with empty values; the caller reads them.

    Args:
        project_root: Directory holding ffhost.toml (defaults to CWD).
        include_env: Include the environment variable source.
        cli_overrides: Values passed on the command line.

    Returns:
        List of ConfigSource objects, highest precedence first.
    """
    sources: list[ConfigSource] = []

    if cli_overrides:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=True,
                values=cli_overrides,
            )
        )

    if include_env:
        sources.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={})
        )

    project_file = get_project_config_file(project_root)
    sources.append(
        ConfigSource(
            name=ConfigSourceName.PROJECT,
            path=project_file,
            exists=_file_exists(project_file),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )
    return sources

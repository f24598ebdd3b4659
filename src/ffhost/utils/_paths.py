from pathlib import Path

CONFIG_FILE_NAME = "ffhost.toml"


def get_project_root(project_root: Path | None = None) -> Path:
    """Get the project root, defaulting to the current working directory."""
    return (project_root or Path.cwd()).resolve()


def get_project_config_file(project_root: Path | None = None) -> Path:
    """Get the path to the project configuration file (ffhost.toml)."""
    return get_project_root(project_root) / CONFIG_FILE_NAME


def resolve_path(path: str | Path, project_root: Path | None = None) -> Path:
    """Resolve a configured path against the project root.

    Absolute paths are returned unchanged.
    """
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return get_project_root(project_root) / candidate


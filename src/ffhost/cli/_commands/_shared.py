"""Shared CLI utilities for commands."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Never

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from ffhost.provision import PlatformTag

    from ._context import CLIContext

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
    "parse_platform",
    "resolve_root",
]


class ExitCode(IntEnum):
    """Standard exit codes for ffhost CLI commands."""

    SUCCESS = 0
    FAILURE = 1
    INTERNAL_ERROR = 2


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.FAILURE,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to FAILURE).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    from rich.markup import escape

    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise SystemExit(code)


def parse_platform(value: str | None) -> PlatformTag:
    """Parse a positional platform argument, exiting with usage on failure."""
    from ffhost.provision import PlatformTag

    choices = "|".join(tag.value for tag in PlatformTag)
    if not value:
        exit_with_error(f"Missing platform argument. Usage: <{choices}>")
    try:
        return PlatformTag(value)
    except ValueError:
        exit_with_error(f"Unknown platform '{value}'. Usage: <{choices}>")


def resolve_root(ctx: CLIContext, root: Path | None) -> Path:
    """Resolve the provisioning root from the flag or the config section."""
    from ffhost.utils import resolve_path

    if root is not None:
        return root.expanduser().resolve()
    return resolve_path(ctx.config.provision.root, ctx.project_root)

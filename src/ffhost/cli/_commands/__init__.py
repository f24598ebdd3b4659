"""ffhost CLI commands."""
# pyright: reportUnusedCallResult=false

from __future__ import annotations

from typing import TYPE_CHECKING

from ._context import CLIContext
from ._provision import app as provision_app
from ._shared import ExitCode, exit_with_error, get_error_console
from ._status import app as status_app
from ._supervise import app as supervise_app
from ._verify import app as verify_app

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "exit_with_error",
    "get_error_console",
    "provision_app",
    "register_commands",
    "status_app",
    "supervise_app",
    "verify_app",
]


def register_commands(app: App) -> None:
    app.command(provision_app)
    app.command(verify_app)
    app.command(supervise_app)
    app.command(status_app)


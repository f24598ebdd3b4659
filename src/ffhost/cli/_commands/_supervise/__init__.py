# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""ffhost supervise command - runs the engine under supervision."""

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter, validators

app = App(
    name="supervise",
    help="Run the transcoding engine in the foreground, restarting it on exit",
    help_on_error=True,
)


@app.default
def supervise(
    *,
    entry_point: Annotated[
        Path | None,
        Parameter(help="Script that bootstraps the engine."),
    ] = None,
    port: Annotated[
        int | None,
        Parameter(
            help="Port handed to the engine.",
            validator=validators.Number(gte=1, lte=65535),
        ),
    ] = None,
    restart_delay: Annotated[
        float | None,
        Parameter(
            help="Seconds to wait before relaunching.",
            validator=validators.Number(gte=0),
        ),
    ] = None,
) -> None:
    """Supervise the transcoding engine until SIGINT or SIGTERM.

    Engine stdout lines containing a configured marker and all stderr lines
    are echoed to the console together with lifecycle events.
    """
    import anyio

    from ffhost.cli._commands._context import CLIContext
    from ffhost.cli._commands._shared import exit_with_error

    from ._runner import build_supervisor, run_supervise

    ctx = CLIContext.get_current()
    supervisor = build_supervisor(
        ctx,
        entry_point=entry_point,
        port=port,
        restart_delay=restart_delay,
    )
    if not supervisor.config.entry_point.is_file():
        exit_with_error(f"Engine entry point not found: {supervisor.config.entry_point}")

    anyio.run(run_supervise, supervisor, ctx.get_logger())

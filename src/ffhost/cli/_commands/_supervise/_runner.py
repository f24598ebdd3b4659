"""Async runner for the supervise command.

Runs the supervisor together with a signal handler that turns SIGINT and
SIGTERM into a graceful stop.
"""

from __future__ import annotations

import dataclasses
import signal
from typing import TYPE_CHECKING

import anyio

from ffhost.supervisor import (
    ConsoleOutputSink,
    EngineConfig,
    Supervisor,
    default_resolvers,
)
from ffhost.utils import resolve_path

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from ffhost.cli._commands._context import CLIContext


def build_supervisor(
    ctx: CLIContext,
    *,
    entry_point: Path | None = None,
    port: int | None = None,
    restart_delay: float | None = None,
) -> Supervisor:
    """Create a supervisor from the loaded configuration and CLI flags."""
    section = ctx.config.supervisor
    engine = EngineConfig.from_config(section, ctx.project_root)

    overrides: dict[str, object] = {}
    if entry_point is not None:
        overrides["entry_point"] = entry_point.expanduser().resolve()
    if port is not None:
        overrides["port"] = port
    if restart_delay is not None:
        overrides["restart_delay"] = restart_delay
    if overrides:
        engine = dataclasses.replace(engine, **overrides)  # type: ignore[arg-type]

    resolvers = default_resolvers(
        ffmpeg_path=section.ffmpeg_path or None,
        provision_root=resolve_path(ctx.config.provision.root, ctx.project_root),
    )
    return Supervisor(
        engine,
        output_sink=ConsoleOutputSink(),
        logger=ctx.get_logger(),
        resolvers=resolvers,
    )


async def run_supervise(supervisor: Supervisor, logger: FilteringBoundLogger) -> None:
    """Run the supervisor until it stops or a termination signal arrives."""

    async def handle_signals() -> None:
        with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
            async for signum in signals:
                logger.info("supervise.signal", signal=signal.Signals(signum).name)
                await supervisor.stop()
                break

    async with anyio.create_task_group() as tg:
        tg.start_soon(handle_signals)

        # Blocks until the supervisor has stopped
        await supervisor.run()

        tg.cancel_scope.cancel()

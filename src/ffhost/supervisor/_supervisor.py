"""Restart-on-failure supervisor for the transcoding engine.

This module provides the Supervisor class that owns at most one engine
child process, relaunching it after unplanned exits until shutdown is
requested. All state changes happen on a single anyio event loop: output
pumps and the exit waiter post messages to a memory object stream that one
consumer task drains in order.
"""

from __future__ import annotations

import os
import subprocess
from typing import TYPE_CHECKING, Literal, final

import anyio
import anyio.abc
from anyio.streams.text import TextReceiveStream

from ffhost.exceptions import EngineSpawnError, SupervisorError, SupervisorNotRunningError
from ffhost.utils import get_null_logger

from ._models import (
    EnvironmentOverlay,
    ErrorLine,
    Exited,
    OutputLine,
    ProcessHandle,
    StreamMessage,
    SupervisorEvent,
    SupervisorEventType,
    SupervisorState,
    SupervisorStatus,
)
from ._output import LogOutputSink
from ._resolve import resolve_binary

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from anyio.streams.memory import (
        MemoryObjectReceiveStream,
        MemoryObjectSendStream,
    )
    from structlog.typing import FilteringBoundLogger

    from ._models import EngineConfig
    from ._protocol import OutputSink
    from ._resolve import Resolver

MESSAGE_BUFFER_SIZE = 256
OUTPUT_DRAIN_TIMEOUT = 0.5


def _get_timestamp() -> str:
    """Get current timestamp in ISO 8601 format."""
    import pendulum  # noqa: PLC0415

    return pendulum.now("UTC").to_iso8601_string()


@final
class Supervisor:
    """Keeps one transcoding engine process alive.

    The engine is launched by ensure_running(). When it exits for any
    reason the handle is released and, unless shutdown has been requested,
    a relaunch is scheduled after a fixed delay. Shutdown only suppresses
    relaunches; terminating a live engine is the host's job (see stop()).
    """

    __slots__ = (
        "_base_env",
        "_config",
        "_handle",
        "_logger",
        "_output_sink",
        "_resolvers",
        "_send",
        "_shutdown_requested",
        "_status",
        "_stopped",
        "_task_group",
    )

    def __init__(
        self,
        config: EngineConfig,
        *,
        output_sink: OutputSink | None = None,
        logger: FilteringBoundLogger | None = None,
        resolvers: Sequence[Resolver] = (),
        base_env: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the supervisor.

        Args:
            config: How to launch and restart the engine.
            output_sink: Sink for engine output and events. Uses a
                LogOutputSink on the supervisor's logger if None.
            logger: Logger for supervisor diagnostics.
            resolvers: Engine binary resolver chain, tried in order.
            base_env: Environment to inherit. Snapshot of os.environ at each
                launch if None.
        """
        self._config = config
        self._logger = (logger or get_null_logger()).bind(engine=config.name)
        self._output_sink: OutputSink = output_sink or LogOutputSink(self._logger)
        self._resolvers = tuple(resolvers)
        self._base_env = base_env
        self._status = SupervisorStatus()
        self._handle: ProcessHandle | None = None
        self._shutdown_requested = False
        self._stopped: anyio.Event | None = None
        self._send: MemoryObjectSendStream[StreamMessage] | None = None
        self._task_group: anyio.abc.TaskGroup | None = None

    @property
    def config(self) -> EngineConfig:
        """Return the engine configuration."""
        return self._config

    @property
    def status(self) -> SupervisorStatus:
        """Return the runtime status."""
        return self._status

    @property
    def state(self) -> SupervisorState:
        """Return the current lifecycle state."""
        return self._status.state

    @property
    def handle(self) -> ProcessHandle | None:
        """Return the handle of the live engine process, if any."""
        return self._handle

    @property
    def shutdown_requested(self) -> bool:
        """Return True once shutdown has been requested."""
        return self._shutdown_requested

    async def run(self) -> None:
        """Run the supervision loop.

        Launches the engine and processes its output and exits until
        shutdown has been requested and no engine is alive. If the loop is
        cancelled, a still-running engine is terminated.

        Raises:
            SupervisorError: If the loop is already running.
        """
        if self._task_group is not None:
            msg = "Supervisor is already running"
            raise SupervisorError(msg)

        self._stopped = anyio.Event()
        send, receive = anyio.create_memory_object_stream[StreamMessage](
            MESSAGE_BUFFER_SIZE
        )
        try:
            async with send, receive:
                async with anyio.create_task_group() as tg:
                    self._task_group = tg
                    self._send = send
                    tg.start_soon(self._consume, receive)

                    _ = await self.ensure_running()
                    if self._shutdown_requested and self._handle is None:
                        self._mark_stopped()

                    await self._stopped.wait()
                    tg.cancel_scope.cancel()
        finally:
            self._task_group = None
            self._send = None
            handle = self._handle
            if handle is not None:
                with anyio.CancelScope(shield=True):
                    await self._terminate(handle)

    async def ensure_running(self) -> bool:
        """Launch the engine unless one is already alive.

        Idempotent: returns immediately while a handle exists or a launch is
        in progress. A missing entry point is logged and ends supervision
        without scheduling a relaunch. A spawn failure is logged and
        handled like an exit.

        Returns:
            True if an engine is alive or starting after the call.

        Raises:
            SupervisorNotRunningError: If called outside run().
        """
        if self._task_group is None:
            msg = "ensure_running() requires an active supervision loop"
            raise SupervisorNotRunningError(msg)

        if self._handle is not None or self._status.state is SupervisorState.STARTING:
            return True

        if self._shutdown_requested:
            self._logger.debug("supervisor.launch_suppressed", reason="shutdown")
            return False

        entry_point = self._config.entry_point
        if not entry_point.is_file():
            self._logger.warning(
                "supervisor.entry_point_missing", path=str(entry_point)
            )
            await self._emit(
                SupervisorEventType.ENTRY_POINT_MISSING,
                message=f"Entry point not found: {entry_point}",
            )
            self._mark_stopped()
            return False

        # Guards the handle across the await in _spawn()
        self._status.state = SupervisorState.STARTING

        try:
            handle = await self._spawn()
        except EngineSpawnError as e:
            self._status.state = SupervisorState.EXITED
            self._logger.error("supervisor.spawn_failed", error=str(e))
            await self._emit(SupervisorEventType.SPAWN_FAILED, message=str(e))
            self._after_exit()
            return False

        self._handle = handle
        self._status.pid = handle.pid
        self._status.started_at = handle.started_at
        self._status.state = (
            SupervisorState.SHUTTING_DOWN
            if self._shutdown_requested
            else SupervisorState.RUNNING
        )

        await self._emit(
            SupervisorEventType.STARTED,
            pid=handle.pid,
            message=f"Listening on port {self._config.port}",
        )
        self._task_group.start_soon(self._pump_process, handle)
        return True

    def request_shutdown(self) -> None:
        """Suppress all future relaunches.

        A live engine is left running; if none is alive the supervision
        loop finishes.
        """
        if self._shutdown_requested:
            return

        self._shutdown_requested = True
        self._logger.info("supervisor.shutdown_requested")

        if self._handle is None and self._status.state is not SupervisorState.STARTING:
            self._mark_stopped()
        else:
            self._status.state = SupervisorState.SHUTTING_DOWN

    async def stop(self, graceful_timeout: float | None = None) -> None:
        """Request shutdown and terminate the live engine.

        Used by the host during teardown. Sends a termination request and
        kills the engine if it has not exited within the timeout.

        Args:
            graceful_timeout: Seconds to wait for a graceful exit. Uses the
                configured shutdown timeout if None.
        """
        self.request_shutdown()
        handle = self._handle
        if handle is not None:
            await self._terminate(handle, graceful_timeout)

    def get_status(self) -> dict[str, object]:
        """Get a status summary of the supervised engine."""
        return {
            "name": self._config.name,
            "state": self._status.state.value,
            "pid": self._status.pid,
            "port": self._config.port,
            "restart_count": self._status.restart_count,
            "launch_count": self._status.launch_count,
            "last_exit_code": self._status.last_exit_code,
            "started_at": self._status.started_at,
            "stopped_at": self._status.stopped_at,
            "ffmpeg_path": self._status.ffmpeg_path,
            "shutdown_requested": self._shutdown_requested,
        }

    async def _spawn(self) -> ProcessHandle:
        """Spawn the engine with a freshly built environment overlay.

        Raises:
            EngineSpawnError: If the process cannot be started.
        """
        resolved = resolve_binary(self._resolvers, self._logger)
        if resolved is None:
            self._logger.info(
                "supervisor.ffmpeg_unresolved",
                message="Engine will locate ffmpeg itself",
            )
        else:
            self._logger.info(
                "supervisor.ffmpeg_resolved",
                source=resolved.source,
                path=str(resolved.path),
            )

        overlay = EnvironmentOverlay.build(
            os.environ if self._base_env is None else self._base_env,
            port=self._config.port,
            supervised_marker=self._config.supervised_marker,
            ffmpeg_path=resolved.path if resolved is not None else None,
        )

        command = self._config.command
        self._logger.info("supervisor.starting", command=" ".join(command))
        try:
            process = await anyio.open_process(
                command,
                cwd=self._config.working_dir,
                env=overlay.to_env(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            msg = f"Failed to start engine '{self._config.name}': {e}"
            raise EngineSpawnError(msg, cause=e) from e

        self._status.launch_count += 1
        self._status.ffmpeg_path = str(resolved.path) if resolved is not None else None
        return ProcessHandle(
            process=process,
            pid=process.pid,
            generation=self._status.launch_count,
            restart_count=self._status.restart_count,
            started_at=_get_timestamp(),
            overlay=overlay,
        )

    async def _pump_process(self, handle: ProcessHandle) -> None:
        """Forward a child's output, then report its exit.

        The exit is reported once the child itself has terminated. Output
        still buffered in the pipes is drained for at most
        OUTPUT_DRAIN_TIMEOUT seconds, since a grandchild that inherited the
        pipes can keep them open indefinitely.
        """
        process = handle.process
        async with anyio.create_task_group() as tg:
            if process.stdout is not None:
                tg.start_soon(self._pump_stream, process.stdout, handle, OutputLine)
            if process.stderr is not None:
                tg.start_soon(self._pump_stream, process.stderr, handle, ErrorLine)
            exit_code = await process.wait()
            tg.cancel_scope.deadline = anyio.current_time() + OUTPUT_DRAIN_TIMEOUT

        await self._post(
            Exited(generation=handle.generation, pid=handle.pid, exit_code=exit_code)
        )
        await self._close_pipes(handle)

    async def _close_pipes(self, handle: ProcessHandle) -> None:
        process = handle.process
        for stream in (process.stdout, process.stderr):
            if stream is not None:
                await stream.aclose()

    async def _pump_stream(
        self,
        stream: anyio.abc.ByteReceiveStream,
        handle: ProcessHandle,
        message_type: type[OutputLine] | type[ErrorLine],
    ) -> None:
        """Split a byte stream into lines and post one message per line."""
        pending = ""
        try:
            async for chunk in TextReceiveStream(stream, errors="replace"):
                pending += chunk
                *lines, pending = pending.split("\n")
                for line in lines:
                    await self._post_line(message_type, handle, line)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            # Stream closed, which is expected on process exit
            pass

        if pending:
            await self._post_line(message_type, handle, pending)

    async def _post_line(
        self,
        message_type: type[OutputLine] | type[ErrorLine],
        handle: ProcessHandle,
        line: str,
    ) -> None:
        clean_line = line.rstrip("\r")
        if clean_line.strip():
            await self._post(
                message_type(generation=handle.generation, pid=handle.pid, line=clean_line)
            )

    async def _post(self, message: StreamMessage) -> None:
        if self._send is not None:
            await self._send.send(message)

    async def _consume(self, receive: MemoryObjectReceiveStream[StreamMessage]) -> None:
        """Handle messages from all children, one at a time, in arrival order."""
        async for message in receive:
            if isinstance(message, Exited):
                await self._on_exited(message)
            elif isinstance(message, OutputLine):
                if self._config.is_notable(message.line):
                    await self._write_line(message.pid, "stdout", message.line)
            else:
                await self._write_line(message.pid, "stderr", message.line)

    async def _on_exited(self, message: Exited) -> None:
        handle = self._handle
        if handle is None or handle.generation != message.generation:
            return

        self._handle = None
        self._status.pid = None
        self._status.last_exit_code = message.exit_code
        self._status.stopped_at = _get_timestamp()
        self._status.state = SupervisorState.EXITED

        event_type = (
            SupervisorEventType.STOPPED
            if message.exit_code == 0
            else SupervisorEventType.CRASHED
        )
        await self._emit(
            event_type,
            pid=message.pid,
            exit_code=message.exit_code,
            message=f"Exited with code {message.exit_code}",
        )
        self._after_exit()

    def _after_exit(self) -> None:
        """Apply the restart policy after an exit or failed spawn."""
        if self._shutdown_requested:
            self._mark_stopped()
            return

        if self._task_group is None:
            self._status.state = SupervisorState.STOPPED
            return

        self._status.restart_count += 1
        self._task_group.start_soon(
            self._restart_after_delay, self._status.restart_count
        )

    async def _restart_after_delay(self, attempt: int) -> None:
        delay = self._config.restart_delay
        await self._emit(
            SupervisorEventType.RESTARTING,
            message=f"Restarting in {delay:.1f}s (attempt {attempt})",
        )
        await anyio.sleep(delay)

        # Shutdown may have been requested while waiting
        if self._shutdown_requested:
            return
        _ = await self.ensure_running()

    def _mark_stopped(self) -> None:
        self._status.state = SupervisorState.STOPPED
        if self._stopped is not None:
            self._stopped.set()

    async def _terminate(
        self,
        handle: ProcessHandle,
        graceful_timeout: float | None = None,
    ) -> None:
        """Terminate a process, escalating to kill after the timeout."""
        timeout = (
            graceful_timeout
            if graceful_timeout is not None
            else self._config.shutdown_timeout
        )
        process = handle.process
        if process.returncode is not None:
            return

        self._logger.info("supervisor.terminating", pid=handle.pid)
        try:
            process.terminate()

            with anyio.move_on_after(timeout):
                _ = await process.wait()

            if process.returncode is None:
                self._logger.warning("supervisor.killing", pid=handle.pid)
                process.kill()
                _ = await process.wait()
        except ProcessLookupError:
            # Process already exited
            pass

    async def _write_line(
        self,
        pid: int,
        stream: Literal["stdout", "stderr"],
        line: str,
    ) -> None:
        try:
            await self._output_sink.write_line(self._config.name, pid, stream, line)
        except Exception as e:  # noqa: BLE001
            self._logger.warning("supervisor.sink_failed", error=str(e))

    async def _emit(
        self,
        event_type: SupervisorEventType,
        *,
        pid: int | None = None,
        exit_code: int | None = None,
        message: str | None = None,
    ) -> None:
        """Emit a lifecycle event to the output sink."""
        event = SupervisorEvent(
            event_type=event_type,
            timestamp=_get_timestamp(),
            pid=pid,
            exit_code=exit_code,
            message=message,
        )
        try:
            await self._output_sink.write_event(self._config.name, event)
        except Exception as e:  # noqa: BLE001
            self._logger.warning("supervisor.sink_failed", error=str(e))

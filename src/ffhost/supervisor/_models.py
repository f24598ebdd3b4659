"""Data models for the engine supervisor.

This module defines the core data types for supervision:
- SupervisorState: Lifecycle states of the supervised engine
- SupervisorEventType / SupervisorEvent: Lifecycle event records
- EngineConfig: How the engine is launched and restarted
- EnvironmentOverlay: Per-launch environment for the child
- ProcessHandle: Exclusive record of the running child
- OutputLine / ErrorLine / Exited: Messages from a child to the supervisor
- SupervisorStatus: Mutable runtime status
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from ffhost.utils import resolve_path

if TYPE_CHECKING:
    import anyio.abc

    from ffhost.config import SupervisorConfig

PORT_VARIABLE = "PORT"
FFMPEG_PATH_VARIABLE = "FFMPEG_PATH"


class SupervisorState(StrEnum):
    """Supervisor lifecycle states.

    - STOPPED: No child is running and none is scheduled
    - STARTING: A child is being spawned
    - RUNNING: A child is alive
    - EXITED: The child exited; a relaunch may be pending
    - SHUTTING_DOWN: Shutdown was requested while a child is still alive
    """

    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    EXITED = "exited"
    SHUTTING_DOWN = "shutting_down"


class SupervisorEventType(StrEnum):
    """Types of engine lifecycle events."""

    STARTED = "started"
    STOPPED = "stopped"
    CRASHED = "crashed"
    RESTARTING = "restarting"
    SPAWN_FAILED = "spawn_failed"
    ENTRY_POINT_MISSING = "entry_point_missing"


@dataclass(frozen=True, slots=True)
class SupervisorEvent:
    """Immutable engine lifecycle event.

    Attributes:
        event_type: Type of lifecycle event.
        timestamp: ISO 8601 formatted timestamp.
        pid: Process ID if applicable.
        exit_code: Exit code if the process terminated.
        message: Optional human-readable message.
    """

    event_type: SupervisorEventType
    timestamp: str
    pid: int | None = None
    exit_code: int | None = None
    message: str | None = None


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Configuration for the supervised transcoding engine.

    Attributes:
        entry_point: Script that bootstraps the engine.
        launcher: Command prefix that runs the entry point. Empty means the
            current Python interpreter.
        cwd: Working directory. None means the entry point's directory.
        port: TCP port the engine is told to bind.
        restart_delay: Seconds between an exit and the relaunch.
        shutdown_timeout: Seconds to wait for a graceful exit on teardown.
        stdout_markers: Substrings that make a stdout line worth logging.
        supervised_marker: Variable set to "1" in the child's environment.
        name: Name used to prefix output.
    """

    entry_point: Path
    launcher: tuple[str, ...] = ()
    cwd: Path | None = None
    port: int = 3005
    restart_delay: float = 5.0
    shutdown_timeout: float = 5.0
    stdout_markers: tuple[str, ...] = ("Starting", "Error")
    supervised_marker: str = "TRANSCODER_SUPERVISED"
    name: str = "transcoder"

    @classmethod
    def from_config(
        cls,
        config: SupervisorConfig,
        project_root: Path | None = None,
    ) -> EngineConfig:
        """Build an engine configuration from the supervisor config section."""
        return cls(
            entry_point=resolve_path(config.entry_point, project_root),
            launcher=tuple(config.launcher),
            cwd=resolve_path(config.cwd, project_root) if config.cwd else None,
            port=config.port,
            restart_delay=config.restart_delay,
            shutdown_timeout=config.shutdown_timeout,
            stdout_markers=tuple(config.stdout_markers),
            supervised_marker=config.supervised_marker,
        )

    @property
    def command(self) -> tuple[str, ...]:
        """Return the full command line that launches the engine."""
        launcher = self.launcher or (sys.executable,)
        return (*launcher, str(self.entry_point))

    @property
    def working_dir(self) -> Path:
        """Return the directory the engine is started in."""
        return self.cwd if self.cwd is not None else self.entry_point.parent

    def is_notable(self, line: str) -> bool:
        """Return True if a stdout line contains one of the markers."""
        return any(marker in line for marker in self.stdout_markers)


@dataclass(frozen=True, slots=True)
class EnvironmentOverlay:
    """Environment for one launch of the engine.

    A snapshot of the base environment plus fixed overrides. Built fresh
    for every launch attempt and never mutated.

    Attributes:
        base: Snapshot of the inherited environment.
        overrides: Variables that take precedence over the base.
    """

    base: Mapping[str, str]
    overrides: Mapping[str, str]

    @classmethod
    def build(
        cls,
        base: Mapping[str, str],
        *,
        port: int,
        supervised_marker: str,
        ffmpeg_path: Path | None = None,
    ) -> EnvironmentOverlay:
        """Construct an overlay from a base environment and launch settings.

        Args:
            base: The inherited environment to snapshot.
            port: Port value exported as PORT.
            supervised_marker: Variable exported as "1".
            ffmpeg_path: Resolved engine binary, exported as FFMPEG_PATH.

        Returns:
            A new immutable overlay.
        """
        overrides = {
            PORT_VARIABLE: str(port),
            supervised_marker: "1",
        }
        if ffmpeg_path is not None:
            overrides[FFMPEG_PATH_VARIABLE] = str(ffmpeg_path)
        return cls(
            base=MappingProxyType(dict(base)),
            overrides=MappingProxyType(overrides),
        )

    def to_env(self) -> dict[str, str]:
        """Return the merged environment passed to the child."""
        return {**self.base, **self.overrides}


@dataclass(frozen=True, slots=True)
class ProcessHandle:
    """Exclusive record of the running engine process.

    Attributes:
        process: The anyio process object.
        pid: Process ID.
        generation: Launch number, starting at 1.
        restart_count: Restarts performed before this launch.
        started_at: ISO 8601 timestamp of the launch.
        overlay: Environment the process was started with.
    """

    process: anyio.abc.Process
    pid: int
    generation: int
    restart_count: int
    started_at: str
    overlay: EnvironmentOverlay

    @property
    def state(self) -> SupervisorState:
        """Return RUNNING while the process is alive, EXITED afterwards."""
        if self.process.returncode is None:
            return SupervisorState.RUNNING
        return SupervisorState.EXITED


@dataclass(frozen=True, slots=True)
class OutputLine:
    """A line the child wrote to stdout."""

    generation: int
    pid: int
    line: str


@dataclass(frozen=True, slots=True)
class ErrorLine:
    """A line the child wrote to stderr."""

    generation: int
    pid: int
    line: str


@dataclass(frozen=True, slots=True)
class Exited:
    """The child terminated; sent after its output has been drained."""

    generation: int
    pid: int
    exit_code: int


StreamMessage = OutputLine | ErrorLine | Exited


@dataclass(slots=True)
class SupervisorStatus:
    """Mutable runtime status of the supervisor.

    Attributes:
        state: Current lifecycle state.
        pid: Process ID of the running engine, if any.
        restart_count: Relaunches scheduled so far (never reset).
        launch_count: Successful spawns so far.
        last_exit_code: Exit code from the last termination.
        started_at: ISO 8601 timestamp of the last launch.
        stopped_at: ISO 8601 timestamp of the last exit.
        ffmpeg_path: Engine binary exported to the last launch, if any.
    """

    state: SupervisorState = SupervisorState.STOPPED
    pid: int | None = None
    restart_count: int = 0
    launch_count: int = 0
    last_exit_code: int | None = None
    started_at: str | None = None
    stopped_at: str | None = None
    ffmpeg_path: str | None = None

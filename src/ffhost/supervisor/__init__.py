"""Supervisor package for the transcoding engine child process.

Key Components:
    - EngineConfig: How the engine is launched and restarted
    - SupervisorState: Lifecycle state enumeration
    - SupervisorStatus: Runtime status tracking
    - SupervisorEvent: Lifecycle event records
    - EnvironmentOverlay: Immutable per-launch environment
    - ProcessHandle: Exclusive record of the live child
    - OutputSink: Protocol for output consumption
    - LogOutputSink / ConsoleOutputSink: structlog and rich sinks
    - Resolver chain: Locates the ffmpeg binary handed to the engine
    - Supervisor: Single-child restart-on-failure supervisor

Example:
    >>> from pathlib import Path
    >>> from ffhost.supervisor import EngineConfig, Supervisor
    >>> supervisor = Supervisor(EngineConfig(entry_point=Path("server.py")))
    >>> await supervisor.run()  # Blocks until shutdown
"""

from ._models import (
    EngineConfig,
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
from ._output import ConsoleOutputSink, LogOutputSink
from ._protocol import OutputSink
from ._resolve import (
    ResolvedBinary,
    Resolver,
    configured_path,
    default_resolvers,
    packaged_binary,
    provisioned_bundle,
    resolve_binary,
)
from ._supervisor import Supervisor

__all__ = [
    "ConsoleOutputSink",
    "EngineConfig",
    "EnvironmentOverlay",
    "ErrorLine",
    "Exited",
    "LogOutputSink",
    "OutputLine",
    "OutputSink",
    "ProcessHandle",
    "ResolvedBinary",
    "Resolver",
    "StreamMessage",
    "Supervisor",
    "SupervisorEvent",
    "SupervisorEventType",
    "SupervisorState",
    "SupervisorStatus",
    "configured_path",
    "default_resolvers",
    "packaged_binary",
    "provisioned_bundle",
    "resolve_binary",
]

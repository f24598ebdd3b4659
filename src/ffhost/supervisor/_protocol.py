"""Protocol definitions for the supervisor.

OutputSink decouples the supervision loop from where engine output and
lifecycle events end up (structured logs, a terminal, a UI).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ._models import SupervisorEvent


@runtime_checkable
class OutputSink(Protocol):
    """Protocol for consuming engine output lines and lifecycle events.

    The protocol is async to support non-blocking I/O operations like
    writing to files or updating UIs.
    """

    async def write_line(
        self,
        name: str,
        pid: int,
        stream: Literal["stdout", "stderr"],
        line: str,
    ) -> None:
        """Write a line of engine output.

        Args:
            name: Name of the supervised engine.
            pid: Process ID of the engine.
            stream: Which output stream the line came from.
            line: The output line (without trailing newline).
        """
        ...

    async def write_event(
        self,
        name: str,
        event: SupervisorEvent,
    ) -> None:
        """Write an engine lifecycle event.

        Args:
            name: Name of the supervised engine.
            event: The lifecycle event to record.
        """
        ...

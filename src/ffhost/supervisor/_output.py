"""Output sink implementations for the supervisor.

This module provides concrete implementations of the OutputSink protocol:
- LogOutputSink: structured log records via structlog
- ConsoleOutputSink: prefixed, colour-coded lines on a rich Console
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, final

from rich.console import Console
from rich.style import Style
from rich.text import Text

from ._models import SupervisorEventType

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from ._models import SupervisorEvent

_WARNING_EVENTS = frozenset(
    {SupervisorEventType.CRASHED, SupervisorEventType.ENTRY_POINT_MISSING}
)


@final
class LogOutputSink:
    """Output sink that writes engine output as structured log records.

    stdout lines are logged at info level, stderr lines at error level.
    """

    __slots__ = ("_logger",)

    def __init__(self, logger: FilteringBoundLogger) -> None:
        self._logger = logger

    async def write_line(
        self,
        name: str,
        pid: int,
        stream: Literal["stdout", "stderr"],
        line: str,
    ) -> None:
        if stream == "stderr":
            self._logger.error("engine.stderr", engine=name, pid=pid, line=line)
        else:
            self._logger.info("engine.stdout", engine=name, pid=pid, line=line)

    async def write_event(self, name: str, event: SupervisorEvent) -> None:
        fields = {
            "engine": name,
            "pid": event.pid,
            "exit_code": event.exit_code,
            "message": event.message,
        }
        key = f"engine.{event.event_type.value}"
        if event.event_type is SupervisorEventType.SPAWN_FAILED:
            self._logger.error(key, **fields)
        elif event.event_type in _WARNING_EVENTS:
            self._logger.warning(key, **fields)
        else:
            self._logger.info(key, **fields)


@final
class ConsoleOutputSink:
    """Output sink that writes to a terminal with formatted prefixes.

    Formats engine output as `[name:pid] line` with color coding:
    - stdout: Default styling
    - stderr: Dim red styling
    - Events: Special formatting based on event type
    """

    __slots__ = ("_console", "_event_styles", "_stderr_style", "_stdout_style")

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the output sink.

        Args:
            console: Rich Console instance for output. If None, creates a new one.
        """
        self._console = console or Console()
        self._stdout_style = Style()
        self._stderr_style = Style(color="red", dim=True)
        self._event_styles: dict[SupervisorEventType, Style] = {
            SupervisorEventType.STARTED: Style(color="green", bold=True),
            SupervisorEventType.STOPPED: Style(color="yellow"),
            SupervisorEventType.CRASHED: Style(color="red", bold=True),
            SupervisorEventType.RESTARTING: Style(color="cyan"),
            SupervisorEventType.SPAWN_FAILED: Style(color="red", bold=True),
            SupervisorEventType.ENTRY_POINT_MISSING: Style(color="magenta"),
        }

    async def write_line(
        self,
        name: str,
        pid: int,
        stream: Literal["stdout", "stderr"],
        line: str,
    ) -> None:
        """Write a line of engine output with prefix."""
        style = self._stderr_style if stream == "stderr" else self._stdout_style

        text = Text()
        _ = text.append(f"[{name}:{pid}]", style=Style(color="blue", bold=True))
        _ = text.append(" ")
        _ = text.append(line, style=style)

        self._console.print(text)

    async def write_event(self, name: str, event: SupervisorEvent) -> None:
        """Write a lifecycle event with special formatting."""
        style = self._event_styles.get(event.event_type, Style())

        text = Text()
        _ = text.append(f"[{name}]", style=Style(color="blue", bold=True))
        _ = text.append(" ")
        _ = text.append(event.event_type.value.upper(), style=style)

        if event.pid is not None:
            _ = text.append(f" (pid={event.pid})", style=Style(dim=True))

        if event.exit_code is not None:
            _ = text.append(f" exit_code={event.exit_code}", style=Style(dim=True))

        if event.message:
            _ = text.append(f" - {event.message}", style=style)

        self._console.print(text)

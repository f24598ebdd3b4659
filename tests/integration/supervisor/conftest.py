from collections.abc import Callable
from pathlib import Path
from typing import Literal

import anyio
import pytest

from ffhost.supervisor import SupervisorEvent, SupervisorEventType


class RecordingSink:
    """Output sink that records everything and lets tests wait on it."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, int, str]] = []
        self.events: list[SupervisorEvent] = []
        self.received_at: list[float] = []
        self._changed: anyio.Event | None = None

    async def write_line(
        self,
        name: str,
        pid: int,
        stream: Literal["stdout", "stderr"],
        line: str,
    ) -> None:
        self.lines.append((stream, pid, line))
        self._notify()

    async def write_event(self, name: str, event: SupervisorEvent) -> None:
        self.events.append(event)
        self.received_at.append(anyio.current_time())
        self._notify()

    def _notify(self) -> None:
        if self._changed is not None:
            self._changed.set()
            self._changed = None

    def count(self, event_type: SupervisorEventType) -> int:
        return sum(1 for event in self.events if event.event_type is event_type)

    def of_type(self, event_type: SupervisorEventType) -> list[SupervisorEvent]:
        return [event for event in self.events if event.event_type is event_type]

    def times_of(self, event_type: SupervisorEventType) -> list[float]:
        return [
            at
            for event, at in zip(self.events, self.received_at, strict=True)
            if event.event_type is event_type
        ]

    def stream(self, name: str) -> list[str]:
        return [line for stream, _, line in self.lines if stream == name]

    async def wait_for(self, predicate: Callable[[], bool], timeout: float = 10.0) -> None:
        with anyio.fail_after(timeout):
            while not predicate():
                if self._changed is None:
                    self._changed = anyio.Event()
                await self._changed.wait()


@pytest.fixture
def entry_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "transcoder"
    directory.mkdir()
    return directory


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()

"""Supervisor configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class SupervisorConfig(BaseModel):
    """Supervisor configuration section.

    Attributes:
        entry_point: Script that bootstraps the transcoding engine.
        launcher: Command prefix used to run the entry point. Empty means the
            current Python interpreter.
        cwd: Working directory for the engine. Empty means the entry point's
            directory.
        port: TCP port handed to the engine through the PORT variable.
        restart_delay: Seconds to wait before relaunching after an exit.
        shutdown_timeout: Seconds to wait for the engine to exit on teardown.
        stdout_markers: Substrings that make a stdout line worth logging.
        ffmpeg_path: Explicit engine binary, tried first by the resolver chain.
        supervised_marker: Variable set to "1" so the engine knows it is
            running under supervision.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    entry_point: str = "transcoder/server.py"
    launcher: tuple[str, ...] = ()
    cwd: str = ""
    port: int = Field(default=3005, ge=1, le=65535)
    restart_delay: float = Field(default=5.0, ge=0)
    shutdown_timeout: float = Field(default=5.0, gt=0)
    stdout_markers: tuple[str, ...] = ("Starting", "Error")
    ffmpeg_path: str = ""
    supervised_marker: str = "TRANSCODER_SUPERVISED"

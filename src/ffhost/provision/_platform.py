"""Platform tags and the filesystem layout of provisioned bundles.

Layout under the provisioning root:

    <root>/ffmpeg<platform>.zip            input archive, deleted after use
    <root>/ffmpeg<platform>/ffmpeg[.exe]   engine binary
    <root>/ffmpeg<platform>/ffprobe[.exe]  probe binary
"""

import sys
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

BUNDLE_PREFIX = "ffmpeg"
ENGINE_NAME = "ffmpeg"
PROBE_NAME = "ffprobe"


class PlatformTag(StrEnum):
    """Platforms a binary bundle can be provisioned for."""

    WIN = "win"
    MAC = "mac"
    LINUX = "linux"

    @property
    def executable_suffix(self) -> str:
        """Return the filename suffix for executables on this platform."""
        return ".exe" if self is PlatformTag.WIN else ""

    @classmethod
    def host(cls) -> "PlatformTag":  # noqa: UP037
        """Return the tag matching the running interpreter's platform."""
        if sys.platform == "win32":
            return cls.WIN
        if sys.platform == "darwin":
            return cls.MAC
        return cls.LINUX


def is_windows_host() -> bool:
    """Return True when running on Windows."""
    return sys.platform == "win32"


@dataclass(frozen=True, slots=True)
class ArchiveBundle:
    """A platform archive and the directory it is extracted into.

    Attributes:
        platform: Platform the archive was built for.
        archive_path: Path to the `ffmpeg<platform>.zip` archive.
        target_dir: Directory the archive is extracted into.
    """

    platform: PlatformTag
    archive_path: Path
    target_dir: Path

    @classmethod
    def for_platform(cls, root: Path, platform: PlatformTag) -> "ArchiveBundle":  # noqa: UP037
        """Compute the archive and target paths for a platform under root."""
        stem = f"{BUNDLE_PREFIX}{platform.value}"
        return cls(
            platform=platform,
            archive_path=root / f"{stem}.zip",
            target_dir=root / stem,
        )


@dataclass(frozen=True, slots=True)
class BinaryBundle:
    """The engine and probe executables provisioned for a platform.

    The bundle is valid only when both paths are existing regular files.

    Attributes:
        platform: Platform the binaries belong to.
        engine_path: Path to the ffmpeg executable.
        probe_path: Path to the ffprobe executable.
    """

    platform: PlatformTag
    engine_path: Path
    probe_path: Path

    @classmethod
    def for_platform(cls, root: Path, platform: PlatformTag) -> "BinaryBundle":  # noqa: UP037
        """Compute the expected binary paths for a platform under root."""
        directory = root / f"{BUNDLE_PREFIX}{platform.value}"
        suffix = platform.executable_suffix
        return cls(
            platform=platform,
            engine_path=directory / f"{ENGINE_NAME}{suffix}",
            probe_path=directory / f"{PROBE_NAME}{suffix}",
        )

    @property
    def directory(self) -> Path:
        """Return the directory holding both binaries."""
        return self.engine_path.parent

    @property
    def paths(self) -> tuple[Path, Path]:
        """Return the (engine, probe) paths."""
        return (self.engine_path, self.probe_path)

    def missing(self) -> tuple[Path, ...]:
        """Return the required paths that are not regular files."""
        return tuple(path for path in self.paths if not path.is_file())

    def is_valid(self) -> bool:
        """Return True when both binaries exist."""
        return not self.missing()

"""Archive extraction back-ends.

The native back-end shells out to the host's own tool: PowerShell's
Expand-Archive on Windows and unzip elsewhere. The zipfile back-end is for
hosts that have neither.
"""

import subprocess
import zipfile
from collections.abc import Callable
from pathlib import Path

from ffhost.config import ExtractorName

from ._platform import is_windows_host

Extractor = Callable[[Path, Path], None]

# Extraction of a large archive can be slow; this only guards against hangs
EXTRACT_TIMEOUT_SECONDS: float = 600.0


class ExtractorFailed(Exception):  # noqa: N818
    """Raised by an extractor when the archive could not be extracted."""


def native_command(archive: Path, target: Path) -> list[str]:
    """Build the host-native extraction command line."""
    if is_windows_host():
        script = (
            f"Expand-Archive -Path '{archive}' -DestinationPath '{target}' -Force"
        )
        return ["powershell", "-NoProfile", "-NonInteractive", "-Command", script]
    return ["unzip", "-o", "-q", str(archive), "-d", str(target)]


def extract_native(archive: Path, target: Path) -> None:
    """Extract archive into target with the host's extraction tool.

    Raises:
        ExtractorFailed: If the tool is missing, times out, or exits non-zero.
    """
    command = native_command(archive, target)
    try:
        result = subprocess.run(  # noqa: S603
            command,
            capture_output=True,
            text=True,
            check=False,
            timeout=EXTRACT_TIMEOUT_SECONDS,
        )
    except FileNotFoundError as e:
        msg = f"{command[0]}: command not found"
        raise ExtractorFailed(msg) from e
    except subprocess.TimeoutExpired as e:
        msg = f"{command[0]} timed out after {EXTRACT_TIMEOUT_SECONDS:.0f}s"
        raise ExtractorFailed(msg) from e

    if result.returncode != 0:
        detail = (result.stderr or result.stdout).strip()
        msg = f"{command[0]} exited with code {result.returncode}"
        if detail:
            msg = f"{msg}: {detail}"
        raise ExtractorFailed(msg)


def extract_zipfile(archive: Path, target: Path) -> None:
    """Extract archive into target with Python's zipfile module.

    Raises:
        ExtractorFailed: If the archive is unreadable or corrupt.
    """
    try:
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(target)
    except (zipfile.BadZipFile, OSError) as e:
        raise ExtractorFailed(str(e)) from e


EXTRACTORS: dict[ExtractorName, Extractor] = {
    ExtractorName.NATIVE: extract_native,
    ExtractorName.ZIPFILE: extract_zipfile,
}


def get_extractor(name: ExtractorName | str) -> Extractor:
    """Look up an extraction back-end by name.

    Raises:
        ValueError: If the name is not a known back-end.
    """
    return EXTRACTORS[ExtractorName(name)]

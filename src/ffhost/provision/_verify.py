"""Verification of provisioned binaries."""

from __future__ import annotations

import stat
from typing import TYPE_CHECKING

from ._flatten import single_nested_directory
from ._platform import BinaryBundle

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def describe_missing(bundle: BinaryBundle) -> list[str]:
    """Return one human-readable line per missing binary.

    When the bundle directory still holds a single nested directory, a hint
    about archives nested more than one level deep is appended.
    """
    lines = [f"Missing: {path}" for path in bundle.missing()]
    if lines and bundle.directory.is_dir():
        nested = single_nested_directory(bundle.directory)
        if nested is not None:
            lines.append(
                f"Hint: {bundle.directory} only contains the directory "
                f"'{nested.name}'; archives nested more than one level deep "
                "are not flattened"
            )
    return lines


def make_executable(
    paths: tuple[Path, ...],
    logger: FilteringBoundLogger,
) -> list[Path]:
    """Add execute permission bits to each path, best-effort.

    Failures are logged as warnings and never raised.

    Returns:
        The paths whose permissions could not be updated.
    """
    failed: list[Path] = []
    for path in paths:
        try:
            path.chmod(path.stat().st_mode | EXECUTABLE_BITS)
        except OSError as e:
            failed.append(path)
            logger.warning("provision.chmod_failed", path=str(path), error=str(e))
    return failed

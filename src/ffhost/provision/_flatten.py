"""Flatten pass for extracted archives.

Archives often wrap their payload in a single top-level folder. The flatten
pass lifts that folder's entries into the target directory, exactly once.
"""

import uuid
from pathlib import Path


def single_nested_directory(target: Path) -> Path | None:
    """Return the only entry of target when it is a real directory.

    A symlink is never followed, even when it points at a directory.
    """
    entries = list(target.iterdir())
    if len(entries) != 1:
        return None
    entry = entries[0]
    if entry.is_symlink() or not entry.is_dir():
        return None
    return entry


def flatten_single_nested(target: Path) -> str | None:
    """Remove one level of superfluous nesting from target.

    If target holds exactly one entry and it is a directory, every entry of
    that directory is moved up into target and the emptied directory is
    removed. Anything else is left untouched, so a second pass over an
    already-flat directory is a no-op.

    A single entry that is a symlink to a directory is not flattened:
    lifting its children would move files out of the link target, which
    may live outside target. Such a bundle then fails verification.

    Args:
        target: The extraction directory.

    Returns:
        The name of the directory that was flattened, or None.
    """
    nested = single_nested_directory(target)
    if nested is None:
        return None

    # Moved aside first: the payload may contain an entry named like its parent
    staging = nested.rename(target / f".{nested.name}.{uuid.uuid4().hex}")
    for child in list(staging.iterdir()):
        _ = child.rename(target / child.name)
    staging.rmdir()
    return nested.name

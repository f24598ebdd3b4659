"""Shared test fixtures for ffhost tests."""

import os
import sys
import textwrap
import zipfile
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from rich.console import Console

from ffhost.cli import CLIContext


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_cli_context() -> None:
    CLIContext.reset()


@pytest.fixture(autouse=True)
def _clear_ffhost_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's FFHOST_* variables out of config loading."""
    for key in list(os.environ):
        if key.startswith("FFHOST_"):
            monkeypatch.delenv(key)


# ---------------------------------------------------------------------------
# Helper functions for creating test artifacts
# ---------------------------------------------------------------------------


def create_archive(path: Path, members: Mapping[str, str]) -> Path:
    """Create a zip archive with the given member names and text contents.

    Member names ending in "/" are written as directory entries.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, contents in members.items():
            if name.endswith("/"):
                zf.writestr(name, "")
            else:
                zf.writestr(name, contents)
    return path


def create_script(path: Path, body: str) -> Path:
    """Write a Python script, dedenting the body."""
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(textwrap.dedent(body).lstrip())
    return path


def create_bundle(root: Path, platform: str) -> tuple[Path, Path]:
    """Create placeholder ffmpeg and ffprobe files for a platform under root."""
    suffix = ".exe" if platform == "win" else ""
    directory = root / f"ffmpeg{platform}"
    directory.mkdir(parents=True, exist_ok=True)
    engine = directory / f"ffmpeg{suffix}"
    probe = directory / f"ffprobe{suffix}"
    _ = engine.write_text("#!/bin/sh\n")
    _ = probe.write_text("#!/bin/sh\n")
    return engine, probe


@pytest.fixture
def make_archive() -> Callable[[Path, Mapping[str, str]], Path]:
    return create_archive


@pytest.fixture
def make_script() -> Callable[[Path, str], Path]:
    return create_script


@pytest.fixture
def make_bundle() -> Callable[[Path, str], tuple[Path, Path]]:
    return create_bundle


@pytest.fixture
def python_executable() -> str:
    return sys.executable

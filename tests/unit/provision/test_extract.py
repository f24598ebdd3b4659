import shutil
import sys
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from ffhost.config import ExtractorName
from ffhost.provision import (
    ExtractorFailed,
    extract_native,
    extract_zipfile,
    get_extractor,
)
from ffhost.provision._extract import native_command

MakeArchive = Callable[[Path, Mapping[str, str]], Path]


class TestNativeCommand:
    def test_unzip_on_posix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.platform", "linux")

        command = native_command(Path("/b/ffmpeglinux.zip"), Path("/b/ffmpeglinux"))

        assert command == [
            "unzip",
            "-o",
            "-q",
            "/b/ffmpeglinux.zip",
            "-d",
            "/b/ffmpeglinux",
        ]

    def test_expand_archive_on_windows(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.platform", "win32")

        command = native_command(Path("ffmpegwin.zip"), Path("ffmpegwin"))

        assert command[0] == "powershell"
        assert "Expand-Archive" in command[-1]
        assert "-Force" in command[-1]


class TestExtractZipfile:
    def test_extracts_members(self, tmp_path: Path, make_archive: MakeArchive) -> None:
        archive = make_archive(
            tmp_path / "ffmpeglinux.zip",
            {"ffmpeg": "engine", "ffprobe": "probe"},
        )
        target = tmp_path / "out"
        target.mkdir()

        extract_zipfile(archive, target)

        assert (target / "ffmpeg").read_text() == "engine"
        assert (target / "ffprobe").read_text() == "probe"

    def test_corrupt_archive_fails(self, tmp_path: Path) -> None:
        archive = tmp_path / "ffmpeglinux.zip"
        _ = archive.write_bytes(b"not a zip")

        with pytest.raises(ExtractorFailed):
            extract_zipfile(archive, tmp_path / "out")


class TestExtractNative:
    @pytest.mark.skipif(
        sys.platform == "win32" or shutil.which("unzip") is None,
        reason="requires unzip",
    )
    def test_extracts_with_unzip(
        self, tmp_path: Path, make_archive: MakeArchive
    ) -> None:
        archive = make_archive(tmp_path / "ffmpeglinux.zip", {"ffmpeg": "engine"})
        target = tmp_path / "out"
        target.mkdir()

        extract_native(archive, target)

        assert (target / "ffmpeg").read_text() == "engine"

    def test_missing_tool_fails(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            "ffhost.provision._extract.native_command",
            lambda archive, target: ["ffhost-no-such-unzip", str(archive), str(target)],
        )

        with pytest.raises(ExtractorFailed, match="command not found"):
            extract_native(tmp_path / "a.zip", tmp_path)

    def test_non_zero_exit_fails(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            "ffhost.provision._extract.native_command",
            lambda archive, target: [
                sys.executable,
                "-c",
                "import sys; sys.stderr.write('broken archive'); sys.exit(3)",
            ],
        )

        with pytest.raises(ExtractorFailed, match="exited with code 3: broken archive"):
            extract_native(tmp_path / "a.zip", tmp_path)


class TestGetExtractor:
    def test_lookup(self) -> None:
        assert get_extractor("native") is extract_native
        assert get_extractor(ExtractorName.ZIPFILE) is extract_zipfile

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="tar"):
            get_extractor("tar")

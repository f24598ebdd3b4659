import sys
from pathlib import Path

import pytest

from ffhost.provision import flatten_single_nested, single_nested_directory


class TestSingleNestedDirectory:
    def test_single_directory(self, tmp_path: Path) -> None:
        nested = tmp_path / "ffmpeg-7.0"
        nested.mkdir()

        assert single_nested_directory(tmp_path) == nested

    def test_single_file(self, tmp_path: Path) -> None:
        _ = (tmp_path / "ffmpeg").write_text("")

        assert single_nested_directory(tmp_path) is None

    def test_multiple_entries(self, tmp_path: Path) -> None:
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()

        assert single_nested_directory(tmp_path) is None

    def test_empty(self, tmp_path: Path) -> None:
        assert single_nested_directory(tmp_path) is None


class TestFlattenSingleNested:
    def test_lifts_children_and_removes_directory(self, tmp_path: Path) -> None:
        nested = tmp_path / "ffmpeg-7.0-linux"
        nested.mkdir()
        _ = (nested / "ffmpeg").write_text("engine")
        _ = (nested / "ffprobe").write_text("probe")
        (nested / "doc").mkdir()
        _ = (nested / "doc" / "README").write_text("readme")

        result = flatten_single_nested(tmp_path)

        assert result == "ffmpeg-7.0-linux"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["doc", "ffmpeg", "ffprobe"]
        assert (tmp_path / "ffmpeg").read_text() == "engine"
        assert (tmp_path / "doc" / "README").read_text() == "readme"

    def test_flat_directory_is_untouched(self, tmp_path: Path) -> None:
        _ = (tmp_path / "ffmpeg").write_text("")
        _ = (tmp_path / "ffprobe").write_text("")

        assert flatten_single_nested(tmp_path) is None
        assert sorted(p.name for p in tmp_path.iterdir()) == ["ffmpeg", "ffprobe"]

    def test_only_one_level_is_removed(self, tmp_path: Path) -> None:
        inner = tmp_path / "outer" / "inner"
        inner.mkdir(parents=True)
        _ = (inner / "ffmpeg").write_text("")

        assert flatten_single_nested(tmp_path) == "outer"
        assert [p.name for p in tmp_path.iterdir()] == ["inner"]
        assert (tmp_path / "inner" / "ffmpeg").is_file()

    def test_child_named_like_parent(self, tmp_path: Path) -> None:
        nested = tmp_path / "ffmpeg"
        nested.mkdir()
        _ = (nested / "ffmpeg").write_text("engine")
        _ = (nested / "ffprobe").write_text("probe")

        assert flatten_single_nested(tmp_path) == "ffmpeg"
        assert (tmp_path / "ffmpeg").is_file()
        assert (tmp_path / "ffmpeg").read_text() == "engine"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["ffmpeg", "ffprobe"]

    def test_empty_nested_directory(self, tmp_path: Path) -> None:
        (tmp_path / "empty").mkdir()

        assert flatten_single_nested(tmp_path) == "empty"
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges")
    def test_symlinked_directory_is_not_followed(self, tmp_path: Path) -> None:
        outside = tmp_path / "outside"
        outside.mkdir()
        _ = (outside / "ffmpeg").write_text("engine")
        target = tmp_path / "target"
        target.mkdir()
        (target / "link").symlink_to(outside, target_is_directory=True)

        assert single_nested_directory(target) is None
        assert flatten_single_nested(target) is None
        assert [p.name for p in target.iterdir()] == ["link"]
        assert (outside / "ffmpeg").read_text() == "engine"

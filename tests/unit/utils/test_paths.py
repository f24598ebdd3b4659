from pathlib import Path

import pytest

from ffhost.utils import (
    CONFIG_FILE_NAME,
    get_project_config_file,
    get_project_root,
    resolve_path,
)


class TestProjectRoot:
    def test_defaults_to_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)

        assert get_project_root() == tmp_path.resolve()

    def test_config_file_lives_in_root(self, tmp_path: Path) -> None:
        assert get_project_config_file(tmp_path) == tmp_path.resolve() / CONFIG_FILE_NAME


class TestResolvePath:
    def test_relative_paths_join_project_root(self, tmp_path: Path) -> None:
        assert resolve_path("ffmpeg", tmp_path) == tmp_path.resolve() / "ffmpeg"

    def test_absolute_paths_are_unchanged(self, tmp_path: Path) -> None:
        absolute = tmp_path / "elsewhere"

        assert resolve_path(absolute, Path("/unused")) == absolute

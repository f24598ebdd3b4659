import json
import logging
from pathlib import Path

import pytest

from ffhost.utils import create_logger, get_null_logger
from ffhost.utils._logging import _log_level_from_string


class TestLogLevelFromString:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("bogus", logging.INFO),
        ],
    )
    def test_maps_names(self, level: str, expected: int) -> None:
        assert _log_level_from_string(level) == expected

    def test_debug_env_overrides_when_respected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FFHOST_DEBUG", "1")

        assert _log_level_from_string("error", respect_env=True) == logging.DEBUG
        assert _log_level_from_string("error") == logging.ERROR


class TestCreateLogger:
    def test_json_file_logger_binds_command(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "ffhost.log"

        logger = create_logger(
            log_format="json", log_file=str(log_file), command="provision"
        )
        logger.info("provision.start", platform="linux")

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "provision.start"
        assert record["platform"] == "linux"
        assert record["command"] == "provision"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filters_records(self, tmp_path: Path) -> None:
        log_file = tmp_path / "ffhost.log"

        logger = create_logger(level="warning", log_format="json", log_file=str(log_file))
        logger.info("dropped")
        logger.warning("kept")

        lines = log_file.read_text().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "kept"

    def test_text_logger_writes_to_stderr(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = create_logger(log_format="text")
        logger.warning("provision.archive_missing", archive="ffmpeglinux.zip")

        err = capsys.readouterr().err
        assert "provision.archive_missing" in err
        assert "archive=ffmpeglinux.zip" in err

    def test_rotating_file_logger(self, tmp_path: Path) -> None:
        log_file = tmp_path / "rotating.log"

        logger = create_logger(
            log_format="json",
            log_file=str(log_file),
            max_bytes=1024,
            backup_count=2,
        )
        logger.info("engine.started", pid=42)

        assert "engine.started" in log_file.read_text()


class TestNullLogger:
    def test_accepts_any_call(self) -> None:
        logger = get_null_logger()

        logger.debug("a")
        logger.warning("b", key="value")
        assert logger.bind(engine="x") is not None

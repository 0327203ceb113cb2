"""Unit tests for the service logging setup."""

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from eligibility_api.core.config import Settings
from eligibility_api.core.logging import LOG_FILE_NAME, SERVICE_NAME, setup_logging, setup_logging_from_settings


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    yield
    setup_logging("INFO")


def _read_file_sink(log_file: Path) -> str:
    # closes the file sink so buffered records reach disk
    logger.remove()
    return log_file.read_text(encoding="utf-8")


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_no_file_without_log_dir(self) -> None:
        assert setup_logging("debug") is None

    def test_text_file_sink_includes_environment(self, tmp_path: Path) -> None:
        log_file = setup_logging("INFO", log_dir=str(tmp_path / "logs"), environment="staging")
        assert log_file == tmp_path / "logs" / LOG_FILE_NAME

        logger.info("zone seed finished")
        content = _read_file_sink(log_file)
        assert "| staging |" in content
        assert "zone seed finished" in content

    def test_level_filters_file_sink(self, tmp_path: Path) -> None:
        log_file = setup_logging("warning", log_dir=str(tmp_path))
        logger.info("hidden")
        logger.warning("shown")
        content = _read_file_sink(log_file)
        assert "hidden" not in content
        assert "shown" in content

    def test_json_mode_serializes_service_extras(self, tmp_path: Path) -> None:
        log_file = setup_logging("INFO", log_dir=str(tmp_path), json_logs=True, environment="dev")
        logger.info("cache cleared")
        lines = [json.loads(line) for line in _read_file_sink(log_file).splitlines() if line.strip()]

        record = lines[-1]["record"]
        assert record["message"] == "cache cleared"
        assert record["extra"]["service"] == SERVICE_NAME
        assert record["extra"]["environment"] == "dev"

    def test_from_settings(self, tmp_path: Path) -> None:
        settings = Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            log_level="DEBUG",
            log_dir=str(tmp_path),
            environment="dev",
            _env_file=None,  # type: ignore[call-arg]
        )
        assert setup_logging_from_settings(settings) == tmp_path / LOG_FILE_NAME

"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from ograph.config.logging import configure_from_settings, configure_logging
from ograph.config.models import DatabaseConfig, LoggingConfig
from ograph.config.settings import OGraphSettings


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ograph = logging.getLogger("ograph")
    ograph_level = ograph.level
    sql = logging.getLogger("sqlalchemy.engine")
    sql_level = sql.level
    yield
    sql.setLevel(sql_level)
    root.handlers = original_handlers
    root.setLevel(original_level)
    ograph.setLevel(ograph_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("ograph").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("ograph").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("ograph.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "ograph.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("ograph.infrastructure.repositories.scope").debug("Scope opened")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Scope opened"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "ograph.infrastructure.repositories.scope"

    def test_sqlalchemy_info_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("sqlalchemy.engine.Engine").info("SELECT 1")
        assert capfd.readouterr().err == ""

    def test_sql_flag_enables_statement_log(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True, sql=True)
        logging.getLogger("sqlalchemy.engine.Engine").info("SELECT 1")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "SELECT 1"
        assert parsed["level"] == "info"

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_from_settings(self, tmp_path: Path) -> None:
        settings = OGraphSettings.load(
            config_path=tmp_path / "absent.toml",
            logging=LoggingConfig(verbose=True),
            database=DatabaseConfig(echo=True),
        )
        configure_from_settings(settings)
        assert logging.getLogger("ograph").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

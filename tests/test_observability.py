"""
Tests for logging setup and level precedence.
"""

import logging
from pathlib import Path

import pytest

from devkit.core.observability.logging_config import (
    StageFilter,
    _parse_level,
    log_stage,
    resolve_level,
    setup_logging,
    short_name,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:
    def test_default_is_warning(self):
        assert resolve_level() == "WARNING"

    def test_env_used_without_flags(self):
        assert resolve_level(env_level="INFO") == "INFO"

    def test_flags_beat_env(self):
        assert resolve_level(quiet=True, env_level="DEBUG") == "ERROR"
        assert resolve_level(verbose=True, env_level="ERROR") == "INFO"

    def test_debug_beats_everything(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"

    def test_verbose_beats_quiet(self):
        assert resolve_level(verbose=True, quiet=True) == "INFO"


class TestParseLevel:
    def test_known(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_unknown_falls_back_to_warning(self):
        assert _parse_level("chatty") == logging.WARNING
        assert _parse_level(None) == logging.WARNING


class TestSetupLogging:
    def test_console_level(self, restore_root_logger):
        setup_logging(level="INFO")
        root = restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_file_handler(self, restore_root_logger, tmp_path: Path):
        log_file = tmp_path / "devkit.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers)

        logging.getLogger("devkit.test").debug("hello file")
        for h in root.handlers:
            h.flush()
        assert "hello file" in log_file.read_text()
    def test_file_records_carry_stage(self, restore_root_logger, tmp_path: Path):
        log_file = tmp_path / "devkit.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="INFO")

        logger = logging.getLogger("devkit.core.services.provision.execution.fonts")
        with log_stage("fonts"):
            logger.info("copied fonts")
        logger.info("after the stage")
        for h in restore_root_logger.handlers:
            h.flush()

        lines = log_file.read_text().splitlines()
        assert "[fonts] devkit.core.services.provision.execution.fonts:" in lines[0]
        assert lines[0].endswith("copied fonts")
        assert "[-]" in lines[1]

    def test_verbose_console_uses_short_names(self, restore_root_logger):
        setup_logging(level="INFO")
        console = restore_root_logger.handlers[0]
        record = logging.LogRecord(
            "devkit.core.services.provision.orchestration.provisioner",
            logging.INFO, __file__, 1, "installed %s", ("git",), None,
        )
        with log_stage("git"):
            assert console.filter(record)
        assert console.format(record).endswith("[git] orchestration.provisioner: installed git")


class TestLogStage:
    def test_nesting_restores_outer_stage(self):
        record = logging.LogRecord("devkit.main", logging.INFO, __file__, 1, "x", (), None)
        stage_filter = StageFilter()
        with log_stage("languages"):
            with log_stage("bootstrap"):
                stage_filter.filter(record)
                assert record.stage == "bootstrap"
            stage_filter.filter(record)
            assert record.stage == "languages"
        stage_filter.filter(record)
        assert record.stage == "-"

    def test_short_name(self):
        assert short_name("devkit.core.services.provision.execution.fonts") == "execution.fonts"
        assert short_name("devkit.main") == "main"
        assert short_name("other.lib") == "other.lib"

"""Tests for package logging configuration."""

import io
import logging

import pytest
from click.testing import CliRunner

from ledgerkit import logging_setup
from ledgerkit.cli.main import cli


@pytest.fixture
def fresh_logging(monkeypatch):
    """Start from an unconfigured package logger; conftest restores it after."""
    monkeypatch.delenv("LEDGERKIT_LOG_LEVEL", raising=False)
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    logger = logging.getLogger("ledgerkit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def _own_handlers(logger):
    return [h for h in logger.handlers if h.get_name() == "ledgerkit"]


def test_get_logger_is_silent_until_configured(fresh_logging):
    logging_setup.get_logger("ledgerkit.domain.aggregation")
    logging_setup.get_logger("ledgerkit.domain.budget")

    null_handlers = [
        h for h in fresh_logging.handlers if isinstance(h, logging.NullHandler)
    ]
    assert len(null_handlers) == 1
    assert logging_setup.package_handler() is None


def test_configure_logging_writes_to_stream(fresh_logging):
    stream = io.StringIO()
    logging_setup.get_logger("ledgerkit.domain.recurrence")
    logging_setup.configure_logging("DEBUG", fmt="%(levelname)s %(message)s", stream=stream)

    logging_setup.get_logger("ledgerkit.domain.recurrence").debug("capped")

    assert stream.getvalue() == "DEBUG capped\n"
    assert not any(isinstance(h, logging.NullHandler) for h in fresh_logging.handlers)
    assert fresh_logging.propagate is False


def test_configure_logging_runs_once(fresh_logging):
    logging_setup.configure_logging("INFO", stream=io.StringIO())
    logging_setup.configure_logging("DEBUG", stream=io.StringIO())

    assert len(_own_handlers(fresh_logging)) == 1
    assert fresh_logging.level == logging.INFO


def test_force_replaces_handler(fresh_logging):
    first = io.StringIO()
    second = io.StringIO()
    logging_setup.configure_logging("INFO", fmt="%(message)s", stream=first)
    logging_setup.configure_logging("WARNING", fmt="%(message)s", stream=second, force=True)

    logging_setup.get_logger("ledgerkit.cli").warning("over budget")

    assert len(_own_handlers(fresh_logging)) == 1
    assert fresh_logging.level == logging.WARNING
    assert first.getvalue() == ""
    assert second.getvalue() == "over budget\n"


def test_level_from_environment(fresh_logging, monkeypatch):
    monkeypatch.setenv("LEDGERKIT_LOG_LEVEL", "warning")

    logging_setup.configure_logging(stream=io.StringIO())

    assert fresh_logging.level == logging.WARNING


def test_explicit_level_beats_environment(monkeypatch):
    monkeypatch.setenv("LEDGERKIT_LOG_LEVEL", "ERROR")

    assert logging_setup.resolve_level("debug") == logging.DEBUG
    assert logging_setup.resolve_level(None) == logging.ERROR
    assert logging_setup.resolve_level("15") == 15


def test_unknown_level_falls_back_to_info(fresh_logging, monkeypatch):
    monkeypatch.setenv("LEDGERKIT_LOG_LEVEL", "LOUDER")

    logging_setup.configure_logging("LOUD", stream=io.StringIO())
    assert fresh_logging.level == logging.INFO
    assert logging_setup.resolve_level(None) == logging.INFO


def test_cli_invocations_do_not_stack_handlers(fresh_logging, temp_db):
    runner = CliRunner()
    for _ in range(2):
        result = runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--log-level", "ERROR", "currencies"],
        )
        assert result.exit_code == 0, result.output

    assert len(_own_handlers(fresh_logging)) == 1
    assert fresh_logging.level == logging.ERROR

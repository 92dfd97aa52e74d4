"""Tests for the command line entry point."""

import logging
from unittest.mock import AsyncMock, patch

import pytest

from common.errors import SourceConnectionError
from lmr.main import build_parser, configure_logging, main


def test_parser():
    args = build_parser().parse_args(["report.yaml", "-v"])
    assert args.config == "report.yaml"
    assert args.verbose is True
    assert args.quiet is False


def test_verbose_and_quiet_are_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["report.yaml", "-v", "-q"])


@pytest.mark.parametrize(
    "verbose, quiet, expected",
    [(False, False, logging.INFO), (True, False, logging.DEBUG), (False, True, logging.WARNING)],
)
def test_configure_logging(verbose, quiet, expected):
    with patch("lmr.main.logging.basicConfig") as mock_config:
        configure_logging(verbose, quiet)
    assert mock_config.call_args.kwargs["level"] == expected


def test_log_level_env_override(monkeypatch):
    monkeypatch.setenv("LMR_LOG_LEVEL", "error")
    with patch("lmr.main.logging.basicConfig") as mock_config:
        configure_logging(verbose=True)
    assert mock_config.call_args.kwargs["level"] == logging.ERROR


def test_main_runs_report(tmp_path):
    path = tmp_path / "lmr.yaml"
    path.write_text("title: T\nsource:\n  kind: sqlite\n  conn: ':memory:'\n")

    with patch("lmr.main.run_report", new_callable=AsyncMock) as mock_run, patch(
        "lmr.main.logging.basicConfig"
    ):
        assert main([str(path)]) == 0

    config = mock_run.await_args.args[0]
    assert config.title == "T"


def test_main_missing_config(tmp_path, caplog):
    with patch("lmr.main.logging.basicConfig"):
        assert main([str(tmp_path / "missing.yaml")]) == 1
    assert "Config file not found" in caplog.text


def test_main_connection_failure(tmp_path, caplog):
    path = tmp_path / "lmr.yaml"
    path.write_text("title: T\nsource:\n  kind: oracle\n  conn: x\n")

    with patch(
        "lmr.main.run_report",
        new_callable=AsyncMock,
        side_effect=SourceConnectionError("Not supported kind"),
    ), patch("lmr.main.logging.basicConfig"):
        assert main([str(path)]) == 1
    assert "Report failed (connection): Not supported kind" in caplog.text

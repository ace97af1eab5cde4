"""Tests for the journal's logging setup."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

from music_journal.config import LoggingConfig
from music_journal.utils.logging import configure_logging


@pytest.fixture
def root_logger():
    """Close the installed handlers and reset the root level after each test."""
    root = logging.getLogger()
    saved_level = root.level
    yield root
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(saved_level)


class TestConfigureLogging:
    def test_console_goes_to_stderr(self, root_logger):
        configure_logging(LoggingConfig(level="DEBUG", log_file=""))
        streams = [h.stream for h in root_logger.handlers if type(h) is logging.StreamHandler]
        assert streams == [sys.stderr]
        assert root_logger.level == logging.DEBUG

    def test_store_warning_lands_in_json_log_file(self, root_logger, tmp_path: Path):
        log_file = tmp_path / "logs" / "journal.log"
        configure_logging(LoggingConfig(level="INFO", log_file=str(log_file), json_format=True))

        logging.getLogger("music_journal.store.record_store").warning(
            "Skipping invalid Review record #%d", 0, extra={"collection": "music_journal_reviews"}
        )
        for handler in root_logger.handlers:
            handler.flush()

        line = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert line["level"] == "WARNING"
        assert line["logger"] == "music_journal.store.record_store"
        assert line["msg"] == "Skipping invalid Review record #0"
        assert line["collection"] == "music_journal_reviews"

    def test_repeat_calls_do_not_stack_handlers(self, root_logger):
        config = LoggingConfig(level="INFO", log_file="")
        configure_logging(config)
        configure_logging(config)
        assert len(root_logger.handlers) == 1

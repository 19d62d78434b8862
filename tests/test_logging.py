"""Tests for the root logger setup used by the CLI."""

import json
import logging

from resume_extractor.logging import setup_logging


def test_json_file_and_console_handlers(tmp_path, restore_root_logging):
    log_path = setup_logging(log_dir=str(tmp_path / "logs"), log_level_console="WARNING")

    logging.getLogger("resume_extractor.test").info("score %d", 85)
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_path == tmp_path / "logs" / "extraction.log"
    record = json.loads(log_path.read_text(encoding="utf-8").splitlines()[-1])
    assert record["message"] == "score 85"
    assert record["level"] == "INFO"
    assert record["logger"] == "resume_extractor.test"


def test_repeated_setup_does_not_duplicate_handlers(tmp_path, restore_root_logging):
    setup_logging(log_dir=str(tmp_path))
    setup_logging(log_dir=str(tmp_path))

    assert len(logging.getLogger().handlers) == 2
    assert logging.getLogger("pdfminer").level == logging.WARNING

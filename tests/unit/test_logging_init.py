from __future__ import annotations

import logging
from io import StringIO

from hs_reconcile.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    assert setup_logging() is setup_logging()
    assert get_logger() is setup_logging()
    assert len(get_logger().handlers) == 1


def test_labeled_prefixes():
    captured = StringIO()
    logger = logging.getLogger("test_hs_reconcile_labels")
    logger.setLevel(logging.INFO)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_module_loggers_share_app_handler(capsys):
    setup_logging()
    logging.getLogger("hs_reconcile.services.reconcile").info("child message")
    log_summary("keys=0")
    out = capsys.readouterr().out
    assert "INFO child message" in out
    assert "SUMMARY keys=0" in out

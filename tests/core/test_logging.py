"""
Tests for the engine logging helpers.
"""

import logging

from vitality.core.logging import ENGINE_LOGGERS, log_debug, setup_logging


def test_setup_logging_sets_engine_levels():
    try:
        setup_logging(logging.DEBUG)
        for name in ENGINE_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG
    finally:
        for name in ENGINE_LOGGERS:
            logging.getLogger(name).setLevel(logging.NOTSET)


def test_context_is_appended(caplog):
    with caplog.at_level(logging.DEBUG, logger="vitality"):
        log_debug("Resolved hit", {"tag": "Fire", "hp": 40})
    assert "Resolved hit [tag=Fire hp=40]" in caplog.text

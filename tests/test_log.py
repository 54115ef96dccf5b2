# tests/test_log.py
import logging

from catalog.log import configure_logging


def test_catalog_logger_follows_level_and_request_chatter_is_quiet():
    try:
        configure_logging("debug")
        assert logging.getLogger("catalog").level == logging.DEBUG
        assert logging.getLogger("catalog.handlers").getEffectiveLevel() == logging.DEBUG
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        configure_logging("INFO")


def test_access_log_lets_request_chatter_through():
    try:
        configure_logging("INFO", access_log=True)
        assert logging.getLogger("uvicorn.access").level == logging.INFO
        assert logging.getLogger("httpx").level == logging.INFO
    finally:
        configure_logging("INFO")

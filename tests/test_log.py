import logging

from intervalmap import configure_logging
from intervalmap.log import logger


def test_logger_is_silent_by_default():
    assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


def test_configure_logging_attaches_handler():
    handler = configure_logging(logging.INFO)
    try:
        assert handler in logger.handlers
        assert logger.level == logging.INFO
    finally:
        logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

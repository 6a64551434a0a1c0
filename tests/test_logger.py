import logging

from fretvoice.logger import setup_logger


def test_setup_logger_replaces_handlers() -> None:
    setup_logger(logging.INFO)
    logger = setup_logger(logging.DEBUG)
    try:
        assert logger.name == "fretvoice"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert "%(lineno)d" in logger.handlers[0].formatter._fmt
    finally:
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

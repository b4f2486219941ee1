"""Logging for intervalmap.

The package logs through the standard library under the ``intervalmap``
logger name and stays silent unless the application configures logging.
"""

import logging

logger = logging.getLogger("intervalmap")
logger.addHandler(logging.NullHandler())


def configure_logging(level: int | str = logging.DEBUG) -> logging.Handler:
    """Attach a stderr handler to the package logger and set its level.

    Intended for interactive debugging; applications normally configure the
    root logger themselves. Returns the handler so it can be removed again.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler

"""Logging configuration.

Modules log through ``logging.getLogger(__name__)``; this module only wires
the root logger once at application start-up.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Attach a single stdout handler to the root logger.

    Calling it again replaces the handler instead of stacking a new one.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    # SQL echo is controlled by Settings.echo_sql, not by the root level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

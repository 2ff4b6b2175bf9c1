"""
util/logging.py

Logging configuration shared by the API server and the CLI.
"""

import logging
import sys


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level="INFO", format_string=None):
    """Configure the root logger once.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom log format string
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format=format_string or LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Per-request connection chatter
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Logging configured - Level: {logging.getLevelName(log_level)}")

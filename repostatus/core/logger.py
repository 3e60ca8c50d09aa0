"""Logging configuration and utilities."""

import sys
import logging
from typing import Optional


def setup_logging(verbosity: int = 0, log_file: Optional[str] = None) -> logging.Logger:
    """Configure logging to stderr and, optionally, a file.

    Standard output carries the status table, so log records never go there.

    Args:
        verbosity: 0 = warnings only, 1 = info, 2+ = debug
        log_file: Optional path of a log file to append to

    Returns:
        Configured logger instance
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True  # Reset any existing configuration
    )

    logger = logging.getLogger('repostatus')
    logger.setLevel(level)
    if log_file:
        logger.info(f"Log file: {log_file}")

    return logger

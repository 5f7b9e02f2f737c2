"""Logging setup using loguru for cpuguard."""

from __future__ import annotations

import sys

from loguru import logger


def setup_logger(log_level: str = "INFO", log_file: str = "") -> None:
    """Configure loguru for console and (optionally) file logging.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Path to the log file. Empty string disables the file sink.
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stdout,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>cpuguard</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if log_file:
        logger.add(
            log_file,
            level=log_level,
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{module}:{function}:{line} | "
                "{message}"
            ),
            rotation="10 MB",
            retention=5,
            compression="zip",
        )

    logger.debug("Logger initialised | level={} file={}", log_level, log_file or "-")

"""
Logging Configuration

Centralized logging setup for the application.
"""
import logging
import sys


def setup_logger(name: str = "tubely", level: int = logging.INFO) -> logging.Logger:
    """
    Setup and configure logger

    Module loggers created with logging.getLogger(__name__) inside the
    tubely package propagate to this one.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    return logger

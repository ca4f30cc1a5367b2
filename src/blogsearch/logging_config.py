"""Logging setup for the service and CLI."""

import logging
import sys

_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "psycopg.pool", "sentence_transformers")


def configure_logging(level: str = "INFO") -> None:
    """Send all records to stdout with an ISO timestamp."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

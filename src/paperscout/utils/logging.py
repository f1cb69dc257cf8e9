"""Logging configuration for paperscout."""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Third-party loggers that are noisy at DEBUG
_QUIET_LOGGERS = ("urllib3", "asyncio")


def setup_logging(level: int = logging.INFO, verbose: bool = False) -> None:
    """Configure root logger with a sensible default format."""
    if verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))


__all__ = ["setup_logging"]

"""
Logging configuration for the installer process.
"""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """
    Sends diagnostic logs to stderr at the given level.

    Unknown level names fall back to WARNING.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)

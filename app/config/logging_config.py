"""Process-wide logging setup."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def config_configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup.

    Args:
        level: Log level name such as `INFO` or `DEBUG`.

    Returns:
        None: Configures the logging module as a side effect.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

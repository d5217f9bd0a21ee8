"""Logging helpers for the Hetzner driver.

The driver runs inside a host process that owns logging, so importing the
package never touches handlers or levels. Hosts that want the driver's own
output format call :func:`configure_logging` once.
"""

import logging
import os
import sys
from typing import Optional

PACKAGE_LOGGER = "hetzner_driver"
LOG_FORMAT = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())

_configured_handler: Optional[logging.Handler] = None


def configure_logging(
    level: Optional[str] = None, handler: Optional[logging.Handler] = None
) -> logging.Handler:
    """Attach a formatted handler to the ``hetzner_driver`` logger.

    Only the package logger is touched; the root logger and any handlers the
    host installed are left alone. Calling it again replaces the handler it
    added before instead of stacking a second one.

    Args:
        level: Log level name. If None, reads HETZNER_DRIVER_LOG_LEVEL or defaults to INFO.
        handler: Handler to use. Defaults to a stdout stream handler.

    Returns:
        The handler that was attached.
    """
    global _configured_handler

    if level is None:
        level = os.environ.get("HETZNER_DRIVER_LOG_LEVEL", "INFO")
    level = level.upper()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _configured_handler is not None:
        package_logger.removeHandler(_configured_handler)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    _configured_handler = handler

    # urllib3 logs every connection at DEBUG, including the credentialed host
    urllib3_logger = logging.getLogger("urllib3")
    if urllib3_logger.getEffectiveLevel() < logging.INFO:
        urllib3_logger.setLevel(logging.INFO)

    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a driver module; no handlers or levels are changed."""

    return logging.getLogger(name)

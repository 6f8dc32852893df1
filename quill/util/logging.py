"""Stdlib logging setup for third-party libraries.

Application code logs through logfire; this only sets the root format and
level and quiets noisy library loggers.
"""

import logging
import sys

from quill.config import Settings

# Chatty below WARNING even in development
QUIET_LOGGERS = ("multipart", "asyncio", "python_multipart")


def setup_logging(settings: Settings) -> None:
    """Configure root logging for the process.

    Args:
        settings: Application settings; `debug` selects DEBUG over INFO
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

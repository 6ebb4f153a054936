"""Logging for the docsearch client.

Modules log through `get_logger(__name__)`, so every record lands under the
"docsearch" logger hierarchy. The embedding application owns the root logger;
`setup_logging()` only touches the package logger.
"""

import logging
import sys

from docsearch.core.config import Settings, get_settings

PACKAGE_LOGGER = "docsearch"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HANDLER_NAME = "docsearch-stdout"


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Set the package log level and attach a stdout handler once.

    Level is DEBUG when settings.debug is True, otherwise settings.log_level.
    Request URLs and response bodies are logged at DEBUG. Calling this again
    updates the level without adding a second handler.

    Returns:
        The package logger.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.log_level.upper())

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Names outside the package are nested under "docsearch" so that
    setup_logging() covers them.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)

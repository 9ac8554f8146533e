"""
Diagnostic sink used by repositories to report operational events.

Repositories never consult the sink for control flow; it only records what
happened. The default implementation forwards to a stdlib logger.
"""

import logging
import sys
from typing import Optional, Protocol, runtime_checkable

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@runtime_checkable
class DiagnosticSink(Protocol):
    """Fire-and-forget recorder of info events and errors."""

    def info(self, message: str) -> None:
        ...

    def error(self, message: str, cause: Optional[BaseException] = None) -> None:
        ...


class LoggingDiagnosticSink:
    """DiagnosticSink backed by a ``logging.Logger``."""

    def __init__(self, logger: Optional[logging.Logger] = None, name: str = "USER_REPOSITORY"):
        self.logger = logger or logging.getLogger(name)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def error(self, message: str, cause: Optional[BaseException] = None) -> None:
        if cause is None:
            self.logger.error(message)
            return
        self.logger.error(f"{message}: {cause}", exc_info=cause)


LOGGER_NAMES = ("CORE_CONFIG", "CORE_DATABASE", "CORE_DEPENDENCIES", "USER_REPOSITORY")


def configure_logging(level: str = "INFO", fmt: str = DEFAULT_LOG_FORMAT) -> None:
    """
    Attach a stdout handler to each of the package's named loggers.

    Safe to call repeatedly; a logger that already carries the handler has
    its level and format updated instead of gaining a second handler.

    Args:
        level: Logging level name
        fmt: Format string for the handler
    """
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level.upper())
        handler = next((h for h in logger.handlers if getattr(h, "_usersvc_handler", False)), None)
        # Avoid duplicate handlers
        if handler is None:
            handler = logging.StreamHandler(sys.stdout)
            handler._usersvc_handler = True
            logger.addHandler(handler)
        handler.setFormatter(logging.Formatter(fmt))

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from typing import Final

from loguru import logger

_LOG_FORMAT: Final[str] = (
    "<green>{time:HH:mm:ss.SSS}</green> <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
)

# Loggers from browser automation libraries that are routed into loguru.
_FORWARDED_STDLIB_LOGGERS: Final[tuple[str, ...]] = ("selenium", "urllib3")


def setup_logging(level: str = "INFO") -> None:
    """Replace loguru's handlers with a single stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_LOG_FORMAT)


class _StdlibToLoguruHandler(logging.Handler):
    """Forward stdlib log records from browser automation libraries to loguru at TRACE level.

    Selenium logs every remote command it sends, which is noise at normal log levels
    but useful when debugging why a wait never succeeded.
    """

    def emit(self, record: logging.LogRecord) -> None:
        logger.trace("[{}] {}", record.name, record.getMessage())


def forward_selenium_logging() -> None:
    for name in _FORWARDED_STDLIB_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.setLevel(logging.DEBUG)
        stdlib_logger.handlers.clear()
        stdlib_logger.addHandler(_StdlibToLoguruHandler())
        stdlib_logger.propagate = False


@contextmanager
def log_span(message: str, *args: Any) -> Iterator[None]:
    """Log the message at DEBUG on entry, then at TRACE with the elapsed time on exit."""
    logger.debug(message, *args)
    start_time = time.monotonic()
    status = "failed after"
    try:
        yield
        status = "done in"
    finally:
        logger.trace(message + " [{} {:.3f}s]", *args, status, time.monotonic() - start_time)

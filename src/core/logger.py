import logging
import os

import structlog
from dotenv import load_dotenv

load_dotenv()

# Third-party loggers that are chatty at DEBUG
NOISY_LOGGERS = ("paho", "pymongo", "urllib3")


def setup_logging(level: int | None = logging.INFO) -> None:
    """
    Configure structured logging for the bridge.

    Args:
        level: The logging level to use. Defaults to INFO.
    """
    # Basic configuration
    logging.basicConfig(level=level)
    logging.getLogger().setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    # Configure processors for structlog
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
            pad_event=40,
        ),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

setup_logging(level=LOG_LEVELS.get(os.getenv("LOG_LEVEL", ""), logging.DEBUG))


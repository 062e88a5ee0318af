"""Structured logging for urlguard.

Every urlguard logger is a structlog ``BoundLogger`` wrapped around a
standard library logger under the ``urlguard`` namespace. Until
``configure_logging`` is called, records are handled by whatever stdlib
logging configuration the host application has (or by the stdlib
defaults, which drop debug and info records). Applications that run
urlguard standalone call ``configure_logging`` to get console or JSON
output on stderr.

Events emitted while a request is checked carry the request's tool and
method, bound with ``log_context``.
"""

import logging
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from urlguard.config import GuardSettings

# Name given to the stderr handler so a second configure_logging call
# replaces it instead of stacking another one.
HANDLER_NAME = "urlguard"


def configure_logging(settings: "GuardSettings | None" = None) -> None:
    """Route urlguard (and stdlib) logging to stderr.

    Args:
        settings: Guard settings supplying ``log_level`` and ``log_format``.
            If None, warnings and above are rendered for the console.
    """
    log_level = logging.WARNING
    log_format = "console"

    if settings is not None:
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
        log_format = settings.log_format

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
        formatter_processors: list[Processor] = [structlog.processors.format_exc_info]
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
        formatter_processors = []

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *formatter_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str = "urlguard") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger backed by the stdlib logger ``name``.

    The stdlib logger is fixed here rather than taken from structlog's
    logger factory, so output follows the stdlib configuration whether
    or not ``configure_logging`` has run.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


@contextmanager
def log_context(**fields: object) -> Iterator[None]:
    """Attach fields to every urlguard event logged inside the block.

    Fields whose value is None are left out.

    Example:
        with log_context(tool="web_fetch", method="GET"):
            validator.validate(url)  # url_blocked carries tool and method
    """
    bound = {key: value for key, value in fields.items() if value is not None}
    with structlog.contextvars.bound_contextvars(**bound):
        yield


class Loggers:
    """Loggers for urlguard components."""

    @staticmethod
    def validation() -> structlog.stdlib.BoundLogger:
        """Logger for allow/block decisions."""
        return get_logger("urlguard.validation")

    @staticmethod
    def config() -> structlog.stdlib.BoundLogger:
        """Logger for settings validation."""
        return get_logger("urlguard.config")

    @staticmethod
    def http() -> structlog.stdlib.BoundLogger:
        """Logger for refused httpx requests."""
        return get_logger("urlguard.http")

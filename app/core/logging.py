"""Structured logging configuration using structlog.

This module sets up structured logging for the API process and the Celery
workers. Publication runs for minutes across threads and tasks, so events
are correlated by binding ``resource_id`` with :func:`log_context` rather
than passing it to every client call.
"""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from app.core.config import get_config

# Third-party loggers that log every request or chunk at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "googleapiclient.discovery_cache")


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp each event with the application name and environment."""
    config = get_config()
    event_dict["app"] = config.app_name
    event_dict["env"] = config.app_env
    return event_dict


def build_processors(json_output: bool, callsite: bool = False) -> list[Processor]:
    """Build the structlog processor chain.

    Args:
        json_output: Render JSON lines instead of colored console output
        callsite: Add file, function and line of the log call

    Returns:
        Ordered processor list ending with a renderer
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if callsite:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    if json_output:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors += [
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    return processors


def setup_logging() -> None:
    """Configure structured logging for the current process.

    Called at import of the API app and from the Celery
    ``worker_process_init`` signal.

    Example:
        >>> setup_logging()
        >>> logger = get_logger(__name__)
        >>> logger.info("Worker ready", queue="publish")
    """
    config = get_config()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.log_level),
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(
            json_output=config.is_production, callsite=config.is_development
        ),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """Bind values to every event logged inside the block.

    UUIDs are stored as strings. Bindings follow tasks created and
    threads started through ``asyncio.to_thread`` inside the block, since
    both copy the current context.

    Example:
        >>> with log_context(resource_id=snapshot.resource_id):
        ...     await pipeline.publish(snapshot)
    """
    bound = {key: str(value) if isinstance(value, uuid.UUID) else value for key, value in values.items()}
    with structlog.contextvars.bound_contextvars(**bound):
        yield


def get_logger(name: str | None = None, **bound_values: Any) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (defaults to calling module)
        **bound_values: Values bound to every event of this logger

    Returns:
        Configured structlog logger

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Publication started", resource_id="123")
    """
    logger = structlog.get_logger(name)
    return logger.bind(**bound_values) if bound_values else logger

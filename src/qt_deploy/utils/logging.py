"""Logging configuration utilities."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import structlog
from structlog.contextvars import bind_contextvars


def setup_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure structured logging to stdout."""

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    # Configure structlog processors
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def bind_deploy_context(
    binary_path: Optional[Union[str, Path]] = None,
    deploy_dir: Optional[Union[str, Path]] = None,
) -> None:
    """Bind correlation fields for deployment logs using contextvars."""
    if binary_path:
        bind_contextvars(binary=str(binary_path))
    if deploy_dir:
        bind_contextvars(deployDir=str(deploy_dir))

"""Logging for mstkit: stdlib handlers with structlog rendering on top.

Library code gets loggers from :func:`get_logger`, which bridges structlog
into the ``logging`` module on first use without touching any handlers the
host application installed. :func:`setup_logging` additionally owns the
root handlers and is meant for programs that run mstkit directly.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

import structlog

from .config import LoggingConfig, Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 5

_is_configured = False


def _resolve(config: Union[LoggingConfig, dict, None]) -> LoggingConfig:
    if config is None:
        return LoggingConfig()
    if isinstance(config, dict):
        return LoggingConfig(**config)
    return config


def configure_structlog(config: Union[LoggingConfig, dict, None] = None) -> LoggingConfig:
    """Route structlog events through stdlib loggers named after the caller.

    Events are rendered to a single string (JSON when ``json_logs`` is set)
    so whatever handler receives the record prints the full event.
    """

    resolved = _resolve(config)
    renderer = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if resolved.json_logs
        else structlog.dev.ConsoleRenderer(colors=resolved.colors)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return resolved


def setup_logging(config: Union[LoggingConfig, dict, None] = None) -> LoggingConfig:
    """Install root handlers for ``config`` and configure structlog.

    Calling it again replaces the handlers it installed before.
    """

    global _is_configured
    resolved = _resolve(config)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(resolved.level.upper())

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list = [logging.StreamHandler(sys.stdout)]
    if resolved.log_dir:
        log_dir = Path(resolved.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_dir / f"{resolved.app_name}.log",
                maxBytes=MAX_LOG_BYTES,
                backupCount=LOG_BACKUPS,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.captureWarnings(resolved.capture_warnings)
    configure_structlog(resolved)

    _is_configured = True
    return resolved


def configure_from_settings(settings: Optional[Settings] = None) -> LoggingConfig:
    """Setup logging from the ``logging`` section of the settings."""

    settings = settings or get_settings()
    return setup_logging(settings.logging)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, bridging structlog to stdlib on first use."""

    if not structlog.is_configured():
        configure_structlog(get_settings().logging)
    return structlog.get_logger(name)


def is_configured() -> bool:
    return _is_configured

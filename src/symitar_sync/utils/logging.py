"""Logging configuration and utilities."""

import functools
import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Optional

import structlog
import colorlog
from structlog.typing import Processor


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """Set up logging configuration."""
    # Imported here: the config package logs through this module
    from ..config.settings import get_settings

    settings = get_settings()

    level = log_level or settings.logging.level
    format_type = log_format or settings.logging.format
    file_path = log_file or settings.logging.file_path

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Replace handlers from a previous call so repeated setup does not duplicate lines
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if file_path:
        setup_file_logging(file_path, level)

    setup_console_logging(level)


def setup_file_logging(file_path: str, level: str) -> None:
    """Set up file logging with rotation."""
    log_file = Path(file_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        file_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(getattr(logging, level.upper()))

    file_formatter = logging.Formatter(
        '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
        '"logger": "%(name)s", "message": "%(message)s"}'
    )
    file_handler.setFormatter(file_formatter)

    logging.getLogger().addHandler(file_handler)


def setup_console_logging(level: str) -> None:
    """Set up colored console logging."""
    console_handler = colorlog.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))

    # structlog already renders timestamp and level into the message
    console_formatter = colorlog.ColoredFormatter(
        "%(log_color)s%(message)s",
        reset=True,
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    )
    console_handler.setFormatter(console_formatter)

    logging.getLogger().addHandler(console_handler)


def set_transport_debug(enabled: bool) -> None:
    """Toggle verbose logging for the SSH library."""
    logging.getLogger("paramiko").setLevel(logging.DEBUG if enabled else logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_async_execution_time(func):
    """Decorator to log async function execution time."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        logger = get_logger(func.__name__)
        start_time = time.time()

        try:
            result = await func(*args, **kwargs)
            execution_time = time.time() - start_time
            logger.debug(
                "Async function executed successfully",
                function=func.__name__,
                execution_time=f"{execution_time:.4f}s"
            )
            return result
        except Exception as e:
            execution_time = time.time() - start_time
            logger.debug(
                "Async function execution failed",
                function=func.__name__,
                execution_time=f"{execution_time:.4f}s",
                error=str(e)
            )
            raise

    return wrapper

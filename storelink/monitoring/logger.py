"""
Logging
Structured logging on top of loguru
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}"


class InterceptHandler(logging.Handler):
    """Route stdlib records (uvicorn, httpx, apscheduler) into loguru"""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(name=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    json_logs: bool = False,
    retention: int = 5,
    console_output: bool = True,
    intercept_stdlib: bool = True,
):
    """
    Initialise logging

    Args:
        log_level: minimum level
        log_file: optional log file path
        json_logs: serialise records as JSON
        retention: number of rotated files to keep
        console_output: write to stdout
        intercept_stdlib: forward stdlib logging records to loguru
    """
    logger.remove()
    logger.configure(extra={"name": "storelink"})

    level = log_level.upper()

    if console_output:
        if json_logs:
            logger.add(sys.stdout, level=level, format="{message}", serialize=True)
        else:
            logger.add(sys.stdout, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_file),
            level=level,
            format="{message}" if json_logs else FILE_FORMAT,
            serialize=json_logs,
            rotation="100 MB",
            retention=retention,
            compression="zip",
        )

        # Errors only
        error_log = log_file.parent / f"{log_file.stem}_error{log_file.suffix}"
        logger.add(
            str(error_log),
            level="ERROR",
            format=FILE_FORMAT + "\n{exception}",
            rotation="1 day",
            retention="30 days",
            compression="zip",
        )

    if intercept_stdlib:
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx", "apscheduler"):
            std_logger = logging.getLogger(name)
            std_logger.handlers = [InterceptHandler()]
            std_logger.propagate = False


class LoggerAdapter:
    """Logger carrying bound context"""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.context = context or {}
        self._logger = logger.bind(name=name, **self.context)

    def bind(self, **kwargs) -> "LoggerAdapter":
        """Bind additional context"""
        return LoggerAdapter(self.name, {**self.context, **kwargs})

    def debug(self, message: str, *args, **kwargs):
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._logger.error(message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        self._logger.exception(message, *args, **kwargs)


def get_logger(name: str, **context) -> LoggerAdapter:
    """
    Create a logger

    Args:
        name: logger name (usually __name__)
        **context: context bound to every record

    Returns:
        LoggerAdapter
    """
    return LoggerAdapter(name, context)

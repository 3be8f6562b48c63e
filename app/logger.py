"""
Loguru logging configuration
"""
import logging
import os
import sys
from datetime import datetime

from loguru import logger

from app.config import settings


LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} |{level: <7}| "
    "{name}:{function}:{line} | {message} | {extra}"
)

# stdlib loggers routed through loguru (uvicorn runs with log_config=None)
BRIDGED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx", "openai")


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _local_log_file() -> str:
    now = datetime.now()
    file_path = os.path.join("logs", now.strftime("%Y-%m-%d"), f"{now.strftime('%H-%M')}.log")
    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    return file_path


def initialize_logger():
    """
    Configure loguru sinks

    ENV=local writes rotating files under logs/<date>/, anything else logs to stdout.
    DEBUG lowers the stdout level to DEBUG.
    """
    logger.remove()

    if settings.ENV.lower() == "local":
        logger.add(
            sink=_local_log_file(),
            rotation="2 MB",
            retention="10 days",
            format=LOG_FORMAT,
            level="DEBUG",
            enqueue=True
        )
    else:
        logger.add(
            sys.stdout,
            format=LOG_FORMAT,
            level="DEBUG" if settings.DEBUG else "INFO",
            enqueue=True
        )

    for name in BRIDGED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    return logger

"""
Core logging module.

This module configures the application logging with Loguru.
"""

import logging
import os
import sys

from loguru import logger

from shorturl.core.config import settings


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging and redirect to loguru.

    Module loggers created with ``logging.getLogger(__name__)`` and the
    uvicorn loggers all end up in the loguru sinks configured below.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Try to get corresponding Loguru level or use level number
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging():
    """
    Route all application logging through loguru.

    Writes to a rotating file under LOG_DIR, serialized as JSON when
    LOG_JSON is set, and also to stderr in debug mode.
    """
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    level = settings.LOG_LEVEL.upper()

    logger.remove()

    if settings.DEBUG:
        logger.add(
            sys.stderr,
            level=level,
            format=settings.LOG_FORMAT,
            backtrace=True,
            diagnose=True,
        )

    file_options = {"serialize": True} if settings.LOG_JSON else {"format": settings.LOG_FORMAT}
    logger.add(
        os.path.join(settings.LOG_DIR, settings.LOG_FILENAME),
        level=level,
        rotation=settings.LOG_ROTATION,
        retention=settings.LOG_RETENTION,
        compression="gz",
        **file_options,
    )

    # Level used by LoggingMiddleware; survives repeated setup calls
    try:
        logger.level("REQUEST")
    except ValueError:
        logger.level("REQUEST", no=25, color="<green>")

    # Module loggers propagate to the root handler
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # uvicorn installs its own handlers when it configures logging
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [InterceptHandler()]
        uvicorn_logger.propagate = False

    return logger

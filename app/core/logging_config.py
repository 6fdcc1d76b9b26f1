import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from app.config import settings


def setup_logging():
    """Configure application logging."""
    # Level from configuration
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    # Root logger
    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Drop existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(
        settings.LOG_FILE,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Console output only in development
    if settings.DEBUG:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # Third party loggers
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )

    logger.info("Logging configuration initialized")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a configured logger.

    Args:
        name: Logger name. None returns the root logger.
    """
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)

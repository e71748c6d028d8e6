import logging
import sys

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogConfig(BaseSettings):
    """Logging configuration"""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    # Logging level
    LEVEL: str = "INFO"

    # Logging format
    FORMAT: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    # Whether to serialize the log message to JSON
    JSON_LOGS: bool = False


class InterceptHandler(logging.Handler):
    """
    Intercept handler to route standard logging to loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(name=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def get_logger(name: str):
    """Get a logger instance with the specified name.

    Args:
        name: The name of the logger, typically the module name.

    Returns:
        A logger instance bound with the specified name.
    """
    return logger.bind(name=name)


def setup_logging() -> None:
    """Configure logging with loguru."""
    log_config = LogConfig()

    # Remove default configuration
    logger.remove()

    # Records logged through the bare loguru logger still need extra[name]
    logger.configure(extra={"name": "thumbor_url"})

    logger.add(
        sys.stdout,
        backtrace=True,
        level=log_config.LEVEL,
        format=log_config.FORMAT,
        serialize=log_config.JSON_LOGS,
    )

    # Intercept standard logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Replace logging handlers for commonly used libraries
    for logger_name in [
        "uvicorn",
        "uvicorn.error",
        "uvicorn.access",
        "fastapi",
    ]:
        logging_logger = logging.getLogger(logger_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    logger.info("Logging configuration completed")

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

import structlog

from aws_resource_adapters.config.schemas import LoggingConfig

LOGGER_NAME = "aws_resource_adapters"


class DetailedFormatter(logging.Formatter):
    """Formatter that adds the caller's module, function and line."""

    def format(self, record):
        record.caller_info = f"{record.module}.{record.funcName}:{record.lineno}"
        return super().format(record)


def setup_logging(logging_config: Optional[LoggingConfig] = None) -> structlog.stdlib.BoundLogger:
    """
    Set up structured logging for the application using structlog.

    Args:
        logging_config: Logging section of the application configuration.
                        If None, logs at INFO to stdout.
    Returns:
        Configured structlog logger instance.
    """
    if logging_config is None:
        logging_config = LoggingConfig()

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, logging_config.level))

    handlers = []

    if logging_config.destination in ("file", "both"):
        log_file = os.path.expandvars(logging_config.file_path)
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=logging_config.max_size_mb * 1024 * 1024,
            backupCount=logging_config.backup_count
        )
        file_handler.setFormatter(DetailedFormatter(logging_config.format))
        handlers.append(file_handler)

    if logging_config.destination in ("stdout", "both"):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(DetailedFormatter(logging_config.format))
        handlers.append(console_handler)

    # Replace whatever handlers were installed before
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(LOGGER_NAME)

    logger.debug(
        "Logging configured",
        log_level=logging_config.level,
        log_destination=logging_config.destination,
    )

    return logger

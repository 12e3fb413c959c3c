import logging
import sys
from pathlib import Path
from typing import Optional

import structlog

from src.config.config import Config


class CustomFormatter(logging.Formatter):
    """Custom formatter that implements the required format: [yyyy-mm-dd hh:mm:ss] [log_type] [class_name]: {message}"""

    def format(self, record):
        # Extract class name from the logger name
        class_name = record.name.split('.')[-1] if '.' in record.name else record.name

        # Format timestamp as yyyy-mm-dd hh:mm:ss
        timestamp = self.formatTime(record, '%Y-%m-%d %H:%M:%S')

        # Format the log message
        formatted_message = f"[{timestamp}] [{record.levelname}] [{class_name}]: {record.getMessage()}"

        # Add exception info if present
        if record.exc_info:
            formatted_message += '\n' + self.formatException(record.exc_info)

        return formatted_message


def get_log_file_path(config: Config) -> Optional[Path]:
    """Get the log file path based on environment, or None when file logging is off."""
    if not config.log_dir:
        return None
    logs_dir = Path(config.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir / f"image_studio_{config.environment}.log"


def setup_logging(config: Config):
    """
    Configure logging for the application.

    Sets up console (and optional file) logging with custom format:
    [yyyy-mm-dd hh:mm:ss] [log_type] [class_name]: {message}

    structlog loggers render their event dict (JSON or key=value text) and
    hand it to these stdlib handlers.
    """
    level = getattr(logging, config.log_level.upper())

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = CustomFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file_path = get_log_file_path(config)
    if log_file_path is not None:
        file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    renderer = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if config.log_format == "json"
        else structlog.processors.KeyValueRenderer(key_order=["event"])
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured - level {config.log_level}, file {log_file_path or 'disabled'}")

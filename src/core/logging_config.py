"""
Logging configuration for the File Storage API.
Sets up a console handler on the root logger and quiets chatty AWS SDK loggers.
"""
import logging
import logging.config
from typing import Optional
from src.core import config

# Third-party loggers that only need to report problems
QUIET_LOGGERS = ["boto3", "botocore", "urllib3", "s3transfer"]


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Log level name; defaults to the LOG_LEVEL setting
    """
    log_level = (level or config.settings.log_level).upper()

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["console"],
        },
        "loggers": {
            name: {"level": "WARNING", "handlers": ["console"], "propagate": False}
            for name in QUIET_LOGGERS
        },
    }

    logging.config.dictConfig(logging_config)
    logging.getLogger(__name__).debug("Logging configured at level %s", log_level)

"""
Logging configuration for structured JSON logging.

Every record goes to stdout as one JSON object.
"""

import sys

from pythonjsonlogger import jsonlogger

APP_LOGGERS = ("core", "signing", "licenses", "activations", "api")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds the service name and level."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)
        log_record["service"] = "license-manager"
        log_record["level"] = record.levelname


def get_logging_config(environment: str = "development") -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "simple": {
                "format": "{levelname} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
        "loggers": {
            "django": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "django.request": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }
    for name in APP_LOGGERS:
        config["loggers"][name] = {
            "handlers": ["console"],
            "level": log_level,
            "propagate": False,
        }
    return config

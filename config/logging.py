"""Logging setup applied by the application factory."""
import logging.config

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "detailed": {
            "format": "{asctime} {levelname} [{name}:{lineno}] {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "detailed",
        },
    },
    "loggers": {
        "school_admin": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "src.school_admin.school_admin": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}


def configure_logging(level: str = "INFO") -> None:
    """Apply LOGGING with the package loggers set to ``level``."""
    config = {**LOGGING, "loggers": {name: {**cfg, "level": level.upper()} for name, cfg in LOGGING["loggers"].items()}}
    logging.config.dictConfig(config)

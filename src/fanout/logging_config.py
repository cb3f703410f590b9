import logging
import logging.config
import os
import sys

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE")

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)-6s %(name)8s:%(lineno)d %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        # stdout carries the report, logs stay on stderr
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": sys.stderr,
        },
    },
    "loggers": {
        "fanout": {
            "level": LOG_LEVEL,
            "handlers": ["console"],
            "propagate": False, # Don't pass 'fanout' logs up to the root logger
        },
        # Shut the log levels for libraries up
        "httpx": {
            "level": "WARNING", # Logs every request at INFO
            "handlers": ["console"],
            "propagate": False,
        },
        "httpcore": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False,
        },
    },
    # Default for all other loggers
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
}


def setup_logging(level: str | None = None):
    """ Apply the logging configuration. """
    config = LOGGING_CONFIG
    if level or LOG_FILE:
        config = {**LOGGING_CONFIG, "handlers": dict(LOGGING_CONFIG["handlers"]),
                  "loggers": {k: dict(v) for k, v in LOGGING_CONFIG["loggers"].items()}}
        if level:
            config["loggers"]["fanout"]["level"] = level.upper()
        if LOG_FILE:
            config["handlers"]["file"] = {
                "class": "logging.FileHandler",
                "formatter": "default",
                "filename": LOG_FILE,
                "mode": "a",
            }
            for logger in config["loggers"].values():
                logger["handlers"] = [*logger["handlers"], "file"]
    logging.config.dictConfig(config)
    os.environ.setdefault("PYTHONUNBUFFERED", "1")

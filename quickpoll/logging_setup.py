"""Root logging configuration.

One stdout handler on the root logger so every ``logging.getLogger(__name__)``
in the package emits without per-module setup. Safe to call more than once.
"""
import logging
from logging.config import dictConfig


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
        },
    }


def configure_logging(level: str = "INFO") -> None:
    if logging.getLevelName(level) == f"Level {level}":
        level = "INFO"
    dictConfig(_dict_config(level))

from __future__ import annotations

import logging.config


def configure_logging(level: str = "INFO") -> None:
    normalized = (level or "INFO").strip().upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "smartschedule": {
                    "handlers": ["console"],
                    "level": normalized,
                    "propagate": False,
                },
            },
        }
    )

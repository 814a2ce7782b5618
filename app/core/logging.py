import logging
import logging.config
from pathlib import Path

from app.core.config import Settings


def build_logging_config(settings: Settings) -> dict:
    level = settings.LOG_LEVEL.upper()
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "detailed",
            "stream": "ext://sys.stdout"
        }
    }
    root_handlers = ["console"]

    if settings.LOG_TO_FILE:
        log_path = Path(settings.LOG_DIR)
        log_path.mkdir(exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "detailed",
            "filename": str(log_path / "app.log"),
            "maxBytes": 10485760,
            "backupCount": 5
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": str(log_path / "error.log"),
            "maxBytes": 10485760,
            "backupCount": 5
        }
        root_handlers += ["file", "error_file"]

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": handlers,
        "root": {
            "level": level,
            "handlers": root_handlers
        },
        "loggers": {
            "app": {
                "level": level,
                "handlers": root_handlers,
                "propagate": False
            },
            "uvicorn.access": {
                "level": "WARNING",
                "handlers": ["console"],
                "propagate": False
            }
        }
    }


def configure_logging(settings: Settings):
    logging.config.dictConfig(build_logging_config(settings))

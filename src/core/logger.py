import json
import logging
import logging.config
import sys

from core.config import configs

# Third-party loggers kept quiet unless something goes wrong
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "PIL")


class JsonFormatter(logging.Formatter):
    """
    Formatter for logging in JSON format.
    """

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record, ensure_ascii=False)


def build_logging_config(formatter: dict, handler_name: str) -> dict:
    """dictConfig for one output profile, all loggers sharing one stdout handler."""
    loggers = {
        # Root Logger: Catches everything not caught by specific loggers
        "root": {"level": configs.LOG_LEVEL, "handlers": [handler_name]},
        "photodb": {"level": configs.LOG_LEVEL, "handlers": [handler_name], "propagate": False},
    }
    for name in QUIET_LOGGERS:
        # Set sqlalchemy.engine to INFO to see SQL queries
        loggers[name] = {"level": "WARNING", "handlers": [handler_name], "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {handler_name: formatter},
        "handlers": {
            handler_name: {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": handler_name,
            },
        },
        "loggers": loggers,
    }


# Development: console-friendly, readable text format.
DEV_LOGGING_CONFIG = build_logging_config(
    {"format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", "datefmt": "%Y-%m-%d %H:%M:%S"},
    "console",
)

# Production: JSON structured, one object per line.
PROD_LOGGING_CONFIG = build_logging_config(
    {"()": JsonFormatter, "datefmt": "%Y-%m-%dT%H:%M:%S%z"},
    "console_json",
)


def setup_logging():
    """
    Set up logging configuration based on the environment.
    """
    env = configs.ENVIRONMENT.lower()

    if env == "production":
        log_config = PROD_LOGGING_CONFIG
    else:
        log_config = DEV_LOGGING_CONFIG

    logging.config.dictConfig(log_config)

    logger = logging.getLogger("photodb")
    logger.info(f"Logging setup complete for {env} environment with level {configs.LOG_LEVEL}")

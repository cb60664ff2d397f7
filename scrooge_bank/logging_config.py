"""
Structured logging configuration.

Every log line is a single JSON object so that deposits,
withdrawals and loan decisions can be searched by user and
action after the fact.
"""

import json
import logging
from datetime import datetime, timezone

LOGGER_NAME = "scrooge_bank"

# Attributes callers may attach with logger.info(..., extra={...})
_STRUCTURED_FIELDS = ("user_id", "action", "resource", "extra")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }
        for field in _STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a JSON console handler to the application logger.

    Safe to call more than once: existing handlers are replaced
    rather than duplicated.
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger, e.g. scrooge_bank.loans."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")

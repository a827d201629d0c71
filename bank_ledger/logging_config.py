"""
Logging Setup

Log lines come from the HTTP API and the interactive menu only; accounts
and the ledger report failures through their results and never log.
Records are written one JSON object per line, or as plain text when
LEDGER_LOG_FORMAT=text.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional

# Record attributes copied into the JSON line when present
STRUCTURED_FIELDS = ("action", "resource", "correlation_id", "extra")


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON line"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", fmt: str = "json",
                  logger_name: str = "bank_ledger") -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Calling it again swaps the handler rather than adding a second one, so
    the CLI and the server can both call it at start-up.

    Args:
        level: Level name; unknown names fall back to INFO
        fmt: "json" or "text"
        logger_name: Logger to configure, the package root by default

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if fmt == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    else:
        handler.setFormatter(JSONFormatter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger


def get_logger(name: str = "bank_ledger") -> logging.Logger:
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               correlation_id: Optional[str] = None,
               extra: Optional[dict] = None):
    """
    Log the outcome of a ledger operation.

    Args:
        logger: Logger to write to
        level: Level name (info, warning, ...)
        message: Human-readable outcome
        action: Operation name (deposit, transfer, ...)
        resource: Account number the operation touched
        correlation_id: Request identifier, when one exists
        extra: Further structured data such as the error kind
    """
    fields = {
        "action": action,
        "resource": resource,
        "correlation_id": correlation_id,
        "extra": extra,
    }
    logger.log(
        getattr(logging, level.upper()),
        message,
        extra={key: value for key, value in fields.items() if value},
        stacklevel=2,
    )

"""
Process-wide logging setup driven by the configuration snapshot.

**Conceptual**: Called once at startup, after the snapshot is built. It maps
LOG_LEVEL onto the standard `logging` levels, installs a single console
handler on the root logger, and picks the output format by environment:
one JSON object per line in production (easy to ship to a log collector),
plain text everywhere else.

When ENABLE_LOGGING is false the root logger gets a `NullHandler` and
records are dropped.
"""

import json
import logging
import sys
from typing import Optional, TextIO

from src.config.snapshot import ConfigurationSnapshot

LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record; `exception` is added when exc_info is set."""

    def format(self, record: logging.LogRecord) -> str:
        record_dict = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.name,
            "funcName": record.funcName,
            "lineno": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            record_dict["exception"] = self.formatException(record.exc_info)

        return json.dumps(record_dict, ensure_ascii=False)


def resolve_level(log_level: str) -> int:
    """Translate a LOG_LEVEL value ("warn", "debug"...) to a logging level."""
    return LOG_LEVELS.get(log_level, logging.INFO)


def setup_logging(
    config: ConfigurationSnapshot,
    stream: Optional[TextIO] = None,
    logger: Optional[logging.Logger] = None,
) -> logging.Handler:
    """
    Configure the root logger (or `logger`) from `config`.

    Existing handlers are removed first, so calling this again replaces the
    previous setup instead of duplicating output.

    Returns:
        The handler that was installed.
    """
    target = logger if logger is not None else logging.getLogger()
    for handler in target.handlers[:]:
        target.removeHandler(handler)

    if not config.feature_flags.logging:
        handler = logging.NullHandler()
        target.addHandler(handler)
        return handler

    log_level = resolve_level(config.server.log_level)
    target.setLevel(log_level)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(log_level)
    if config.server.is_production:
        handler.setFormatter(JsonLogFormatter(datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT))
    target.addHandler(handler)
    return handler

import json
import logging
import sys
from datetime import datetime, timezone

from tomcat_log_analyzer.core.config import settings

# Attributes every LogRecord carries; anything else arrived through ``extra=``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

QUIET_LOGGERS = ("uvicorn.access", "multipart")


def record_extras(record: logging.LogRecord) -> dict:
    """Fields attached to a record via ``extra=``, in the order they were set."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_") and value is not None
    }


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: event time, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(level: str | None = None, stream=None) -> logging.Handler:
    """Send every log record to ``stream`` (stdout by default) as JSON lines.

    Re-running replaces the previous handler, so reloads never double output.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    root = logging.getLogger()
    resolved = logging.getLevelName(level_name)
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonLineFormatter())
    root.handlers[:] = [handler]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler

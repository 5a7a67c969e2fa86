"""Logging for Workforce Hub.

Every record gets the HTTP method, path and session user of the request it
was emitted under (or "-" outside a request). Services pass the touched
collection as ``extra={"collection": ...}``.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from flask import has_request_context, request, session

_HANDLER_NAME = "workforce_hub"
CONTEXT_FIELDS = ("method", "path", "user_id", "collection")
TEXT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(method)s %(path)s user=%(user_id)s: %(message)s"


class RequestContextFilter(logging.Filter):
    """Attach request context to records; never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            record.method = request.method
            record.path = request.path
            record.user_id = session.get("user_id", "-")
        else:
            record.method = record.path = record.user_id = "-"
        if not hasattr(record, "collection"):
            record.collection = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value not in (None, "-"):
                entry[name] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", json_output: bool = False) -> logging.Handler:
    """Install the app's stdout handler on the root logger.

    Calling it again replaces only the handler installed by a previous call.
    """

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for old in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(old)
    root.addHandler(handler)

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("mysql.connector").setLevel(logging.WARNING)
    return handler

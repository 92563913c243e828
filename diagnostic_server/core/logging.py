"""Log line formatting and handler setup.

Lines are written to stdout as ``[<ISO timestamp>][<server id>] <message>``,
with tracebacks appended for records that carry exception info.
"""
from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Optional


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """Render a UTC ISO-8601 timestamp with millisecond precision and a Z suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ServerLogFormatter(logging.Formatter):
    """Prefix every record with its timestamp and the owning server id."""

    def __init__(self, server_id: str):
        super().__init__()
        self.server_id = server_id

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        return iso_timestamp(datetime.fromtimestamp(record.created, tz=timezone.utc))

    def formatMessage(self, record: logging.LogRecord) -> str:
        return f"[{self.formatTime(record)}][{self.server_id}] {record.message}"


# PUBLIC_INTERFACE
def configure_logging(server_id: str, level: str = "INFO") -> logging.Handler:
    """Install a single stdout handler on the root logger.

    uvicorn runs with ``log_config=None`` so its loggers propagate here too.
    Calling this again replaces the handler installed previously.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing.formatter, ServerLogFormatter):
            root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ServerLogFormatter(server_id))
    root.addHandler(handler)
    root.setLevel(level)
    return handler

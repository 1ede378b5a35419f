"""Structured Logging — one record per line, graph context carried as extra fields.

Invariants:
    - Every record carries timestamp, level, logger and message
    - Known extras (EXTRA_FIELDS) are emitted when set and not None; unknown extras never are
    - Both formats ("json", "text") show the same extras
    - setup_logging replaces only the handler it installed, so it can run again

Design Decisions:
    - stdlib logging with its own formatters; services log through
      logging.getLogger(__name__) and pass context via extra=
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "task", "argument", "edge", "iteration", "error_code", "path",
    "attempt", "input_tokens", "output_tokens",
    "nodes_added", "edges_added", "skipped",
)

_HANDLER_NAME = "argument_forge"


def record_extras(record: logging.LogRecord) -> dict:
    """Known extra fields set on the record, in EXTRA_FIELDS order."""
    extras = {}
    for key in EXTRA_FIELDS:
        value = getattr(record, key, None)
        if value is not None:
            extras[key] = value
    return extras


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Development format: the message followed by key=value extras."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if not extras:
            return line
        pairs = " ".join(f"{key}={value!r}" for key, value in extras.items())
        head, _, rest = line.partition("\n")
        return f"{head} [{pairs}]" + (f"\n{rest}" if rest else "")


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

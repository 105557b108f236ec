"""
StockChart logging

One stdout handler for the whole process. Local runs get readable text;
STOCKCHART_LOG_JSON=true switches to JSON lines so the indicator
service's extras (symbol, bar counts) land in a "context" object.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys())

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Serialize log records as compact JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED and not key.startswith("_")
        }
        if extras:
            payload["context"] = extras

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=True, separators=(",", ":"), default=str)


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    if getattr(root, "_stockchart_configured", False):
        root.setLevel(level.upper())
        return

    root.handlers.clear()
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(TEXT_FORMAT))

    root.addHandler(handler)
    root.setLevel(level.upper())
    setattr(root, "_stockchart_configured", True)

from __future__ import annotations

"""Logging for the planner's server and client commands.

Records carry structured fields as ``extra={"_json_<name>": value}`` (ids,
days, request paths). The rotating log file gets one JSON object per record;
the console gets a short line with the same fields appended as ``name=value``.
Each command logs to its own file under ``<home>/logs``.
"""

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict

LOG_DIR_NAME = "logs"
FIELD_PREFIX = "_json_"

# Per-request chatter from the HTTP libraries, kept out of the client's console.
_CLIENT_QUIET = ("httpx", "httpcore")


def planner_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        k[len(FIELD_PREFIX):]: v
        for k, v in record.__dict__.items()
        if k.startswith(FIELD_PREFIX)
    }


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(planner_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """``LEVEL: message  id=3 day=2``"""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname}: {record.getMessage()}"
        fields = planner_fields(record)
        if fields:
            line += "  " + " ".join(f"{k}={v}" for k, v in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(home: Path, level: int | str = logging.INFO, component: str = "server") -> Path:
    """Route root logging to ``<home>/logs/<component>.log`` and stderr."""
    log_dir = home / LOG_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    logfile = log_dir / f"{component}.log"
    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    handler = RotatingFileHandler(logfile, maxBytes=512_000, backupCount=5, encoding="utf-8")
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    console = logging.StreamHandler()
    console.setFormatter(ConsoleFormatter())
    root.addHandler(console)
    if component != "server":
        for name in _CLIENT_QUIET:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger(__name__).info(
        "logging initialised", extra={"_json_component": component, "_json_home": str(home)}
    )
    return logfile


__all__ = ["configure_logging", "JsonFormatter", "ConsoleFormatter", "planner_fields"]

from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from fleetctl.domain import Event
from fleetctl.ports import EventBus


def _json_formatter(record: logging.LogRecord) -> str:
    base = {
        "level": record.levelname,
        "logger": record.name,
        "msg": record.getMessage(),
        "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
    }
    extra = getattr(record, "extra", None)
    if isinstance(extra, dict):
        base.update(extra)
    return json.dumps(base, ensure_ascii=False, default=str)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return _json_formatter(record)


def setup_logging(logs_dir: Path, level: str = "INFO", console_level: str = "WARNING") -> logging.Logger:
    """
    Logger setup:
      - stderr, warnings and above by default so CLI output stays readable
      - {logs_dir}/fleetctl.log with rotation
    Both in JSON so the file can be grepped/parsed.
    """
    logs_dir = Path(logs_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    logfile = logs_dir / "fleetctl.log"

    logger = logging.getLogger("fleetctl")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()

    stream_h = logging.StreamHandler()
    stream_h.setFormatter(JsonFormatter())
    stream_h.setLevel(max(logger.level, getattr(logging, console_level.upper(), logging.WARNING)))

    file_h = RotatingFileHandler(logfile, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
    file_h.setFormatter(JsonFormatter())
    file_h.setLevel(logger.level)

    logger.addHandler(stream_h)
    logger.addHandler(file_h)
    logger.propagate = False
    logger.info("logging.initialized", extra={"extra": {"logfile": str(logfile)}})
    return logger


def attach_event_logger(bus: EventBus, logger: Optional[logging.Logger] = None) -> None:
    """Log every bus event; failed host outcomes and failed aggregates as warnings."""
    base_logger = logger or logging.getLogger("fleetctl.events")

    def _handler(ev: Event) -> None:
        failed = ev.payload.get("ok") is False or ev.payload.get("success") is False
        base_logger.log(
            logging.WARNING if failed else logging.INFO,
            ev.type,
            extra={
                "extra": {
                    "time": datetime.fromtimestamp(ev.ts, tz=timezone.utc).isoformat(),
                    "type": ev.type,
                    "source": ev.source,
                    "payload": dict(ev.payload),
                }
            },
        )

    bus.subscribe("", _handler)

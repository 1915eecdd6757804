"""JSON-lines run log for tiltgrid renders, plus a last-chance crash hook."""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import os
import platform
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


_LOGGER_NAME = "tiltgrid"

# Structured fields the renderer and CLI attach through ``extra=``.
RECORD_FIELDS = ("event", "theme", "seed", "cells", "cell_size", "digest", "path", "crash_id")


def log_dir() -> Path:
    override = os.environ.get("TILTGRID_LOG_DIR")
    if override:
        path = Path(override)
    elif platform.system() == "Windows":
        path = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming")) / "tiltgrid" / "logs"
    elif platform.system() == "Darwin":
        path = Path.home() / "Library" / "Logs" / "tiltgrid"
    else:
        path = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state")) / "tiltgrid"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    """One JSON object per record; render fields are copied through when present."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key in RECORD_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(keep_files: int = 7, console: bool = True, directory: Path | None = None) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    logger.propagate = False
    target = directory or log_dir()
    target.mkdir(parents=True, exist_ok=True)
    # one file per day of rendering; old runs age out after ``keep_files`` days
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(target / "renders.jsonl"),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.WARNING)
        stream_handler.setFormatter(logging.Formatter("tiltgrid %(levelname)s %(message)s"))
        logger.addHandler(stream_handler)

    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def install_crash_hooks() -> None:
    """Route uncaught exceptions and native faults (Pillow, numpy) into the run log."""
    logger = get_logger()

    def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
        crash_id = str(uuid.uuid4())
        logger.critical(
            f"uncaught exception crash_id={crash_id}",
            exc_info=(exc_type, exc_value, exc_tb),
            extra={"event": "uncaught_exception", "crash_id": crash_id},
        )

    sys.excepthook = _log_uncaught
    fault_file = (log_dir() / "fault.log").open("a", encoding="utf-8")
    faulthandler.enable(file=fault_file)

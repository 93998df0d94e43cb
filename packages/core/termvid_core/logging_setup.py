"""Structured local logging, decoder failure records, and crash hook setup."""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from termvid_decoder.errors import ChildExitError, DecoderError, TruncatedFrameError

from .config import config_root


_LOGGER_NAME = "termvid"

# Record attributes copied into the JSON line when a call passes them in ``extra``.
_EXTRA_FIELDS = ("event", "crash_id", "error_kind", "returncode", "decoder_stderr", "received", "expected")

_STDERR_TAIL_LINES = 20


def log_dir() -> Path:
    path = config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(
    keep_files: int = 7,
    console: bool = False,
    directory: Path | None = None,
) -> logging.Logger:
    """Attach the JSON file handler once.

    The console handler writes to stderr and is off by default: during
    playback the terminal belongs to the renderer.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    path = (directory or log_dir()) / "termvid.log"
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    if console:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        logger.addHandler(stream_handler)

    logger.info("logging configured", extra={"event": "logging_configured"})
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def log_decoder_failure(exc: DecoderError, logger: logging.Logger | None = None) -> None:
    """Record a session-ending decoder error, keeping the tail of ffmpeg's stderr."""
    logger = logger or get_logger()
    fields: dict[str, Any] = {"event": "playback_failed", "error_kind": type(exc).__name__}
    if isinstance(exc, ChildExitError):
        fields["returncode"] = exc.returncode
        fields["decoder_stderr"] = "\n".join(exc.stderr.strip().splitlines()[-_STDERR_TAIL_LINES:])
    elif isinstance(exc, TruncatedFrameError):
        fields["received"] = exc.received
        fields["expected"] = exc.expected
    logger.error("playback failed: %s", exc, extra=fields)


def _install_fault_handler(logger: logging.Logger) -> None:
    fault_path = log_dir() / "fault.log"
    fh = fault_path.open("a", encoding="utf-8")
    faulthandler.enable(file=fh)
    logger.info("fault handler enabled", extra={"event": "fault_handler_enabled"})


def install_crash_hooks() -> None:
    logger = get_logger()

    def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
        crash_id = str(uuid.uuid4())
        logger.critical(
            f"uncaught exception crash_id={crash_id}",
            exc_info=(exc_type, exc_value, exc_tb),
            extra={"event": "uncaught_exception", "crash_id": crash_id},
        )
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = _log_uncaught
    _install_fault_handler(logger)

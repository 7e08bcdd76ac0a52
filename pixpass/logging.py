"""Structured logging for pixpass: console/JSON output, audit events and call tracing."""

import functools
import json
import logging
import sys
import time
import traceback
from datetime import datetime, timezone

ROOT = "pixpass"

# Sits between WARNING (30) and ERROR (40)
AUDIT = 35
logging.addLevelName(AUDIT, "AUDIT")


def _truncate(value: object, max_len: int = 80) -> str:
    s = str(value)
    if len(s) > max_len:
        return s[:max_len] + "..."
    return s


def _timestamp(record: logging.LogRecord, fmt: str) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(fmt)[:-3]


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record):
        entry = {
            "ts": _timestamp(record, "%Y-%m-%dT%H:%M:%S.%f") + "Z",
            "level": record.levelname,
            "src": record.name,
        }
        event = getattr(record, "event", None)
        if event is not None:
            entry["event"] = event
        elif record.getMessage():
            entry["msg"] = record.getMessage()
        if hasattr(record, "duration_ms"):
            entry["duration_ms"] = round(record.duration_ms, 2)
        if getattr(record, "ctx", None):
            entry["ctx"] = record.ctx
        if record.exc_info and record.exc_info[1]:
            entry["traceback"] = traceback.format_exception(*record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored single-line output for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "AUDIT": "\033[35m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.COLORS.get(record.levelname, "")
        parts = [
            _timestamp(record, "%H:%M:%S.%f"),
            f"{color}{record.levelname:5s}{self.RESET}",
            f"[{record.name}]",
        ]

        event = getattr(record, "event", None)
        if event is not None:
            parts.append(event)
        if hasattr(record, "duration_ms"):
            parts.append(f"({record.duration_ms:.1f}ms)")

        ctx = getattr(record, "ctx", None)
        if ctx:
            parts.append(" ".join(f"{k}={_truncate(v)}" for k, v in ctx.items()))
        elif event is None and record.getMessage():
            parts.append(record.getMessage())

        if record.exc_info and record.exc_info[1]:
            parts.append("\n" + "".join(traceback.format_exception(*record.exc_info)))
        return " ".join(parts)


def setup_logging(level: str = "INFO", log_file: str | None = None, json_format: bool = False):
    """Configure the ``pixpass`` logger tree.

    Args:
        level: DEBUG, INFO, AUDIT, WARNING or ERROR.
        log_file: Optional path; the file always receives JSON lines.
        json_format: Emit JSON on the console as well.
    """
    root = logging.getLogger(ROOT)
    resolved = logging.getLevelName(level.upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(JsonFormatter() if json_format else ConsoleFormatter())
    root.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(JsonFormatter())
        root.addHandler(fh)


def get_logger(module_name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT}.{module_name}")


def _emit(log: logging.Logger, level: int, event: str, ctx: dict,
          duration_ms: float | None = None, exc_info=None):
    if not log.isEnabledFor(level):
        return
    record = log.makeRecord(
        name=log.name, level=level, fn="", lno=0,
        msg="", args=(), exc_info=exc_info,
    )
    record.event = event
    record.ctx = ctx
    if duration_ms is not None:
        record.duration_ms = duration_ms
    log.handle(record)


def audit(event: str, logger: logging.Logger | None = None, **context):
    """Emit an AUDIT-level event, e.g. ``audit("document.generated", logger=log, country=code)``."""
    _emit(logger or logging.getLogger(ROOT), AUDIT, event, context)


def _summarize(value) -> str:
    if isinstance(value, (str, int, float, bool)):
        return _truncate(repr(value), 80)
    if isinstance(value, (bytes, bytearray)):
        return f"bytes[{len(value)}]"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}[{len(value)}]"
    if isinstance(value, dict):
        return f"dict[{len(value)} keys]"
    size = getattr(value, "size", None)
    if "Image" in type(value).__name__ and size is not None:
        return f"<{type(value).__name__} {size[0]}x{size[1]}>"
    return type(value).__name__


def trace(func=None, *, logger_name: str | None = None):
    """Log entry (DEBUG), exit with timing (INFO) and failures (ERROR) of a call.

    Exceptions are logged and re-raised unchanged.
    """
    def decorator(fn):
        log = get_logger(logger_name or fn.__module__.replace(f"{ROOT}.", ""))

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            name = fn.__name__
            if log.isEnabledFor(logging.DEBUG):
                _emit(log, logging.DEBUG, f"{name}.enter", {
                    "args": [_summarize(a) for a in args],
                    "kwargs": {k: _summarize(v) for k, v in kwargs.items()},
                })

            start = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except Exception:
                _emit(log, logging.ERROR, f"{name}.error", {"function": name},
                      duration_ms=(time.perf_counter() - start) * 1000,
                      exc_info=sys.exc_info())
                raise
            _emit(log, logging.INFO, f"{name}.done", {"result": _summarize(result)},
                  duration_ms=(time.perf_counter() - start) * 1000)
            return result

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator

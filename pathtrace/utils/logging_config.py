"""Logging setup shared by the CLI and by applications embedding the engine.

Engine modules log through plain ``logging.getLogger(__name__)`` loggers and
stay at DEBUG on per-frame code paths, since sampling runs once per visible
item per frame.  Entry points call ``setup_logging()`` once to decide where
records go and how they look.

Line formats:
    human  2026-10-19T13:45:12.345Z | INFO     | app=sample_path path=wave | Length 412.3380
    json   {"t": "2026-10-19T13:45:12.345000+00:00", "lvl": "INFO", "name": "...", "msg": "...", "path": "wave"}

Contextual fields (``app``, ``path``, ``axis``, ...) live in a ContextVar, so
each thread or asyncio task sees its own set.  Only handlers installed by
``setup_logging()`` are replaced when it is called again; handlers added by
the host application are left alone.
"""

import contextvars
import json
import logging
import logging.handlers
import os
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

_fields: contextvars.ContextVar = contextvars.ContextVar("pathtrace_log_fields", default={})

_installed: List[logging.Handler] = []

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ContextFormatter(logging.Formatter):
    """Render records as human lines or JSON objects, with context fields.

    Parameters
    ----------
    fmt_mode : str
        "human" or "json"
    use_color : bool
        Color the level name; only honored for human lines on a TTY
    tz : str
        "UTC" (default) or "local"
    """

    def __init__(self, fmt_mode: str = "human", use_color: bool = True, tz: str = "UTC"):
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"fmt_mode must be 'human' or 'json', got {fmt_mode!r}")
        super().__init__()
        self.fmt_mode = fmt_mode
        self.use_color = use_color and fmt_mode == "human" and sys.stderr.isatty()
        self.tz = timezone.utc if tz == "UTC" else None

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=self.tz)
        fields = current_context()

        if self.fmt_mode == "json":
            payload = {
                "t": stamp.isoformat(),
                "lvl": record.levelname,
                "name": record.name,
                "pid": os.getpid(),
                "msg": record.getMessage(),
                **fields,
            }
            if record.exc_info:
                payload["exc"] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"

        suffix = "Z" if self.tz is not None else ""
        parts = [stamp.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + suffix, level]
        if fields:
            parts.append(" ".join(f"{k}={v}" for k, v in fields.items()))
        parts.append(record.getMessage())

        line = " | ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Install console and file handlers on the root logger.

    Safe to call repeatedly: handlers from a previous call are closed and
    replaced, so records are never duplicated.

    Parameters
    ----------
    log_level : str
        Root level name, e.g. "INFO" or "DEBUG"
    log_file : str, optional
        File to append records to; parent directories are created
    json : bool
        Write JSON lines to the file instead of human lines
    color : bool
        Color level names on the console
    to_stderr : bool
        Add a console handler on stderr
    rotate : dict, optional
        ``{"mode": "size", "max_bytes": ..., "backup_count": ...}`` or
        ``{"mode": "time", "when": "D", "interval": 1, "backup_count": ...}``
    tz : str
        "UTC" or "local" timestamps
    capture_warnings : bool
        Route ``warnings.warn`` through the ``py.warnings`` logger
    quiet_libs : list[str], optional
        Logger names raised to WARNING (e.g. ["torch"])
    context : dict, optional
        Fields pushed onto the logging context

    Returns
    -------
    dict
        ``{"handlers": [...]}`` in installation order.

    Raises
    ------
    ValueError
        If the level name or rotation mode is unknown.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    root = logging.getLogger()
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)

    handlers: List[logging.Handler] = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", color, tz))
        handlers.append(console)
    if log_file:
        file_handler = _file_handler(log_file, rotate)
        file_handler.setFormatter(
            ContextFormatter("json" if json else "human", use_color=False, tz=tz)
        )
        handlers.append(file_handler)

    for handler in handlers:
        root.addHandler(handler)
        _installed.append(handler)

    for name in quiet_libs or ():
        logging.getLogger(name).setLevel(logging.WARNING)
    if capture_warnings:
        logging.captureWarnings(True)
    if context:
        push_context(**context)

    return {"handlers": handlers}


def _file_handler(log_file: str, rotate: Optional[Dict[str, Any]]) -> logging.Handler:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    mode = (rotate or {}).get("mode")

    if mode is None:
        return logging.FileHandler(log_file, encoding="utf-8")
    if mode == "size":
        return logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=rotate.get("max_bytes", 5_000_000),
            backupCount=rotate.get("backup_count", 3),
            encoding="utf-8",
        )
    if mode == "time":
        return logging.handlers.TimedRotatingFileHandler(
            log_file,
            when=rotate.get("when", "D"),
            interval=rotate.get("interval", 1),
            backupCount=rotate.get("backup_count", 7),
            encoding="utf-8",
        )
    raise ValueError(f"Unknown rotation mode: {mode!r}; expected 'size' or 'time'")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Change the root level at runtime, e.g. ``set_level("DEBUG")``."""
    logging.getLogger().setLevel(level.upper())


def current_context() -> Dict[str, Any]:
    """Copy of the fields currently attached to log records."""
    return dict(_fields.get())


def push_context(**fields: Any) -> None:
    """Attach fields to every following record in this context."""
    _fields.set({**_fields.get(), **fields})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Detach the named fields, or all of them when keys is None."""
    if keys is None:
        _fields.set({})
        return
    remaining = dict(_fields.get())
    for key in keys:
        remaining.pop(key, None)
    _fields.set(remaining)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach fields for the duration of a ``with`` block.

    Examples
    --------
    >>> with log_context(path="wave"):
    ...     logger.info("Length %.3f", length)   # ... | path=wave | Length ...
    """
    token = _fields.set({**_fields.get(), **fields})
    try:
        yield
    finally:
        _fields.reset(token)

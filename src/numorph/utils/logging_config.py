"""Logging setup for preview scripts, tests and host applications.

The library only ever logs through ``logging.getLogger(__name__)``; handlers
are installed by whoever runs it, through setup_logging().

Provides:
    - setup_logging: stderr handler plus optional (rotating) file handler,
      human or JSON lines; repeated calls replace the handlers installed by
      the previous call
    - push_context / pop_context / get_context: key=value fields appended to
      every record (e.g. app, widget, shape_type)
    - install_excepthook, set_level, get_logger, shutdown

Line formats:
    human: 2026-10-19T13:45:12.345Z | DEBUG    | app=preview | Regenerated FlatShape ...
    json:  {"t": "2026-10-19T13:45:12.345000+00:00", "lvl": "DEBUG", "name": "...", "msg": "...", "app": "preview"}
"""

import contextvars
import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

_context_var = contextvars.ContextVar('numorph_logging_context', default={})

# Owned by setup_logging; foreign handlers on the root logger are left alone
_installed_handlers: List[logging.Handler] = []

_FORMAT_MODES = ("human", "json")


class ContextFormatter(logging.Formatter):
    """UTC timestamped lines carrying the current context fields.

    Parameters
    ----------
    fmt_mode : str
        "human" (pipe separated) or "json" (one object per line)
    """

    def __init__(self, fmt_mode: str = "human"):
        super().__init__()
        if fmt_mode not in _FORMAT_MODES:
            raise ValueError(f"fmt_mode must be one of {_FORMAT_MODES}, got {fmt_mode!r}")
        self.fmt_mode = fmt_mode

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        context = _context_var.get()

        if self.fmt_mode == "json":
            payload = {
                't': ts.isoformat(),
                'lvl': record.levelname,
                'name': record.name,
                'msg': record.getMessage(),
                **context,
            }
            if record.exc_info:
                payload['exc'] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        fields = [ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z', f"{record.levelname:8s}"]
        if context:
            fields.append(' '.join(f"{k}={v}" for k, v in context.items()))
        fields.append(record.getMessage())
        line = ' | '.join(fields)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    capture_warnings: bool = True,
    context: Optional[Dict[str, Any]] = None
) -> List[logging.Handler]:
    """Configure the root logger.

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Also log to this file (parent directories are created)
    json : bool
        JSON lines in the file handler; stderr stays human-readable
    to_stderr : bool
        Attach a stderr handler, default True
    rotate : dict, optional
        ``{"mode": "size", "max_bytes": ..., "backup_count": ...}`` or
        ``{"mode": "time", "when": "D", "interval": 1, "backup_count": ...}``
    capture_warnings : bool
        Route ``warnings.warn`` through logging, default True
    context : dict, optional
        Initial context fields

    Returns
    -------
    list of logging.Handler
        Handlers now installed

    Raises
    ------
    ValueError
        Unknown level or rotation mode
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    handlers = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human"))
        handlers.append(console)
    if log_file:
        handlers.append(_file_handler(Path(log_file), rotate, "json" if json else "human"))

    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)
    _installed_handlers.extend(handlers)

    if context:
        push_context(**context)
    logging.captureWarnings(capture_warnings)
    return list(handlers)


def _file_handler(path: Path, rotate: Optional[Dict[str, Any]], fmt_mode: str) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = (rotate or {}).get('mode')
    if rotate is None:
        handler = logging.FileHandler(path)
    elif mode == 'size':
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=rotate.get('max_bytes', 10_000_000),
            backupCount=rotate.get('backup_count', 3)
        )
    elif mode == 'time':
        handler = logging.handlers.TimedRotatingFileHandler(
            path,
            when=rotate.get('when', 'D'),
            interval=rotate.get('interval', 1),
            backupCount=rotate.get('backup_count', 7)
        )
    else:
        raise ValueError(f"Unknown rotation mode {mode!r}; use 'size' or 'time'")
    handler.setFormatter(ContextFormatter(fmt_mode))
    return handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Change the root level without touching handlers."""
    logging.getLogger().setLevel(level.upper())


def push_context(**fields) -> None:
    """Add fields to every subsequent record, e.g. ``push_context(widget="ok")``."""
    _context_var.set({**_context_var.get(), **fields})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Drop ``keys`` from the context, or all fields when None."""
    if keys is None:
        _context_var.set({})
        return
    _context_var.set({k: v for k, v in _context_var.get().items() if k not in keys})


def get_context() -> Dict[str, Any]:
    return dict(_context_var.get())


def install_excepthook() -> None:
    """Log uncaught exceptions as CRITICAL; Ctrl+C keeps the default hook."""
    def hook(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logging.getLogger(__name__).critical(
            "Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = hook


def shutdown() -> None:
    """Flush and close every handler."""
    logging.shutdown()

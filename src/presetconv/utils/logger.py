"""
Provides structured logging with log levels and an explicit output stream.

This module provides a structured logging system with UTC timestamps, log levels,
and key-value pair formatting for better log parsing and analysis. Every write
goes to the stream passed by the caller (the run's output sink), falling back
to standard output, and is routed through ``tqdm.write`` so records never
tear an active progress bar.
"""
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, TextIO

from tqdm import tqdm

_separator = " | "


class LogLevel(Enum):
    """Log level enumeration."""
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


_current_level = LogLevel.INFO


def set_log_level(level: LogLevel) -> None:
    """Set the current log level."""
    global _current_level
    _current_level = level


def _format_kv(data: Dict[str, Any]) -> str:
    """Format key-value pairs for logging."""
    parts = []
    for key, value in data.items():
        if isinstance(value, str):
            # Escape quotes and newlines to keep log entries single-line.
            escaped = value.replace("\r", "\\r").replace("\n", "\\n")
            escaped = escaped.replace('"', '\\"')
            parts.append(f'{key}="{escaped}"')
        elif value is None:
            parts.append(f'{key}=null')
        elif isinstance(value, bool):
            parts.append(f'{key}={str(value).lower()}')
        else:
            parts.append(f'{key}={value}')
    return _separator.join(parts)


def _write_line(text: str, stream: Optional[TextIO]) -> None:
    tqdm.write(text, file=stream if stream is not None else sys.stdout)


def _should_log(level: LogLevel) -> bool:
    """Check if a message at the given level should be logged."""
    return level.value >= _current_level.value


def log(event: str, level: LogLevel = LogLevel.INFO, *, stream: Optional[TextIO] = None, **kwargs) -> None:
    """
    Structured logging function.

    Args:
        event: Event name (e.g., 'batch.start', 'file.failed')
        level: Log level (DEBUG, INFO, WARN, ERROR)
        stream: Destination stream; standard output when omitted
        **kwargs: Key-value pairs to log
    """
    if not _should_log(level):
        return

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    header = f"{timestamp}{_separator}[{level.name}]{_separator}{event}"
    if kwargs:
        _write_line(f"{header}{_separator}{_format_kv(kwargs)}", stream)
    else:
        _write_line(header, stream)


def safe_print(*args, file: Optional[TextIO] = None, sep: str = " ") -> None:
    """
    Print a human-readable report line to ``file``.
    Use log() for structured records instead.
    """
    _write_line(sep.join(str(a) for a in args), file)

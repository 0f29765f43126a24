#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Logging setup for patchbin.

- FastFormatter: level-specific plain text, optional ANSI colours on a tty
- JsonFormatter: one structured JSON object per line
- setup_logging(): console handler plus optional rotating log file
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER_ROOT = "patchbin"
JSON_ENV = "PATCHBIN_LOG_JSON"

# =====================================================================================================
# Formatters
# =====================================================================================================

class FastFormatter(logging.Formatter):
    """Plain text formatter with one pre-built format per level."""

    def __init__(self, enable_colors: bool = False):
        super().__init__()
        self.enable_colors = enable_colors

        self._formatters = {
            level: logging.Formatter(fmt, style='{', datefmt='%H:%M:%S')
            for level, fmt in {
                logging.ERROR: "[{asctime}] ERROR   [{name}] {message}",
                logging.WARNING: "[{asctime}] WARNING [{name}] {message}",
                logging.INFO: "[{asctime}] INFO    {message}",
                logging.DEBUG: "[{asctime}] DEBUG   {name}:{lineno} - {message}",
            }.items()
        }

        self.colors = {
            logging.ERROR: '\033[91m',     # Red
            logging.WARNING: '\033[93m',   # Yellow
            logging.INFO: '\033[92m',      # Green
            logging.DEBUG: '\033[94m',     # Blue
        } if enable_colors else {}

    def format(self, record):
        formatter = self._formatters.get(record.levelno)
        if formatter is None:
            formatter = self._formatters[logging.ERROR if record.levelno > logging.ERROR else logging.INFO]
        text = formatter.format(record)

        color = self.colors.get(record.levelno)
        if color:
            return f"{color}{text}\033[0m"
        return text


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }
        error = getattr(record, "error", None)
        if isinstance(error, dict):
            payload["error"] = error
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)

# =====================================================================================================
# Setup
# =====================================================================================================

def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_size_string(size_str: str) -> int:
    """Parse size string such as '10MB' into bytes."""
    size_str = size_str.upper().strip()

    multipliers = {
        'KB': 1024,
        'MB': 1024 ** 2,
        'GB': 1024 ** 3,
        'B': 1,
    }

    for suffix, multiplier in multipliers.items():
        if size_str.endswith(suffix):
            try:
                return int(float(size_str[:-len(suffix)].strip()) * multiplier)
            except ValueError:
                continue

    try:
        return int(float(size_str))
    except ValueError:
        return 10 * 1024 * 1024  # Default 10MB


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_console_logging: bool = True,
    structured_json: Optional[bool] = None,
    max_log_size: str = "10MB",
    backup_count: int = 3,
    stream=None,
) -> Dict[str, Any]:
    """Configure the ``patchbin`` logger hierarchy.

    Handlers are attached to the ``patchbin`` logger rather than the root
    logger so an embedding host keeps its own logging untouched. Calling
    this again replaces the handlers installed by the previous call.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    use_json = structured_json if structured_json is not None else _env_bool(JSON_ENV)

    logger = logging.getLogger(LOGGER_ROOT)
    logger.setLevel(numeric_level)
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    handlers = {}

    if enable_console_logging:
        stream = stream or sys.stderr
        console_handler = logging.StreamHandler(stream)
        console_handler.setLevel(numeric_level)

        enable_colors = (hasattr(stream, 'isatty') and
                         stream.isatty() and
                         os.environ.get('TERM') != 'dumb')

        console_handler.setFormatter(JsonFormatter() if use_json else FastFormatter(enable_colors=enable_colors))
        logger.addHandler(console_handler)
        handlers['console'] = console_handler

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            str(log_path),
            maxBytes=_parse_size_string(max_log_size),
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JsonFormatter() if use_json else FastFormatter())
        logger.addHandler(file_handler)
        handlers['file'] = file_handler

    logger.debug("Logging initialized (level=%s, json=%s, file=%s)", log_level, use_json, log_file)

    return {
        'logger': logger,
        'handlers': handlers,
    }


@lru_cache(maxsize=32)
def get_logger(name: str) -> logging.Logger:
    """Get cached logger instance below the patchbin root."""
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")


def cleanup_logging():
    """Close and detach the handlers installed by setup_logging()."""
    logger = logging.getLogger(LOGGER_ROOT)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    get_logger.cache_clear()

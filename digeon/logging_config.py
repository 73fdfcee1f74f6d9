"""
Digeon Logging Configuration
Structured logging with context for debugging and monitoring
"""
import asyncio
import json
import logging
import os
import sys
import time
import traceback
from datetime import datetime, timezone
from functools import wraps
from typing import Optional

# ============================================================
# LOG LEVELS
# ============================================================

LOG_LEVEL = os.environ.get("DIGEON_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.environ.get("DIGEON_LOG_FORMAT", "json")  # json or text


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


# ============================================================
# FORMATTERS
# ============================================================

class StructuredFormatter(logging.Formatter):
    """Formats logs as JSON"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": _utc_timestamp(),
            "level": record.levelname,
            "logger": getattr(record, "logger_name", record.name),
            "message": record.getMessage(),
        }
        if hasattr(record, "context"):
            log_data.update(record.context)
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Formats logs as readable text"""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        stamp = datetime.now(timezone.utc).strftime("%H:%M:%S")
        parts = [f"{color}[{stamp}]", f"[{record.levelname}]", f"{self.RESET}{record.getMessage()}"]

        context = getattr(record, "context", None)
        if context:
            context_str = " ".join(f"{k}={v}" for k, v in context.items() if k != "traceback")
            if context_str:
                parts.append(f"\033[90m({context_str}){self.RESET}")
        return " ".join(parts)


# ============================================================
# STRUCTURED LOGGER
# ============================================================

class StructuredLogger:
    """Logger that attaches keyword context to every record"""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(StructuredFormatter() if LOG_FORMAT == "json" else TextFormatter())
            self.logger.addHandler(handler)

    def _log(self, level: str, message: str, **context):
        extra = {"context": context, "logger_name": self.name}
        getattr(self.logger, level)(message, extra=extra)

    @staticmethod
    def _with_error(error: Optional[Exception], context: dict) -> dict:
        if error:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
            context["traceback"] = traceback.format_exc()
        return context

    def debug(self, message: str, **context):
        self._log("debug", message, **context)

    def info(self, message: str, **context):
        self._log("info", message, **context)

    def warning(self, message: str, **context):
        self._log("warning", message, **context)

    def error(self, message: str, error: Optional[Exception] = None, **context):
        self._log("error", message, **self._with_error(error, context))

    def critical(self, message: str, error: Optional[Exception] = None, **context):
        self._log("critical", message, **self._with_error(error, context))


# ============================================================
# FUNCTION TIMING DECORATOR
# ============================================================

def timed(logger: StructuredLogger):
    """Decorator to log function execution time"""
    def decorator(func):
        def _report(start: float, error: Optional[Exception] = None):
            duration = round((time.time() - start) * 1000, 2)
            if error is None:
                logger.debug(f"{func.__name__} completed", function=func.__name__, duration_ms=duration)
            else:
                logger.error(f"{func.__name__} failed", error=error, function=func.__name__, duration_ms=duration)

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start = time.time()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _report(start, e)
                raise
            _report(start)
            return result

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            start = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _report(start, e)
                raise
            _report(start)
            return result

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


# ============================================================
# LOGGER INSTANCES
# ============================================================

api_logger = StructuredLogger("digeon.api")
db_logger = StructuredLogger("digeon.db")
media_logger = StructuredLogger("digeon.media")


def get_logger(name: str) -> StructuredLogger:
    """Get or create a logger by name"""
    return StructuredLogger(f"digeon.{name}")

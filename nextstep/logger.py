"""
Structured Logger for the NextStep advisor

Every entry is one JSON object (timestamp, level, event, context, metadata)
so logs from the MCP tool and the REST endpoint can be filtered the same way.

Key features:
1. Structured JSON output, indented when LOG_PRETTY is set
2. Tool call tracking (start, end, error) with durations
3. Error taxonomy (VALIDATION_ERROR, PARSE_ERROR, CONFIG_ERROR, UNKNOWN_ERROR)
4. Level filtering driven by LOG_LEVEL
"""

import json
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from nextstep.config import settings


def _utc_now_iso() -> str:
    """Return current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _duration_ms(started_at: str, ended_at: str) -> int:
    start_dt = datetime.fromisoformat(started_at.replace("Z", "+00:00"))
    end_dt = datetime.fromisoformat(ended_at.replace("Z", "+00:00"))
    return int((end_dt - start_dt).total_seconds() * 1000)


# ============================================================================
# TYPES
# ============================================================================

class LogLevel(str, Enum):
    """Log level enumeration"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


_LEVEL_ORDER = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
}


class ErrorType(str, Enum):
    """Standard error types for consistent error handling"""
    VALIDATION_ERROR = "VALIDATION_ERROR"    # Request payload failed validation
    PARSE_ERROR = "PARSE_ERROR"              # Request body was not valid JSON
    CONFIG_ERROR = "CONFIG_ERROR"            # Settings rejected at startup
    UNKNOWN_ERROR = "UNKNOWN_ERROR"          # Unexpected error


# ============================================================================
# LOGGER CLASS
# ============================================================================

class Logger:
    """Structured logger with JSON output"""

    def __init__(self, context: Optional[str] = None, min_level: Optional[str] = None):
        self.context = context
        self.min_level = min_level

    def _enabled(self, level: LogLevel) -> bool:
        threshold = (self.min_level or settings.log_level).upper()
        try:
            return _LEVEL_ORDER[level] >= _LEVEL_ORDER[LogLevel(threshold)]
        except ValueError:
            return True

    def _log(
        self,
        level: LogLevel,
        event: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log a structured message"""
        if not self._enabled(level):
            return

        entry = {
            "timestamp": _utc_now_iso(),
            "level": level.value,
            "event": event,
        }

        if self.context:
            entry["context"] = self.context

        if metadata:
            entry["metadata"] = metadata

        output = json.dumps(
            entry,
            indent=2 if settings.log_pretty else None,
            default=str,
            ensure_ascii=False,
        )

        # Route to appropriate stream
        if level in (LogLevel.ERROR, LogLevel.WARN):
            print(output, file=sys.stderr)
        else:
            print(output, file=sys.stdout)

    def debug(self, event: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message"""
        self._log(LogLevel.DEBUG, event, metadata)

    def info(self, event: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Log info message"""
        self._log(LogLevel.INFO, event, metadata)

    def warn(self, event: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message"""
        self._log(LogLevel.WARN, event, metadata)

    def error(self, event: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        """Log error message"""
        self._log(LogLevel.ERROR, event, metadata)

    def tool_call_start(self, tool_name: str, args: Optional[Dict[str, Any]] = None) -> str:
        """Log the start of a tool call, returns timestamp for duration tracking"""
        started_at = _utc_now_iso()

        metadata = {
            "tool_name": tool_name,
            "started_at": started_at,
        }
        if args:
            metadata["arguments"] = args

        self.info("Tool call started", metadata)
        return started_at

    def tool_call_end(
        self,
        tool_name: str,
        started_at: str,
        result: Optional[Any] = None,
    ) -> None:
        """Log successful tool call completion"""
        ended_at = _utc_now_iso()
        metadata = {
            "tool_name": tool_name,
            "started_at": started_at,
            "ended_at": ended_at,
            "duration_ms": _duration_ms(started_at, ended_at),
            "success": True,
        }
        if result is not None:
            metadata["result_summary"] = self._summarize_result(result)

        self.info("Tool call completed", metadata)

    def tool_call_error(
        self,
        tool_name: str,
        started_at: str,
        error: Exception,
        error_type: ErrorType = ErrorType.UNKNOWN_ERROR,
    ) -> None:
        """Log tool call error"""
        ended_at = _utc_now_iso()
        metadata = {
            "tool_name": tool_name,
            "started_at": started_at,
            "ended_at": ended_at,
            "duration_ms": _duration_ms(started_at, ended_at),
            "success": False,
            "error_type": error_type.value,
            "error_message": str(error),
        }

        self.error("Tool call failed", metadata)

    def validation_error(
        self,
        validation_context: str,
        error: Exception,
        data: Optional[Any] = None,
    ) -> None:
        """Log a validation error with details"""
        metadata = {
            "validation_context": validation_context,
            "error_type": ErrorType.VALIDATION_ERROR.value,
            "error": str(error),
        }
        if data is not None:
            metadata["invalid_data"] = self._summarize_result(data)

        self.error("Validation failed", metadata)

    def _summarize_result(self, result: Any) -> Any:
        """Summarize result for logging (avoid logging huge objects)"""
        if result is None:
            return None

        if isinstance(result, (list, tuple)):
            return {
                "_type": "array",
                "length": len(result),
                "sample": list(result[:3]),
            }

        if isinstance(result, dict):
            return {
                "_type": "object",
                "keys": list(result.keys())[:10],
            }

        if isinstance(result, (str, int, float, bool)):
            return result

        return {"_type": type(result).__name__}


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def classify_error(error: Exception) -> ErrorType:
    """Helper to classify errors into ErrorType"""
    # Imported lazily: the tools package imports this module
    from pydantic import ValidationError
    from nextstep.tools.next_step import NextStepValidationError

    if isinstance(error, (ValidationError, NextStepValidationError)):
        return ErrorType.VALIDATION_ERROR
    if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError)):
        return ErrorType.PARSE_ERROR

    error_msg = str(error).lower()
    if "validation" in error_msg:
        return ErrorType.VALIDATION_ERROR
    if "json" in error_msg or "decode" in error_msg or "parse" in error_msg:
        return ErrorType.PARSE_ERROR
    if "setting" in error_msg or "must be one of" in error_msg:
        return ErrorType.CONFIG_ERROR

    return ErrorType.UNKNOWN_ERROR


# ============================================================================
# EXPORTS
# ============================================================================


def create_logger(context: str) -> Logger:
    """Create a logger with a specific context"""
    return Logger(context)

"""Structured JSON logging configuration."""

import json
import logging
import re
import sys
from datetime import UTC, datetime

# Patterns that may carry credentials, redacted before any log output.
# Invitation tokens authorise accept/decline on their own, so they are treated
# the same way as bearer tokens.
_SENSITIVE_PATTERNS = [
    (re.compile(r"(Authorization:\s*Bearer\s+)\S+", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r'(api[_-]?key["\s:=]+)[^\s&"\']+', re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r'(password["\s:=]+)[^\s&"\']+', re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r'(secret["\s:=]+)[^\s&"\']+', re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r"(/invite/)[A-Za-z0-9_\-]{16,}"), r"\1[REDACTED]"),
    (re.compile(r"(/invitations/)(?!project/|user/)[A-Za-z0-9_\-]{40,}"), r"\1[REDACTED]"),
]

# Extra record attributes copied into JSON output when present
_CONTEXT_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "user_id",
    "project_id",
    "task_id",
)


def _redact(value: str) -> str:
    """Apply all sensitive-data patterns to a string and return the redacted result."""
    for pattern, replacement in _SENSITIVE_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


class SensitiveDataFilter(logging.Filter):
    """Redacts bearer tokens, invitation tokens, API keys and secrets from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(_redact(a) if isinstance(a, str) else a for a in record.args)
        elif isinstance(record.args, dict):
            record.args = {
                k: (_redact(v) if isinstance(v, str) else v) for k, v in record.args.items()
            }
        return True


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in _CONTEXT_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        # default=str covers datetimes and UUIDs passed through `extra`
        return json.dumps(log_entry, default=str)


def setup_logging(json_output: bool = False, level: str = "INFO") -> None:
    """
    Configure root logger.

    Args:
        json_output: If True, use JSON formatter (for production).
                     If False, use standard human-readable format (for development).
        level: Log level string.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)

    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    # Filters on the handler see records propagated from child loggers too
    handler.addFilter(SensitiveDataFilter())

    root.addHandler(handler)

    # Quiet noisy libraries
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

"""
Structured JSON Logging for MTN MoMo SDK

Provides a JSON formatter for structured logging output.
Useful for log aggregation systems like ELK, Datadog, CloudWatch.
"""

import json
import logging
import sys
from typing import Any, Dict

EXTRA_FIELDS = ("reference_id", "endpoint", "status_code")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),  # milliseconds
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        return json.dumps(payload, default=str)


def setup_structured_logger(level: int = logging.INFO, stream=None) -> None:
    """
    Configure structured JSON logging for the SDK.

    Args:
        level: Logging level (default: logging.INFO)
        stream: Output stream (default: sys.stdout)

    Example:
        >>> from mtn_momo.logging_setup import setup_structured_logger
        >>> setup_structured_logger(logging.DEBUG)
        >>> logger = logging.getLogger("mtn_momo")
        >>> logger.info("Transfer submitted", extra={"reference_id": "0f8c..."})
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())

    sdk_logger = logging.getLogger("mtn_momo")
    sdk_logger.setLevel(level)
    sdk_logger.handlers = [handler]
    sdk_logger.propagate = False

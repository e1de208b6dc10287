"""
MTN MoMo SDK Utilities
"""

import base64
import json
import logging
import uuid
from typing import Any, Dict, Optional

logger = logging.getLogger("mtn_momo")


def new_reference_id() -> str:
    """Fresh X-Reference-Id for a money-movement call"""
    return str(uuid.uuid4())


def basic_auth(api_user: str, api_key: str) -> str:
    """
    Build the Basic authorization header value for the token endpoint

    Args:
        api_user: API user id
        api_key: API key

    Returns:
        "Basic <base64(api_user:api_key)>"
    """
    raw = f"{api_user}:{api_key}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def parse_body(text: Optional[str]) -> Dict[str, Any]:
    """
    Parse a response body

    Empty bodies (the 202 replies of transfer and request-to-pay) become an
    empty dict; bodies that are not JSON are kept under "raw".
    """
    if not text:
        return {}
    try:
        body = json.loads(text)
    except ValueError:
        return {"raw": text}
    if not isinstance(body, dict):
        return {"data": body}
    return body


def setup_logging(debug: bool = False) -> None:
    """
    Setup logging for SDK

    Args:
        debug: Enable debug level logging
    """
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("mtn_momo").setLevel(level)


def sanitize_for_logging(data: dict) -> dict:
    """
    Sanitize sensitive data for logging

    Args:
        data: Dictionary to sanitize

    Returns:
        Sanitized dictionary
    """
    sensitive_keys = {
        "api_key",
        "apikey",
        "token",
        "secret",
        "password",
        "subscription-key",
        "authorization",
    }
    sanitized = {}

    for key, value in data.items():
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            sanitized[key] = "***REDACTED***"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_for_logging(value)
        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_for_logging(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            sanitized[key] = value

    return sanitized

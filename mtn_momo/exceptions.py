"""
MTN MoMo SDK Exceptions
"""

from typing import Optional, Dict, Any


class MomoError(Exception):
    """Base exception for MTN MoMo SDK"""

    pass


class HttpError(MomoError):
    """API request error passed through from the MoMo API"""

    def __init__(
        self,
        status_code: int,
        message: str,
        body: Optional[Dict[str, Any]] = None,
        reference_id: Optional[str] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.body = body or {}
        self.reference_id = reference_id
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.message}"


class AuthError(HttpError):
    """API user / API key rejected (HTTP 401)"""

    pass


class ServiceUnavailableError(HttpError):
    """MoMo service failure (HTTP 500)"""

    pass


class TimeoutError(MomoError):
    """Request timeout error"""

    def __init__(self, message: str, reference_id: Optional[str] = None):
        self.reference_id = reference_id
        super().__init__(message)


class NetworkError(MomoError):
    """Network/connectivity error"""

    pass


class ConfigurationError(MomoError):
    """SDK configuration error"""

    pass


class ValidationError(MomoError):
    """
    Input validation error.

    Raised when workflow parameters are missing or malformed.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.errors = errors or {}


class NodeOperationError(MomoError):
    """Node operation failed for one input item"""

    def __init__(self, message: str, item_index: int):
        super().__init__(message)
        self.item_index = item_index


def reference_hint(reference_id: Optional[str]) -> str:
    if not reference_id:
        return ""
    return (
        f" Transaction reference ID: {reference_id}."
        " Check the transaction status later with this reference ID."
    )


def translate_http_error(
    status_code: int,
    body: Optional[Dict[str, Any]] = None,
    reference_id: Optional[str] = None,
) -> HttpError:
    """
    Map an HTTP error status to an SDK exception.

    401 becomes AuthError, 500 becomes ServiceUnavailableError and every
    other status is returned as a plain HttpError with the provider message.

    Args:
        status_code: HTTP status code (>= 400)
        body: Parsed response body
        reference_id: Reference id of the money-movement call, if any

    Returns:
        HttpError: Exception to raise
    """
    body = body or {}

    if status_code == 401:
        return AuthError(
            status_code,
            "Authentication with MTN MoMo failed. Check the API user and API key.",
            body=body,
            reference_id=reference_id,
        )

    if status_code == 500:
        return ServiceUnavailableError(
            status_code,
            "MTN MoMo service is temporarily unavailable." + reference_hint(reference_id),
            body=body,
            reference_id=reference_id,
        )

    message = (
        body.get("message")
        or body.get("error_description")
        or body.get("code")
        or body.get("error")
        or f"HTTP {status_code}"
    )
    return HttpError(status_code, str(message), body=body, reference_id=reference_id)

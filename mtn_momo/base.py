"""
Request construction and response handling shared by the sync and async clients
"""

import logging
from typing import Any, Dict, Optional, Union

from mtn_momo.__version__ import __version__
from mtn_momo.exceptions import AuthError, translate_http_error, reference_hint
from mtn_momo.models import (
    ClientConfig,
    MomoCredentials,
    RequestToPayRequest,
    TransferRequest,
)
from mtn_momo.utils import basic_auth, parse_body, sanitize_for_logging, setup_logging

TRANSFER_PATH = "/disbursement/v1_0/transfer"
REQUEST_TO_PAY_PATH = "/collection/v1_0/requesttopay"


class BaseClient:
    """
    Holds the credentials, derives the base URL and builds every request
    the MoMo API expects. Subclasses only perform the I/O.
    """

    logger = logging.getLogger("mtn_momo.client")

    def __init__(
        self,
        credentials: Union[MomoCredentials, Dict[str, Any]],
        config: Optional[ClientConfig] = None,
    ):
        if isinstance(credentials, dict):
            credentials = MomoCredentials.model_validate(credentials)
        self.credentials = credentials
        self.config = config or ClientConfig()

        if self.config.debug:
            setup_logging(debug=True)

        self.base_url = (self.config.base_url or credentials.base_url).rstrip("/")

        self.headers = {
            "Accept": "application/json",
            "User-Agent": f"mtn-momo-python/{__version__}",
            "Ocp-Apim-Subscription-Key": credentials.subscription_key,
            "X-Target-Environment": credentials.x_target_environment,
        }

        self.logger.debug(
            "MTN MoMo client initialized: %s %s (target %s)",
            self.base_url,
            credentials.product,
            credentials.x_target_environment,
        )

    @property
    def product(self) -> str:
        return self.credentials.product

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    # ===================================================================
    # Endpoint paths
    # ===================================================================

    def _token_path(self) -> str:
        return f"/{self.product}/token/"

    def _status_path(self, reference_id: str) -> str:
        if self.product == "disbursement":
            return f"{TRANSFER_PATH}/{reference_id}"
        return f"{REQUEST_TO_PAY_PATH}/{reference_id}"

    def _balance_path(self) -> str:
        return f"/{self.product}/v1_0/account/balance"

    def _account_holder_path(self, phone: str) -> str:
        return f"/{self.product}/v1_0/accountholder/msisdn/{phone}/active"

    # ===================================================================
    # Headers and payloads
    # ===================================================================

    def _token_headers(self) -> Dict[str, str]:
        headers = self.headers.copy()
        headers["Authorization"] = basic_auth(
            self.credentials.api_user, self.credentials.api_key
        )
        return headers

    def _bearer_headers(self, token: str, reference_id: Optional[str] = None) -> Dict[str, str]:
        headers = self.headers.copy()
        headers["Authorization"] = f"Bearer {token}"
        if reference_id:
            headers["X-Reference-Id"] = reference_id
            headers["Content-Type"] = "application/json"
        return headers

    @staticmethod
    def _coerce_transfer(request: Union[TransferRequest, Dict[str, Any]]) -> TransferRequest:
        if isinstance(request, dict):
            return TransferRequest.model_validate(request)
        return request

    @staticmethod
    def _coerce_request_to_pay(
        request: Union[RequestToPayRequest, Dict[str, Any]]
    ) -> RequestToPayRequest:
        if isinstance(request, dict):
            return RequestToPayRequest.model_validate(request)
        return request

    def _check_product(self, expected: str, operation: str) -> None:
        if self.product != expected:
            self.logger.warning(
                "%s uses the %s API but the credentials are for %s; "
                "the token may be rejected",
                operation,
                expected,
                self.product,
            )

    # ===================================================================
    # Responses
    # ===================================================================

    def _log_request(self, method: str, url: str, json: Optional[Dict[str, Any]]) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            safe_data = sanitize_for_logging(json) if json else None
            self.logger.debug("%s %s: %s", method, url, safe_data)

    def _timeout_message(self, timeout: float, reference_id: Optional[str]) -> str:
        return f"Request to MTN MoMo timed out after {timeout:g}s." + reference_hint(
            reference_id
        )

    def _handle_response(
        self,
        endpoint: str,
        status: int,
        text: str,
        reference_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Parse a response and raise the translated error for failures

        Raises:
            AuthError: HTTP 401
            ServiceUnavailableError: HTTP 500
            HttpError: Any other status >= 400
        """
        body = parse_body(text)

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("Response (%s): %s", status, sanitize_for_logging(body))

        if status >= 400:
            error = translate_http_error(status, body, reference_id)
            self.logger.error(
                "MTN MoMo %s failed: %s",
                endpoint,
                error,
                extra={
                    "endpoint": endpoint,
                    "status_code": status,
                    "reference_id": reference_id,
                },
            )
            raise error

        return body

    @staticmethod
    def _extract_token(body: Dict[str, Any]) -> str:
        token = body.get("access_token")
        if not token:
            raise AuthError(200, "Token response did not include an access token", body=body)
        return token

"""
MTN MoMo SDK Synchronous Client
"""

import logging
import time
from typing import Any, Dict, Optional, Union

from mtn_momo.base import BaseClient, REQUEST_TO_PAY_PATH, TRANSFER_PATH
from mtn_momo.exceptions import NetworkError, TimeoutError as MomoTimeoutError
from mtn_momo.http.adapter import HTTPAdapter
from mtn_momo.http.requests_adapter import RequestsAdapter
from mtn_momo.metrics import metrics_request
from mtn_momo.models import (
    ClientConfig,
    MomoCredentials,
    RequestToPayRequest,
    TransferRequest,
)
from mtn_momo.utils import new_reference_id

logger = logging.getLogger("mtn_momo.client")


class MtnMomoClient(BaseClient):
    """
    Synchronous MTN MoMo API client

    Same operations and error translation as MtnMomoApiClient, backed by
    requests for callers without an event loop.

    Example:
        >>> from mtn_momo import MtnMomoClient, MomoCredentials
        >>> client = MtnMomoClient(MomoCredentials.from_env())
        >>> client.get_account_balance()
        {'availableBalance': '1000', 'currency': 'EUR'}
    """

    def __init__(
        self,
        credentials: Union[MomoCredentials, Dict[str, Any]],
        config: Optional[ClientConfig] = None,
        http_adapter: Optional[HTTPAdapter] = None,
    ):
        """
        Initialize MTN MoMo client

        Args:
            credentials: MoMo credentials (model or camelCase dict)
            config: Client configuration
            http_adapter: Optional transport; a requests adapter by default
        """
        super().__init__(credentials, config)
        self._owns_adapter = http_adapter is None
        self.http = http_adapter or RequestsAdapter()

    def __enter__(self) -> "MtnMomoClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_adapter:
            self.http.close()

    def _send(
        self,
        endpoint: str,
        method: str,
        path: str,
        headers: Dict[str, str],
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
        reference_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        url = self._url(path)
        timeout = timeout or self.config.timeout
        self._log_request(method, url, json)
        start = time.time()

        try:
            status, text, _ = self.http.send(
                method, url, headers=headers, json=json, timeout=timeout
            )
        except MomoTimeoutError as e:
            metrics_request(endpoint, 0, time.time() - start)
            logger.error(
                "MTN MoMo %s timed out after %ss",
                endpoint,
                timeout,
                extra={"endpoint": endpoint, "reference_id": reference_id},
            )
            raise MomoTimeoutError(
                self._timeout_message(timeout, reference_id), reference_id=reference_id
            ) from e
        except NetworkError as e:
            metrics_request(endpoint, 0, time.time() - start)
            logger.error(f"Network error during {endpoint}: {e}")
            raise

        metrics_request(endpoint, status, time.time() - start)
        return self._handle_response(endpoint, status, text, reference_id)

    def get_access_token(self) -> str:
        """
        Exchange the API user and key for a bearer token

        Raises:
            AuthError: If the API user / key is rejected
            ServiceUnavailableError: If the token service fails
        """
        body = self._send("token", "POST", self._token_path(), self._token_headers(), json={})
        return self._extract_token(body)

    def transfer(self, request: Union[TransferRequest, Dict[str, Any]]) -> str:
        """
        Send money to a payee (Disbursement)

        Args:
            request: Transfer details

        Returns:
            Reference id to poll with get_transaction_status
        """
        request = self._coerce_transfer(request)
        self._check_product("disbursement", "transfer")
        reference_id = new_reference_id()
        token = self.get_access_token()

        self._send(
            "transfer",
            "POST",
            TRANSFER_PATH,
            self._bearer_headers(token, reference_id),
            json=request.to_payload(),
            timeout=self.config.payment_timeout,
            reference_id=reference_id,
        )
        logger.info(f"Transfer submitted: {reference_id}")
        return reference_id

    def request_to_pay(self, request: Union[RequestToPayRequest, Dict[str, Any]]) -> str:
        """
        Request a payment from a payer (Collection)

        Args:
            request: Request-to-pay details

        Returns:
            Reference id to poll with get_transaction_status
        """
        request = self._coerce_request_to_pay(request)
        self._check_product("collection", "request_to_pay")
        reference_id = new_reference_id()
        token = self.get_access_token()

        self._send(
            "request_to_pay",
            "POST",
            REQUEST_TO_PAY_PATH,
            self._bearer_headers(token, reference_id),
            json=request.to_payload(),
            timeout=self.config.payment_timeout,
            reference_id=reference_id,
        )
        logger.info(f"Request to pay submitted: {reference_id}")
        return reference_id

    def get_transaction_status(self, reference_id: str) -> Dict[str, Any]:
        token = self.get_access_token()
        return self._send(
            "transaction_status",
            "GET",
            self._status_path(reference_id),
            self._bearer_headers(token),
        )

    def get_account_balance(self) -> Dict[str, Any]:
        token = self.get_access_token()
        return self._send(
            "account_balance", "GET", self._balance_path(), self._bearer_headers(token)
        )

    def validate_account_holder(self, phone: str) -> Dict[str, Any]:
        token = self.get_access_token()
        return self._send(
            "validate_account_holder",
            "GET",
            self._account_holder_path(phone),
            self._bearer_headers(token),
        )

"""
Asynchronous Client for MTN MoMo SDK

Provides non-blocking API calls using aiohttp.
Ideal for async frameworks like FastAPI, aiohttp, or async scripts.
"""

import logging
import time
from typing import Any, Dict, Optional, Union

from .base import BaseClient, REQUEST_TO_PAY_PATH, TRANSFER_PATH
from .exceptions import NetworkError, TimeoutError as MomoTimeoutError
from .http.adapter import AsyncHTTPAdapter
from .http.aiohttp_adapter import AiohttpAdapter
from .metrics import metrics_request
from .models import ClientConfig, MomoCredentials, RequestToPayRequest, TransferRequest
from .utils import new_reference_id

logger = logging.getLogger("mtn_momo.async")


class MtnMomoApiClient(BaseClient):
    """
    Asynchronous MTN MoMo API client

    Every operation fetches a fresh access token and makes exactly one
    further call. Nothing is cached or retried.

    Example:
        >>> import asyncio
        >>> from mtn_momo import MtnMomoApiClient, MomoCredentials, TransferRequest
        >>>
        >>> async def main():
        ...     credentials = MomoCredentials.from_env()
        ...     async with MtnMomoApiClient(credentials) as client:
        ...         reference_id = await client.transfer(
        ...             TransferRequest(
        ...                 amount="500",
        ...                 currency="RWF",
        ...                 external_id="tx1",
        ...                 payee={"partyId": "250788123456"},
        ...             )
        ...         )
        ...         print(await client.get_transaction_status(reference_id))
        >>>
        >>> asyncio.run(main())
    """

    logger = logger

    def __init__(
        self,
        credentials: Union[MomoCredentials, Dict[str, Any]],
        config: Optional[ClientConfig] = None,
        http_adapter: Optional[AsyncHTTPAdapter] = None,
    ):
        """
        Initialize async client.

        Args:
            credentials: MoMo credentials (model or camelCase dict)
            config: Client configuration
            http_adapter: Optional transport; an aiohttp adapter by default
        """
        super().__init__(credentials, config)
        self._owns_adapter = http_adapter is None
        self.http = http_adapter or AiohttpAdapter()

    async def __aenter__(self) -> "MtnMomoApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session owned by this client"""
        if self._owns_adapter:
            await self.http.close()

    async def _send(
        self,
        endpoint: str,
        method: str,
        path: str,
        headers: Dict[str, str],
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
        reference_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Make one HTTP call and translate its outcome.

        Raises:
            AuthError: HTTP 401
            ServiceUnavailableError: HTTP 500
            HttpError: Any other error status
            MomoTimeoutError: If the call exceeds its timeout
            NetworkError: If the connection fails
        """
        url = self._url(path)
        timeout = timeout or self.config.timeout
        self._log_request(method, url, json)
        start = time.time()

        try:
            status, text, _ = await self.http.send(
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
        except NetworkError:
            metrics_request(endpoint, 0, time.time() - start)
            logger.exception("Network error during %s", endpoint)
            raise

        metrics_request(endpoint, status, time.time() - start)
        return self._handle_response(endpoint, status, text, reference_id)

    async def get_access_token(self) -> str:
        """
        Exchange the API user and key for a bearer token.

        Returns:
            str: Access token

        Raises:
            AuthError: If the API user / key is rejected
            ServiceUnavailableError: If the token service fails
        """
        body = await self._send("token", "POST", self._token_path(), self._token_headers(), json={})
        return self._extract_token(body)

    async def transfer(self, request: Union[TransferRequest, Dict[str, Any]]) -> str:
        """
        Send money to a payee (Disbursement).

        Args:
            request: Transfer details

        Returns:
            str: Reference id to poll with get_transaction_status
        """
        request = self._coerce_transfer(request)
        self._check_product("disbursement", "transfer")
        reference_id = new_reference_id()
        token = await self.get_access_token()

        await self._send(
            "transfer",
            "POST",
            TRANSFER_PATH,
            self._bearer_headers(token, reference_id),
            json=request.to_payload(),
            timeout=self.config.payment_timeout,
            reference_id=reference_id,
        )
        logger.info("Transfer submitted", extra={"reference_id": reference_id})
        return reference_id

    async def request_to_pay(self, request: Union[RequestToPayRequest, Dict[str, Any]]) -> str:
        """
        Request a payment from a payer (Collection).

        Args:
            request: Request-to-pay details

        Returns:
            str: Reference id to poll with get_transaction_status
        """
        request = self._coerce_request_to_pay(request)
        self._check_product("collection", "request_to_pay")
        reference_id = new_reference_id()
        token = await self.get_access_token()

        await self._send(
            "request_to_pay",
            "POST",
            REQUEST_TO_PAY_PATH,
            self._bearer_headers(token, reference_id),
            json=request.to_payload(),
            timeout=self.config.payment_timeout,
            reference_id=reference_id,
        )
        logger.info("Request to pay submitted", extra={"reference_id": reference_id})
        return reference_id

    async def get_transaction_status(self, reference_id: str) -> Dict[str, Any]:
        """Provider status record for a transfer or request-to-pay"""
        token = await self.get_access_token()
        return await self._send(
            "transaction_status",
            "GET",
            self._status_path(reference_id),
            self._bearer_headers(token),
        )

    async def get_account_balance(self) -> Dict[str, Any]:
        token = await self.get_access_token()
        return await self._send(
            "account_balance", "GET", self._balance_path(), self._bearer_headers(token)
        )

    async def validate_account_holder(self, phone: str) -> Dict[str, Any]:
        """Check whether an MSISDN belongs to an active account ({"result": bool})"""
        token = await self.get_access_token()
        return await self._send(
            "validate_account_holder",
            "GET",
            self._account_holder_path(phone),
            self._bearer_headers(token),
        )

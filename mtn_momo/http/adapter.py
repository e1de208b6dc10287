"""
Base HTTP adapter interfaces.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

Response = Tuple[int, str, Dict[str, str]]


class HTTPAdapter(ABC):
    """
    Abstract base class for synchronous HTTP adapters.

    Allows pluggable HTTP clients for different use cases.
    """

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
        timeout: float = 10,
    ) -> Response:
        """
        Send HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            headers: Request headers
            json: JSON request body
            timeout: Request timeout in seconds

        Returns:
            Tuple of (status_code, response_text, response_headers)

        Raises:
            NetworkError: On network connectivity issues
            TimeoutError: On request timeout
        """
        raise NotImplementedError

    def close(self) -> None:
        pass


class AsyncHTTPAdapter(ABC):
    """Abstract base class for asynchronous HTTP adapters."""

    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
        timeout: float = 10,
    ) -> Response:
        """Send HTTP request; same contract as HTTPAdapter.send."""
        raise NotImplementedError

    async def close(self) -> None:
        pass

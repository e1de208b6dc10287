"""
Aiohttp-based HTTP adapter (asynchronous).
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from .adapter import AsyncHTTPAdapter, Response
from ..exceptions import NetworkError, TimeoutError as MomoTimeoutError


class AiohttpAdapter(AsyncHTTPAdapter):
    """
    Asynchronous HTTP adapter using aiohttp library.

    The session is created on first use, inside the running event loop.
    A session passed in by the caller is never closed by the adapter.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize aiohttp adapter.

        Args:
            session: Optional aiohttp.ClientSession instance
        """
        self._external_session = session is not None
        self.session = session

    async def __aenter__(self) -> "AiohttpAdapter":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession()
        return self.session

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
        timeout: float = 10,
    ) -> Response:
        session = self._get_session()
        timeout_obj = aiohttp.ClientTimeout(total=timeout)

        try:
            async with session.request(
                method=method,
                url=url,
                headers=headers,
                json=json,
                timeout=timeout_obj,
            ) as response:
                text = await response.text(errors="replace")
                return (
                    response.status,
                    text,
                    dict(response.headers),
                )

        except asyncio.TimeoutError as e:
            raise MomoTimeoutError(f"Request timed out after {timeout}s") from e

        except aiohttp.ClientError as e:
            raise NetworkError(f"Network request failed: {e}") from e

    async def close(self) -> None:
        """Close the session."""
        if not self._external_session and self.session and not self.session.closed:
            await self.session.close()

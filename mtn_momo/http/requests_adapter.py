"""
Requests-based HTTP adapter (synchronous).
"""

import requests
from typing import Any, Dict, Optional
from .adapter import HTTPAdapter, Response
from ..exceptions import NetworkError, TimeoutError as MomoTimeoutError


class RequestsAdapter(HTTPAdapter):
    """
    Synchronous HTTP adapter using requests library.

    Single attempt per call: failures surface to the caller unchanged.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize requests adapter.

        Args:
            session: Optional requests.Session instance
        """
        self._external_session = session is not None
        self.session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json: Optional[Any] = None,
        timeout: float = 10,
    ) -> Response:
        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                json=json,
                timeout=timeout,
            )

            return (
                response.status_code,
                response.text,
                dict(response.headers),
            )

        except requests.exceptions.Timeout as e:
            raise MomoTimeoutError(f"Request timed out after {timeout}s") from e

        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network request failed: {e}") from e

    def close(self) -> None:
        if not self._external_session:
            self.session.close()

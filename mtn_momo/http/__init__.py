"""
HTTP adapters for MTN MoMo SDK.
"""

from .adapter import HTTPAdapter, AsyncHTTPAdapter
from .requests_adapter import RequestsAdapter
from .aiohttp_adapter import AiohttpAdapter

__all__ = ["HTTPAdapter", "AsyncHTTPAdapter", "RequestsAdapter", "AiohttpAdapter"]

"""
MTN MoMo Python SDK
Client for the MTN Mobile Money Collection and Disbursement APIs
"""

from mtn_momo.async_client import MtnMomoApiClient
from mtn_momo.client import MtnMomoClient
from mtn_momo.node import MtnMomoNode
from mtn_momo.models import (
    ClientConfig,
    MomoCredentials,
    Party,
    TransferRequest,
    RequestToPayRequest,
)
from mtn_momo.exceptions import (
    MomoError,
    HttpError,
    AuthError,
    ServiceUnavailableError,
    TimeoutError,
    NetworkError,
    ValidationError,
    ConfigurationError,
    NodeOperationError,
)
from mtn_momo.__version__ import __version__

__all__ = [
    "MtnMomoApiClient",
    "MtnMomoClient",
    "MtnMomoNode",
    "ClientConfig",
    "MomoCredentials",
    "Party",
    "TransferRequest",
    "RequestToPayRequest",
    "MomoError",
    "HttpError",
    "AuthError",
    "ServiceUnavailableError",
    "TimeoutError",
    "NetworkError",
    "ValidationError",
    "ConfigurationError",
    "NodeOperationError",
    "__version__",
]

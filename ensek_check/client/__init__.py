"""HTTP transport for the ENSEK API."""

from ensek_check.client.ensek_client import EnsekApiClient
from ensek_check.client.models import (
    ApiResult,
    BuyResponse,
    BuyResult,
    ErrorResponse,
    LoginResponse,
    LoginResult,
    NetworkError,
    OrdersResult,
    ResetResponse,
    ResetResult,
)

__all__ = [
    "EnsekApiClient",
    "ApiResult",
    "BuyResponse",
    "BuyResult",
    "ErrorResponse",
    "LoginResponse",
    "LoginResult",
    "NetworkError",
    "OrdersResult",
    "ResetResponse",
    "ResetResult",
]

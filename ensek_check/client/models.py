"""Request/response models for the ENSEK API.

Every client call returns one of the ``*Result`` wrappers below instead of
raising. A transport failure (DNS, refused connection, timeout) is reported
with ``status_code == 0`` and a populated ``network_error``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ensek_check.domain.buy_message import BuyMessage, extract_buy_message
from ensek_check.domain.order import Order

NETWORK_REQUEST = "request"
NETWORK_TIMEOUT = "timeout"


def _text(payload: Mapping[str, Any], key: str) -> str | None:
    for name, value in payload.items():
        if isinstance(name, str) and name.lower() == key:
            return None if value is None else str(value)
    return None


@dataclass(frozen=True)
class NetworkError:
    """A request that never produced an HTTP response."""

    kind: str  # NETWORK_REQUEST or NETWORK_TIMEOUT
    message: str


@dataclass(frozen=True)
class ErrorResponse:
    error: str | None = None
    message: str | None = None

    @classmethod
    def from_json(cls, payload: Any) -> ErrorResponse | None:
        if not isinstance(payload, Mapping):
            return None
        return cls(error=_text(payload, "error"), message=_text(payload, "message"))

    def __str__(self) -> str:
        return f"Error: {self.error} - {self.message}"


@dataclass(frozen=True)
class LoginResponse:
    access_token: str | None = None
    message: str | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> LoginResponse:
        return cls(access_token=_text(payload, "access_token"), message=_text(payload, "message"))

    def __str__(self) -> str:
        token = "***PRESENT***" if self.access_token else "MISSING"
        return f"Login Response - Message: {self.message}, AccessToken: {token}"


@dataclass(frozen=True)
class ResetResponse:
    description: str | None = None
    status: str | None = None
    timestamp: str | None = None
    message: str | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> ResetResponse:
        return cls(
            description=_text(payload, "description"),
            status=_text(payload, "status"),
            timestamp=_text(payload, "timestamp"),
            message=_text(payload, "message"),
        )


@dataclass(frozen=True)
class BuyResponse:
    message: str | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> BuyResponse:
        return cls(message=_text(payload, "message"))


@dataclass
class ApiResult:
    """Common fields of every API call result."""

    is_success: bool
    status_code: int
    error_message: str | None = None
    error_data: ErrorResponse | None = None
    raw_response: str | None = None
    network_error: NetworkError | None = None

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_bad_request(self) -> bool:
        return self.status_code == 400

    @property
    def is_network_error(self) -> bool:
        return self.network_error is not None

    def describe(self, operation: str) -> str:
        if self.is_success:
            return f"{operation} Success (HTTP {self.status_code})"
        return f"{operation} Failed (HTTP {self.status_code}): {self.error_message or 'No error message'}"


@dataclass
class LoginResult(ApiResult):
    data: LoginResponse | None = None

    @property
    def access_token(self) -> str | None:
        return self.data.access_token if self.data else None


@dataclass
class ResetResult(ApiResult):
    data: ResetResponse | None = None


@dataclass
class BuyResult(ApiResult):
    data: BuyResponse | None = None

    @property
    def message(self) -> str | None:
        return self.data.message if self.data else None

    @property
    def buy_message(self) -> BuyMessage:
        return extract_buy_message(self.message)


@dataclass
class OrdersResult(ApiResult):
    orders: list[Order] = field(default_factory=list)

"""HTTP client for the ENSEK energy-trading API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from ensek_check.client.models import (
    NETWORK_REQUEST,
    NETWORK_TIMEOUT,
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
from ensek_check.domain.order import Order
from ensek_check.runtime import get_logger

logger = get_logger(__name__)

LOGIN_PATH = "/ENSEK/login"
RESET_PATH = "/ENSEK/reset"
BUY_PATH = "/ENSEK/buy/{energy_id}/{quantity}"
ORDERS_PATH = "/ENSEK/orders"

R = TypeVar("R", bound=ApiResult)


def _error_result(result_type: type[R], response: httpx.Response) -> R:
    """Build a failed result from a non-2xx response, keeping any error payload."""
    error_data: ErrorResponse | None = None
    try:
        error_data = ErrorResponse.from_json(response.json())
    except ValueError:
        pass  # Body is not JSON; fall back to the raw text below.

    error_message = (error_data.message if error_data else None) or response.text or f"HTTP {response.status_code} error"
    return result_type(
        is_success=False,
        status_code=response.status_code,
        error_message=error_message,
        error_data=error_data,
        raw_response=response.text,
    )


def _network_result(result_type: type[R], error: httpx.RequestError) -> R:
    kind = NETWORK_TIMEOUT if isinstance(error, httpx.TimeoutException) else NETWORK_REQUEST
    prefix = "Request timed out" if kind == NETWORK_TIMEOUT else "HTTP request failed"
    message = f"{prefix}: {error}"
    return result_type(
        is_success=False,
        status_code=0,
        error_message=message,
        network_error=NetworkError(kind=kind, message=str(error)),
    )


class EnsekApiClient:
    """Thin synchronous wrapper over the four ENSEK endpoints.

    The bearer token is kept on the client and attached per request, so
    login is always sent without an Authorization header.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)
        self._bearer_token: str | None = None
        logger.info("ENSEK API client initialized with base URL: %s", base_url)

    def __enter__(self) -> EnsekApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    @property
    def bearer_token(self) -> str | None:
        return self._bearer_token

    def set_bearer_token(self, bearer_token: str) -> None:
        """Use ``bearer_token`` for all authenticated requests."""
        self._bearer_token = bearer_token
        logger.info("Bearer token set for authenticated requests")

    def clear_bearer_token(self) -> None:
        self._bearer_token = None

    def _auth_headers(self) -> dict[str, str]:
        if not self._bearer_token:
            return {}
        return {"Authorization": f"Bearer {self._bearer_token}"}

    def _send(
        self,
        operation: str,
        result_type: type[R],
        request: Callable[[], httpx.Response],
        on_success: Callable[[httpx.Response], R],
    ) -> R:
        try:
            response = request()
        except httpx.RequestError as e:
            logger.error("%s request failed: %s", operation, e)
            return _network_result(result_type, e)

        if not response.is_success:
            logger.warning(
                "%s failed. Status: %s, Response: %s",
                operation,
                response.status_code,
                response.text,
            )
            return _error_result(result_type, response)

        try:
            return on_success(response)
        except (ValueError, TypeError, AttributeError) as e:
            logger.error("Failed to parse %s response: %s", operation, e)
            return result_type(
                is_success=False,
                status_code=response.status_code,
                error_message=f"Failed to parse {operation} response: {e}",
                raw_response=response.text,
            )

    def login(self, username: str, password: str) -> LoginResult:
        """Authenticate and return the access token in the result."""
        logger.info("Attempting to login with username: %s", username)

        def on_success(response: httpx.Response) -> LoginResult:
            data = LoginResponse.from_json(_json_object(response))
            logger.info("Login successful for user: %s", username)
            return LoginResult(is_success=True, status_code=response.status_code, data=data, raw_response=response.text)

        return self._send(
            "login",
            LoginResult,
            lambda: self._http.post(LOGIN_PATH, json={"username": username, "password": password}),
            on_success,
        )

    def reset(self) -> ResetResult:
        """Reset the test data back to its initial state."""
        logger.info("Resetting test data")

        def on_success(response: httpx.Response) -> ResetResult:
            data = ResetResponse.from_json(_json_object(response))
            logger.info("Test data reset successful. Status: %s", response.status_code)
            return ResetResult(is_success=True, status_code=response.status_code, data=data, raw_response=response.text)

        return self._send(
            "reset",
            ResetResult,
            lambda: self._http.post(RESET_PATH, headers=self._auth_headers()),
            on_success,
        )

    def buy(self, energy_id: int, quantity: int) -> BuyResult:
        """Purchase ``quantity`` units of the energy type ``energy_id``."""
        logger.info("Purchasing energy - ID: %s, Quantity: %s", energy_id, quantity)
        path = BUY_PATH.format(energy_id=energy_id, quantity=quantity)

        def on_success(response: httpx.Response) -> BuyResult:
            data = BuyResponse.from_json(_json_object(response))
            logger.info(
                "Energy purchase successful. ID: %s, Quantity: %s, Status: %s",
                energy_id,
                quantity,
                response.status_code,
            )
            return BuyResult(is_success=True, status_code=response.status_code, data=data, raw_response=response.text)

        return self._send(
            "buy",
            BuyResult,
            lambda: self._http.put(path, headers=self._auth_headers()),
            on_success,
        )

    def list_orders(self) -> OrdersResult:
        """Fetch every order known to the API."""
        logger.info("Attempting to get orders")

        def on_success(response: httpx.Response) -> OrdersResult:
            payload = response.json()
            if not isinstance(payload, list):
                raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
            orders = [Order.from_json(item) for item in payload if isinstance(item, dict)]
            logger.info("Orders retrieved successfully. Count: %s", len(orders))
            return OrdersResult(
                is_success=True,
                status_code=response.status_code,
                orders=orders,
                raw_response=response.text,
            )

        return self._send(
            "orders",
            OrdersResult,
            lambda: self._http.get(ORDERS_PATH, headers=self._auth_headers()),
            on_success,
        )


def _json_object(response: httpx.Response) -> dict[str, Any]:
    payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    return payload

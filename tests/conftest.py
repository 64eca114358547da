"""Shared pytest fixtures/options for ensek-check tests."""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest
from ensek_check.application import EnsekSession
from ensek_check.client import EnsekApiClient
from ensek_check.runtime import EnsekSettings

_BUY_PATH_RE = re.compile(r"^/ENSEK/buy/(-?\d+)/(-?\d+)$")


def pytest_addoption(parser):
    """Custom pytest option for the live conformance suite."""
    parser.addoption(
        "--ensek-live",
        action="store_true",
        default=False,
        help="Run tests/live/ against the ENSEK API configured by ENSEK_* / .env.",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--ensek-live"):
        return
    skip_live = pytest.mark.skip(reason="live ENSEK API tests need --ensek-live")
    for item in items:
        if item.get_closest_marker("live") is not None:
            item.add_marker(skip_live)


class FakeEnsekApi:
    """In-memory stand-in for the ENSEK endpoints, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.token = "fake-token"
        self.username = "test"
        self.password = "testing"
        self.orders: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []
        self.buy_message: Callable[[int, int], str] | None = None
        self.order_fuel = {1: "gas", 2: "nuclear", 3: "Elec", 4: "oil"}
        self.order_quantity_override: int | None = None
        self.order_time = "Mon, 7 Feb 2022 17:53:19 GMT"
        self.orders_status = 200
        self._next_id = 0

    def _authorized(self, request: httpx.Request) -> bool:
        return request.headers.get("authorization") == f"Bearer {self.token}"

    def _new_order_id(self) -> str:
        self._next_id += 1
        return f"{self._next_id:08x}-0000-4000-8000-000000000000"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/ENSEK/login" and request.method == "POST":
            body = json.loads(request.content or b"{}")
            if body.get("username") == self.username and body.get("password") == self.password:
                return httpx.Response(200, json={"access_token": self.token, "message": "Success"})
            return httpx.Response(401, json={"message": "Unauthorized"})

        if not self._authorized(request):
            return httpx.Response(401, json={"message": "Unauthorized"})

        if path == "/ENSEK/reset" and request.method == "POST":
            self.orders.clear()
            return httpx.Response(200, json={"message": "Success"})

        if path == "/ENSEK/orders" and request.method == "GET":
            if self.orders_status != 200:
                return httpx.Response(self.orders_status, json={"message": "Orders unavailable"})
            return httpx.Response(200, json=self.orders)

        match = _BUY_PATH_RE.match(path)
        if match and request.method == "PUT":
            energy_id, quantity = int(match.group(1)), int(match.group(2))
            if energy_id not in self.order_fuel or quantity <= 0:
                return httpx.Response(400, json={"message": "Bad request"})
            if self.buy_message is not None:
                return httpx.Response(200, json={"message": self.buy_message(energy_id, quantity)})
            order_id = self._new_order_id()
            self.orders.append(
                {
                    "fuel": self.order_fuel[energy_id],
                    "id": order_id,
                    "quantity": (
                        self.order_quantity_override if self.order_quantity_override is not None else quantity
                    ),
                    "time": self.order_time,
                }
            )
            unit = {1: "m³", 2: "MW", 3: "kWh", 4: "Litres"}[energy_id]
            message = (
                f"You have purchased {quantity} {unit} at a cost of 3.4000000000000004 "
                f"there are 10 units remaining. Your order id is {order_id}"
            )
            return httpx.Response(200, json={"message": message})

        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def fake_api() -> FakeEnsekApi:
    return FakeEnsekApi()


@pytest.fixture
def settings() -> EnsekSettings:
    return EnsekSettings(base_url="https://ensek.test", settle_delay=0.0)


@pytest.fixture
def session(fake_api: FakeEnsekApi, settings: EnsekSettings) -> Iterator[EnsekSession]:
    client = EnsekApiClient(settings.base_url, transport=httpx.MockTransport(fake_api))
    yield EnsekSession(client, settings)
    client.close()

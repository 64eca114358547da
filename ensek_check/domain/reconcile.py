"""Reconcile a buy request and its confirmation against the orders listing.

The orders endpoint is read independently of the buy call, so the order it
lists for a purchase must agree with what was asked for:

- the unit named in the buy message matches the catalog unit for the id
- an order with the returned order id exists
- that order's fuel matches the catalog fuel for the id
- that order's quantity equals the *requested* quantity

The orders endpoint records the request, not the amount actually fulfilled,
so the parsed purchased quantity is not compared.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from ensek_check.domain.buy_message import BuyMessage
from ensek_check.domain.energy import (
    expected_fuel_type,
    expected_unit_type,
    is_known_energy_id,
    normalize_fuel_type,
    normalize_unit_type,
)
from ensek_check.domain.order import Order, as_local_aware, find_order

UNIT_TYPE = "unit_type"
ORDER_LOOKUP = "order_lookup"
FUEL_TYPE = "fuel_type"
QUANTITY = "quantity"


@dataclass(frozen=True)
class FieldCheck:
    """One hard comparison made during reconciliation."""

    name: str
    matched: bool
    expected: str
    actual: str
    message: str


@dataclass(frozen=True)
class ReconcileConfig:
    """Configuration for the reconciliation checks."""

    # Drift beyond this is reported as a warning, never as a failure.
    max_time_drift: timedelta = timedelta(minutes=5)


@dataclass
class ReconciliationResult:
    """Result of reconciling one buy attempt with the orders listing."""

    energy_id: int
    order_id: str | None
    skipped: bool = False
    skip_reason: str | None = None
    checks: list[FieldCheck] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    matched_order: Order | None = None
    time_difference_minutes: float | None = None

    @classmethod
    def skip(cls, energy_id: int, order_id: str | None, reason: str) -> ReconciliationResult:
        return cls(energy_id=energy_id, order_id=order_id, skipped=True, skip_reason=reason)

    @property
    def failures(self) -> list[FieldCheck]:
        return [check for check in self.checks if not check.matched]

    @property
    def is_match(self) -> bool:
        return not self.skipped and not self.failures

    def check(self, name: str) -> FieldCheck | None:
        for item in self.checks:
            if item.name == name:
                return item
        return None

    @property
    def details(self) -> str:
        """Human-readable one-line summary, in the order the checks ran."""
        if self.skipped:
            return f"skipped: {self.skip_reason}"
        parts = [f"{c.name}: {'ok' if c.matched else 'MISMATCH'}" for c in self.checks]
        if self.time_difference_minutes is not None:
            parts.append(f"timing: {self.time_difference_minutes:.2f} min")
        parts.extend(f"warning: {w}" for w in self.warnings)
        return ", ".join(parts)


def _check_unit_type(energy_id: int, unit_type: str) -> FieldCheck:
    expected = expected_unit_type(energy_id)
    normalized_expected = normalize_unit_type(expected)
    normalized_actual = normalize_unit_type(unit_type)
    matched = normalized_actual == normalized_expected
    if matched:
        message = f"Unit type {unit_type} matches expected {expected} for energy ID {energy_id}"
    else:
        message = (
            f"Buy response unit type should match expected unit for energy type: "
            f"Expected {expected} (normalized: {normalized_expected}) for energy ID {energy_id}, "
            f"Got {unit_type} (normalized: {normalized_actual})"
        )
    return FieldCheck(UNIT_TYPE, matched, expected, unit_type, message)


def _check_fuel_type(energy_id: int, order: Order) -> FieldCheck:
    expected = expected_fuel_type(energy_id)
    actual = order.fuel or ""
    normalized_expected = normalize_fuel_type(expected)
    normalized_actual = normalize_fuel_type(actual)
    matched = normalized_actual == normalized_expected
    if matched:
        message = f"Fuel type {actual} matches expected {expected} for energy ID {energy_id}"
    else:
        message = (
            f"Order fuel type should match input energy type: "
            f"Expected {expected} (normalized: {normalized_expected}) for energy ID {energy_id}, "
            f"Got {actual} (normalized: {normalized_actual})"
        )
    return FieldCheck(FUEL_TYPE, matched, expected, actual, message)


def _check_quantity(requested_quantity: int, order: Order) -> FieldCheck:
    matched = order.quantity == requested_quantity
    if matched:
        message = f"Quantity {order.quantity} matches requested {requested_quantity}"
    else:
        message = (
            f"Order quantity should match requested quantity: "
            f"Expected {requested_quantity}, Got {order.quantity}"
        )
    return FieldCheck(QUANTITY, matched, str(requested_quantity), str(order.quantity), message)


def reconcile_order(
    energy_id: int,
    requested_quantity: int,
    order_id: str | None,
    buy_message: BuyMessage | None,
    orders: Sequence[Order],
    *,
    purchased_at: datetime | None = None,
    config: ReconcileConfig | None = None,
) -> ReconciliationResult:
    """
    Check that the order created by a buy call agrees with the request.

    Args:
        energy_id: Energy id used in the buy request
        requested_quantity: Quantity used in the buy request
        order_id: Order id parsed from the buy message
        buy_message: Parsed buy message, used for its unit type
        orders: Orders listing fetched after the purchase
        purchased_at: When the purchase was attempted; enables the timing annotation
        config: Reconciliation configuration

    Returns:
        A ReconciliationResult. Mismatches are reported in ``checks``;
        nothing is raised.
    """
    if config is None:
        config = ReconcileConfig()

    if not order_id:
        return ReconciliationResult.skip(energy_id, order_id, "no order id to validate")

    if not is_known_energy_id(energy_id):
        return ReconciliationResult.skip(energy_id, order_id, f"no expected fuel/unit for energy ID {energy_id}")

    result = ReconciliationResult(energy_id=energy_id, order_id=order_id)

    if buy_message is not None and buy_message.unit_type:
        result.checks.append(_check_unit_type(energy_id, buy_message.unit_type))
    else:
        result.warnings.append("no unit type in buy response to validate")

    order = find_order(orders, order_id)
    if order is None:
        result.checks.append(
            FieldCheck(
                ORDER_LOOKUP,
                matched=False,
                expected=order_id,
                actual="",
                message=f"Order with ID {order_id} not found in orders endpoint ({len(orders)} orders searched)",
            )
        )
        return result

    result.matched_order = order
    result.checks.append(FieldCheck(ORDER_LOOKUP, True, order_id, order.id or "", f"Found order {order.id}"))
    result.checks.append(_check_fuel_type(energy_id, order))
    result.checks.append(_check_quantity(requested_quantity, order))

    order_time = order.parsed_time
    if purchased_at is not None and order_time is not None:
        drift = abs(as_local_aware(order_time) - as_local_aware(purchased_at))
        result.time_difference_minutes = drift.total_seconds() / 60
        if drift > config.max_time_drift:
            result.warnings.append(
                f"order time {order.time} is {result.time_difference_minutes:.2f} minutes from purchase time"
            )
    elif purchased_at is not None:
        result.warnings.append(f"could not validate timing - order time {order.time!r} did not parse")

    return result

"""Order records returned by the orders endpoint and helpers over them."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from dateutil import parser as date_parser

# Two defaults differing in year, month and day. A string that carries a full
# date parses to the same value under both; a fragment like "5" or "Mon" does not.
_DATE_CHECK_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def parse_order_time(value: str | None) -> datetime | None:
    """Parse an order timestamp, returning None unless it names a full date."""
    if not value:
        return None
    try:
        first, second = (date_parser.parse(value, default=default) for default in _DATE_CHECK_DEFAULTS)
    except (ValueError, OverflowError):
        return None
    if first != second:
        return None
    return first


def as_local_aware(moment: datetime) -> datetime:
    """Attach the local timezone to naive datetimes so they compare with aware ones.

    Naive values at the edges of the datetime range (e.g. ``0001-01-01T00:00:00``,
    a serialized .NET default) cannot be shifted to local time and are taken as UTC.
    """
    if moment.tzinfo is not None:
        return moment
    try:
        return moment.astimezone()
    except (ValueError, OverflowError):
        return moment.replace(tzinfo=timezone.utc)


def _lookup(payload: Mapping[str, Any], key: str) -> Any:
    # The orders endpoint is matched case-insensitively on property names.
    for name, value in payload.items():
        if isinstance(name, str) and name.lower() == key:
            return value
    return None


def _coerce_quantity(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


def _coerce_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class Order:
    """A single order as listed by the orders endpoint."""

    id: str | None
    fuel: str | None
    quantity: int = 0
    time: str | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> Order:
        return cls(
            id=_coerce_text(_lookup(payload, "id")),
            fuel=_coerce_text(_lookup(payload, "fuel")),
            quantity=_coerce_quantity(_lookup(payload, "quantity")),
            time=_coerce_text(_lookup(payload, "time")),
        )

    @property
    def parsed_time(self) -> datetime | None:
        return parse_order_time(self.time)

    def is_created_before(self, moment: datetime) -> bool:
        """True when the order time parses and is strictly earlier than ``moment``."""
        parsed = self.parsed_time
        if parsed is None:
            return False
        return as_local_aware(parsed) < as_local_aware(moment)


def orders_created_before(orders: Iterable[Order], moment: datetime) -> list[Order]:
    return [order for order in orders if order.is_created_before(moment)]


def count_orders_before(orders: Iterable[Order], moment: datetime) -> int:
    return sum(1 for order in orders if order.is_created_before(moment))


def find_order(orders: Iterable[Order], order_id: str) -> Order | None:
    """Return the first order whose id equals ``order_id`` ignoring case."""
    wanted = order_id.casefold()
    for order in orders:
        if order.id is not None and order.id.casefold() == wanted:
            return order
    return None


def fuel_breakdown(orders: Iterable[Order]) -> dict[str, int]:
    """Count orders per fuel label, sorted by label; blank fuels are ignored."""
    counts = Counter(order.fuel for order in orders if order.fuel)
    return {fuel: counts[fuel] for fuel in sorted(counts)}


@dataclass(frozen=True)
class OrderStructureSummary:
    """Outcome of checking each order for required fields and a parseable time."""

    valid: int
    invalid_time: int
    empty_fields: int
    negative_quantity: int

    @property
    def total(self) -> int:
        return self.valid + self.invalid_time + self.empty_fields


def summarize_order_structure(orders: Sequence[Order]) -> OrderStructureSummary:
    """Classify orders as valid, missing required fields, or with an unparseable time.

    Empty fields take precedence over a bad time. Negative quantities are
    counted separately and do not affect the other buckets.
    """
    valid = 0
    invalid_time = 0
    empty_fields = 0
    for order in orders:
        if not order.id or not order.fuel or not order.time:
            empty_fields += 1
        elif order.parsed_time is None:
            invalid_time += 1
        else:
            valid += 1
    negative_quantity = sum(1 for order in orders if order.quantity < 0)
    return OrderStructureSummary(
        valid=valid,
        invalid_time=invalid_time,
        empty_fields=empty_fields,
        negative_quantity=negative_quantity,
    )

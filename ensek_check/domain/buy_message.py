"""Field extraction for the buy endpoint's confirmation message.

The buy endpoint answers with a single sentence such as::

    You have purchased 2970 m³ at a cost of 3.4000000000000004 there are
    10 units remaining. Your order id is 69d09d33-9944-4d27-9f89-c5ffddf8a4e8

Each field is scanned independently; an unmatched pattern leaves the field
as None and never raises. Cost and order id belong to a purchase and are only
read from text that contains the purchase phrase.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

PURCHASE_PHRASE = "You have purchased"

_QUANTITY_RE = re.compile(r"You have purchased (\d+)")
_COST_RE = re.compile(r"at a cost of (\d*\.?\d+)")
_REMAINING_RE = re.compile(r"there are (-?\d+) units remaining")
_ORDER_ID_RE = re.compile(r"Your order\s?id is ([a-fA-F0-9-]+)")
_UNIT_TYPE_RE = re.compile(r"You have purchased \d+ (\S+)")

# Matched case-sensitively against the raw message.
NO_FUEL_PHRASES = ("There is no", "fuel to purchase")

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class BuyMessage:
    """Structured view of a buy confirmation message."""

    raw_text: str = ""
    purchased_quantity: int | None = None
    cost: Decimal | None = None
    remaining_units: int | None = None
    order_id: str | None = None
    unit_type: str | None = None

    @property
    def is_successful_purchase(self) -> bool:
        return self.purchased_quantity is not None and self.cost is not None and bool(self.order_id)

    @property
    def is_no_fuel_available(self) -> bool:
        return any(phrase in self.raw_text for phrase in NO_FUEL_PHRASES)


def _search_int(pattern: re.Pattern[str], text: str) -> int | None:
    match = pattern.search(text)
    if match is None:
        return None
    return int(match.group(1))


def _search_cost(text: str) -> Decimal | None:
    match = _COST_RE.search(text)
    if match is None:
        return None
    try:
        return Decimal(match.group(1)).quantize(CENTS, rounding=ROUND_HALF_EVEN)
    except InvalidOperation:
        return None


def _search_str(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None


def extract_buy_message(text: str | None) -> BuyMessage:
    """Parse a buy confirmation message into a BuyMessage.

    Args:
        text: The ``message`` field of the buy response; may be None or empty.

    Returns:
        A BuyMessage whose fields are None wherever the text did not match.
    """
    if not text:
        return BuyMessage(raw_text="")

    is_purchase = PURCHASE_PHRASE in text
    return BuyMessage(
        raw_text=text,
        purchased_quantity=_search_int(_QUANTITY_RE, text),
        cost=_search_cost(text) if is_purchase else None,
        remaining_units=_search_int(_REMAINING_RE, text),
        order_id=_search_str(_ORDER_ID_RE, text) if is_purchase else None,
        unit_type=_search_str(_UNIT_TYPE_RE, text),
    )


def format_buy_message(message: BuyMessage) -> str:
    """Format a parsed buy message for display."""
    if message.is_successful_purchase:
        return (
            f"Purchased: {message.purchased_quantity} {message.unit_type or 'units'}, "
            f"Cost: {message.cost:.2f}, Remaining: {message.remaining_units}, "
            f"OrderID: {message.order_id}"
        )
    return f"Message: {message.raw_text or '(empty)'}"

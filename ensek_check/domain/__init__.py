"""Pure domain logic for ENSEK response checking.

This package has no I/O:
- BuyMessage, extract_buy_message: buy confirmation parsing
- energy catalog and fuel/unit normalization
- Order and order listing helpers
- reconcile_order: buy-vs-orders reconciliation

Usage:
    from ensek_check.domain import extract_buy_message, reconcile_order
"""

from ensek_check.domain.buy_message import BuyMessage, extract_buy_message, format_buy_message
from ensek_check.domain.energy import (
    ENERGY_TYPES,
    UNKNOWN,
    EnergyType,
    energy_type_for,
    expected_fuel_type,
    expected_unit_type,
    is_known_energy_id,
    normalize_fuel_type,
    normalize_unit_type,
)
from ensek_check.domain.order import (
    Order,
    OrderStructureSummary,
    count_orders_before,
    find_order,
    fuel_breakdown,
    orders_created_before,
    parse_order_time,
    summarize_order_structure,
)
from ensek_check.domain.reconcile import (
    FieldCheck,
    ReconcileConfig,
    ReconciliationResult,
    reconcile_order,
)

__all__ = [
    "BuyMessage",
    "extract_buy_message",
    "format_buy_message",
    "ENERGY_TYPES",
    "UNKNOWN",
    "EnergyType",
    "energy_type_for",
    "expected_fuel_type",
    "expected_unit_type",
    "is_known_energy_id",
    "normalize_fuel_type",
    "normalize_unit_type",
    "Order",
    "OrderStructureSummary",
    "count_orders_before",
    "find_order",
    "fuel_breakdown",
    "orders_created_before",
    "parse_order_time",
    "summarize_order_structure",
    "FieldCheck",
    "ReconcileConfig",
    "ReconciliationResult",
    "reconcile_order",
]

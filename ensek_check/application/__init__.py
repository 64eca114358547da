"""ENSEK check workflows."""

from ensek_check.application.orders_report import OrdersReport, build_orders_report, format_orders_report
from ensek_check.application.purchase import (
    NO_FUEL,
    PURCHASED,
    REJECTED,
    UNRECOGNIZED,
    PurchaseVerification,
    buy_and_verify,
    classify_buy,
    verify_order,
)
from ensek_check.application.session import AuthenticationError, EnsekSession

__all__ = [
    "AuthenticationError",
    "EnsekSession",
    "OrdersReport",
    "build_orders_report",
    "format_orders_report",
    "NO_FUEL",
    "PURCHASED",
    "REJECTED",
    "UNRECOGNIZED",
    "PurchaseVerification",
    "buy_and_verify",
    "classify_buy",
    "verify_order",
]

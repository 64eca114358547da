"""Summaries over the orders listing, grouped around a cutoff date."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from ensek_check.domain import (
    Order,
    OrderStructureSummary,
    count_orders_before,
    fuel_breakdown,
    orders_created_before,
    summarize_order_structure,
)
from ensek_check.domain.order import as_local_aware


@dataclass(frozen=True)
class OrdersReport:
    cutoff: datetime
    total: int
    before_cutoff: int
    earliest: Order | None
    latest: Order | None
    fuel_before_cutoff: dict[str, int]
    structure: OrderStructureSummary
    samples_before_cutoff: tuple[Order, ...] = ()

    @property
    def at_or_after_cutoff(self) -> int:
        return self.total - self.before_cutoff


def build_orders_report(orders: Sequence[Order], cutoff: datetime, *, sample_size: int = 3) -> OrdersReport:
    """Count orders created before ``cutoff`` and describe the listing."""
    dated = [order for order in orders if order.parsed_time is not None]
    dated.sort(key=lambda order: as_local_aware(order.parsed_time))  # type: ignore[arg-type]
    before = orders_created_before(orders, cutoff)
    return OrdersReport(
        cutoff=cutoff,
        total=len(orders),
        before_cutoff=count_orders_before(orders, cutoff),
        earliest=dated[0] if dated else None,
        latest=dated[-1] if dated else None,
        fuel_before_cutoff=fuel_breakdown(before),
        structure=summarize_order_structure(orders),
        samples_before_cutoff=tuple(before[:sample_size]),
    )


def _order_line(order: Order) -> str:
    parsed = order.parsed_time
    when = parsed.strftime("%Y-%m-%d %H:%M:%S") if parsed else order.time
    return f"{order.fuel} order on {when} (Qty: {order.quantity}, ID: {order.id})"


def format_orders_report(report: OrdersReport) -> str:
    """Format an orders report for display to user."""
    cutoff = report.cutoff.strftime("%Y-%m-%d %H:%M:%S")
    lines = [
        f"Total orders: {report.total}",
        f"Orders before {cutoff}: {report.before_cutoff}",
        f"Orders at or after {cutoff}: {report.at_or_after_cutoff}",
    ]
    if report.earliest is not None:
        lines.append(f"Earliest: {_order_line(report.earliest)}")
    if report.latest is not None:
        lines.append(f"Latest: {_order_line(report.latest)}")
    if report.fuel_before_cutoff:
        lines.append("Orders before cutoff by fuel type:")
        lines.extend(f"  - {fuel}: {count}" for fuel, count in report.fuel_before_cutoff.items())
    if report.samples_before_cutoff:
        lines.append("Sample orders before cutoff:")
        lines.extend(f"  - {_order_line(order)}" for order in report.samples_before_cutoff)
    structure = report.structure
    lines.append(
        f"Structure: {structure.valid} valid, {structure.invalid_time} with invalid time, "
        f"{structure.empty_fields} with empty fields, {structure.negative_quantity} with negative quantity"
    )
    return "\n".join(lines)

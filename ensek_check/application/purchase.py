"""Buy energy and verify the purchase through the orders endpoint."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ensek_check.application.session import EnsekSession
from ensek_check.client import BuyResult, OrdersResult
from ensek_check.domain import (
    BuyMessage,
    ReconcileConfig,
    ReconciliationResult,
    expected_fuel_type,
    format_buy_message,
    reconcile_order,
)
from ensek_check.runtime import get_logger

logger = get_logger(__name__)

# Purchase outcomes
PURCHASED = "purchased"
NO_FUEL = "no_fuel"
UNRECOGNIZED = "unrecognized"
REJECTED = "rejected"


@dataclass
class PurchaseVerification:
    """Everything observed while buying and then verifying one order."""

    energy_id: int
    quantity: int
    purchased_at: datetime
    buy_result: BuyResult
    buy_message: BuyMessage
    outcome: str
    reconciliation: ReconciliationResult | None = None
    orders_result: OrdersResult | None = None

    @property
    def expected_fuel_type(self) -> str:
        return expected_fuel_type(self.energy_id)

    @property
    def is_verified(self) -> bool:
        return self.outcome == PURCHASED and self.reconciliation is not None and self.reconciliation.is_match

    @property
    def has_mismatch(self) -> bool:
        """True when reconciliation ran and found a hard mismatch."""
        return self.reconciliation is not None and not self.reconciliation.skipped and not self.reconciliation.is_match


def classify_buy(buy_result: BuyResult, buy_message: BuyMessage) -> str:
    if not buy_result.is_success:
        return REJECTED
    if buy_message.is_successful_purchase:
        return PURCHASED
    if buy_message.is_no_fuel_available:
        return NO_FUEL
    return UNRECOGNIZED


def verify_order(
    session: EnsekSession,
    energy_id: int,
    quantity: int,
    buy_message: BuyMessage,
    *,
    purchased_at: datetime | None = None,
    config: ReconcileConfig | None = None,
) -> tuple[ReconciliationResult, OrdersResult | None]:
    """Fetch the orders listing and reconcile it against a parsed buy message."""
    if not buy_message.order_id:
        return ReconciliationResult.skip(energy_id, None, "no order id to validate"), None

    orders_result = session.client.list_orders()
    if not orders_result.is_success:
        logger.warning("Could not retrieve orders for validation: %s", orders_result.error_message)
        reason = f"could not retrieve orders: {orders_result.error_message}"
        return ReconciliationResult.skip(energy_id, buy_message.order_id, reason), orders_result

    reconciliation = reconcile_order(
        energy_id,
        quantity,
        buy_message.order_id,
        buy_message,
        orders_result.orders,
        purchased_at=purchased_at,
        config=config,
    )
    for check in reconciliation.checks:
        if check.matched:
            logger.info("%s", check.message)
        else:
            logger.warning("%s", check.message)
    for warning in reconciliation.warnings:
        logger.warning("Reconciliation warning: %s", warning)
    return reconciliation, orders_result


def buy_and_verify(
    session: EnsekSession,
    energy_id: int,
    quantity: int,
    *,
    settle_delay: float | None = None,
    config: ReconcileConfig | None = None,
    clock: Callable[[], datetime] = datetime.now,
    sleep: Callable[[float], None] = time.sleep,
) -> PurchaseVerification:
    """
    Buy energy, then confirm the purchase appears in the orders listing.

    Args:
        session: Session whose client will be authenticated if needed
        energy_id: Energy id to buy
        quantity: Quantity to buy
        settle_delay: Seconds to wait between the buy and the orders read.
            Defaults to the session settings.
        config: Reconciliation configuration
        clock: Source of the purchase timestamp
        sleep: Called with the settle delay

    Returns:
        PurchaseVerification describing the buy and any reconciliation.

    Raises:
        AuthenticationError: If no bearer token can be obtained.
    """
    session.ensure_bearer_token()
    if settle_delay is None:
        settle_delay = session.settings.settle_delay

    purchased_at = clock()
    buy_result = session.client.buy(energy_id, quantity)
    buy_message = buy_result.buy_message
    outcome = classify_buy(buy_result, buy_message)
    verification = PurchaseVerification(
        energy_id=energy_id,
        quantity=quantity,
        purchased_at=purchased_at,
        buy_result=buy_result,
        buy_message=buy_message,
        outcome=outcome,
    )

    if outcome == REJECTED:
        logger.warning("Buy failed - %s", buy_result.describe("Buy"))
        return verification

    logger.info("Buy response - %s", format_buy_message(buy_message))

    if outcome == NO_FUEL:
        logger.info("No fuel available for energy ID %s (expected %s)", energy_id, verification.expected_fuel_type)
        return verification

    if outcome == UNRECOGNIZED:
        logger.warning("Buy response could not be parsed: %s", buy_message.raw_text)
        return verification

    if settle_delay > 0:
        sleep(settle_delay)

    reconciliation, orders_result = verify_order(
        session,
        energy_id,
        quantity,
        buy_message,
        purchased_at=purchased_at,
        config=config,
    )
    verification.reconciliation = reconciliation
    verification.orders_result = orders_result
    return verification

"""Live checks for the buy endpoint and its consistency with orders."""

from __future__ import annotations

import pytest
from ensek_check.application import NO_FUEL, PURCHASED, REJECTED, EnsekSession, buy_and_verify

pytestmark = pytest.mark.live


def _assert_consistent(verification) -> None:
    reconciliation = verification.reconciliation
    assert reconciliation is not None
    failures = "; ".join(f.message for f in reconciliation.failures)
    assert not verification.has_mismatch, failures


@pytest.mark.parametrize(("energy_id", "quantity"), [(1, 100), (2, 50), (3, 200), (4, 25)])
def test_buy_with_valid_parameters(live_session: EnsekSession, energy_id: int, quantity: int) -> None:
    verification = buy_and_verify(live_session, energy_id, quantity)
    result = verification.buy_result

    assert not result.is_unauthorized, f"Buy failed with 401 Unauthorized: {result.error_message}"
    if verification.outcome == REJECTED:
        # Stock limits can legitimately produce a 400 here.
        assert result.is_bad_request, f"Buy failed with unexpected status {result.status_code}: {result.error_message}"
        return

    assert result.status_code == 200
    assert result.message, "Response should contain a message"
    if verification.outcome == PURCHASED:
        _assert_consistent(verification)


@pytest.mark.parametrize(("energy_id", "quantity"), [(-1, 100), (0, 100), (1, -50), (1, 0), (999, 100)])
def test_buy_with_invalid_parameters(live_session: EnsekSession, energy_id: int, quantity: int) -> None:
    verification = buy_and_verify(live_session, energy_id, quantity)

    result = verification.buy_result

    assert not result.is_network_error, result.error_message
    assert not result.is_unauthorized, f"Buy failed with 401 Unauthorized: {result.error_message}"
    if verification.outcome == REJECTED:
        assert result.is_bad_request, f"Expected 400 Bad Request, got {result.status_code}"
    elif verification.outcome == PURCHASED:
        # The API accepts some invalid inputs; any order it creates must still be consistent.
        _assert_consistent(verification)


@pytest.mark.parametrize(("energy_id", "quantity"), [(1, 150), (3, 75), (4, 30)])
def test_buy_then_verify_in_orders(live_session: EnsekSession, energy_id: int, quantity: int) -> None:
    verification = buy_and_verify(live_session, energy_id, quantity)

    assert verification.buy_result.is_success, verification.buy_result.describe("Buy")
    if verification.outcome == NO_FUEL:
        pytest.skip(f"No fuel available for {verification.expected_fuel_type}")
    assert verification.outcome == PURCHASED, f"Unparseable buy message: {verification.buy_message.raw_text}"

    reconciliation = verification.reconciliation
    assert reconciliation is not None
    assert not reconciliation.skipped, reconciliation.skip_reason
    assert reconciliation.is_match, "; ".join(f.message for f in reconciliation.failures)

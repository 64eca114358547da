"""Fixtures for the live ENSEK conformance suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from ensek_check.application import EnsekSession
from ensek_check.client import EnsekApiClient
from ensek_check.runtime import EnsekSettings, get_settings


@pytest.fixture(scope="module")
def live_settings() -> EnsekSettings:
    return get_settings()


@pytest.fixture(scope="module")
def live_session(live_settings: EnsekSettings) -> Iterator[EnsekSession]:
    """One authenticated-on-demand session per test module, reset afterwards."""
    client = EnsekApiClient(live_settings.base_url, timeout=live_settings.timeout)
    session = EnsekSession(client, live_settings)
    yield session
    # A failed reset leaves dirty data but should not fail the suite.
    session.reset_test_data()
    client.close()

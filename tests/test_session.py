"""Tests for login/reset session helpers."""

from __future__ import annotations

import pytest
from ensek_check.application import AuthenticationError, EnsekSession


def test_login_sets_bearer_token(session: EnsekSession, fake_api) -> None:
    assert session.bearer_token is None

    assert session.login_and_set_bearer_token()

    assert session.bearer_token == fake_api.token


def test_login_with_bad_credentials_returns_false(session: EnsekSession, fake_api) -> None:
    fake_api.password = "something-else"

    assert not session.login_and_set_bearer_token()
    assert session.bearer_token is None


def test_ensure_bearer_token_logs_in_once(session: EnsekSession, fake_api) -> None:
    first = session.ensure_bearer_token()
    second = session.ensure_bearer_token()

    assert first == second == fake_api.token
    login_calls = [r for r in fake_api.requests if r.url.path == "/ENSEK/login"]
    assert len(login_calls) == 1


def test_ensure_bearer_token_raises_when_login_fails(session: EnsekSession, fake_api) -> None:
    fake_api.password = "something-else"

    with pytest.raises(AuthenticationError):
        session.ensure_bearer_token()


def test_reset_logs_in_first_when_needed(session: EnsekSession, fake_api) -> None:
    fake_api.orders.append({"id": "a", "fuel": "gas", "quantity": 1, "time": "2022-01-01"})

    assert session.reset_test_data()

    assert [r.url.path for r in fake_api.requests] == ["/ENSEK/login", "/ENSEK/reset"]
    assert fake_api.orders == []


def test_reset_fails_with_rejected_token(session: EnsekSession, fake_api) -> None:
    session.client.set_bearer_token("expired")

    assert not session.reset_test_data()

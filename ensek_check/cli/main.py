#!/usr/bin/env python3

import argparse
from collections.abc import Sequence
from datetime import datetime

from ensek_check.application import (
    NO_FUEL,
    PURCHASED,
    REJECTED,
    AuthenticationError,
    EnsekSession,
    buy_and_verify,
    build_orders_report,
    format_orders_report,
)
from ensek_check.client import EnsekApiClient
from ensek_check.domain import format_buy_message
from ensek_check.runtime import (
    ConfigurationError,
    EnsekSettings,
    describe_settings,
    get_settings,
    parse_log_level,
    set_log_level,
)


def _open_session(settings: EnsekSettings) -> EnsekSession:
    client = EnsekApiClient(settings.base_url, timeout=settings.timeout)
    return EnsekSession(client, settings)


def _parse_cutoff(value: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from e


def cmd_config(settings: EnsekSettings, _args: argparse.Namespace) -> int:
    for line in describe_settings(settings):
        print(line)
    return 0


def cmd_login(settings: EnsekSettings, _args: argparse.Namespace) -> int:
    session = _open_session(settings)
    try:
        result = session.client.login(settings.username, settings.password)
    finally:
        session.client.close()
    print(result.describe("Login"))
    if result.data is not None:
        print(result.data)
    return 0 if result.is_success and result.access_token else 1


def cmd_reset(settings: EnsekSettings, _args: argparse.Namespace) -> int:
    session = _open_session(settings)
    try:
        ok = session.reset_test_data()
    finally:
        session.client.close()
    print("Reset successful" if ok else "Reset failed")
    return 0 if ok else 1


def cmd_buy(settings: EnsekSettings, args: argparse.Namespace) -> int:
    session = _open_session(settings)
    try:
        verification = buy_and_verify(
            session,
            args.energy_id,
            args.quantity,
            settle_delay=args.settle_delay,
        )
    finally:
        session.client.close()

    print(verification.buy_result.describe("Buy"))
    if verification.outcome == REJECTED:
        return 1
    print(format_buy_message(verification.buy_message))
    if verification.outcome == NO_FUEL:
        print(f"No fuel available (expected fuel type: {verification.expected_fuel_type})")
        return 0
    if verification.outcome != PURCHASED:
        print("Buy response could not be parsed")
        return 1

    reconciliation = verification.reconciliation
    if reconciliation is None:
        return 1
    print(f"Reconciliation: {reconciliation.details}")
    for failure in reconciliation.failures:
        print(f"  MISMATCH {failure.message}")
    return 1 if verification.has_mismatch else 0


def cmd_orders(settings: EnsekSettings, args: argparse.Namespace) -> int:
    session = _open_session(settings)
    try:
        session.ensure_bearer_token()
        result = session.client.list_orders()
    finally:
        session.client.close()

    if not result.is_success:
        print(result.describe("Orders"))
        return 1
    cutoff = args.before if args.before is not None else datetime.now()
    print(format_orders_report(build_orders_report(result.orders, cutoff)))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="ENSEK API conformance checks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  config                     Show the active configuration
  login                      Log in with the configured credentials
  reset                      Reset the remote test data
  buy <id> <quantity>        Buy energy and verify it in the orders listing
  orders [--before DATE]     Summarize orders relative to a cutoff date

Configuration is read from ENSEK_* environment variables and .env.
""",
    )
    parser.add_argument("--log-level", help="Override ENSEK_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser("config", help="Show the active configuration")
    subparsers.add_parser("login", help="Log in with the configured credentials")
    subparsers.add_parser("reset", help="Reset the remote test data")

    buy_parser = subparsers.add_parser("buy", help="Buy energy and verify the order")
    buy_parser.add_argument("energy_id", type=int, help="Energy type id (1=gas, 2=nuclear, 3=electric, 4=oil)")
    buy_parser.add_argument("quantity", type=int, help="Quantity to buy")
    buy_parser.add_argument(
        "--settle-delay",
        type=float,
        default=None,
        help="Seconds to wait before reading orders (default: ENSEK_SETTLE_DELAY)",
    )

    orders_parser = subparsers.add_parser("orders", help="Summarize orders")
    orders_parser.add_argument("--before", type=_parse_cutoff, default=None, help="Cutoff date (YYYY-MM-DD)")

    args = parser.parse_args(argv)

    if args.log_level:
        set_log_level(parse_log_level(args.log_level))

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 2

    commands = {
        "config": cmd_config,
        "login": cmd_login,
        "reset": cmd_reset,
        "buy": cmd_buy,
        "orders": cmd_orders,
    }
    try:
        return commands[args.command](settings, args)
    except AuthenticationError as e:
        print(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

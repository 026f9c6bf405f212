"""Command-line interface for the gas tracker."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .chains.evm import Erc20Reader
from .config import AppConfig, load_config
from .lending import LoanWorkflow
from .logging_setup import configure_logging
from .models import Rejection
from .services import GasTracker, TokenLookup
from .services.fees import to_gwei
from .services.history import bar_heights

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="gas-tracker",
        description="Multi-network gas tracker with simulated gas loans",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("check", help="Single refresh of every network")

    monitor_parser = sub.add_parser("monitor", help="Continuous auto refresh")
    monitor_parser.add_argument(
        "interval",
        nargs="?",
        type=float,
        default=None,
        help="Refresh interval in seconds (overrides config)",
    )

    token_parser = sub.add_parser("token", help="Look up an ERC-20 token")
    token_parser.add_argument("address", help="Token contract address")
    token_parser.add_argument("--owner", default=None, help="Balance holder")

    loan_parser = sub.add_parser("loan-demo", help="Run one simulated gas loan")
    loan_parser.add_argument("token", help="Collateral token address")
    loan_parser.add_argument("--borrower", required=True, help="Borrower address")
    loan_parser.add_argument("--principal", default="0.01", help="Gas loan amount")
    loan_parser.add_argument("--collateral", default="100", help="Collateral amount")

    return parser


def format_report(tracker: GasTracker) -> str:
    """Render snapshots, trend and comparison as plain text."""
    lines: list[str] = []
    price = tracker.get_price()

    for network in tracker.networks:
        snapshot = tracker.get_snapshot(network)
        lines.append(f"━━ {tracker.label(network)} ━━")
        if snapshot.gas_price is None:
            lines.append("  Gas price: N/A")
        else:
            cost = tracker.gas_cost(network)
            usd = f" / ${cost.usd:.4f}" if cost.usd is not None else ""
            lines.append(
                f"  Gas price: {to_gwei(snapshot.gas_price):.3f} Gwei "
                f"({tracker.gas_level(network)}) ~{cost.eth:.6f} ETH{usd}"
            )
            if snapshot.base_fee is not None:
                lines.append(f"  Base fee: {to_gwei(snapshot.base_fee):.3f} Gwei")
            if snapshot.priority_fee is not None:
                lines.append(f"  Priority fee: {to_gwei(snapshot.priority_fee):.3f} Gwei")
            lines.append(f"  Block: #{snapshot.block_number}")
        if snapshot.last_error:
            lines.append(f"  Error: {snapshot.last_error}")

        heights = bar_heights(tracker.get_history(network))
        if heights:
            lines.append("  Trend: " + " ".join(f"{h:.0f}" for h in heights))

    comparison = tracker.compare()
    if comparison is not None:
        lines.append(
            f"{tracker.label(comparison.cheaper)} is cheaper by "
            f"{comparison.difference_gwei:.3f} Gwei ({comparison.percentage:.1f}%)"
        )
    if price.usd > 0:
        lines.append(f"ETH: ${price.usd:,.2f}")
    elif price.last_error:
        lines.append(price.last_error)

    return "\n".join(lines)


async def _check(config: AppConfig) -> None:
    tracker = GasTracker(config)
    await tracker.refresh_now()
    await tracker.drain()
    print(format_report(tracker))


async def _monitor(config: AppConfig, interval: float | None) -> None:
    tracker = GasTracker(config)
    tracker.auto_refresh = False
    await tracker.start()
    tracker.set_auto_refresh(True, interval)
    period = interval or config.poller.interval_seconds
    try:
        while True:
            print(format_report(tracker), flush=True)
            await asyncio.sleep(period)
    finally:
        await tracker.stop()


def _token_reader(config: AppConfig) -> Erc20Reader:
    network = config.networks[config.token.network]
    return Erc20Reader(network.endpoints[0])


async def _token(config: AppConfig, address: str, owner: str | None) -> None:
    lookup = TokenLookup(_token_reader(config))
    token = await lookup.lookup(address, owner)
    if token is None:
        print(f"Not a token address: {address}")
        sys.exit(1)
    print(f"{token.name} ({token.symbol})")
    print(f"  Decimals: {token.decimals}")
    print(f"  Total supply: {token.total_supply}")
    print(f"  Balance: {token.balance}")
    if token.error:
        print(f"  Error: {token.error}")


async def _loan_demo(config: AppConfig, args: argparse.Namespace) -> None:
    lookup = TokenLookup(_token_reader(config))
    token = await lookup.lookup(args.token, args.borrower)

    workflow = LoanWorkflow.from_config(args.borrower, config.lending)
    try:
        loan = workflow.submit_loan_request(args.principal, args.collateral, token)
        if isinstance(loan, Rejection):
            print(f"Rejected: {loan.reason}")
            sys.exit(1)
        print(f"[{workflow.step.value}] loan {loan.id}")

        quote = workflow.execute_swap()
        if isinstance(quote, Rejection):
            print(f"Rejected: {quote.reason}")
            sys.exit(1)
        print(f"[{workflow.step.value}] receiving ~{quote.received:.4f} ETH")

        await workflow.wait_settled()
        print(f"[{workflow.step.value}]")
        for entry in workflow.ledger.recent(config.lending.ledger_display_limit):
            status = "repaid" if entry.repaid else "failed" if entry.failed else "active"
            print(
                f"  {entry.id[:8]} {entry.principal} ETH, "
                f"collateral {entry.collateral_amount} ({status})"
            )
        workflow.acknowledge_completion()
    finally:
        workflow.close()


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    if args.command == "check":
        await _check(config)
    elif args.command == "monitor":
        await _monitor(config, args.interval)
    elif args.command == "token":
        await _token(config, args.address, args.owner)
    elif args.command == "loan-demo":
        await _loan_demo(config, args)
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(_run(args))
    except KeyboardInterrupt:
        logger.info("Interrupted")

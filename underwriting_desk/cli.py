"""
Command line entry point for the underwriting client.

Usage:
  underwriting-desk ping
  underwriting-desk submit --user-id user-123 --monthly-income 8000 --monthly-debts 2000 \\
      --loan-amount 300000 --property-value 400000 --credit-score 720 \\
      --occupancy-type primary_residence
  underwriting-desk history user-123

The base URL comes from UNDERWRITING_API_BASE_URL (or .env / config file)
unless --base-url is given.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from underwriting_desk.integrations.clients.real_http.underwriting import UnderwritingHttpClient
from underwriting_desk.integrations.contracts.underwriting import UnderwritingFormValues, UnderwritingHistory
from underwriting_desk.integrations.policy.underwriting_service import UnderwritingService
from underwriting_desk.result_cards import MISSING, build_history_rows, build_result_card
from underwriting_desk.utils.config_loader import ClientConfig, load_client_config
from underwriting_desk.validation import OCCUPANCY_OPTIONS

HISTORY_COLUMNS = [
    ("date", "Date"),
    ("decision", "Decision"),
    ("dti", "DTI"),
    ("ltv", "LTV"),
    ("fico", "FICO"),
    ("loan", "Loan"),
    ("property", "Property"),
    ("occupancy", "Occupancy"),
]


def setup_logging(level: str, verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="underwriting-desk", description="Submit loans for underwriting and review decisions")
    parser.add_argument("--base-url", default=None, help="Underwriting API base URL (overrides config)")
    parser.add_argument("--config", type=Path, default=None, help="Path to client_config.yml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("ping", help="Check whether the underwriting API is online")

    submit = sub.add_parser("submit", help="Submit a borrower for evaluation")
    submit.add_argument("--user-id", default="")
    submit.add_argument("--monthly-income", default="")
    submit.add_argument("--monthly-debts", default="")
    submit.add_argument("--loan-amount", default="")
    submit.add_argument("--property-value", default="")
    submit.add_argument("--credit-score", default="")
    submit.add_argument(
        "--occupancy-type",
        default="",
        help="One of: " + ", ".join(option["value"] for option in OCCUPANCY_OPTIONS),
    )

    history = sub.add_parser("history", help="Show a borrower's evaluation history")
    history.add_argument("user_id")
    return parser


def print_result_card(card: dict) -> None:
    print("=" * 60)
    print(f"  Decision: {card['decision']} ({card['tone']})")
    print(f"  {card['descriptor']}")
    print("=" * 60)
    for item in card["fields"]:
        print(f"  {item['label']:<16} {item['value'] or MISSING}")
    if card["reasons"]:
        print("\n  Reasons:")
        for reason in card["reasons"]:
            print(f"   - {reason}")
    print()


def print_history(history: UnderwritingHistory) -> None:
    print("Evaluation History")
    if not history:
        print("  No evaluations found yet.")
        return
    rows = build_history_rows(history)
    widths = {key: max(len(label), *(len(row[key]) for row in rows)) for key, label in HISTORY_COLUMNS}
    print("  " + "  ".join(label.ljust(widths[key]) for key, label in HISTORY_COLUMNS))
    for row in rows:
        print("  " + "  ".join(row[key].ljust(widths[key]) for key, _ in HISTORY_COLUMNS))


async def run(args: argparse.Namespace, config: ClientConfig) -> int:
    base_url = (args.base_url or config.api_base_url).rstrip("/")
    client = UnderwritingHttpClient(base_url, timeout_seconds=config.timeout_seconds)

    async with UnderwritingService(client=client) as service:
        if args.command == "ping":
            healthy = await service.check_health()
            print("API online" if healthy else "API offline")
            return 0 if healthy else 1

        if args.command == "history":
            result = await service.refresh_history(args.user_id)
            if result.error:
                print(f"Error: {result.error}", file=sys.stderr)
                return 1
            print_history(result.records)
            return 0

        values = UnderwritingFormValues(
            user_id=args.user_id,
            monthly_income=args.monthly_income,
            monthly_debts=args.monthly_debts,
            loan_amount=args.loan_amount,
            property_value=args.property_value,
            credit_score=args.credit_score,
            occupancy_type=args.occupancy_type,
        )
        outcome = await service.submit_form(values)
        if outcome.error:
            print(f"Error: {outcome.error}", file=sys.stderr)
            return 1
        print_result_card(build_result_card(outcome.record))
        if outcome.history_error:
            print(f"Error: {outcome.history_error}", file=sys.stderr)
            return 1
        print_history(outcome.history)
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_client_config(args.config)
    setup_logging(config.log_level, args.verbose)
    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())

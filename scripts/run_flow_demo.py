#!/usr/bin/env python3
"""
Run a full submit → history flow against the in-process mock underwriting
service and print each stage to the terminal.
Shows the normalized records, the decision card and the history rows.

Usage (from repo root):
  python scripts/run_flow_demo.py
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from underwriting_desk.api.endpoints.mock_underwriting import create_mock_app
from underwriting_desk.integrations.clients.real_http.underwriting import UnderwritingHttpClient
from underwriting_desk.integrations.policy.underwriting_service import UnderwritingService
from underwriting_desk.result_cards import build_history_rows, build_result_card


def setup_logging():
    """Log to terminal at INFO so every stage is visible."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


async def main():
    setup_logging()
    transport = httpx.ASGITransport(app=create_mock_app())
    client = UnderwritingHttpClient("http://mock-underwriting", transport=transport)

    form = {
        "user_id": "demo-user",
        "monthly_income": "8500",
        "monthly_debts": "2100.50",
        "loan_amount": "320000",
        "property_value": "410000",
        "credit_score": "731",
        "occupancy_type": "primary_residence",
    }

    async with UnderwritingService(client=client) as service:
        print_stage("HEALTH CHECK", "API online" if await service.check_health() else "API offline")

        for attempt in range(1, 4):
            outcome = await service.submit_form(form)
            if outcome.error:
                print_stage(f"SUBMISSION {attempt}: error", outcome.error)
                return
            print_stage(f"SUBMISSION {attempt}: normalized record", outcome.record.model_dump(mode="json"))
            print_stage(f"SUBMISSION {attempt}: decision card", build_result_card(outcome.record))

        history = await service.refresh_history(form["user_id"])
        print_stage("HISTORY ROWS", build_history_rows(history.records))

        invalid = await service.submit_form({**form, "occupancy_type": ""})
        print_stage("INVALID FORM", {"error": invalid.error, "field_errors": invalid.field_errors})


if __name__ == "__main__":
    asyncio.run(main())

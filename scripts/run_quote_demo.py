#!/usr/bin/env python3
"""
Run a quote → lead submission flow and print each stage to the terminal.
Shows the applicant, the premium breakdown, the assembled lead and the CRM result.

Usage (from repo root):
  python scripts/run_quote_demo.py
  python scripts/run_quote_demo.py --product WHOLE_LIFE --age 40 --coverage 250000
  python scripts/run_quote_demo.py --real   # deliver to CRM_ENDPOINT instead of the mock
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.integrations.clients.mocks.crm import MockCRMClient
from src.integrations.clients.real_http.crm import CRMClient
from src.integrations.contracts.leads import LeadSubmissionError
from src.error_handler import ErrorHandler
from src.leads import build_lead, validate_contact_form
from src.quoting import Applicant, format_coverage, quote
from src.utils.config_loader import load_crm_config


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


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Quote a life premium and submit the lead")
    parser.add_argument("--product", default="TERM_LIFE")
    parser.add_argument("--age", type=int, default=30)
    parser.add_argument("--coverage", type=float, default=100_000)
    parser.add_argument("--years", type=int, default=10)
    parser.add_argument("--health", default="Good")
    parser.add_argument("--smoker", default="Non-smoker")
    parser.add_argument("--real", action="store_true", help="Send to the configured CRM endpoint")
    return parser.parse_args(argv)


async def main(argv=None):
    setup_logging()
    args = parse_args(argv)

    applicant = Applicant.from_mapping(
        {
            "product": args.product,
            "age": args.age,
            "coverage": args.coverage,
            "years": args.years,
            "health_status": args.health,
            "smoker_status": args.smoker,
        }
    )
    print_stage("APPLICANT", {**asdict(applicant), "coverage_label": format_coverage(args.coverage)})

    result = quote(applicant)
    print_stage("QUOTE (premium, breakdown)", result.to_dict())
    if not result.eligible:
        print_stage("NOT ELIGIBLE", result.reason or "")
        return

    contact = {
        "first_name": "Jane",
        "last_name": "Demo",
        "email": "jane.demo@example.com",
        "phone": "(410) 555-0142",
        "zip": "21201",
    }
    print_stage("CONTACT FORM ERRORS", validate_contact_form(contact) or "none")

    lead = build_lead(applicant, contact, result.premium, gender="Female")
    print_stage("LEAD", lead)

    settings = load_crm_config()
    client = CRMClient(settings) if args.real else MockCRMClient(settings)
    try:
        submission = await client.submit_lead(lead)
        print_stage("CRM RESULT", submission.to_dict())
    except LeadSubmissionError as exc:
        print_stage("CRM FAILURE (internal)", exc.to_dict())
        print_stage("CRM FAILURE (user-facing)", ErrorHandler().handle_submission_error(exc))

    print("\n" + "=" * 60)
    print("  Demo complete. Check logs above for each stage.")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(main())

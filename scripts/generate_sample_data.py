#!/usr/bin/env python3
"""Generate a sample fund for manual validation.

Seeds members, a year of deposits and a handful of emergency loans with
partial repayments, then writes members.json, deposits.json, loans.json
and summary.json (plus the loan event log) to the output folder.
"""

import argparse
import json
import sys
from dataclasses import asdict
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from chit_fund.config import FundConfig
from chit_fund.generators import DepositGenerator, LoanRequestGenerator, MemberGenerator
from chit_fund.logging import get_logger, setup_logging
from chit_fund.models.fund import MemberRole
from chit_fund.services import LoanService, summarize_fund
from chit_fund.sinks import ConsoleSink, JsonFileSink
from chit_fund.sinks.serialization import format_currency, serialize_value
from chit_fund.store import FundDataStore

logger = get_logger("scripts.generate_sample_data")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--members", type=int, default=15, help="Number of members")
    parser.add_argument("--loans", type=int, default=5, help="Number of loans to issue")
    parser.add_argument("--output", type=Path, default=None, help="Output directory")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--console", action="store_true", help="Print loan events to stdout instead of a JSON file"
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = FundConfig.from_env()
    setup_logging(config.log_level)

    seed = args.seed if args.seed is not None else config.seed
    output_dir = args.output or config.output.json_output_dir
    sink = JsonFileSink(output_dir, pretty=True)
    event_sink = ConsoleSink(currency=config.policy.currency) if args.console else sink
    store = FundDataStore()
    service = LoanService(store, config=config, sink=event_sink)

    member_gen = MemberGenerator(seed=seed)
    deposit_gen = DepositGenerator(seed=seed)
    loan_gen = LoanRequestGenerator(seed=seed)

    manager = member_gen.generate(role=MemberRole.ADMIN)
    store.add_member(manager)
    for member in member_gen.generate_batch(args.members):
        store.add_member(member)
    logger.info("Seeded %d members", len(store.members))

    today = date.today()
    start = date(today.year - 1, today.month, 1)
    for member in store.approved_members():
        for deposit in deposit_gen.generate_for_member(member.member_id, start, 12):
            store.add_deposit(deposit)
    logger.info("Seeded %d deposits", len(store.deposits))

    borrowers = [m for m in store.approved_members() if not m.is_manager][: args.loans]
    for borrower in borrowers:
        request = loan_gen.generate(borrower.member_id)
        loan = service.issue_loan(
            manager,
            request.member_id,
            request.total_amount,
            request.term_months,
            request.issue_date,
        )
        for installment_id, paid_at in loan_gen.payable_installments(loan, today):
            loan = service.record_payment(manager, loan.loan_id, installment_id, paid_at)

    sink.write_batch("members", list(store.members.values()))
    sink.write_batch("deposits", store.deposits)
    sink.write_batch("loans", list(store.loans.values()))

    summary = summarize_fund(store)
    summary_path = output_dir / "summary.json"
    with open(summary_path, "w", encoding="utf-8") as f:
        data = serialize_value(asdict(summary))
        data["current_balance"] = serialize_value(summary.current_balance)
        data["pending_recovery"] = serialize_value(summary.pending_recovery)
        json.dump(data, f, indent=2)

    currency = config.policy.currency
    logger.info("Fund balance: %s", format_currency(summary.current_balance, currency))
    logger.info("Recovered: %s", format_currency(summary.total_recoveries, currency))
    logger.info("Waived: %s", format_currency(summary.total_waivers, currency))
    if args.console:
        event_sink.write_batch("loans", list(store.loans.values()))
        event_sink.close()
    sink.close()


if __name__ == "__main__":
    main()

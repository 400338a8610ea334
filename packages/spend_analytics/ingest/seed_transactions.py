from __future__ import annotations

# Seeder for synthetic demo transactions.
#
# Usage (example):
#   python -m spend_analytics.ingest.seed_transactions \
#     --database-url sqlite:///spend.db --count 500 --seed 7
#
# This script:
#   1) Does nothing when the transactions table already has rows.
#   2) Reuses (or creates) a single "Primary Checking" account.
#   3) Inserts ``count`` transactions spread over the past year with messy,
#      bank-statement style raw descriptions. Clean descriptions are left
#      NULL and some categories are NULL so every status shows up.
#
# All randomness comes from the ``random.Random`` passed in; there is no
# module-level generator.
import argparse
import random
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from db.client import session_scope
from db.models.finance import Account, Transaction
from sqlalchemy import func, select

from ..logging_setup import configure_logging, get_logger

logger = get_logger(__name__)

SEED_ACTOR = "seed_transactions"
DEFAULT_ACCOUNT_NAME = "Primary Checking"
DEFAULT_COUNT = 500

RAW_DESCRIPTIONS: tuple[str, ...] = (
    "VZW*WEBSITE PMT",
    "7-ELEVEN 0042",
    "WLMRT ST#1024",
    "AMZN MKTP US*2K4H91JF0",
    "NETFLIX.COM",
    "SPOTIFY USA",
    "UBER *TRIP",
    "LYFT *RIDE",
    "SHELL OIL 57442136",
    "COSTCO WHSE #1234",
    "TARGET 00012345",
    "CVS/PHARMACY #4521",
    "STARBUCKS 12345",
    "CHIPOTLE 1234",
    "DOORDASH*DASHPASS",
    "WHOLEFDS MKT 10234",
    "TRADER JOE'S #123",
    "HOME DEPOT #1234",
    "APPLE.COM/BILL",
    "COMCAST CABLE",
    "DUKE ENERGY",
    "GEICO *AUTO",
    "PLANET FITNESS",
    "GITHUB INC",
    "VENMO *PAYMENT",
    "ZELLE *SENT",
    "USPS PO 123456789",
    "ETSY.COM",
    "CHEWY.COM",
    "AIRBNB*RESERVATION",
    "DELTA AIR*TICKET",
)

# ``None`` entries leave a transaction uncategorized.
CATEGORIES: tuple[str | None, ...] = (
    "Utilities",
    "Groceries",
    "Dining",
    "Transportation",
    "Entertainment",
    "Shopping",
    "Healthcare",
    "Insurance",
    "Subscriptions",
    "Travel",
    "Gas",
    "Pets",
    "Home",
    "Fitness",
    "Transfers",
    None,
)

_LOCATIONS: tuple[tuple[str, str], ...] = (
    ("SAN FRAN", "CA"),
    ("NEW YORK", "NY"),
    ("HOUSTON", "TX"),
    ("MIAMI", "FL"),
    ("SEATTLE", "WA"),
    ("CHICAGO", "IL"),
    ("ATLANTA", "GA"),
)


def _money(value: float) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def _raw_description(rng: random.Random) -> str:
    parts = [rng.choice(RAW_DESCRIPTIONS)]
    if rng.random() < 0.5:
        parts.append(f"{rng.randrange(100_000):05d}")
    if rng.randrange(3) == 0:
        city, state = rng.choice(_LOCATIONS)
        parts.append(f"{city} {state}")
    return " ".join(parts)


def _amount(rng: random.Random) -> Decimal:
    # Roughly 80% expenses (-5.00..-500.00), 20% income (+100.00..+3000.00).
    if rng.randrange(5) < 4:
        return _money(-(5 + rng.random() * 495))
    return _money(100 + rng.random() * 2900)


def generate_transactions(
    rng: random.Random,
    *,
    count: int,
    now: datetime,
) -> list[dict[str, Any]]:
    """Return ``count`` synthetic transaction payloads dated within the past year.

    Output is fully determined by the state of ``rng`` and ``now``.
    """

    if count < 0:
        raise ValueError("count must be >= 0")

    base = now.replace(second=0, microsecond=0) - timedelta(days=365)
    items: list[dict[str, Any]] = []
    for _ in range(count):
        when = base + timedelta(
            days=rng.randrange(365),
            hours=rng.randrange(24),
            minutes=rng.randrange(60),
        )
        items.append(
            {
                "raw_description": _raw_description(rng),
                "clean_description": None,
                "category": rng.choice(CATEGORIES),
                "amount": _amount(rng),
                "transaction_date": when,
            }
        )
    return items


def _get_or_create_account(session) -> Account:
    existing = (
        session.execute(select(Account).order_by(Account.created_at, Account.id).limit(1))
        .scalars()
        .first()
    )
    if existing is not None:
        return existing
    account = Account(
        account_name=DEFAULT_ACCOUNT_NAME,
        balance=Decimal("5000.00"),
        created_by=SEED_ACTOR,
    )
    session.add(account)
    session.flush()
    return account


def seed_transactions(
    *,
    database_url: str | None,
    rng: random.Random,
    count: int = DEFAULT_COUNT,
    now: datetime | None = None,
) -> int:
    """Insert synthetic transactions when the table is empty; return rows added."""

    with session_scope(database_url=database_url) as session:
        existing = session.execute(select(func.count()).select_from(Transaction)).scalar_one()
        if existing:
            logger.info("Transactions table already has %d rows; skipping seeding", existing)
            return 0

        logger.info("Seeding %d transactions", count)
        account = _get_or_create_account(session)
        payloads = generate_transactions(rng, count=count, now=now or datetime.now())
        session.add_all(
            Transaction(account_id=account.id, created_by=SEED_ACTOR, **p) for p in payloads
        )
        session.flush()

    logger.info("Seeded %d transactions", len(payloads))
    return len(payloads)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        description="Seed synthetic transactions into an empty database",
    )
    ap.add_argument(
        "--database-url",
        required=False,
        default=None,
        help=("SQLAlchemy database URL; falls back to $DATABASE_URL when not set"),
    )
    ap.add_argument("--count", type=int, default=DEFAULT_COUNT)
    ap.add_argument("--seed", type=int, default=0, help="Random seed (default 0)")
    args = ap.parse_args(argv)

    configure_logging()
    seed_transactions(
        database_url=args.database_url or None,
        rng=random.Random(args.seed),
        count=args.count,
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - manual utility
    raise SystemExit(main())

"""Monthly burn-rate aggregation.

Burn rate is the total magnitude of outgoing (negative) amounts in a calendar
month. :class:`BurnRateAggregator` turns an optional date range into a run of
consecutive months and sums expenses for each one.

Range resolution
----------------
- End month: the month of ``end_date``, else the month of today.
- Start month: the month of ``start_date``, else three months before the end
  month, so a call without arguments covers four months ending now.
- A start month after the end month yields no buckets (an empty list), and a
  warning is logged.
- "Current month" always means the month of today, independent of
  ``end_date``.

Each month is fetched from the store separately and in order. The months are
not read as one snapshot.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date
from decimal import Decimal

from .logging_setup import get_logger
from .models import MonthBucket, Transaction, YearMonth
from .store import TransactionStore

logger = get_logger(__name__)

DEFAULT_LOOKBACK_MONTHS = 3
ZERO = Decimal("0")


def total_spent(transactions: Iterable[Transaction]) -> Decimal:
    """Sum ``abs(amount)`` over negative amounts; null amounts are skipped."""

    total = ZERO
    for tx in transactions:
        if tx.amount is not None and tx.amount < ZERO:
            total += abs(tx.amount)
    return total


def resolve_months(
    start_date: date | None,
    end_date: date | None,
    *,
    today: date,
) -> tuple[YearMonth, YearMonth]:
    """Return ``(start_month, end_month)`` for a possibly partial range."""

    end_month = YearMonth.from_date(end_date if end_date is not None else today)
    if start_date is not None:
        start_month = YearMonth.from_date(start_date)
    else:
        start_month = end_month.plus_months(-DEFAULT_LOOKBACK_MONTHS)
    return start_month, end_month


def iter_months(start: YearMonth, end: YearMonth) -> Iterable[YearMonth]:
    """Yield every month from ``start`` to ``end`` inclusive, ascending."""

    month = start
    while month <= end:
        yield month
        month = month.plus_months(1)


class BurnRateAggregator:
    """Compute per-month expense totals from a :class:`TransactionStore`.

    Parameters
    ----------
    store:
        Source of transactions; queried once per month.
    today:
        Clock returning the local date. Defaults to ``date.today``; tests pass
        a fixed function.
    """

    def __init__(
        self,
        store: TransactionStore,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._today = today

    def aggregate(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        *,
        account_id: str | None = None,
    ) -> list[MonthBucket]:
        now = self._today()
        start_month, end_month = resolve_months(start_date, end_date, today=now)
        current_month = YearMonth.from_date(now)

        if start_month > end_month:
            logger.warning(
                "burn rate range is reversed (start %s after end %s); returning no months",
                start_month,
                end_month,
            )
            return []

        buckets: list[MonthBucket] = []
        for month in iter_months(start_month, end_month):
            rows = self._store.find_by_date_range(
                month.first_instant(), month.last_second(), account_id
            )
            spent = total_spent(rows)
            buckets.append(
                MonthBucket(
                    month=month,
                    label=month.label(),
                    total_spent=spent,
                    is_current_month=(month == current_month),
                )
            )

        logger.debug(
            "burn rate %s..%s (%d months, account=%s)",
            start_month,
            end_month,
            len(buckets),
            account_id,
        )
        return buckets


__all__ = [
    "BurnRateAggregator",
    "DEFAULT_LOOKBACK_MONTHS",
    "iter_months",
    "resolve_months",
    "total_spent",
]

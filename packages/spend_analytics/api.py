"""Public API for the ``spend_analytics`` package.

Two boundary operations are exposed to callers (the CLI, or a web layer that
lives elsewhere):

- :func:`get_burn_rate` returns monthly expense totals as
  ``{monthLabel, totalSpent, isCurrentMonth}`` records.
- :func:`list_transactions` returns one page of transactions with a concrete
  status per row.

Inputs are validated with pydantic before any query runs, so malformed dates
or paging values raise ``pydantic.ValidationError`` (a ``ValueError``). Each
call opens one short session via ``db.client.session_scope``; database errors
propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from db.client import session_scope

from .burn_rate import BurnRateAggregator
from .logging_setup import get_logger
from .models import BurnRateMonth, BurnRateQuery, TransactionPage, TransactionQuery
from .store import SqlTransactionStore
from .view import TransactionView

logger = get_logger(__name__)


def get_burn_rate(
    start_date: date | str | None = None,
    end_date: date | str | None = None,
    *,
    account_id: str | None = None,
    database_url: str | None = None,
    today: Callable[[], date] | None = None,
) -> list[BurnRateMonth]:
    """Monthly burn rate for an optional, possibly partial, date range.

    Parameters
    ----------
    start_date / end_date:
        ``date`` objects or ISO-8601 ``YYYY-MM-DD`` strings. Either may be
        omitted; see :mod:`spend_analytics.burn_rate` for the defaults.
    account_id:
        Limit the totals to one account.
    database_url:
        Optional DB URL override. Falls back to ``DATABASE_URL``.
    today:
        Clock override, mainly for tests.
    """

    query = BurnRateQuery(start_date=start_date, end_date=end_date, account_id=account_id)

    with session_scope(database_url=database_url, read_only=True) as session:
        store = SqlTransactionStore(session)
        aggregator = (
            BurnRateAggregator(store, today=today) if today else BurnRateAggregator(store)
        )
        buckets = aggregator.aggregate(
            query.start_date, query.end_date, account_id=query.account_id
        )
    return [BurnRateMonth.from_bucket(b) for b in buckets]


def list_transactions(
    page: int = 0,
    size: int = 10,
    category: str | None = None,
    sort_field: str | None = "transactionDate",
    sort_direction: str | None = "desc",
    *,
    database_url: str | None = None,
) -> TransactionPage:
    """One page of transactions, newest first by default.

    ``category`` matches case-insensitively and exactly; ``None``, ``""`` and
    ``"All"`` list everything. Pages past the end come back empty with the
    correct totals.
    ``sort_field=None`` sorts by transaction date and any direction other than
    ``"asc"`` (``None`` included) sorts descending.
    """

    query = TransactionQuery(
        page=page,
        size=size,
        category=category,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )

    with session_scope(database_url=database_url, read_only=True) as session:
        view = TransactionView(SqlTransactionStore(session))
        result = view.list(
            query.page,
            query.size,
            query.category,
            query.sort_field,
            query.sort_direction,
        )
    return TransactionPage.from_page(result)


__all__ = [
    "get_burn_rate",
    "list_transactions",
]

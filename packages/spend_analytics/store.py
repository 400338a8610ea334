"""Transaction store contract and its SQLAlchemy implementation.

The engine only reads transactions, through two queries:

- ``find_by_date_range(start, end, account_id=None)``: every transaction whose
  ``transaction_date`` lies in ``[start, end]`` (both ends inclusive),
  optionally limited to one account.
- ``find_page(filter, page, size)``: one zero-indexed page of the
  (optionally category-filtered) transactions in the requested order, plus
  the total row count.

:class:`SqlTransactionStore` runs both against ``db.models.finance`` with a
session owned by the caller. Database errors are not caught here; they reach
the caller unchanged.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol

from db.models.finance import Transaction as TransactionRow
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .logging_setup import get_logger
from .models import Page, PageFilter, SortDirection, SortSpec, Transaction
from .normalizers import fold, snake_case

logger = get_logger(__name__)


class TransactionStore(Protocol):
    def find_by_date_range(
        self, start: datetime, end: datetime, account_id: str | None = None
    ) -> Sequence[Transaction]: ...

    def find_page(self, filter: PageFilter, page: int, size: int) -> Page[Transaction]: ...


# Public (camelCase) sort names and their snake_case forms map to columns.
_SORTABLE_COLUMNS: dict[str, Any] = {
    "id": TransactionRow.id,
    "raw_description": TransactionRow.raw_description,
    "clean_description": TransactionRow.clean_description,
    "category": TransactionRow.category,
    "amount": TransactionRow.amount,
    "transaction_date": TransactionRow.transaction_date,
    "status": TransactionRow.status,
}


def sortable_fields() -> list[str]:
    return sorted(_SORTABLE_COLUMNS)


def resolve_sort_column(field: str) -> Any:
    """Return the column for a public sort field name or raise ``ValueError``."""

    column = _SORTABLE_COLUMNS.get(snake_case(field or ""))
    if column is None:
        raise ValueError(
            f"Unknown sort field {field!r}; expected one of: " + ", ".join(sortable_fields())
        )
    return column


def validate_paging(page: int, size: int) -> None:
    if page < 0:
        raise ValueError(f"page must be >= 0, got {page}")
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")


def _order_by(sort: SortSpec) -> list[Any]:
    column = resolve_sort_column(sort.field)
    primary = column.asc() if sort.direction is SortDirection.ASC else column.desc()
    if column is TransactionRow.id:
        return [primary]
    # Tie-break on the key so equal sort values page deterministically.
    return [primary, TransactionRow.id.asc()]


class SqlTransactionStore:
    """``TransactionStore`` over the ``transactions`` table.

    The session is borrowed; commit/rollback/close stay with the caller
    (typically ``db.client.session_scope``).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_date_range(
        self, start: datetime, end: datetime, account_id: str | None = None
    ) -> list[Transaction]:
        stmt = select(TransactionRow).where(TransactionRow.transaction_date.between(start, end))
        if account_id is not None:
            stmt = stmt.where(TransactionRow.account_id == uuid.UUID(str(account_id)))
        stmt = stmt.order_by(TransactionRow.transaction_date.asc(), TransactionRow.id.asc())
        rows = self._session.execute(stmt).scalars().all()
        logger.debug("range %s..%s account=%s -> %d rows", start, end, account_id, len(rows))
        return [Transaction.from_row(r) for r in rows]

    def find_page(self, filter: PageFilter, page: int, size: int) -> Page[Transaction]:
        validate_paging(page, size)
        order_by = _order_by(filter.sort)

        conditions = []
        folded = fold(filter.category)
        if folded is not None:
            conditions.append(func.lower(TransactionRow.category) == folded)

        count_stmt = select(func.count()).select_from(TransactionRow).where(*conditions)
        total = int(self._session.execute(count_stmt).scalar_one())

        rows_stmt = (
            select(TransactionRow)
            .where(*conditions)
            .order_by(*order_by)
            .offset(page * size)
            .limit(size)
        )
        rows = self._session.execute(rows_stmt).scalars().all()
        return Page(
            content=tuple(Transaction.from_row(r) for r in rows),
            page=page,
            size=size,
            total_elements=total,
        )


__all__ = [
    "SqlTransactionStore",
    "TransactionStore",
    "resolve_sort_column",
    "sortable_fields",
    "validate_paging",
]

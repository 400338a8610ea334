"""Data models for ``spend_analytics``.

Two groups of types live here:

- Domain types used by the engine (frozen dataclasses): :class:`Transaction`,
  :class:`YearMonth`, :class:`MonthBucket`, :class:`TransactionSummary`,
  :class:`Page` and the sort/filter specs handed to a store.
- Boundary DTOs (pydantic models) that validate caller input and serialize
  results with camelCase keys, e.g. ``{"monthLabel", "totalSpent",
  "isCurrentMonth"}``.

Domain types own no persistent state. They are created per request and
dropped after serialization.
"""

from __future__ import annotations

import calendar
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .normalizers import present

T = TypeVar("T")
U = TypeVar("U")

# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """Read-only view of a stored transaction.

    Field values are kept exactly as the store returned them. Whether an
    optional text field "has a value" is answered only by the properties
    below, so classification never repeats its own null/empty checks.
    """

    id: str
    raw_description: str | None
    clean_description: str | None
    category: str | None
    amount: Decimal | None
    transaction_date: datetime
    status: str | None = None
    account_id: str | None = None

    @property
    def has_clean_description(self) -> bool:
        return present(self.clean_description) is not None

    @property
    def has_category(self) -> bool:
        return present(self.category) is not None

    @property
    def persisted_status(self) -> str | None:
        """The stored status when set; ``None`` means "derive it"."""
        return present(self.status)

    @classmethod
    def from_row(cls, row: Any) -> Transaction:
        """Build from an ORM row (``db.models.finance.Transaction``)."""

        account_id = getattr(row, "account_id", None)
        return cls(
            id=str(row.id),
            raw_description=row.raw_description,
            clean_description=row.clean_description,
            category=row.category,
            amount=row.amount,
            transaction_date=row.transaction_date,
            status=row.status,
            account_id=str(account_id) if account_id is not None else None,
        )


@dataclass(frozen=True, slots=True)
class TransactionSummary:
    """A transaction as listed to callers: same fields, concrete ``status``."""

    id: str
    raw_description: str | None
    clean_description: str | None
    category: str | None
    amount: Decimal | None
    transaction_date: datetime
    status: str

    @classmethod
    def from_transaction(cls, tx: Transaction, *, status: str) -> TransactionSummary:
        return cls(
            id=tx.id,
            raw_description=tx.raw_description,
            clean_description=tx.clean_description,
            category=tx.category,
            amount=tx.amount,
            transaction_date=tx.transaction_date,
            status=status,
        )


# ---------------------------------------------------------------------------
# Calendar months and burn-rate buckets
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, order=True)
class YearMonth:
    """A calendar month. Ordering is chronological (year, then month)."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"YearMonth.month must be within 1..12, got {self.month}")

    @classmethod
    def from_date(cls, value: date) -> YearMonth:
        """Month containing ``value`` (a ``date`` or ``datetime``)."""
        return cls(value.year, value.month)

    def plus_months(self, n: int) -> YearMonth:
        index = self.year * 12 + (self.month - 1) + n
        return YearMonth(index // 12, index % 12 + 1)

    def months_until(self, other: YearMonth) -> int:
        """Signed number of months from ``self`` to ``other``."""
        return (other.year - self.year) * 12 + (other.month - self.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def first_instant(self) -> datetime:
        return datetime.combine(self.first_day, time.min)

    def last_second(self) -> datetime:
        # 23:59:59 exactly; sub-second timestamps after it fall outside the month.
        return datetime.combine(self.last_day, time(23, 59, 59))

    def label(self) -> str:
        """Short month name and 4-digit year, e.g. ``"Nov 2025"``."""
        return self.first_day.strftime("%b %Y")

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True, slots=True)
class MonthBucket:
    month: YearMonth
    label: str
    total_spent: Decimal
    is_current_month: bool


# ---------------------------------------------------------------------------
# Paging, sorting and filtering
# ---------------------------------------------------------------------------


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


DEFAULT_SORT_FIELD = "transactionDate"


@dataclass(frozen=True, slots=True)
class SortSpec:
    field: str = DEFAULT_SORT_FIELD
    direction: SortDirection = SortDirection.DESC


@dataclass(frozen=True, slots=True)
class PageFilter:
    """What a store should list: an optional category and the sort order.

    ``category`` is ``None`` for "no filter"; the sentinel ``"All"`` is
    resolved by the view before a filter reaches the store.
    """

    category: str | None = None
    sort: SortSpec = SortSpec()


@dataclass(frozen=True)
class Page(Generic[T]):
    """A zero-indexed slice of a larger ordered result.

    Attributes
    ----------
    content:
        Items on this page, possibly empty when ``page`` is past the end.
    page:
        Zero-based page index that was requested.
    size:
        Requested page size (not the number of items returned).
    total_elements:
        Row count of the whole filtered result.
    """

    content: tuple[T, ...]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    def map(self, fn: Callable[[T], U]) -> Page[U]:
        return Page(
            content=tuple(fn(item) for item in self.content),
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )


# ---------------------------------------------------------------------------
# Boundary DTOs (pydantic)
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-ready mapping with camelCase keys; decimals become strings."""
        return self.model_dump(mode="json", by_alias=True)


class BurnRateMonth(_CamelModel):
    month_label: str
    total_spent: Decimal
    is_current_month: bool

    @classmethod
    def from_bucket(cls, bucket: MonthBucket) -> BurnRateMonth:
        return cls(
            month_label=bucket.label,
            total_spent=bucket.total_spent,
            is_current_month=bucket.is_current_month,
        )


class TransactionOut(_CamelModel):
    id: str
    raw_description: str | None
    clean_description: str | None
    category: str | None
    amount: Decimal | None
    transaction_date: datetime
    status: str

    @classmethod
    def from_summary(cls, summary: TransactionSummary) -> TransactionOut:
        return cls(
            id=summary.id,
            raw_description=summary.raw_description,
            clean_description=summary.clean_description,
            category=summary.category,
            amount=summary.amount,
            transaction_date=summary.transaction_date,
            status=summary.status,
        )


class TransactionPage(_CamelModel):
    content: list[TransactionOut]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[TransactionSummary]) -> TransactionPage:
        return cls(
            content=[TransactionOut.from_summary(s) for s in page.content],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        )


class BurnRateQuery(_CamelModel):
    """Validated burn-rate request; ISO-8601 strings are parsed to dates."""

    start_date: date | None = None
    end_date: date | None = None
    account_id: str | None = None


class TransactionQuery(_CamelModel):
    """Validated listing request with the documented defaults."""

    page: int = Field(default=0, ge=0)
    size: int = Field(default=10, ge=1)
    category: str | None = None
    sort_field: str | None = DEFAULT_SORT_FIELD
    sort_direction: str | None = SortDirection.DESC.value


__all__ = [
    "BurnRateMonth",
    "BurnRateQuery",
    "DEFAULT_SORT_FIELD",
    "MonthBucket",
    "Page",
    "PageFilter",
    "SortDirection",
    "SortSpec",
    "Transaction",
    "TransactionOut",
    "TransactionPage",
    "TransactionQuery",
    "TransactionSummary",
    "YearMonth",
]

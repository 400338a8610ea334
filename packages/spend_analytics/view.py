"""Paginated transaction listing with read-time status."""

from __future__ import annotations

from collections.abc import Callable

from .logging_setup import get_logger
from .models import (
    DEFAULT_SORT_FIELD,
    Page,
    PageFilter,
    SortDirection,
    SortSpec,
    Transaction,
    TransactionSummary,
)
from .normalizers import is_all_categories, is_ascending, present
from .status import classify
from .store import TransactionStore, validate_paging

logger = get_logger(__name__)


def build_filter(
    category: str | None,
    sort_field: str | None,
    sort_direction: str | None,
) -> PageFilter:
    """Translate raw request values into a :class:`PageFilter`.

    ``"All"`` (any case), ``""`` and ``None`` disable the category filter.
    The direction is ascending only for ``"asc"`` (any case).
    """

    direction = SortDirection.ASC if is_ascending(sort_direction) else SortDirection.DESC
    field = present(sort_field) or DEFAULT_SORT_FIELD
    return PageFilter(
        category=None if is_all_categories(category) else category,
        sort=SortSpec(field=field, direction=direction),
    )


class TransactionView:
    """Lists transactions page by page and attaches a status to each one."""

    def __init__(
        self,
        store: TransactionStore,
        *,
        classifier: Callable[[Transaction], str] = classify,
    ) -> None:
        self._store = store
        self._classify = classifier

    def summarize(self, tx: Transaction) -> TransactionSummary:
        return TransactionSummary.from_transaction(tx, status=self._classify(tx))

    def list(
        self,
        page: int = 0,
        size: int = 10,
        category: str | None = None,
        sort_field: str | None = DEFAULT_SORT_FIELD,
        sort_direction: str | None = SortDirection.DESC.value,
    ) -> Page[TransactionSummary]:
        validate_paging(page, size)
        logger.info("Fetching transactions: page=%d, size=%d, category=%s", page, size, category)

        page_filter = build_filter(category, sort_field, sort_direction)
        raw = self._store.find_page(page_filter, page, size)
        result = raw.map(self.summarize)

        logger.info(
            "Returning %d transactions out of %d total",
            result.number_of_elements,
            result.total_elements,
        )
        return result


__all__ = ["TransactionView", "build_filter"]

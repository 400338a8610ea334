"""Public interface for the ``spend_analytics`` package.

This module exposes the package's API functions, engine components and
public models as the stable import surface. There is no runtime logic here,
only symbol re-exports.
"""

from .api import get_burn_rate, list_transactions
from .burn_rate import BurnRateAggregator
from .models import (
    BurnRateMonth,
    MonthBucket,
    Page,
    PageFilter,
    SortDirection,
    SortSpec,
    Transaction,
    TransactionOut,
    TransactionPage,
    TransactionSummary,
    YearMonth,
)
from .status import StatusClassifier, classify
from .store import SqlTransactionStore, TransactionStore
from .view import TransactionView

__all__ = [
    # API
    "get_burn_rate",
    "list_transactions",
    # Engine
    "BurnRateAggregator",
    "StatusClassifier",
    "classify",
    "TransactionView",
    "TransactionStore",
    "SqlTransactionStore",
    # Models / types
    "BurnRateMonth",
    "MonthBucket",
    "Page",
    "PageFilter",
    "SortDirection",
    "SortSpec",
    "Transaction",
    "TransactionOut",
    "TransactionPage",
    "TransactionSummary",
    "YearMonth",
]

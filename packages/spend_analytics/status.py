"""Read-time status classification for transactions.

A stored status, when present, is returned verbatim. Otherwise the status is
derived from how complete the record is, checked in this order:

1. ``Cleaned``: both a clean description and a category are present.
2. ``Flagged``: the amount's magnitude is strictly above ``FLAG_THRESHOLD``
   and the transaction is uncategorized.
3. ``Raw``: everything else.

The order matters: a cleaned, categorized transfer of 5,000 is ``Cleaned``,
and an uncategorized one is ``Flagged`` even if it has a clean description.
"""

from __future__ import annotations

from decimal import Decimal

from .models import Transaction

STATUS_CLEANED = "Cleaned"
STATUS_FLAGGED = "Flagged"
STATUS_RAW = "Raw"

# Exclusive: exactly 1000.00 is not flagged.
FLAG_THRESHOLD = Decimal("1000")


def derive_status(tx: Transaction) -> str:
    """Compute the status from the record's contents, ignoring ``tx.status``."""

    if tx.has_clean_description and tx.has_category:
        return STATUS_CLEANED
    if tx.amount is not None and abs(tx.amount) > FLAG_THRESHOLD and not tx.has_category:
        return STATUS_FLAGGED
    return STATUS_RAW


def classify(tx: Transaction) -> str:
    """Return the persisted status when set, otherwise :func:`derive_status`."""

    persisted = tx.persisted_status
    if persisted is not None:
        return persisted
    return derive_status(tx)


class StatusClassifier:
    """Callable wrapper so views can take the classifier as a collaborator."""

    __slots__ = ()

    def classify(self, tx: Transaction) -> str:
        return classify(tx)

    __call__ = classify


__all__ = [
    "FLAG_THRESHOLD",
    "STATUS_CLEANED",
    "STATUS_FLAGGED",
    "STATUS_RAW",
    "StatusClassifier",
    "classify",
    "derive_status",
]

"""String normalization shared by filtering, sorting and classification.

Every case-insensitive comparison in the package goes through :func:`fold`:
the category filter, the ``"All"`` sentinel check and sort-direction parsing.
The SQL store folds stored values with ``LOWER()``, so ``fold`` uses
``str.lower`` rather than ``casefold`` to stay consistent with the database.

:func:`present` is the one place that decides whether an optional text field
carries a value. ``None`` and the empty string both mean "absent"; whitespace
is kept as a value.
"""

from __future__ import annotations

ALL_CATEGORIES = "All"
ASCENDING = "asc"


def present(value: str | None) -> str | None:
    """Return ``value`` when it is a non-empty string, else ``None``."""

    if value is None or value == "":
        return None
    return value


def fold(value: str | None) -> str | None:
    """Case-fold ``value`` for comparisons; absent values stay ``None``."""

    v = present(value)
    return v.lower() if v is not None else None


def is_all_categories(category: str | None) -> bool:
    """True when ``category`` requests no category filter.

    Absent, empty and any casing of ``"All"`` all mean "no filter".
    """

    folded = fold(category)
    return folded is None or folded == fold(ALL_CATEGORIES)


def is_ascending(direction: str | None) -> bool:
    """True only for a case-insensitive ``"asc"``; everything else is descending."""

    return fold(direction) == ASCENDING


def snake_case(name: str) -> str:
    """Convert a camelCase field name (``transactionDate``) to snake_case."""

    out: list[str] = []
    for ch in name.strip():
        if ch.isupper():
            if out:
                out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


__all__ = [
    "ALL_CATEGORIES",
    "fold",
    "is_all_categories",
    "is_ascending",
    "present",
    "snake_case",
]

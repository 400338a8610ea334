"""Persistence layer for spend analytics.

``db.models.finance`` declares the ``accounts`` and ``transactions`` tables;
``db.client`` owns the engine and sessions. ``metadata`` is exported so tests
and one-off scripts can ``create_all`` without importing the models module.
"""

from __future__ import annotations

from .models.finance import Account, Base, Transaction

metadata = Base.metadata

__all__ = [
    "Account",
    "Base",
    "Transaction",
    "metadata",
]

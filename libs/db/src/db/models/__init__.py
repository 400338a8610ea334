"""ORM models: accounts and their transactions."""

from .finance import Account, Base, Transaction

__all__ = ["Account", "Base", "Transaction"]

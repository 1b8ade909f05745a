"""Persistence for ledger snapshots."""

from .storage import LedgerStorage

__all__ = ["LedgerStorage"]

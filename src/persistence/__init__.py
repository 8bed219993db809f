"""Persistence — хранение снапшота ledger на диске."""

from .ledger_store import LedgerStore, LoadResult

__all__ = [
    "LedgerStore",
    "LoadResult",
]

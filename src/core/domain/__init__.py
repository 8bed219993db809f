"""
Domain models and value objects.

Contains fundamental domain entities: Instrument, Transaction, LedgerState.
"""

from src.core.domain.instrument import Instrument
from src.core.domain.ledger_state import LEDGER_STATE_SCHEMA_VERSION, LedgerState
from src.core.domain.transaction import Transaction, TransactionKind

__all__ = [
    # Instrument model
    "Instrument",
    # Transaction model
    "Transaction",
    "TransactionKind",
    # Ledger snapshot
    "LedgerState",
    "LEDGER_STATE_SCHEMA_VERSION",
]

"""
Contract Validation Module

Модуль для валидации JSON контрактов (формат файла состояния ledger).
"""

from .validators import LEDGER_STATE_SCHEMA, LedgerStateValidator, SchemaLoader

__all__ = [
    "SchemaLoader",
    "LedgerStateValidator",
    "LEDGER_STATE_SCHEMA",
]

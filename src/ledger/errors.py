"""Таксономия ошибок ledger.

Все ошибки восстановимы на месте вызова: ledger не бросает их, а возвращает
в TradeResult.error; вызывающий код решает, показать сообщение или raise.
Каждая ошибка несёт запрошенное и доступное значение для сообщения человеку.
"""

from decimal import Decimal
from enum import Enum
from pathlib import Path


class LedgerErrorCode(str, Enum):
    """Машиночитаемый код ошибки."""

    INVALID_QUANTITY = "invalid_quantity"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_SHARES = "insufficient_shares"
    SYMBOL_NOT_FOUND = "symbol_not_found"
    PERSISTENCE_UNAVAILABLE = "persistence_unavailable"


class LedgerError(Exception):
    """Базовый класс ошибок ledger."""

    code: LedgerErrorCode


class InvalidQuantityError(LedgerError):
    """Количество <= 0."""

    code = LedgerErrorCode.INVALID_QUANTITY

    def __init__(self, quantity: int):
        self.quantity = quantity
        super().__init__(f"Invalid quantity {quantity}: must be greater than zero")


class InsufficientFundsError(LedgerError):
    """Стоимость покупки больше свободного cash."""

    code = LedgerErrorCode.INSUFFICIENT_FUNDS

    def __init__(self, required: Decimal, available: Decimal):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient cash: need {required}, have {available}")


class InsufficientSharesError(LedgerError):
    """Продажа большего количества, чем есть в позиции."""

    code = LedgerErrorCode.INSUFFICIENT_SHARES

    def __init__(self, symbol: str, requested: int, held: int):
        self.symbol = symbol
        self.requested = requested
        self.held = held
        super().__init__(
            f"Insufficient shares of {symbol}: hold {held}, tried to sell {requested}"
        )


class SymbolNotFoundError(LedgerError):
    """Тикер отсутствует в каталоге (проверяется до вызова ledger)."""

    code = LedgerErrorCode.SYMBOL_NOT_FOUND

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Stock with symbol '{symbol}' not found in market data")


class PersistenceUnavailableError(LedgerError):
    """Файл состояния отсутствует или не читается; ledger стартует заново."""

    code = LedgerErrorCode.PERSISTENCE_UNAVAILABLE

    def __init__(self, path: Path, reason: str, missing: bool = False):
        self.path = path
        self.reason = reason
        self.missing = missing
        super().__init__(f"Ledger state unavailable at {path}: {reason}")

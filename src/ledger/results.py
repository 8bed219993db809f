"""Результаты операций ledger."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from src.core.domain.transaction import Transaction, TransactionKind
from src.ledger.errors import LedgerError, LedgerErrorCode


@dataclass(frozen=True)
class TradeResult:
    """Результат buy/sell.

    success=True: amount — реализованная стоимость (buy) или выручка (sell),
    transaction — добавленная запись журнала.
    success=False: error — причина отказа, состояние ledger не изменилось.
    """

    success: bool
    kind: TransactionKind
    symbol: str
    quantity: int

    # Реализованная сумма (0 при отказе)
    amount: Decimal

    transaction: Optional[Transaction]
    error: Optional[LedgerError]

    # Диагностика
    details: str

    @property
    def error_code(self) -> Optional[LedgerErrorCode]:
        return self.error.code if self.error is not None else None

    def raise_for_error(self) -> None:
        """Raise ошибку отказа (для вызывающего кода, который предпочитает исключения)."""
        if self.error is not None:
            raise self.error

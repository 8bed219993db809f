"""
LedgerState — Модель снапшота ledger

Immutable Pydantic модель, представляющая полное состояние ledger
(cash, holdings, history) для сохранения на диск и восстановления.
Полная совместимость с JSON Schema (contracts/schema/ledger_state.json).

Версия схемы (schema_version) меняется при любом несовместимом изменении
формата; чтение файла другой версии отклоняется.
"""

from decimal import Decimal
from typing import Final

from pydantic import BaseModel, Field, field_validator

from src.core.math.money import MAX_MONEY

from .transaction import Transaction

# Текущая версия формата снапшота
LEDGER_STATE_SCHEMA_VERSION: Final[str] = "1"


# =============================================================================
# LEDGER STATE MODEL
# =============================================================================


class LedgerState(BaseModel):
    """
    Снапшот состояния ledger.

    Immutable модель (frozen=True). Содержит:
    - Версию схемы (schema_version)
    - Баланс (cash)
    - Позиции (holdings: symbol → quantity, quantity >= 1)
    - Журнал операций (history, хронологический порядок)
    """

    schema_version: str = Field(
        LEDGER_STATE_SCHEMA_VERSION,
        pattern="^1$",
        description="Версия схемы для tracking совместимости",
    )
    cash: Decimal = Field(..., ge=0, lt=MAX_MONEY, description="Свободные денежные средства")
    holdings: dict[str, int] = Field(
        default_factory=dict, description="Позиции: тикер → количество акций"
    )
    history: list[Transaction] = Field(
        default_factory=list, description="Журнал операций (старые первыми)"
    )

    model_config = {"frozen": True}

    @field_validator("cash")
    @classmethod
    def validate_cash_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError(f"cash must be finite, got {v}")
        return v

    @field_validator("holdings")
    @classmethod
    def validate_holdings_positive(cls, v: dict[str, int]) -> dict[str, int]:
        """
        Инвариант: каждая позиция >= 1.

        Нулевые позиции удаляются ledger'ом и не должны попадать в снапшот.
        """
        for symbol, quantity in v.items():
            if not symbol:
                raise ValueError("holdings contain an empty symbol")
            if quantity < 1:
                raise ValueError(f"holding {symbol} has quantity {quantity}, expected >= 1")
        return v

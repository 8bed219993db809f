"""
Transaction — Модель завершённой операции

Immutable Pydantic модель, представляющая одну исполненную покупку или продажу.
Transaction создаётся ledger'ом в момент применения операции и только
добавляется в историю (append-only): никогда не меняется и не удаляется.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.core.math.money import MAX_MONEY


# =============================================================================
# ENUMS
# =============================================================================


class TransactionKind(str, Enum):
    """Тип операции"""

    BUY = "BUY"
    SELL = "SELL"


# =============================================================================
# TRANSACTION MODEL
# =============================================================================


class Transaction(BaseModel):
    """
    Запись журнала операций (order record).

    Порядок записей в истории ledger совпадает с хронологическим.
    Immutable модель (frozen=True).
    """

    symbol: str = Field(..., min_length=1, description="Тикер инструмента")
    kind: TransactionKind = Field(..., description="Тип операции (BUY/SELL)")
    quantity: int = Field(..., gt=0, description="Количество акций (всегда положительное)")
    unit_price: Decimal = Field(
        ..., ge=0, lt=MAX_MONEY, description="Цена за акцию на момент операции"
    )
    timestamp: datetime = Field(..., description="Время операции (UTC, timezone-aware)")

    model_config = {"frozen": True}  # Immutable

    @field_validator("unit_price")
    @classmethod
    def validate_unit_price_finite(cls, v: Decimal) -> Decimal:
        """Проверка, что цена конечная."""
        if not v.is_finite():
            raise ValueError(f"unit_price must be finite, got {v}")
        return v

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp_aware(cls, v: datetime) -> datetime:
        """Naive datetime запрещён: без таймзоны порядок записей неоднозначен."""
        if v.tzinfo is None or v.tzinfo.utcoffset(v) is None:
            raise ValueError(f"timestamp {v.isoformat()} must be timezone-aware")
        return v

    def notional(self) -> Decimal:
        """
        Денежный объём операции.

        Returns:
            unit_price × quantity
        """
        return self.unit_price * self.quantity

    def is_buy(self) -> bool:
        return self.kind == TransactionKind.BUY

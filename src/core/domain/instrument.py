"""
Instrument — Модель торгуемого инструмента

Immutable Pydantic модель: котируемый инструмент каталога (тикер, название, цена).
Снапшот цены фиксирован в момент создания; каталог хранит инструменты по symbol.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from src.core.math.money import MAX_MONEY


# =============================================================================
# INSTRUMENT MODEL
# =============================================================================


class Instrument(BaseModel):
    """
    Модель котируемого инструмента.

    Immutable модель (frozen=True). Новая цена означает новый экземпляр.
    """

    symbol: str = Field(..., min_length=1, description="Тикер (уникальный ключ, например 'TCS')")
    display_name: str = Field(..., min_length=1, description="Название компании")
    price: Decimal = Field(..., ge=0, lt=MAX_MONEY, description="Текущая цена за акцию")

    model_config = {"frozen": True}

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        """Тикер без пробелов по краям и не пустой."""
        if v != v.strip() or not v.strip():
            raise ValueError(f"symbol {v!r} must be non-blank without surrounding whitespace")
        return v

    @field_validator("price")
    @classmethod
    def validate_price_finite(cls, v: Decimal) -> Decimal:
        """Проверка, что цена конечная (не NaN/Inf)."""
        if not v.is_finite():
            raise ValueError(f"price must be finite, got {v}")
        return v

    def cost_of(self, quantity: int) -> Decimal:
        """
        Стоимость quantity акций по текущей цене.

        Args:
            quantity: Количество акций

        Returns:
            price × quantity (точное Decimal произведение)
        """
        return self.price * quantity

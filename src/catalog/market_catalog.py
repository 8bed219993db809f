"""Market Catalog — read-only справочник котируемых инструментов.

- lookup(symbol) → Instrument или None (чистое чтение, без side effects)
- Набор инструментов фиксируется при создании; live feed и модель волатильности отсутствуют
- default_catalog() — фиксированный набор из пяти акций NSE
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Protocol

from src.core.domain.instrument import Instrument


class PriceLookup(Protocol):
    """Источник цен, которым пользуется ledger для оценки позиций."""

    def lookup(self, symbol: str) -> Optional[Instrument]:
        ...


class MarketCatalog:
    """Неизменяемый каталог инструментов, ключ — symbol.

    Порядок итерации совпадает с порядком добавления.
    """

    def __init__(self, instruments: Iterable[Instrument]):
        """
        Args:
            instruments: инструменты каталога

        Raises:
            ValueError: если symbol встречается дважды
        """
        by_symbol: dict[str, Instrument] = {}
        for instrument in instruments:
            if instrument.symbol in by_symbol:
                raise ValueError(f"Duplicate symbol in catalog: {instrument.symbol}")
            by_symbol[instrument.symbol] = instrument

        self._instruments: Mapping[str, Instrument] = MappingProxyType(by_symbol)

    def lookup(self, symbol: str) -> Optional[Instrument]:
        """Поиск инструмента по точному тикеру; None если не найден."""
        return self._instruments.get(symbol)

    def symbols(self) -> tuple[str, ...]:
        return tuple(self._instruments)

    def instruments(self) -> tuple[Instrument, ...]:
        return tuple(self._instruments.values())

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._instruments

    def __iter__(self) -> Iterator[Instrument]:
        return iter(self._instruments.values())

    def __len__(self) -> int:
        return len(self._instruments)


def default_catalog() -> MarketCatalog:
    """Стартовый набор инструментов с фиксированными ценами."""
    return MarketCatalog(
        [
            Instrument(symbol="TCS", display_name="Tata Consultancy Services", price=Decimal("3800.00")),
            Instrument(symbol="RELIANCE", display_name="Reliance Industries", price=Decimal("2950.00")),
            Instrument(symbol="HDFC", display_name="HDFC Bank", price=Decimal("1500.00")),
            Instrument(symbol="INFY", display_name="Infosys", price=Decimal("1600.00")),
            Instrument(symbol="SBIN", display_name="State Bank of India", price=Decimal("750.00")),
        ]
    )

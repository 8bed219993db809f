"""TradingSession — фасад для presentation layer.

Связывает каталог, ledger и хранилище, которые владелец создаёт явно
(глобальных синглтонов нет). Каждая операция принимает сырой ввод и
возвращает SessionOutcome: успех/отказ и готовое сообщение для человека.

Поток buy/sell:
1. parse_symbol (нормализация + каталог) → SymbolNotFound при промахе
2. parse_quantity (синтаксис целого)
3. ledger.buy / ledger.sell (InvalidQuantity, InsufficientFunds, InsufficientShares)
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from src.catalog.market_catalog import MarketCatalog, default_catalog
from src.core.config import DEFAULT_CURRENCY_SYMBOL, LedgerConfig
from src.core.domain.transaction import TransactionKind
from src.core.math.money import format_money
from src.ledger.errors import LedgerError, PersistenceUnavailableError, SymbolNotFoundError
from src.ledger.input_boundary import ParseErrorCode, normalize_symbol, parse_quantity, parse_symbol
from src.ledger.portfolio_ledger import PortfolioLedger
from src.ledger.results import TradeResult
from src.persistence.ledger_store import LedgerStore, LoadResult
from src.reporting.summaries import (
    format_history,
    format_market_data,
    format_portfolio,
    format_trade_result,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOutcome:
    """Исход операции сессии.

    - trade: результат ledger, если до него дошло
    - parse_error: код отказа разбора ввода
    - error: типизированная ошибка (SymbolNotFound, ошибки ledger, PersistenceUnavailable)
    """

    success: bool
    message: str
    trade: Optional[TradeResult] = None
    parse_error: Optional[ParseErrorCode] = None
    error: Optional[LedgerError] = None


class TradingSession:
    """Сессия одного трейдера над явно переданными каталогом, ledger и хранилищем."""

    def __init__(
        self,
        catalog: MarketCatalog,
        ledger: PortfolioLedger,
        store: Optional[LedgerStore] = None,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    ):
        self.catalog = catalog
        self.ledger = ledger
        self.store = store
        self.currency_symbol = currency_symbol

    def buy(self, raw_symbol: str, raw_quantity: str) -> SessionOutcome:
        return self._trade(TransactionKind.BUY, raw_symbol, raw_quantity)

    def sell(self, raw_symbol: str, raw_quantity: str) -> SessionOutcome:
        return self._trade(TransactionKind.SELL, raw_symbol, raw_quantity)

    def save(self) -> SessionOutcome:
        """Сохранение ledger целиком; ошибка записи не роняет сессию."""
        if self.store is None:
            return SessionOutcome(success=False, message="No ledger store configured.")

        try:
            self.store.save(self.ledger)
        except PersistenceUnavailableError as e:
            logger.warning("Save failed: %s", e)
            return SessionOutcome(
                success=False, message=f"Error saving portfolio: {e.reason}", error=e
            )

        return SessionOutcome(
            success=True, message=f"Portfolio saved successfully to {self.store.path}"
        )

    def valuation(self) -> Decimal:
        return self.ledger.valuation(self.catalog)

    def market_data(self) -> list[str]:
        return format_market_data(self.catalog, self.currency_symbol)

    def portfolio_summary(self) -> list[str]:
        return format_portfolio(self.ledger, self.catalog, self.currency_symbol)

    def history_summary(self) -> list[str]:
        return format_history(self.ledger, self.currency_symbol)

    def _trade(self, kind: TransactionKind, raw_symbol: str, raw_quantity: str) -> SessionOutcome:
        symbol_result = parse_symbol(raw_symbol, self.catalog)
        if not symbol_result.ok:
            error = None
            if symbol_result.error_code == ParseErrorCode.SYMBOL_NOT_FOUND:
                error = SymbolNotFoundError(normalize_symbol(raw_symbol))
            return SessionOutcome(
                success=False,
                message=symbol_result.details,
                parse_error=symbol_result.error_code,
                error=error,
            )

        quantity_result = parse_quantity(raw_quantity)
        if not quantity_result.ok:
            return SessionOutcome(
                success=False,
                message=quantity_result.details,
                parse_error=quantity_result.error_code,
            )

        instrument = symbol_result.value
        if kind == TransactionKind.BUY:
            trade = self.ledger.buy(instrument, quantity_result.value)
        else:
            trade = self.ledger.sell(instrument, quantity_result.value)

        return SessionOutcome(
            success=trade.success,
            message=format_trade_result(trade, self.currency_symbol),
            trade=trade,
            error=trade.error,
        )


def open_session(
    config: Optional[LedgerConfig] = None,
    catalog: Optional[MarketCatalog] = None,
) -> tuple[TradingSession, LoadResult]:
    """Создание сессии: ledger восстанавливается из config.state_path или создаётся заново.

    Args:
        config: конфигурация (по умолчанию из окружения)
        catalog: каталог (по умолчанию default_catalog())

    Returns:
        (сессия, результат загрузки); LoadResult сообщает, откуда взят ledger
    """
    if config is None:
        config = LedgerConfig.from_env()
    store = LedgerStore(config.state_path)
    load_result = store.load(config.starting_cash)

    session = TradingSession(
        catalog=catalog if catalog is not None else default_catalog(),
        ledger=load_result.ledger,
        store=store,
        currency_symbol=config.currency_symbol,
    )
    logger.info(
        "Session opened: restored=%s cash=%s",
        load_result.restored,
        format_money(load_result.ledger.cash),
    )
    return session, load_result

"""PortfolioLedger — cash, позиции и журнал операций одного трейдера.

Инварианты
----------
1. **Все денежные значения — Decimal**; cost/revenue = price × quantity без округления.
2. **cash >= 0** после любой завершённой операции; покупка, которая увела бы
   cash в минус, отклоняется целиком.
3. **Позиции >= 1**: при продаже до нуля тикер удаляется из holdings, нулевые
   позиции не хранятся.
4. **Журнал append-only**: порядок записей — хронологический, записи не
   меняются и не удаляются.
5. **Атомарность**: buy/sell либо меняют cash, holdings и history вместе,
   либо не меняют ничего. Тройка защищена одним lock, поэтому ledger можно
   разделять между потоками.

Использование
-------------
::

    catalog = default_catalog()
    ledger = PortfolioLedger(starting_cash=Decimal("10000.00"))
    result = ledger.buy(catalog.lookup("TCS"), 2)
    if not result.success:
        print(result.details)
    total = ledger.valuation(catalog)
"""

import logging
import threading
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional

from src.catalog.market_catalog import PriceLookup
from src.core.domain.instrument import Instrument
from src.core.domain.ledger_state import LedgerState
from src.core.domain.transaction import Transaction, TransactionKind
from src.core.math.money import ZERO, to_decimal, validate_money_amount
from src.ledger.errors import (
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidQuantityError,
    LedgerError,
)
from src.ledger.results import TradeResult

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PortfolioLedger:
    """Ledger одного трейдера.

    Создаётся один раз со стартовым cash или восстанавливается из LedgerState;
    меняется только через buy/sell.
    """

    def __init__(
        self,
        starting_cash: Decimal,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Args:
            starting_cash: начальный баланс (>= 0)
            clock: источник времени для записей журнала (UTC, timezone-aware)
        """
        starting_cash = to_decimal(starting_cash, "starting_cash")
        validate_money_amount(starting_cash, "starting_cash")

        self._cash: Decimal = starting_cash
        self._holdings: dict[str, int] = {}
        self._history: list[Transaction] = []
        self._clock: Callable[[], datetime] = clock or _utc_now
        self._lock = threading.Lock()

    @classmethod
    def from_state(
        cls,
        state: LedgerState,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "PortfolioLedger":
        """Восстановление ledger из снапшота (инварианты проверены моделью)."""
        ledger = cls(starting_cash=state.cash, clock=clock)
        ledger._holdings = dict(state.holdings)
        ledger._history = list(state.history)
        return ledger

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def cash(self) -> Decimal:
        with self._lock:
            return self._cash

    @property
    def holdings(self) -> dict[str, int]:
        """Копия позиций; изменение копии не влияет на ledger."""
        with self._lock:
            return dict(self._holdings)

    @property
    def history(self) -> tuple[Transaction, ...]:
        """Журнал в хронологическом порядке (старые первыми)."""
        with self._lock:
            return tuple(self._history)

    def quantity_of(self, symbol: str) -> int:
        with self._lock:
            return self._holdings.get(symbol, 0)

    def history_descending(self) -> tuple[Transaction, ...]:
        """Журнал в обратном хронологическом порядке (новые первыми).

        Read-only view: сам журнал не меняется.
        """
        with self._lock:
            return tuple(reversed(self._history))

    def valuation(self, catalog: PriceLookup) -> Decimal:
        """Полная стоимость: cash + Σ quantity × текущая цена каталога.

        Позиции, чей тикер больше не находится в каталоге, дают ноль и
        пропускаются без ошибки. Сама позиция при этом остаётся в holdings.
        """
        with self._lock:
            cash = self._cash
            holdings = list(self._holdings.items())

        holdings_value = ZERO
        for symbol, quantity in holdings:
            instrument = catalog.lookup(symbol)
            if instrument is None:
                logger.debug("Valuation: %s not in catalog, %d shares valued at zero", symbol, quantity)
                continue
            holdings_value += instrument.cost_of(quantity)

        return cash + holdings_value

    def to_state(self) -> LedgerState:
        """Снапшот для сохранения (cash, holdings, history целиком)."""
        with self._lock:
            return LedgerState(
                cash=self._cash,
                holdings=dict(self._holdings),
                history=list(self._history),
            )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def buy(self, instrument: Instrument, quantity: int) -> TradeResult:
        """Покупка quantity акций по текущей цене инструмента.

        Порядок проверок:
        1. quantity <= 0 → InvalidQuantity
        2. price × quantity > cash → InsufficientFunds
        3. Применение: cash -= cost, holdings += quantity, запись BUY

        Returns:
            TradeResult; при success amount = реализованная стоимость
        """
        _check_quantity_type(quantity)
        kind = TransactionKind.BUY

        with self._lock:
            if quantity <= 0:
                return self._rejected(kind, instrument.symbol, quantity, InvalidQuantityError(quantity))

            cost = instrument.cost_of(quantity)
            if cost > self._cash:
                return self._rejected(
                    kind,
                    instrument.symbol,
                    quantity,
                    InsufficientFundsError(required=cost, available=self._cash),
                )

            # Запись создаётся до мутаций: ошибка валидации не оставит частичного состояния
            transaction = self._record(kind, instrument, quantity)

            self._cash -= cost
            self._holdings[instrument.symbol] = self._holdings.get(instrument.symbol, 0) + quantity
            self._history.append(transaction)

        logger.info("BUY %d %s @ %s, cost=%s", quantity, instrument.symbol, instrument.price, cost)
        return TradeResult(
            success=True,
            kind=kind,
            symbol=instrument.symbol,
            quantity=quantity,
            amount=cost,
            transaction=transaction,
            error=None,
            details=f"Bought {quantity} shares of {instrument.symbol} for {cost}",
        )

    def sell(self, instrument: Instrument, quantity: int) -> TradeResult:
        """Продажа quantity акций по текущей цене инструмента.

        Порядок проверок:
        1. quantity <= 0 → InvalidQuantity
        2. позиции нет или она меньше quantity → InsufficientShares
        3. Применение: cash += revenue, holdings -= quantity (удаление при нуле), запись SELL

        Returns:
            TradeResult; при success amount = реализованная выручка
        """
        _check_quantity_type(quantity)
        kind = TransactionKind.SELL
        symbol = instrument.symbol

        with self._lock:
            if quantity <= 0:
                return self._rejected(kind, symbol, quantity, InvalidQuantityError(quantity))

            held = self._holdings.get(symbol, 0)
            if held < quantity:
                return self._rejected(
                    kind,
                    symbol,
                    quantity,
                    InsufficientSharesError(symbol=symbol, requested=quantity, held=held),
                )

            transaction = self._record(kind, instrument, quantity)
            revenue = transaction.notional()

            self._cash += revenue
            remaining = held - quantity
            if remaining == 0:
                del self._holdings[symbol]
            else:
                self._holdings[symbol] = remaining
            self._history.append(transaction)

        logger.info("SELL %d %s @ %s, revenue=%s", quantity, symbol, instrument.price, revenue)
        return TradeResult(
            success=True,
            kind=kind,
            symbol=symbol,
            quantity=quantity,
            amount=revenue,
            transaction=transaction,
            error=None,
            details=f"Sold {quantity} shares of {symbol} for {revenue}",
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _record(self, kind: TransactionKind, instrument: Instrument, quantity: int) -> Transaction:
        return Transaction(
            symbol=instrument.symbol,
            kind=kind,
            quantity=quantity,
            unit_price=instrument.price,
            timestamp=self._clock(),
        )

    @staticmethod
    def _rejected(
        kind: TransactionKind, symbol: str, quantity: int, error: LedgerError
    ) -> TradeResult:
        logger.debug("%s %s x%d rejected: %s", kind.value, symbol, quantity, error)
        return TradeResult(
            success=False,
            kind=kind,
            symbol=symbol,
            quantity=quantity,
            amount=ZERO,
            transaction=None,
            error=error,
            details=str(error),
        )

    def __repr__(self) -> str:
        return (
            f"PortfolioLedger(cash={self._cash}, holdings={len(self._holdings)}, "
            f"history={len(self._history)})"
        )


def _check_quantity_type(quantity: int) -> None:
    # bool наследует int, но это не количество акций
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise TypeError(f"quantity must be int, got {type(quantity).__name__}")

"""Тесты для PortfolioLedger.

Coverage:
- buy/sell: изменение cash, holdings, history
- Отказы (InvalidQuantity, InsufficientFunds, InsufficientShares) без изменения состояния
- valuation: пустой портфель, позиции, тикер пропал из каталога
- history_descending: порядок и read-only
- Снапшот to_state / from_state
- Сценарии из консольного симулятора
- Атомарность при конкурентных вызовах
"""

import threading
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.catalog import MarketCatalog, default_catalog
from src.core.domain import Instrument, TransactionKind
from src.core.math import MAX_MONEY
from src.ledger import (
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidQuantityError,
    LedgerErrorCode,
    PortfolioLedger,
)


class FakeClock:
    """Детерминированные часы: каждый вызов +1 секунда."""

    def __init__(self, start: datetime = datetime(2026, 1, 5, 9, 15, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def tcs(catalog):
    return catalog.lookup("TCS")


@pytest.fixture
def ledger(clock):
    return PortfolioLedger(starting_cash=Decimal("10000.00"), clock=clock)


def snapshot(ledger: PortfolioLedger):
    return ledger.cash, ledger.holdings, ledger.history


# =============================================================================
# CONSTRUCTION
# =============================================================================


class TestConstruction:
    """Создание ledger."""

    def test_fresh_ledger_is_empty(self, ledger):
        assert ledger.cash == Decimal("10000.00")
        assert ledger.holdings == {}
        assert ledger.history == ()

    def test_negative_starting_cash_rejected(self):
        with pytest.raises(ValueError):
            PortfolioLedger(starting_cash=Decimal("-1"))

    def test_starting_cash_at_upper_bound_rejected(self):
        with pytest.raises(ValueError, match="below"):
            PortfolioLedger(starting_cash=MAX_MONEY)

    def test_negative_zero_starting_cash_normalized(self):
        ledger = PortfolioLedger(starting_cash=Decimal("-0"))
        assert not ledger.cash.is_signed()

    def test_float_starting_cash_converted(self):
        ledger = PortfolioLedger(starting_cash=100.1)
        assert ledger.cash == Decimal("100.1")

    def test_holdings_property_is_a_copy(self, ledger, tcs):
        ledger.buy(tcs, 1)
        holdings = ledger.holdings
        holdings["TCS"] = 999
        assert ledger.quantity_of("TCS") == 1


# =============================================================================
# BUY
# =============================================================================


class TestBuy:
    """Покупка."""

    def test_buy_debits_cash_and_adds_holding(self, ledger, tcs):
        result = ledger.buy(tcs, 2)

        assert result.success is True
        assert result.error is None
        assert result.amount == Decimal("7600.00")
        assert ledger.cash == Decimal("2400.00")
        assert ledger.holdings == {"TCS": 2}

    def test_buy_appends_exactly_one_record(self, ledger, tcs, clock):
        expected_ts = clock.now
        result = ledger.buy(tcs, 2)

        assert len(ledger.history) == 1
        tx = ledger.history[0]
        assert tx.kind == TransactionKind.BUY
        assert tx.symbol == "TCS"
        assert tx.quantity == 2
        assert tx.unit_price == tcs.price
        assert tx.timestamp == expected_ts
        assert result.transaction == tx

    def test_buy_increments_existing_holding(self, ledger, tcs):
        ledger.buy(tcs, 1)
        ledger.buy(tcs, 1)
        assert ledger.holdings == {"TCS": 2}
        assert len(ledger.history) == 2

    def test_buy_exact_cash_allowed(self, clock):
        """cost == cash допустимо, cash становится ровно 0"""
        ledger = PortfolioLedger(starting_cash=Decimal("7600.00"), clock=clock)
        inst = Instrument(symbol="TCS", display_name="TCS", price=Decimal("3800.00"))

        result = ledger.buy(inst, 2)

        assert result.success is True
        assert ledger.cash == Decimal("0")

    @pytest.mark.parametrize("quantity", [0, -1, -100])
    def test_buy_non_positive_quantity_rejected(self, ledger, tcs, quantity):
        before = snapshot(ledger)

        result = ledger.buy(tcs, quantity)

        assert result.success is False
        assert result.error_code == LedgerErrorCode.INVALID_QUANTITY
        assert isinstance(result.error, InvalidQuantityError)
        assert result.error.quantity == quantity
        assert result.amount == Decimal("0")
        assert result.transaction is None
        assert snapshot(ledger) == before

    def test_buy_insufficient_funds_rejected(self, clock):
        """Сценарий: cash 100.00, покупка 1 акции по 150.00"""
        ledger = PortfolioLedger(starting_cash=Decimal("100.00"), clock=clock)
        pricey = Instrument(symbol="XYZ", display_name="Xyz Ltd", price=Decimal("150.00"))

        result = ledger.buy(pricey, 1)

        assert result.success is False
        assert result.error_code == LedgerErrorCode.INSUFFICIENT_FUNDS
        assert isinstance(result.error, InsufficientFundsError)
        assert result.error.required == Decimal("150.00")
        assert result.error.available == Decimal("100.00")
        assert ledger.cash == Decimal("100.00")
        assert ledger.holdings == {}
        assert ledger.history == ()

    def test_buy_insufficient_funds_leaves_existing_state(self, ledger, tcs):
        ledger.buy(tcs, 2)
        before = snapshot(ledger)

        result = ledger.buy(tcs, 1)  # 3800 > 2400

        assert result.error_code == LedgerErrorCode.INSUFFICIENT_FUNDS
        assert snapshot(ledger) == before

    def test_buy_rejects_non_int_quantity(self, ledger, tcs):
        with pytest.raises(TypeError):
            ledger.buy(tcs, 1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            ledger.buy(tcs, True)

    def test_raise_for_error(self, ledger, tcs):
        result = ledger.buy(tcs, 0)
        with pytest.raises(InvalidQuantityError):
            result.raise_for_error()

        ledger.buy(tcs, 1).raise_for_error()  # успех не бросает


# =============================================================================
# SELL
# =============================================================================


class TestSell:
    """Продажа."""

    def test_sell_credits_cash_and_decrements_holding(self, ledger, tcs):
        ledger.buy(tcs, 2)

        result = ledger.sell(tcs, 1)

        assert result.success is True
        assert result.amount == Decimal("3800.00")
        assert ledger.cash == Decimal("6200.00")
        assert ledger.holdings == {"TCS": 1}
        assert ledger.history[-1].kind == TransactionKind.SELL
        assert len(ledger.history) == 2
        assert result.amount == result.transaction.notional()

    def test_sell_to_zero_removes_holding(self, ledger, tcs):
        ledger.buy(tcs, 2)

        ledger.sell(tcs, 2)

        assert "TCS" not in ledger.holdings
        assert ledger.quantity_of("TCS") == 0

    def test_sell_uses_current_price(self, ledger, tcs):
        """Продажа по текущей цене инструмента, не по цене покупки"""
        ledger.buy(tcs, 1)
        repriced = Instrument(symbol="TCS", display_name=tcs.display_name, price=Decimal("4000.00"))

        result = ledger.sell(repriced, 1)

        assert result.amount == Decimal("4000.00")
        assert ledger.cash == Decimal("10200.00")
        assert ledger.history[-1].unit_price == Decimal("4000.00")

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_sell_non_positive_quantity_rejected(self, ledger, tcs, quantity):
        ledger.buy(tcs, 1)
        before = snapshot(ledger)

        result = ledger.sell(tcs, quantity)

        assert result.error_code == LedgerErrorCode.INVALID_QUANTITY
        assert snapshot(ledger) == before

    def test_sell_without_holding_rejected(self, ledger, tcs):
        result = ledger.sell(tcs, 1)

        assert result.error_code == LedgerErrorCode.INSUFFICIENT_SHARES
        assert isinstance(result.error, InsufficientSharesError)
        assert result.error.held == 0
        assert result.error.requested == 1
        assert ledger.history == ()

    def test_sell_more_than_held_rejected(self, ledger, tcs):
        ledger.buy(tcs, 2)
        before = snapshot(ledger)

        result = ledger.sell(tcs, 3)

        assert result.error_code == LedgerErrorCode.INSUFFICIENT_SHARES
        assert result.error.held == 2
        assert snapshot(ledger) == before

    def test_invalid_quantity_checked_before_holdings(self, ledger, tcs):
        """quantity <= 0 → InvalidQuantity даже без позиции"""
        result = ledger.sell(tcs, 0)
        assert result.error_code == LedgerErrorCode.INVALID_QUANTITY


# =============================================================================
# VALUATION / HISTORY
# =============================================================================


class TestValuation:
    """Оценка портфеля."""

    def test_empty_holdings_equals_cash(self, ledger, catalog):
        assert ledger.valuation(catalog) == ledger.cash

    def test_valuation_includes_holdings(self, ledger, catalog):
        ledger.buy(catalog.lookup("TCS"), 1)
        ledger.buy(catalog.lookup("SBIN"), 4)

        # 10000 - 3800 - 3000 = 3200 cash; 3800 + 3000 holdings
        assert ledger.valuation(catalog) == Decimal("10000.00")

    def test_valuation_uses_current_catalog_price(self, ledger, tcs):
        ledger.buy(tcs, 2)
        repriced = MarketCatalog(
            [Instrument(symbol="TCS", display_name="TCS", price=Decimal("4000.00"))]
        )

        assert ledger.valuation(repriced) == Decimal("2400.00") + Decimal("8000.00")

    def test_valuation_skips_symbol_missing_from_catalog(self, ledger, catalog):
        """Пропавший из каталога тикер оценивается в ноль и остаётся в holdings"""
        ledger.buy(catalog.lookup("TCS"), 1)
        ledger.buy(catalog.lookup("INFY"), 1)
        delisted = MarketCatalog([catalog.lookup("INFY")])

        value = ledger.valuation(delisted)

        assert value == ledger.cash + Decimal("1600.00")
        assert ledger.holdings == {"TCS": 1, "INFY": 1}


class TestHistory:
    """Журнал операций."""

    def test_history_descending_reverses_order(self, ledger, catalog):
        ledger.buy(catalog.lookup("TCS"), 1)
        ledger.buy(catalog.lookup("INFY"), 1)
        ledger.sell(catalog.lookup("TCS"), 1)

        descending = ledger.history_descending()

        assert [(tx.kind, tx.symbol) for tx in descending] == [
            (TransactionKind.SELL, "TCS"),
            (TransactionKind.BUY, "INFY"),
            (TransactionKind.BUY, "TCS"),
        ]
        assert descending[0].timestamp > descending[-1].timestamp

    def test_history_descending_does_not_mutate(self, ledger, catalog):
        ledger.buy(catalog.lookup("TCS"), 1)
        ledger.buy(catalog.lookup("INFY"), 1)
        chronological = ledger.history

        ledger.history_descending()

        assert ledger.history == chronological
        assert ledger.history[0].symbol == "TCS"

    def test_empty_history(self, ledger):
        assert ledger.history_descending() == ()


# =============================================================================
# SNAPSHOT
# =============================================================================


class TestSnapshot:
    """to_state / from_state."""

    def test_round_trip_through_state(self, ledger, catalog):
        ledger.buy(catalog.lookup("TCS"), 2)
        ledger.buy(catalog.lookup("SBIN"), 3)
        ledger.sell(catalog.lookup("TCS"), 1)

        restored = PortfolioLedger.from_state(ledger.to_state())

        assert restored.cash == ledger.cash
        assert restored.holdings == ledger.holdings
        assert restored.history == ledger.history

    def test_restored_ledger_is_independent(self, ledger, tcs):
        ledger.buy(tcs, 1)
        restored = PortfolioLedger.from_state(ledger.to_state())

        restored.buy(tcs, 1)

        assert ledger.quantity_of("TCS") == 1
        assert restored.quantity_of("TCS") == 2


# =============================================================================
# SCENARIOS
# =============================================================================


def test_scenario_buy_two_sell_back(ledger, tcs):
    """10000.00 → buy 2 @ 3800 → sell 1 → sell 1 → 10000.00"""
    ledger.buy(tcs, 2)
    assert ledger.cash == Decimal("2400.00")
    assert ledger.holdings == {"TCS": 2}

    ledger.sell(tcs, 1)
    assert ledger.cash == Decimal("6200.00")
    assert ledger.holdings == {"TCS": 1}

    ledger.sell(tcs, 1)
    assert ledger.cash == Decimal("10000.00")
    assert ledger.holdings == {}

    history = ledger.history
    assert [tx.kind for tx in history] == [
        TransactionKind.BUY,
        TransactionKind.SELL,
        TransactionKind.SELL,
    ]
    assert history[0].timestamp < history[1].timestamp < history[2].timestamp


# =============================================================================
# CONCURRENCY
# =============================================================================


def test_concurrent_buys_never_overdraw():
    """Конкурентные покупки: cash не уходит в минус, состояние согласовано"""
    ledger = PortfolioLedger(starting_cash=Decimal("1000"))
    inst = Instrument(symbol="ONE", display_name="One Rupee", price=Decimal("1"))
    results = []
    results_lock = threading.Lock()

    def worker():
        for _ in range(100):
            result = ledger.buy(inst, 1)
            with results_lock:
                results.append(result)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    succeeded = sum(1 for r in results if r.success)
    assert succeeded == 1000
    assert ledger.cash == Decimal("0")
    assert ledger.holdings == {"ONE": 1000}
    assert len(ledger.history) == 1000
    assert all(
        r.error_code == LedgerErrorCode.INSUFFICIENT_FUNDS for r in results if not r.success
    )


def test_cash_read_waits_for_running_operation(ledger):
    """Чтение cash берёт тот же lock, что и buy/sell"""
    seen = []
    ledger._lock.acquire()
    reader = threading.Thread(target=lambda: seen.append(ledger.cash))
    try:
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()
        assert seen == []
    finally:
        ledger._lock.release()

    reader.join()
    assert seen == [Decimal("10000.00")]

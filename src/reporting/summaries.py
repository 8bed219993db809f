"""Человекочитаемые сводки для presentation layer.

Функции возвращают список строк; печать (консоль, GUI, лог) — забота вызывающего.
Денежные суммы округляются до 0.01 только здесь, ledger хранит точные значения.
"""

from src.catalog.market_catalog import MarketCatalog, PriceLookup
from src.core.config import DEFAULT_CURRENCY_SYMBOL
from src.core.domain.instrument import Instrument
from src.core.domain.transaction import Transaction
from src.core.math.money import format_money
from src.ledger.errors import (
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidQuantityError,
)
from src.ledger.portfolio_ledger import PortfolioLedger
from src.ledger.results import TradeResult
from src.persistence.ledger_store import LoadResult

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_instrument(instrument: Instrument, currency: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """'TCS (Tata Consultancy Services): ₹3800.00'"""
    return f"{instrument.symbol} ({instrument.display_name}): {format_money(instrument.price, currency)}"


def format_transaction(transaction: Transaction, currency: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """'BUY 2 shares of TCS at ₹3800.00/share on 2026-01-02 10:00:00'"""
    return (
        f"{transaction.kind.value} {transaction.quantity} shares of {transaction.symbol} "
        f"at {format_money(transaction.unit_price, currency)}/share "
        f"on {transaction.timestamp.strftime(TIMESTAMP_FORMAT)}"
    )


def format_market_data(catalog: MarketCatalog, currency: str = DEFAULT_CURRENCY_SYMBOL) -> list[str]:
    if len(catalog) == 0:
        return ["No stocks available in the market."]

    lines = ["--- Current Market Data ---"]
    lines.extend(format_instrument(instrument, currency) for instrument in catalog)
    lines.append("---------------------------")
    return lines


def format_portfolio(
    ledger: PortfolioLedger,
    catalog: PriceLookup,
    currency: str = DEFAULT_CURRENCY_SYMBOL,
) -> list[str]:
    """Cash, позиции с текущей ценой и стоимостью, итоговая стоимость портфеля.

    Позиция без цены в каталоге показывается как 'Price data unavailable'.
    """
    lines = [
        "--- Your Portfolio ---",
        f"Cash Balance: {format_money(ledger.cash, currency)}",
        "Holdings:",
    ]

    holdings = ledger.holdings
    if not holdings:
        lines.append("  No stocks held.")
    for symbol, quantity in holdings.items():
        instrument = catalog.lookup(symbol)
        if instrument is None:
            lines.append(f"  - {symbol}: {quantity} shares (Price data unavailable)")
            continue
        lines.append(
            f"  - {instrument.symbol} ({instrument.display_name}): {quantity} shares "
            f"(Current Price: {format_money(instrument.price, currency)}, "
            f"Value: {format_money(instrument.cost_of(quantity), currency)})"
        )

    lines.append(f"Total Portfolio Value: {format_money(ledger.valuation(catalog), currency)}")
    lines.append("----------------------")
    return lines


def format_history(ledger: PortfolioLedger, currency: str = DEFAULT_CURRENCY_SYMBOL) -> list[str]:
    """Журнал операций, новые первыми."""
    lines = ["--- Transaction History ---"]
    history = ledger.history_descending()
    if not history:
        lines.append("  No transactions yet.")
    lines.extend(f"  {format_transaction(tx, currency)}" for tx in history)
    lines.append("---------------------------")
    return lines


def format_startup(load_result: LoadResult, currency: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Приветствие после загрузки: ledger восстановлен или создан заново."""
    cash = format_money(load_result.ledger.cash, currency)
    if load_result.restored:
        return f"Portfolio loaded successfully! Current cash: {cash}"
    if load_result.error is not None and not load_result.error.missing:
        return f"Error loading portfolio ({load_result.error.reason}). New portfolio created with initial cash: {cash}"
    return f"Welcome! New portfolio created with initial cash: {cash}"


def format_trade_result(result: TradeResult, currency: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Сообщение об исходе buy/sell."""
    if result.success:
        verb = "bought" if result.transaction.is_buy() else "sold"
        return (
            f"Successfully {verb} {result.quantity} shares of {result.symbol} "
            f"for {format_money(result.amount, currency)}."
        )

    error = result.error
    if isinstance(error, InvalidQuantityError):
        return "Invalid quantity. Must be greater than zero."
    if isinstance(error, InsufficientFundsError):
        return (
            f"Insufficient cash. Need {format_money(error.required, currency)}, "
            f"but only have {format_money(error.available, currency)}."
        )
    if isinstance(error, InsufficientSharesError):
        return (
            f"Insufficient shares of {error.symbol}. "
            f"You hold {error.held}, but tried to sell {error.requested}."
        )
    return result.details

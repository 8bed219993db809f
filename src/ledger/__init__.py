"""Ledger — cash, позиции и журнал операций.

- portfolio_ledger.py — PortfolioLedger: buy / sell / valuation / history
- results.py          — TradeResult (успех или типизированный отказ)
- errors.py           — таксономия ошибок (InvalidQuantity, InsufficientFunds, ...)
- input_boundary.py   — разбор сырого ввода в ParseResult без исключений
"""

from .errors import (
    InsufficientFundsError,
    InsufficientSharesError,
    InvalidQuantityError,
    LedgerError,
    LedgerErrorCode,
    PersistenceUnavailableError,
    SymbolNotFoundError,
)
from .input_boundary import (
    ParseErrorCode,
    ParseResult,
    normalize_symbol,
    parse_quantity,
    parse_symbol,
)
from .portfolio_ledger import PortfolioLedger
from .results import TradeResult

__all__ = [
    "PortfolioLedger",
    "TradeResult",
    # Errors
    "LedgerError",
    "LedgerErrorCode",
    "InvalidQuantityError",
    "InsufficientFundsError",
    "InsufficientSharesError",
    "SymbolNotFoundError",
    "PersistenceUnavailableError",
    # Input boundary
    "ParseErrorCode",
    "ParseResult",
    "normalize_symbol",
    "parse_symbol",
    "parse_quantity",
]

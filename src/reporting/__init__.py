"""Reporting — текстовые сводки по каталогу, портфелю и журналу."""

from .summaries import (
    format_history,
    format_instrument,
    format_market_data,
    format_portfolio,
    format_startup,
    format_trade_result,
    format_transaction,
)

__all__ = [
    "format_instrument",
    "format_transaction",
    "format_market_data",
    "format_portfolio",
    "format_history",
    "format_startup",
    "format_trade_result",
]

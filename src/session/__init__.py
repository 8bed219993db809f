"""Session — точка входа для presentation layer (консоль, GUI)."""

from .trading_session import SessionOutcome, TradingSession, open_session

__all__ = [
    "SessionOutcome",
    "TradingSession",
    "open_session",
]

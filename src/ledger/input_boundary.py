"""Граница валидации пользовательского ввода.

Сырые строки (консоль, GUI, HTTP) превращаются в типизированный ParseResult:
либо значение, либо код ошибки разбора. Ожидаемый плохой ввод не бросает
исключений.

- parse_symbol: тикер нормализуется (strip + upper) и ищется в каталоге
- parse_quantity: только синтаксис целого числа; знак проверяет ledger
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from src.catalog.market_catalog import PriceLookup
from src.core.domain.instrument import Instrument

T = TypeVar("T")

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class ParseErrorCode(str, Enum):
    """Причина отказа разбора."""

    EMPTY_INPUT = "empty_input"
    NOT_AN_INTEGER = "not_an_integer"
    SYMBOL_NOT_FOUND = "symbol_not_found"


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Результат разбора: value при успехе, error_code при отказе."""

    raw: str
    value: Optional[T]
    error_code: Optional[ParseErrorCode]
    details: str

    @property
    def ok(self) -> bool:
        return self.error_code is None

    @classmethod
    def success(cls, raw: str, value: T) -> "ParseResult[T]":
        return cls(raw=raw, value=value, error_code=None, details="")

    @classmethod
    def failure(cls, raw: str, error_code: ParseErrorCode, details: str) -> "ParseResult[T]":
        return cls(raw=raw, value=None, error_code=error_code, details=details)


def normalize_symbol(raw: str) -> str:
    return raw.strip().upper()


def parse_symbol(raw: str, catalog: PriceLookup) -> ParseResult[Instrument]:
    """Разбор тикера и поиск в каталоге.

    Args:
        raw: ввод пользователя (регистр не важен)
        catalog: источник инструментов

    Returns:
        ParseResult с Instrument или кодом EMPTY_INPUT / SYMBOL_NOT_FOUND
    """
    symbol = normalize_symbol(raw)
    if not symbol:
        return ParseResult.failure(raw, ParseErrorCode.EMPTY_INPUT, "Stock symbol cannot be empty.")

    instrument = catalog.lookup(symbol)
    if instrument is None:
        return ParseResult.failure(
            raw,
            ParseErrorCode.SYMBOL_NOT_FOUND,
            f"Stock with symbol '{symbol}' not found in market data.",
        )

    return ParseResult.success(raw, instrument)


def parse_quantity(raw: str) -> ParseResult[int]:
    """Разбор количества акций как целого числа.

    Returns:
        ParseResult с int (в том числе <= 0) или кодом EMPTY_INPUT / NOT_AN_INTEGER
    """
    text = raw.strip()
    if not text:
        return ParseResult.failure(raw, ParseErrorCode.EMPTY_INPUT, "Quantity cannot be empty.")

    if _INTEGER_RE.fullmatch(text):
        try:
            return ParseResult.success(raw, int(text))
        except ValueError:
            # int() отклоняет строки длиннее sys.get_int_max_str_digits()
            pass

    return ParseResult.failure(
        raw,
        ParseErrorCode.NOT_AN_INTEGER,
        "Invalid quantity. Please enter a whole number.",
    )

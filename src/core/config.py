"""Конфигурация ledger: стартовый капитал, путь к файлу состояния, валюта.

Значения по умолчанию совпадают с консольным симулятором (10000.00, ₹);
любое значение переопределяется переменной окружения с префиксом LEDGER_.
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Final

from src.core.math.money import to_decimal, validate_money_amount

DEFAULT_STARTING_CASH: Final[Decimal] = Decimal("10000.00")
DEFAULT_STATE_PATH: Final[str] = "portfolio.json"
DEFAULT_CURRENCY_SYMBOL: Final[str] = "₹"


@dataclass(frozen=True)
class LedgerConfig:
    """Runtime-конфигурация ledger.

    - starting_cash: баланс нового ledger (когда файла состояния нет или он повреждён)
    - state_path: файл, куда ledger сохраняется целиком
    - currency_symbol: префикс денежных сумм в отчётах
    """

    starting_cash: Decimal = DEFAULT_STARTING_CASH
    state_path: Path = field(default_factory=lambda: Path(DEFAULT_STATE_PATH))
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL

    def __post_init__(self) -> None:
        # frozen: нормализуем через object.__setattr__
        object.__setattr__(self, "starting_cash", to_decimal(self.starting_cash, "starting_cash"))
        object.__setattr__(self, "state_path", Path(self.state_path))
        validate_money_amount(self.starting_cash, "starting_cash")

    @staticmethod
    def from_env(prefix: str = "LEDGER_") -> "LedgerConfig":
        """Загрузка конфигурации из окружения.

        Отсутствующие переменные берут значения по умолчанию.

        Raises:
            ValueError: Если STARTING_CASH не число, отрицательное или не меньше MAX_MONEY
        """
        starting_cash = os.getenv(prefix + "STARTING_CASH")
        state_path = os.getenv(prefix + "STATE_PATH")
        currency_symbol = os.getenv(prefix + "CURRENCY_SYMBOL")

        return LedgerConfig(
            starting_cash=(
                to_decimal(starting_cash, prefix + "STARTING_CASH")
                if starting_cash
                else DEFAULT_STARTING_CASH
            ),
            state_path=Path(state_path) if state_path else Path(DEFAULT_STATE_PATH),
            currency_symbol=(
                currency_symbol if currency_symbol is not None else DEFAULT_CURRENCY_SYMBOL
            ),
        )

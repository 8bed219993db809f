"""LedgerStore — сохранение и восстановление ledger целиком в JSON-файл.

Формат файла описан контрактом contracts/schema/ledger_state.json и моделью
LedgerState (schema_version, cash, holdings, history). Decimal сериализуются
строками, timestamp — ISO 8601 с таймзоной.

Поведение при старте:
- файла нет → новый ledger со стартовым cash (штатная ситуация, info)
- файл повреждён / не читается / не проходит контракт → warning, новый ledger
- загрузка никогда не бросает исключение наружу

Запись атомарная: временный файл рядом + os.replace.
"""

import json
import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional

import jsonschema

from src.core.contracts.validators import LedgerStateValidator
from src.core.domain.ledger_state import LedgerState
from src.ledger.errors import PersistenceUnavailableError
from src.ledger.portfolio_ledger import PortfolioLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Результат загрузки.

    restored=True: ledger восстановлен из файла, error=None.
    restored=False: ledger новый; error объясняет, почему файл не использован.
    """

    ledger: PortfolioLedger
    restored: bool
    error: Optional[PersistenceUnavailableError]


class LedgerStore:
    """Файловое хранилище одного ledger."""

    def __init__(self, path: Path | str, validator: Optional[LedgerStateValidator] = None):
        self.path = Path(path)
        self._validator = validator or LedgerStateValidator()

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, ledger: PortfolioLedger) -> None:
        """Запись полного состояния ledger.

        Raises:
            PersistenceUnavailableError: снапшот нарушает контракт или файл
                не удалось записать
        """
        try:
            payload = ledger.to_state().model_dump(mode="json")
            self._validator.validate(payload)
        except jsonschema.ValidationError as e:
            raise PersistenceUnavailableError(self.path, f"contract violation: {e.message}") from e
        except ValueError as e:
            raise PersistenceUnavailableError(self.path, f"invalid state: {e}") from e

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceUnavailableError(self.path, f"write failed: {e}") from e

        logger.info(
            "Ledger saved to %s (holdings=%d, history=%d)",
            self.path,
            len(payload["holdings"]),
            len(payload["history"]),
        )

    def read_state(self) -> LedgerState:
        """Чтение и валидация снапшота.

        Raises:
            PersistenceUnavailableError: файл отсутствует, не читается,
                не является JSON или нарушает контракт
        """
        if not self.path.exists():
            raise PersistenceUnavailableError(self.path, "file not found", missing=True)

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._validator.validate(data)
            # pydantic ValidationError наследует ValueError
            return LedgerState.model_validate(data)
        except jsonschema.ValidationError as e:
            raise PersistenceUnavailableError(self.path, f"contract violation: {e.message}") from e
        except (OSError, ValueError, RecursionError) as e:
            # RecursionError: json.load на глубоко вложенных массивах
            raise PersistenceUnavailableError(self.path, f"unreadable: {e}") from e

    def load(self, starting_cash: Decimal) -> LoadResult:
        """Восстановление ledger или создание нового.

        Args:
            starting_cash: cash нового ledger, если файл не использован

        Returns:
            LoadResult (никогда не бросает PersistenceUnavailableError)
        """
        try:
            state = self.read_state()
        except PersistenceUnavailableError as e:
            if e.missing:
                logger.info("No ledger state at %s, starting fresh with cash=%s", self.path, starting_cash)
            else:
                logger.warning("Ignoring ledger state: %s; starting fresh with cash=%s", e, starting_cash)
            return LoadResult(
                ledger=PortfolioLedger(starting_cash=starting_cash),
                restored=False,
                error=e,
            )

        logger.info("Ledger restored from %s (cash=%s)", self.path, state.cash)
        return LoadResult(ledger=PortfolioLedger.from_state(state), restored=True, error=None)

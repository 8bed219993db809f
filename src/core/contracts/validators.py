"""
Контракт файла состояния ledger (JSON Schema)

SchemaLoader находит схемы в contracts/schema/, проверяет их meta-схемой
Draft 2020-12 и кэширует. LedgerStateValidator проверяет снапшот перед
записью и после чтения; из всех нарушений наружу уходит самое релевантное
(jsonschema best_match), его message становится причиной
PersistenceUnavailableError.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

LEDGER_STATE_SCHEMA = "ledger_state"

# <корень проекта>/contracts/schema
_DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


class SchemaLoader:
    """Чтение схем из директории: meta-валидация и кэш по имени."""

    def __init__(self, schema_dir: Path | None = None):
        self.schema_dir = schema_dir or _DEFAULT_SCHEMA_DIR
        if not self.schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self.schema_dir}")
        self._cache: dict[str, dict[str, Any]] = {}

    def load_schema(self, name: str) -> dict[str, Any]:
        """
        Загрузка схемы по имени файла без расширения.

        Raises:
            FileNotFoundError: Схемы нет в schema_dir
            ValueError: Файл не является валидной Draft 2020-12 схемой
        """
        if name not in self._cache:
            path = self.schema_dir / f"{name}.json"
            if not path.is_file():
                raise FileNotFoundError(f"Schema not found: {path}")

            schema = json.loads(path.read_text(encoding="utf-8"))
            try:
                Draft202012Validator.check_schema(schema)
            except jsonschema.SchemaError as e:
                raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

            self._cache[name] = schema
        return self._cache[name]


class LedgerStateValidator:
    """Проверка снапшота ledger против ledger_state.json."""

    def __init__(self, loader: SchemaLoader | None = None):
        schema = (loader or SchemaLoader()).load_schema(LEDGER_STATE_SCHEMA)
        self._validator = Draft202012Validator(schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            jsonschema.ValidationError: Самое релевантное нарушение контракта
        """
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error

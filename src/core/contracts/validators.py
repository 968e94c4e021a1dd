"""
Mint Contracts — JSON Schema проверки на границе mint контракта

Две схемы в contracts/schema/:
- mint_request.json: каждый MintRequest перед исполнением
  (MerkleMintContract.submit)
- mint_state.json: каждый MintStateSnapshot перед выдачей наружу
  (MerkleMintContract.snapshot), включая запрет PUBLIC + PRESALE одновременно

Pydantic модели сериализуются в JSON форму (model_dump(mode="json")),
которая и проверяется схемой: так контракт фиксирует внешний формат,
а не внутренние типы Python.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import jsonschema
from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from src.core.domain.mint_request import MintRequest
from src.core.domain.sale_state import MintStateSnapshot

# contracts/schema/ в корне репозитория
SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """
    Загрузка и meta-validation схемы (кэшируется на процесс).

    Args:
        schema_name: имя без расширения ('mint_request' или 'mint_state')

    Raises:
        FileNotFoundError: Если файла схемы нет
        ValueError: Если схема не является корректной Draft 2020-12
    """
    schema_path = SCHEMA_DIR / f"{schema_name}.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")
    return schema


class SchemaContract:
    """Один JSON контракт: схема + валидатор."""

    schema_name: str = ""

    def __init__(self):
        self.schema = load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    def violations(self, data: Dict[str, Any]) -> List[str]:
        """Все нарушения в виде 'путь: сообщение', отсортированные по пути."""
        errors = sorted(self.validator.iter_errors(data), key=lambda e: list(e.absolute_path))
        return [
            f"{'/'.join(str(p) for p in error.absolute_path) or '<root>'}: {error.message}"
            for error in errors
        ]

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: наиболее релевантное нарушение (best_match)
        """
        error = best_match(self.validator.iter_errors(data))
        if error is not None:
            raise error


class MintRequestContract(SchemaContract):
    """mint_request.json для MintRequest."""

    schema_name = "mint_request"

    def check(self, request: MintRequest) -> Dict[str, Any]:
        """Проверка запроса; возвращает его JSON форму."""
        data = request.model_dump(mode="json")
        self.validate(data)
        return data


class MintStateContract(SchemaContract):
    """mint_state.json для MintStateSnapshot."""

    schema_name = "mint_state"

    def check(self, snapshot: MintStateSnapshot) -> Dict[str, Any]:
        """Проверка снапшота; возвращает его JSON форму."""
        data = snapshot.model_dump(mode="json")
        self.validate(data)
        return data


def validate_mint_request(data: Dict[str, Any]) -> None:
    """Проверка сырых данных запроса (Raises: ValidationError)."""
    MintRequestContract().validate(data)


def validate_mint_state(data: Dict[str, Any]) -> None:
    """Проверка сырых данных снапшота (Raises: ValidationError)."""
    MintStateContract().validate(data)

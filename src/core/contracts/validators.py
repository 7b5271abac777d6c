"""
JSON Schema Contract Validators

Валидация сериализованных данных ledger-а против JSON Schema контрактов
(jsonschema, Draft 2020-12).

Схемы поставляются вместе с пакетом (src/core/contracts/schema/):
- ledger_state.json (снапшот реестра)
- transfer_event.json (событие Transfer)
- approval_event.json (событие Approval)

Схемы читаются лениво, при первом обращении; импорт модуля не трогает диск.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator

# Каталог схем внутри пакета
SCHEMA_DIR: Path = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов с кэшем.

    Args:
        schema_dir: каталог со схемами (default: SCHEMA_DIR)
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema по имени без расширения.

        Raises:
            RuntimeError: Если каталог схем отсутствует
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


@lru_cache(maxsize=None)
def default_loader() -> SchemaLoader:
    """Общий загрузчик для схем пакета."""
    return SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор данных против одной схемы."""

    schema_name: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        self.schema = (loader or default_loader()).load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class LedgerStateValidator(ContractValidator):
    schema_name = "ledger_state"


class TransferEventValidator(ContractValidator):
    schema_name = "transfer_event"


class ApprovalEventValidator(ContractValidator):
    schema_name = "approval_event"


# Имя события → класс валидатора
_EVENT_VALIDATORS = {
    "Transfer": TransferEventValidator,
    "Approval": ApprovalEventValidator,
}


@lru_cache(maxsize=None)
def _validator(cls: type) -> ContractValidator:
    return cls()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_ledger_state(data: Dict[str, Any]) -> None:
    """Валидация снапшота LedgerState.model_dump(mode="json")."""
    _validator(LedgerStateValidator).validate(data)


def validate_transfer_event(data: Dict[str, Any]) -> None:
    _validator(TransferEventValidator).validate(data)


def validate_approval_event(data: Dict[str, Any]) -> None:
    _validator(ApprovalEventValidator).validate(data)


def validate_event(data: Dict[str, Any]) -> None:
    """
    Валидация события по полю "event".

    Raises:
        ValueError: Если имя события неизвестно
        ValidationError: Если данные не соответствуют схеме
    """
    cls = _EVENT_VALIDATORS.get(data.get("event"))
    if cls is None:
        raise ValueError(f"Unknown event: {data.get('event')!r}")
    _validator(cls).validate(data)

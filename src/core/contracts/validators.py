"""
JSON Schema Contract Validators

Модуль для валидации JSON payload таблицы неттинга согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы:
- claim_graph.json (сериализованный граф: Nodes / Edges)
- netting_stats.json (сводная статистика)
- counterparty_claims.json (зеркальные требования одного контрагента)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Корень проекта (4 уровня вверх от этого файла)
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'claim_graph')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема сама по себе невалидна
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class ClaimGraphValidator(ContractValidator):
    """Валидатор для claim_graph контракта (payload Codec)."""

    def __init__(self):
        super().__init__("claim_graph")


class NettingStatsValidator(ContractValidator):
    """Валидатор для netting_stats контракта."""

    def __init__(self):
        super().__init__("netting_stats")


class CounterpartyClaimsValidator(ContractValidator):
    """Валидатор для counterparty_claims контракта."""

    def __init__(self):
        super().__init__("counterparty_claims")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_claim_graph(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованного графа.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ClaimGraphValidator().validate(data)


def validate_netting_stats(data: Dict[str, Any]) -> None:
    """
    Валидация сводной статистики.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    NettingStatsValidator().validate(data)


def validate_counterparty_claims(data: list) -> None:
    """
    Валидация списка требований контрагента.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    CounterpartyClaimsValidator().validate(data)

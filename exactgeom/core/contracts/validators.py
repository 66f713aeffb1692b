"""
JSON Schema Contract Validators

Модуль для валидации JSON-представлений согласно формальным JSON Schema
контрактам. Использует библиотеку jsonschema (Draft 2020-12).

Схемы (exactgeom/core/contracts/schema/):
- geometry_vector.json — snapshot типизированной коллекции примитивов
- intersection_result.json — тегированный результат пересечения одной пары
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'geometry_vector')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор одного контракта.

    Все нарушения перечисляет iter_errors; validate и is_valid построены
    поверх него, поэтому проверки наследников действуют во всех трёх.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.validator = Draft202012Validator(_SCHEMA_LOADER.load_schema(schema_name))

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Итератор по всем нарушениям контракта."""
        return self.validator.iter_errors(data)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против контракта.

        Raises:
            ValidationError: Наиболее релевантное нарушение (best_match)
        """
        error = best_match(self.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return next(iter(self.iter_errors(data)), None) is None


class GeometryVectorValidator(ContractValidator):
    """
    Валидатор snapshot коллекции примитивов.

    Помимо схемы проверяет согласованность, которую JSON Schema не выражает:
    каждая строка definitions имеет ровно len(def_names) значений.
    Ширина строк проверяется только для структурно валидного snapshot.
    """

    def __init__(self):
        super().__init__("geometry_vector")

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        schema_errors = list(super().iter_errors(data))
        if schema_errors:
            yield from schema_errors
            return

        width = len(data["def_names"])
        for index, row in enumerate(data["definitions"]):
            if len(row) != width:
                yield ValidationError(
                    f"definitions[{index}] has {len(row)} values, "
                    f"expected {width} ({data['def_names']})",
                    path=("definitions", index),
                    instance=row,
                )


class IntersectionResultValidator(ContractValidator):
    """Валидатор результата пересечения одной пары."""

    def __init__(self):
        super().__init__("intersection_result")


@lru_cache(maxsize=None)
def _validator(validator_type: type[ContractValidator]) -> ContractValidator:
    return validator_type()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_geometry_vector(data: Dict[str, Any]) -> None:
    """
    Валидация snapshot коллекции примитивов.

    Raises:
        ValidationError: Если данные не соответствуют контракту
    """
    _validator(GeometryVectorValidator).validate(data)


def validate_intersection_result(data: Dict[str, Any]) -> None:
    """
    Валидация представления результата пересечения.

    Raises:
        ValidationError: Если данные не соответствуют контракту
    """
    _validator(IntersectionResultValidator).validate(data)

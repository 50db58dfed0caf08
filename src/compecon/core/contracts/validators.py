"""
JSON Schema Contract Validators

Проверка JSON-запросов движка распределения бюджета до построения
pydantic моделей. Схемы лежат в compecon/core/contracts/schema/:
- price_function.json: одна ценовая кривая (fixed / step / tiered)
- allocation_request.json: параметры Cobb-Douglas, кривые по входам и
  бюджет; кривые ссылаются на price_function.json через $ref

Схема проверяет форму и диапазоны. Сумму экспонент проверяет
CobbDouglasParameters, так как JSON Schema её не выражает.
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator
from referencing import Registry, Resource


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Загрузка схем каталога и сборка Registry для $ref по $id."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без .json, с meta-validation и кэшем.

        Raises:
            FileNotFoundError: нет такого файла
            ValueError: схема не является валидной Draft 2020-12
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema

    def registry(self) -> Registry:
        """Registry со всеми схемами каталога по $id."""
        resources = []
        for schema_path in sorted(self._schema_dir.glob("*.json")):
            schema = self.load_schema(schema_path.stem)
            resources.append((schema["$id"], Resource.from_contents(schema)))
        return Registry().with_resources(resources)


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор одного контракта: схема плюс Registry каталога."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        loader = loader or _SCHEMA_LOADER
        self.schema_name = schema_name
        self.validator = Draft202012Validator(
            loader.load_schema(schema_name), registry=loader.registry()
        )

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: наиболее релевантное нарушение схемы
        """
        self.validator.validate(data)


class PriceFunctionValidator(ContractValidator):
    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("price_function", loader)


class AllocationRequestValidator(ContractValidator):
    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("allocation_request", loader)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

# Валидаторы создаются при первом обращении и переиспользуются
_VALIDATORS: Dict[str, ContractValidator] = {}


def _validator(schema_name: str) -> ContractValidator:
    if schema_name not in _VALIDATORS:
        factory = {
            "price_function": PriceFunctionValidator,
            "allocation_request": AllocationRequestValidator,
        }[schema_name]
        _VALIDATORS[schema_name] = factory()
    return _VALIDATORS[schema_name]


def validate_price_function(data: Dict[str, Any]) -> None:
    """Проверка одной ценовой кривой, например {"kind": "fixed", "price": 2.0}."""
    _validator("price_function").validate(data)


def validate_allocation_request(data: Dict[str, Any]) -> None:
    """
    Проверка запроса на распределение бюджета.

    Raises:
        jsonschema.ValidationError: нарушение схемы, включая вложенные кривые
    """
    _validator("allocation_request").validate(data)

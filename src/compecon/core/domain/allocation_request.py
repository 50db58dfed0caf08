"""
AllocationRequest — запрос агента на распределение бюджета

Immutable Pydantic модели для JSON-интерфейса движка: параметры
Cobb-Douglas, ценовые кривые по входам и бюджет. Соответствует схеме
allocation_request (compecon.core.contracts).

Типы входов в JSON задаются строками.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

from compecon.core.contracts.validators import validate_allocation_request
from compecon.core.math.cobb_douglas import CobbDouglasFunction
from compecon.core.math.convex_optimizer import DEFAULT_NUMBER_OF_ITERATIONS, OptimizerConfig
from compecon.core.math.functions import bundle_cost
from compecon.core.math.numerical_safeguards import EXPONENT_SUM_TOLERANCE
from compecon.core.math.price_functions import PriceFunction

logger = logging.getLogger(__name__)


# =============================================================================
# MODELS
# =============================================================================


class CobbDouglasParameters(BaseModel):
    """
    Параметры Cobb-Douglas: a > 0, e_i ∈ (0, 1], Σ e_i = 1.

    Порядок exponents сохраняется и задаёт tie-break оптимизатора.
    """

    coefficient: float = Field(..., gt=0, allow_inf_nan=False, description="Коэффициент a")
    exponents: dict[str, float] = Field(..., min_length=1, description="Экспонента по входу")

    model_config = {"frozen": True}

    @field_validator("exponents")
    @classmethod
    def validate_exponents(cls, v: dict[str, float]) -> dict[str, float]:
        """Проверка диапазона экспонент и их суммы"""
        for input_type, exponent in v.items():
            if not 0.0 < exponent <= 1.0:
                raise ValueError(f"exponent of {input_type!r} must be in ]0, 1], got {exponent}")

        total = sum(v.values())
        if abs(total - 1.0) > EXPONENT_SUM_TOLERANCE:
            raise ValueError(f"exponents must sum to 1, got {total}")
        return v

    def to_function(self) -> CobbDouglasFunction[str]:
        return CobbDouglasFunction(self.coefficient, self.exponents)


class AllocationRequest(BaseModel):
    """Запрос на распределение бюджета по входам."""

    parameters: CobbDouglasParameters = Field(..., description="Параметры функции выпуска")
    price_functions: dict[str, PriceFunction] = Field(
        ..., description="Ценовая кривая по входу (отсутствие = NaN-цена)"
    )
    budget: float = Field(..., ge=0, allow_inf_nan=False, description="Бюджет")
    number_of_iterations: int = Field(
        DEFAULT_NUMBER_OF_ITERATIONS, gt=0, description="Порций бюджета на вход"
    )

    model_config = {"frozen": True}

    def optimizer_config(self) -> OptimizerConfig:
        return OptimizerConfig(number_of_iterations=self.number_of_iterations)


class AllocationResult(BaseModel):
    """Результат распределения: bundle, выпуск и потраченные деньги."""

    bundle: dict[str, float] = Field(..., description="Количество по входу")
    output: float = Field(..., description="Выпуск для bundle")
    money_spent: float = Field(..., description="Стоимость bundle по ценовым кривым")

    model_config = {"frozen": True}


# =============================================================================
# ENTRY POINT
# =============================================================================


def allocate(request: AllocationRequest) -> AllocationResult:
    """
    Выполнение запроса: dispatch Cobb-Douglas (аналитика или итерации).

    Returns:
        AllocationResult с полным bundle
    """
    function = request.parameters.to_function()
    bundle = function.allocate(
        request.price_functions, request.budget, request.optimizer_config()
    )

    result = AllocationResult(
        bundle=bundle,
        output=function.evaluate(bundle),
        money_spent=bundle_cost(bundle, request.price_functions),
    )
    logger.debug("Allocated budget %s: %s", request.budget, result.bundle)
    return result


def allocate_from_request(data: dict[str, Any]) -> AllocationResult:
    """
    Валидация JSON-запроса по схеме allocation_request и его выполнение.

    Args:
        data: например
            {"coefficient": 1.0,
             "exponents": {"A": 0.5, "B": 0.5},
             "price_functions": {"A": {"kind": "fixed", "price": 2.0},
                                 "B": {"kind": "fixed", "price": 4.0}},
             "budget": 100.0}

    Raises:
        jsonschema.ValidationError: нарушение схемы
        pydantic.ValidationError: нарушение инвариантов параметров
    """
    validate_allocation_request(data)

    request = AllocationRequest(
        parameters=CobbDouglasParameters(
            coefficient=data["coefficient"], exponents=data["exponents"]
        ),
        price_functions=data["price_functions"],
        budget=data["budget"],
        number_of_iterations=data.get("number_of_iterations", DEFAULT_NUMBER_OF_ITERATIONS),
    )
    return allocate(request)

"""
Economic Functions — фасады целевых функций для агентов

UtilityFunction используется домохозяйствами (полезность потребления),
ProductionFunction — фабриками (выпуск из факторов производства).
Оба фасада только оборачивают DifferentiableFunction и не хранят
состояния агента.
"""

from collections.abc import Mapping
from typing import Generic

from compecon.core.math.convex_optimizer import OptimizerConfig
from compecon.core.math.functions import Bundle, DifferentiableFunction, T
from compecon.core.math.numerical_safeguards import validate_non_negative
from compecon.core.math.price_functions import PriceFunction


class UtilityFunction(Generic[T]):
    """Функция полезности домохозяйства."""

    def __init__(self, delegate: DifferentiableFunction[T]):
        self.delegate = delegate

    @property
    def input_types(self) -> tuple[T, ...]:
        return self.delegate.input_types

    def calculate_utility(self, bundle_of_goods: Mapping[T, float]) -> float:
        return self.delegate.evaluate(bundle_of_goods)

    def calculate_marginal_utility(
        self, bundle_of_goods: Mapping[T, float], differential_input_type: T
    ) -> float:
        return self.delegate.partial_derivative(bundle_of_goods, differential_input_type)

    def calculate_utility_maximizing_inputs(
        self,
        price_functions: Mapping[T, PriceFunction],
        budget: float,
        config: OptimizerConfig | None = None,
    ) -> Bundle:
        return self.delegate.allocate(price_functions, budget, config)


class ProductionFunction(Generic[T]):
    """
    Производственная функция фабрики.

    Выпуск масштабируется на productivity (>= 0), например для учёта
    технологического уровня. Оптимальный набор факторов от productivity
    не зависит.
    """

    def __init__(self, delegate: DifferentiableFunction[T], productivity: float = 1.0):
        validate_non_negative(productivity, "productivity")
        self.delegate = delegate
        self.productivity = productivity

    @property
    def input_types(self) -> tuple[T, ...]:
        return self.delegate.input_types

    def calculate_output(self, bundle_of_inputs: Mapping[T, float]) -> float:
        return self.productivity * self.delegate.evaluate(bundle_of_inputs)

    def calculate_marginal_output(
        self, bundle_of_inputs: Mapping[T, float], differential_input_type: T
    ) -> float:
        return self.productivity * self.delegate.partial_derivative(
            bundle_of_inputs, differential_input_type
        )

    def calculate_profit_maximizing_inputs(
        self,
        price_functions: Mapping[T, PriceFunction],
        budget: float,
        config: OptimizerConfig | None = None,
    ) -> Bundle:
        return self.delegate.allocate(price_functions, budget, config)

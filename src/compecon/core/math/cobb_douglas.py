"""
Cobb-Douglas Function — выпуск с аналитическими решениями

ФОРМУЛЫ:
    y = a * Π (x_i ^ e_i),   Σ e_i = 1,  a > 0

    dy/dx_k = e_k * a * Π_{i≠k} (x_i ^ e_i) * x_k ^ (e_k - 1)

АНАЛИТИЧЕСКИЕ РЕШЕНИЯ (Лагранжиан при Σ p_i(x_i) * x_i = b):

    Фиксированные цены p_i:
        x_i = e_i * b / p_i

    Кривые p_i(x) = c0_i + c(-1)_i / x  (полная стоимость c0_i * x + c(-1)_i):
        x_i = (b - Σ_j c(-1)_j) * e_i / c0_i

    Условия первого порядка дают e_1 * x_2 / c0_1 = e_2 * x_1 / c0_2, откуда
    бюджетное ограничение сводится к b = Σ c(-1)_j + x_1 * c0_1 / e_1.

Если хотя бы одна цена не определена, bundle нулевой целиком.
Отдельные NaN (и отрицательные) количества заменяются на 0.0.
"""

import logging
import math
from collections.abc import Mapping

from compecon.core.math.convex_optimizer import OptimizerConfig, optimize_iteratively
from compecon.core.math.functions import Bundle, DifferentiableFunction, T, zero_bundle
from compecon.core.math.numerical_safeguards import (
    EXPONENT_SUM_TOLERANCE,
    is_close,
    is_lesser_or_equal,
    is_valid_float,
    safe_power,
    safe_ratio,
    sanitize_float,
    validate_positive,
)
from compecon.core.math.price_functions import (
    PriceFunction,
    PriceFunctionConfig,
    PriceFunctionKind,
)

logger = logging.getLogger(__name__)


class CobbDouglasFunction(DifferentiableFunction[T]):
    """
    y = a * x_1^e_1 * x_2^e_2 * ... * x_n^e_n

    Args:
        coefficient: a > 0
        exponents: упорядоченное отображение вход → e_i, e_i ∈ (0, 1],
            Σ e_i = 1 (с толерантностью EXPONENT_SUM_TOLERANCE).
            Порядок ключей задаёт tie-break итеративного оптимизатора.

    Raises:
        ValueError: при нарушении любого из условий
    """

    def __init__(self, coefficient: float, exponents: Mapping[T, float]):
        validate_positive(coefficient, "coefficient")

        if not exponents:
            raise ValueError("exponents must declare at least one input type")

        sum_of_exponents = 0.0
        for input_type, exponent in exponents.items():
            if not is_valid_float(exponent) or not 0.0 < exponent <= 1.0:
                raise ValueError(
                    f"exponent of {input_type!r} must be in ]0, 1], got {exponent}"
                )
            sum_of_exponents += exponent

        if not is_close(sum_of_exponents, 1.0, rel_tol=0.0, abs_tol=EXPONENT_SUM_TOLERANCE):
            raise ValueError(f"exponents must sum to 1, got {sum_of_exponents}")

        self._coefficient = coefficient
        self._input_types: tuple[T, ...] = tuple(exponents)
        self._exponents: dict[T, float] = dict(exponents)

    @property
    def coefficient(self) -> float:
        return self._coefficient

    @property
    def exponents(self) -> dict[T, float]:
        return dict(self._exponents)

    @property
    def input_types(self) -> tuple[T, ...]:
        return self._input_types

    @property
    def needs_all_inputs_non_zero(self) -> bool:
        return True

    def evaluate(self, bundle: Mapping[T, float]) -> float:
        output = self._coefficient
        for input_type in self._input_types:
            output *= safe_power(bundle[input_type], self._exponents[input_type])
        return output

    def partial_derivative(self, bundle: Mapping[T, float], with_respect_to: T) -> float:
        constant = self._coefficient
        for input_type in self._input_types:
            if input_type != with_respect_to:
                constant *= safe_power(bundle[input_type], self._exponents[input_type])

        exponent = self._exponents[with_respect_to]
        differential_factor = exponent * safe_power(bundle[with_respect_to], exponent - 1.0)

        # 0 * inf → 0
        if constant == 0.0 and math.isinf(differential_factor):
            return 0.0

        return constant * differential_factor

    # =========================================================================
    # ALLOCATION
    # =========================================================================

    def allocate(
        self,
        price_functions: Mapping[T, PriceFunction],
        budget: float,
        config: OptimizerConfig | None = None,
    ) -> Bundle:
        """
        Bundle, максимизирующий выпуск при бюджете.

        Dispatch:
        1. все кривые FIXED → calculate_output_maximizing_inputs_with_fixed_prices
        2. все кривые имеют аналитическую форму (FIXED/STEP)
           → calculate_output_maximizing_inputs_with_step_prices
        3. иначе → итеративный оптимизатор
        Отсутствующая кривая трактуется как NaN-цена.
        """
        if is_lesser_or_equal(budget, 0.0):
            return zero_bundle(self._input_types)

        present = [price_functions.get(t) for t in self._input_types]

        if all(p is not None and p.kind == PriceFunctionKind.FIXED for p in present):
            logger.debug("Cobb-Douglas dispatch: fixed-price analytic solver")
            prices = {t: p.price for t, p in zip(self._input_types, present)}
            return self.calculate_output_maximizing_inputs_with_fixed_prices(prices, budget)

        configs = {
            t: p.get_config() for t, p in zip(self._input_types, present) if p is not None
        }
        if all(c is not None for c in configs.values()):
            logger.debug("Cobb-Douglas dispatch: step-price analytic solver")
            return self.calculate_output_maximizing_inputs_with_step_prices(configs, budget)

        logger.debug("Cobb-Douglas dispatch: iterative optimizer")
        return optimize_iteratively(self, price_functions, budget, config)

    def calculate_output_maximizing_inputs_with_fixed_prices(
        self,
        prices_of_inputs: Mapping[T, float],
        budget: float,
    ) -> Bundle:
        """
        x_i = e_i * b / p_i

        Отсутствующая или NaN-цена любого входа → нулевой bundle.
        """
        prices_are_nan = any(
            math.isnan(prices_of_inputs.get(t, math.nan)) for t in self._input_types
        )
        if prices_are_nan:
            logger.debug("Fixed-price solver: unpriced input, returning zero bundle")
            return zero_bundle(self._input_types)

        bundle: Bundle = {}
        for input_type in self._input_types:
            optimal_amount = safe_ratio(
                self._exponents[input_type] * budget, prices_of_inputs[input_type]
            )
            bundle[input_type] = _feasible_amount(optimal_amount)
        return bundle

    def calculate_output_maximizing_inputs_with_step_prices(
        self,
        price_function_configs: Mapping[T, PriceFunctionConfig],
        budget: float,
    ) -> Bundle:
        """
        x_i = (b - Σ_j c(-1)_j) * e_i / c0_i

        Σ c(-1)_j берётся по входам функции. Отсутствующая конфигурация или
        NaN c0 любого входа → нулевой bundle.
        """
        for input_type in self._input_types:
            price_function_config = price_function_configs.get(input_type)
            if price_function_config is None or math.isnan(
                price_function_config.coefficient_x_power_0
            ):
                logger.debug(
                    "Step-price solver: unpriced input %r, returning zero bundle", input_type
                )
                return zero_bundle(self._input_types)

        sum_of_coefficient_x_power_minus_1 = sum(
            price_function_configs[t].coefficient_x_power_minus_1 for t in self._input_types
        )
        remaining_budget = budget - sum_of_coefficient_x_power_minus_1

        bundle: Bundle = {}
        for input_type in self._input_types:
            optimal_amount = safe_ratio(
                self._exponents[input_type] * remaining_budget,
                price_function_configs[input_type].coefficient_x_power_0,
            )
            bundle[input_type] = _feasible_amount(optimal_amount)
        return bundle


def _feasible_amount(amount: float) -> float:
    # NaN, inf (нулевая цена) и отрицательные количества не покупаются
    return max(sanitize_float(amount), 0.0)

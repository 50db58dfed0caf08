"""
Convex Optimizer — итеративное распределение бюджета

Жадный алгоритм маргинального распределения ("water-filling"):
бюджет делится на number_of_iterations * |input_types| равных порций,
каждая порция тратится на вход с максимальным отношением
partial_derivative / marginal_price.
Порция, пересекающая границу смены маргинальной цены (ступень TIERED),
обрезается по этой границе, и списывается только стоимость купленного.

Работает для любой выпуклой DifferentiableFunction и любых ценовых кривых.
Точность растёт с number_of_iterations, стоимость O(N * n^2).

ВЫРОЖДЕННЫЕ СЛУЧАИ (никогда не исключение):
1. budget <= 0 → нулевой bundle
2. NaN-цена при x = 0 у функции с needs_all_inputs_non_zero → нулевой bundle
3. Нет кандидата с конечным отношением → возвращается текущий bundle
   (частично потраченный бюджет допустим)
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from compecon.core.math.functions import Bundle, DifferentiableFunction, T, zero_bundle
from compecon.core.math.numerical_safeguards import (
    is_greater,
    is_lesser_or_equal,
    is_valid_float,
    validate_positive,
)
from compecon.core.math.price_functions import PriceFunction

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Число порций бюджета на один тип входа
DEFAULT_NUMBER_OF_ITERATIONS: Final[int] = 100

# Стартовое количество каждого входа для функций, чья производная
# не определена в нуле. Эмпирический параметр.
NON_ZERO_SEED_EPS: Final[float] = 1e-7


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class OptimizerConfig:
    """Конфигурация итеративного оптимизатора.

    number_of_iterations: порций бюджета на один тип входа
    non_zero_seed: стартовое количество входа при needs_all_inputs_non_zero
    """

    number_of_iterations: int = DEFAULT_NUMBER_OF_ITERATIONS
    non_zero_seed: float = NON_ZERO_SEED_EPS

    def __post_init__(self) -> None:
        if self.number_of_iterations <= 0:
            raise ValueError(
                f"number_of_iterations must be positive, got {self.number_of_iterations}"
            )
        validate_positive(self.non_zero_seed, "non_zero_seed")


# =============================================================================
# PRICE LOOKUP
# =============================================================================


def _price(price_functions: Mapping[T, PriceFunction], input_type: T, amount: float) -> float:
    price_function = price_functions.get(input_type)
    if price_function is None:
        return math.nan
    return price_function.get_price(amount)


def _marginal_price(
    price_functions: Mapping[T, PriceFunction], input_type: T, amount: float
) -> float:
    price_function = price_functions.get(input_type)
    if price_function is None:
        return math.nan
    return price_function.get_marginal_price(amount)


# =============================================================================
# OPTIMIZER
# =============================================================================


def find_highest_partial_derivative_per_price(
    function: DifferentiableFunction[T],
    bundle: Mapping[T, float],
    price_functions: Mapping[T, PriceFunction],
) -> T | None:
    """
    Вход с максимальным маргинальным выпуском на единицу денег.

    Кандидаты с NaN/inf/неположительной маргинальной ценой или с
    неконечным отношением пропускаются. При равенстве выигрывает первый
    вход в порядке function.input_types.

    Returns:
        Тип входа или None, если жизнеспособных кандидатов нет
    """
    best_input_type: T | None = None
    best_ratio = -math.inf

    for input_type in function.input_types:
        marginal_price = _marginal_price(price_functions, input_type, bundle[input_type])
        if not is_valid_float(marginal_price) or marginal_price <= 0:
            continue

        ratio = function.partial_derivative(bundle, input_type) / marginal_price
        if not is_valid_float(ratio):
            continue

        if ratio > best_ratio:
            best_ratio = ratio
            best_input_type = input_type

    return best_input_type


def optimize_iteratively(
    function: DifferentiableFunction[T],
    price_functions: Mapping[T, PriceFunction],
    budget: float,
    config: OptimizerConfig | None = None,
) -> Bundle:
    """
    Bundle, приближённо максимизирующий выпуск при бюджетном ограничении.

    Args:
        function: Целевая функция
        price_functions: Ценовая кривая по типу входа (отсутствие = NaN-цена)
        budget: Бюджет (>= 0)
        config: Конфигурация оптимизатора (default: OptimizerConfig())

    Returns:
        Новый bundle с записью для каждого входа функции
    """
    config = config or OptimizerConfig()
    input_types = function.input_types

    # special case: нет бюджета
    if is_lesser_or_equal(budget, 0.0):
        logger.debug("Budget %s is not positive, returning zero bundle", budget)
        return zero_bundle(input_types)

    # special case: обязательный вход без цены → аллокация невозможна
    if function.needs_all_inputs_non_zero:
        for input_type in input_types:
            if math.isnan(_price(price_functions, input_type, 0.0)):
                logger.debug(
                    "Input %r has no price but is mandatory, returning zero bundle",
                    input_type,
                )
                return zero_bundle(input_types)

    # initialize
    money_spent = 0.0
    bundle: Bundle = {}
    if function.needs_all_inputs_non_zero:
        seed = config.non_zero_seed
        for input_type in input_types:
            bundle[input_type] = seed
            money_spent += seed * _price(price_functions, input_type, seed)
    else:
        bundle = zero_bundle(input_types)

    # maximize output
    number_of_increments = config.number_of_iterations * len(input_types)
    increment_budget = budget / number_of_increments

    iterations = 0
    while is_greater(budget, money_spent) and iterations < number_of_increments:
        iterations += 1

        optimal_input_type = find_highest_partial_derivative_per_price(
            function, bundle, price_functions
        )
        if optimal_input_type is None:
            logger.debug(
                "No viable input left after %d increments, spent %s of %s",
                iterations - 1,
                money_spent,
                budget,
            )
            break

        current_amount = bundle[optimal_input_type]
        price_function = price_functions[optimal_input_type]
        marginal_price = price_function.get_marginal_price(current_amount)

        # порция не переходит границу, за которой меняется маргинальная цена
        new_amount = current_amount + increment_budget / marginal_price
        price_change_at = price_function.get_next_price_change(current_amount)
        if new_amount > price_change_at:
            new_amount = price_change_at

        bundle[optimal_input_type] = new_amount
        money_spent += marginal_price * (new_amount - current_amount)

    return bundle

"""
Differentiable Functions — контракт целевой функции оптимизации

Функция отображает bundle (количество каждого типа входа) в выпуск
(полезность или производство) и умеет считать частную производную по
одному входу при фиксированных остальных.

Порядок input_types значим: он определяет tie-break в итеративном
оптимизаторе (первый объявленный вход выигрывает при равенстве).
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING, Generic, TypeVar

from compecon.core.math.numerical_safeguards import validate_non_negative
from compecon.core.math.price_functions import PriceFunction

if TYPE_CHECKING:
    from compecon.core.math.convex_optimizer import OptimizerConfig


T = TypeVar("T", bound=Hashable)

# Полное назначение количеств всем типам входа
Bundle = dict[T, float]


# =============================================================================
# BUNDLE HELPERS
# =============================================================================


def zero_bundle(input_types: tuple[T, ...]) -> Bundle:
    """Новый bundle с нулевым количеством для каждого входа."""
    return {input_type: 0.0 for input_type in input_types}


def bundle_cost(
    bundle: Mapping[T, float],
    price_functions: Mapping[T, PriceFunction],
) -> float:
    """
    Суммарная стоимость bundle по ценовым кривым.

    Вход с нулевым количеством ничего не стоит, даже если не оценён.
    Ненулевое количество без ценовой кривой даёт NaN.
    """
    total = 0.0
    for input_type, amount in bundle.items():
        if amount <= 0:
            continue
        price_function = price_functions.get(input_type)
        if price_function is None:
            return math.nan
        total += price_function.get_total_cost(amount)
    return total


# =============================================================================
# CONTRACT
# =============================================================================


class DifferentiableFunction(ABC, Generic[T]):
    """
    Контракт дифференцируемой функции выпуска.

    Реализации обязаны:
    - возвращать фиксированный упорядоченный набор входов
    - возвращать 0.0 (не NaN) в вырожденном случае 0 * inf производной
    - объявлять, требует ли производная строго положительных входов
    """

    @property
    @abstractmethod
    def input_types(self) -> tuple[T, ...]:
        """Упорядоченный домен функции."""

    @property
    @abstractmethod
    def needs_all_inputs_non_zero(self) -> bool:
        """True, если производная не определена при нулевом входе."""

    @abstractmethod
    def evaluate(self, bundle: Mapping[T, float]) -> float:
        """Выпуск для полностью заданного bundle."""

    @abstractmethod
    def partial_derivative(self, bundle: Mapping[T, float], with_respect_to: T) -> float:
        """Маргинальный выпуск от ещё одной единицы with_respect_to."""

    def allocate(
        self,
        price_functions: Mapping[T, PriceFunction],
        budget: float,
        config: "OptimizerConfig | None" = None,
    ) -> Bundle:
        """
        Bundle, максимизирующий выпуск при бюджетном ограничении.

        По умолчанию используется итеративный оптимизатор; функции с аналитическим
        решением переопределяют метод.
        """
        from compecon.core.math.convex_optimizer import optimize_iteratively

        return optimize_iteratively(self, price_functions, budget, config)


# =============================================================================
# LINEAR FUNCTION
# =============================================================================


class LinearFunction(DifferentiableFunction[T]):
    """
    y = c_1 * x_1 + c_2 * x_2 + ... + c_n * x_n

    Совершенные субституты. Производная постоянна и определена в нуле,
    поэтому оптимизатор стартует с нулевого bundle.
    """

    def __init__(self, coefficients: Mapping[T, float]):
        if not coefficients:
            raise ValueError("coefficients must declare at least one input type")

        for input_type, coefficient in coefficients.items():
            validate_non_negative(coefficient, f"coefficient of {input_type!r}")

        self._input_types: tuple[T, ...] = tuple(coefficients)
        self._coefficients: dict[T, float] = dict(coefficients)

    @property
    def input_types(self) -> tuple[T, ...]:
        return self._input_types

    @property
    def needs_all_inputs_non_zero(self) -> bool:
        return False

    @property
    def coefficients(self) -> dict[T, float]:
        return dict(self._coefficients)

    def evaluate(self, bundle: Mapping[T, float]) -> float:
        return sum(
            self._coefficients[input_type] * bundle[input_type]
            for input_type in self._input_types
        )

    def partial_derivative(self, bundle: Mapping[T, float], with_respect_to: T) -> float:
        return self._coefficients[with_respect_to]

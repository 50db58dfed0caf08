"""
Price Functions — ценовые кривые входов

Ценовая кривая отвечает на три вопроса для количества x:
- средняя цена единицы при покупке x единиц (get_price)
- маргинальная цена следующей единицы (get_marginal_price)
- до какого количества маргинальная цена постоянна (get_next_price_change)

Варианты (закрытый набор, различаются тегом kind):
- FIXED:  price(x) = p
- STEP:   price(x) = c0 + c(-1) / x   (bulk-скидка или scarcity-премия)
- TIERED: ступенчатый прайс-лист (volume, unit_price), после исчерпания
          объёма цена не определена (NaN)

FIXED и STEP имеют аналитическую форму (PriceFunctionConfig), TIERED не имеет.
Выбор пути решения делается по тегу kind и get_config(), без isinstance.

NaN-цена означает "вход не оценён рынком" и является легальным значением.
"""

import math
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class PriceFunctionKind(str, Enum):
    """Тег варианта ценовой кривой"""

    FIXED = "fixed"
    STEP = "step"
    TIERED = "tiered"


# =============================================================================
# CONFIG
# =============================================================================


class PriceFunctionConfig(BaseModel):
    """
    Аналитическая форма price(x) = c0 + c(-1) / x.

    Фиксированная цена p выражается как (p, 0).
    """

    coefficient_x_power_0: float = Field(..., description="c0: предельная цена единицы")
    coefficient_x_power_minus_1: float = Field(
        0.0, description="c(-1): фиксированная часть стоимости, не зависящая от x"
    )

    model_config = {"frozen": True}


# =============================================================================
# PRICE FUNCTIONS
# =============================================================================


def _none_to_nan(v: Any) -> Any:
    return math.nan if v is None else v


class FixedPriceFunction(BaseModel):
    """Постоянная цена, не зависящая от объёма покупки."""

    kind: Literal["fixed"] = "fixed"
    price: float = Field(..., description="Цена единицы (NaN: вход не оценён)")

    model_config = {"frozen": True}

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> Any:
        return _none_to_nan(v)

    def get_price(self, number_of_goods: float) -> float:
        return self.price

    def get_marginal_price(self, number_of_goods: float) -> float:
        return self.price

    def get_total_cost(self, number_of_goods: float) -> float:
        if number_of_goods <= 0:
            return 0.0
        return self.price * number_of_goods

    def get_next_price_change(self, number_of_goods: float) -> float:
        return math.inf

    def get_config(self) -> PriceFunctionConfig:
        return PriceFunctionConfig(
            coefficient_x_power_0=self.price, coefficient_x_power_minus_1=0.0
        )


class StepPriceFunction(BaseModel):
    """
    Сдвинутая рациональная кривая price(x) = c0 + c(-1) / x.

    Полная стоимость c0 * x + c(-1), где c(-1) является фиксированным сбором,
    поэтому маргинальная цена всегда c0, а средняя цена убывает с объёмом.
    """

    kind: Literal["step"] = "step"
    coefficient_x_power_0: float = Field(..., description="c0")
    coefficient_x_power_minus_1: float = Field(0.0, description="c(-1)")

    model_config = {"frozen": True}

    @field_validator("coefficient_x_power_0", mode="before")
    @classmethod
    def validate_coefficient_x_power_0(cls, v: Any) -> Any:
        return _none_to_nan(v)

    def get_price(self, number_of_goods: float) -> float:
        """
        Средняя цена единицы при покупке number_of_goods.

        При x <= 0 цена равна c0 только если c(-1) == 0, иначе ±inf.
        """
        c0 = self.coefficient_x_power_0
        c_minus_1 = self.coefficient_x_power_minus_1

        if number_of_goods <= 0:
            if c_minus_1 == 0.0:
                return c0
            return c0 + math.copysign(math.inf, c_minus_1)

        return c0 + c_minus_1 / number_of_goods

    def get_marginal_price(self, number_of_goods: float) -> float:
        # d(c0 * x + c(-1)) / dx
        return self.coefficient_x_power_0

    def get_total_cost(self, number_of_goods: float) -> float:
        if number_of_goods <= 0:
            return 0.0
        return self.coefficient_x_power_0 * number_of_goods + self.coefficient_x_power_minus_1

    def get_next_price_change(self, number_of_goods: float) -> float:
        return math.inf

    def get_config(self) -> PriceFunctionConfig:
        return PriceFunctionConfig(
            coefficient_x_power_0=self.coefficient_x_power_0,
            coefficient_x_power_minus_1=self.coefficient_x_power_minus_1,
        )


class PriceTier(BaseModel):
    """Ступень прайс-листа: volume единиц по unit_price."""

    volume: float = Field(..., gt=0, description="Объём ступени")
    unit_price: float = Field(..., ge=0, description="Цена единицы в ступени")

    model_config = {"frozen": True}


class TieredPriceFunction(BaseModel):
    """
    Ступенчатый прайс-лист, например собранный из предложений рынка.

    Ступени потребляются по порядку. Маргинальная цена в точке x равна цене
    ступени, содержащей x. За пределами суммарного объёма вход недоступен:
    маргинальная и средняя цены равны NaN.
    """

    kind: Literal["tiered"] = "tiered"
    tiers: tuple[PriceTier, ...] = Field(..., min_length=1, description="Ступени по порядку")

    model_config = {"frozen": True}

    @property
    def total_volume(self) -> float:
        return sum(tier.volume for tier in self.tiers)

    def get_marginal_price(self, number_of_goods: float) -> float:
        upper_bound = 0.0
        for tier in self.tiers:
            upper_bound += tier.volume
            if number_of_goods < upper_bound:
                return tier.unit_price
        return math.nan

    def get_next_price_change(self, number_of_goods: float) -> float:
        """
        Количество, на котором заканчивается текущая ступень.

        Границы накапливаются так же, как в get_marginal_price, поэтому
        в точке границы маргинальная цена уже берётся из следующей ступени.
        За пределами объёма возвращается NaN.
        """
        upper_bound = 0.0
        for tier in self.tiers:
            upper_bound += tier.volume
            if number_of_goods < upper_bound:
                return upper_bound
        return math.nan

    def get_total_cost(self, number_of_goods: float) -> float:
        if number_of_goods <= 0:
            return 0.0

        remaining = number_of_goods
        cost = 0.0
        for tier in self.tiers:
            taken = min(remaining, tier.volume)
            cost += taken * tier.unit_price
            remaining -= taken
            if remaining <= 0:
                return cost
        return math.nan

    def get_price(self, number_of_goods: float) -> float:
        if number_of_goods <= 0:
            return self.tiers[0].unit_price
        return self.get_total_cost(number_of_goods) / number_of_goods

    def get_config(self) -> None:
        # аналитической формы нет
        return None


PriceFunction = Annotated[
    Union[FixedPriceFunction, StepPriceFunction, TieredPriceFunction],
    Field(discriminator="kind"),
]

_PRICE_FUNCTION_ADAPTER: TypeAdapter[PriceFunction] = TypeAdapter(PriceFunction)


def parse_price_function(data: dict[str, Any]) -> PriceFunction:
    """
    Построение ценовой кривой из dict по тегу kind.

    Args:
        data: например {"kind": "step", "coefficient_x_power_0": 1.0,
              "coefficient_x_power_minus_1": 10.0}

    Returns:
        FixedPriceFunction | StepPriceFunction | TieredPriceFunction

    Raises:
        pydantic.ValidationError: неизвестный kind или невалидные поля
    """
    return _PRICE_FUNCTION_ADAPTER.validate_python(data)

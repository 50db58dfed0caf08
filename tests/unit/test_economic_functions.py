"""
Тесты для фасадов UtilityFunction и ProductionFunction
"""

import pytest

from compecon.core.domain.economic_functions import ProductionFunction, UtilityFunction
from compecon.core.math.cobb_douglas import CobbDouglasFunction
from compecon.core.math.convex_optimizer import OptimizerConfig
from compecon.core.math.functions import LinearFunction
from compecon.core.math.price_functions import FixedPriceFunction


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def cobb_douglas():
    return CobbDouglasFunction(1.0, {"food": 0.5, "clothing": 0.5})


@pytest.fixture
def prices():
    return {"food": FixedPriceFunction(price=2.0), "clothing": FixedPriceFunction(price=4.0)}


# =============================================================================
# UTILITY
# =============================================================================


class TestUtilityFunction:
    """Тесты для UtilityFunction"""

    def test_delegates_to_function(self, cobb_douglas) -> None:
        utility = UtilityFunction(cobb_douglas)
        bundle = {"food": 4.0, "clothing": 9.0}

        assert utility.input_types == ("food", "clothing")
        assert utility.calculate_utility(bundle) == pytest.approx(6.0)
        assert utility.calculate_marginal_utility(bundle, "food") == pytest.approx(0.75)

    def test_utility_maximizing_inputs_use_analytic_solution(self, cobb_douglas, prices) -> None:
        utility = UtilityFunction(cobb_douglas)
        bundle = utility.calculate_utility_maximizing_inputs(prices, 100.0)
        assert bundle == {"food": pytest.approx(25.0), "clothing": pytest.approx(12.5)}

    def test_non_cobb_douglas_uses_iterative_optimizer(self, prices) -> None:
        utility = UtilityFunction(LinearFunction({"food": 1.0, "clothing": 1.0}))
        bundle = utility.calculate_utility_maximizing_inputs(
            prices, 100.0, OptimizerConfig(number_of_iterations=10)
        )
        assert bundle == {"food": pytest.approx(50.0), "clothing": 0.0}


# =============================================================================
# PRODUCTION
# =============================================================================


class TestProductionFunction:
    """Тесты для ProductionFunction"""

    def test_productivity_scales_output(self, cobb_douglas) -> None:
        production = ProductionFunction(cobb_douglas, productivity=2.0)
        bundle = {"food": 4.0, "clothing": 9.0}

        assert production.calculate_output(bundle) == pytest.approx(12.0)
        assert production.calculate_marginal_output(bundle, "food") == pytest.approx(1.5)

    def test_productivity_does_not_change_optimal_inputs(self, cobb_douglas, prices) -> None:
        low = ProductionFunction(cobb_douglas, productivity=1.0)
        high = ProductionFunction(cobb_douglas, productivity=5.0)

        assert low.calculate_profit_maximizing_inputs(
            prices, 100.0
        ) == high.calculate_profit_maximizing_inputs(prices, 100.0)

    def test_negative_productivity_rejected(self, cobb_douglas) -> None:
        with pytest.raises(ValueError, match="productivity must be non-negative"):
            ProductionFunction(cobb_douglas, productivity=-1.0)

    def test_zero_budget(self, cobb_douglas, prices) -> None:
        production = ProductionFunction(cobb_douglas)
        assert production.calculate_profit_maximizing_inputs(prices, 0.0) == {
            "food": 0.0,
            "clothing": 0.0,
        }

"""
Core math modules для compecon

Целевые функции, ценовые кривые и оптимизаторы распределения бюджета.
"""

# Numerical Safeguards
from compecon.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    EXPONENT_SUM_TOLERANCE,
    # NaN/Inf
    is_valid_float,
    sanitize_float,
    # Safe arithmetic
    safe_power,
    safe_ratio,
    # Epsilon comparisons
    is_close,
    is_greater,
    is_lesser_or_equal,
    # Validation
    validate_non_negative,
    validate_positive,
)

# Price Functions
from compecon.core.math.price_functions import (
    FixedPriceFunction,
    PriceFunction,
    PriceFunctionConfig,
    PriceFunctionKind,
    PriceTier,
    StepPriceFunction,
    TieredPriceFunction,
    parse_price_function,
)

# Functions
from compecon.core.math.functions import (
    Bundle,
    DifferentiableFunction,
    LinearFunction,
    bundle_cost,
    zero_bundle,
)

# Convex Optimizer
from compecon.core.math.convex_optimizer import (
    DEFAULT_NUMBER_OF_ITERATIONS,
    NON_ZERO_SEED_EPS,
    OptimizerConfig,
    find_highest_partial_derivative_per_price,
    optimize_iteratively,
)

# Cobb-Douglas
from compecon.core.math.cobb_douglas import CobbDouglasFunction

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "EXPONENT_SUM_TOLERANCE",
    # Numerical Safeguards — NaN/Inf
    "is_valid_float",
    "sanitize_float",
    # Numerical Safeguards — Safe arithmetic
    "safe_power",
    "safe_ratio",
    # Numerical Safeguards — Epsilon comparisons
    "is_close",
    "is_greater",
    "is_lesser_or_equal",
    # Numerical Safeguards — Validation
    "validate_non_negative",
    "validate_positive",
    # Price Functions
    "FixedPriceFunction",
    "PriceFunction",
    "PriceFunctionConfig",
    "PriceFunctionKind",
    "PriceTier",
    "StepPriceFunction",
    "TieredPriceFunction",
    "parse_price_function",
    # Functions
    "Bundle",
    "DifferentiableFunction",
    "LinearFunction",
    "bundle_cost",
    "zero_bundle",
    # Convex Optimizer
    "DEFAULT_NUMBER_OF_ITERATIONS",
    "NON_ZERO_SEED_EPS",
    "OptimizerConfig",
    "find_highest_partial_derivative_per_price",
    "optimize_iteratively",
    # Cobb-Douglas
    "CobbDouglasFunction",
]

"""
Contract Validation Module

Модуль для валидации JSON контрактов движка распределения бюджета.
"""

from .validators import (
    AllocationRequestValidator,
    ContractValidator,
    PriceFunctionValidator,
    SchemaLoader,
    validate_allocation_request,
    validate_price_function,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PriceFunctionValidator",
    "AllocationRequestValidator",
    # Functions
    "validate_price_function",
    "validate_allocation_request",
]

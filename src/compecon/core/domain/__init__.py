"""
Domain models and agent-facing facades.

Contains economic function facades (UtilityFunction, ProductionFunction)
and the JSON allocation request models.
"""

from compecon.core.domain.allocation_request import (
    AllocationRequest,
    AllocationResult,
    CobbDouglasParameters,
    allocate,
    allocate_from_request,
)
from compecon.core.domain.economic_functions import ProductionFunction, UtilityFunction

__all__ = [
    # Economic functions
    "UtilityFunction",
    "ProductionFunction",
    # Allocation requests
    "CobbDouglasParameters",
    "AllocationRequest",
    "AllocationResult",
    "allocate",
    "allocate_from_request",
]

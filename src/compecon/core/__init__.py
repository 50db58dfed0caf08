"""
Core numerical engine, domain models and contracts.

This module contains the budget-allocation engine that agents call into.
It is independent of agent scheduling, markets and persistence.
"""

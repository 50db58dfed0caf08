"""
compecon — constrained-optimization engine for agent-based economic simulation.

Agents (households, factories, traders, banks) allocate a finite budget
across typed inputs to maximize utility or production under given price
curves.
"""

__version__ = "1.0.0"

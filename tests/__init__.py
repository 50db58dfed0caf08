"""
Test suite for compecon

Contains:
- tests/unit/          : Unit tests for individual modules
"""

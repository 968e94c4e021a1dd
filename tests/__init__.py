"""
Test suite for the mint authorization engine

Contains:
- tests/unit/          : Unit tests for individual modules and contract scenarios
"""

"""
Test suite for finite-float

Contains:
- tests/unit/          : Unit and property tests for individual modules
"""

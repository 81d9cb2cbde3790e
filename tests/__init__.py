"""
Test suite for fixedpoint

Contains:
- tests/unit/          : Unit and property tests for Fixed and the pattern codec
"""

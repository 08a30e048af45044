"""
Test suite for the BigInt arithmetic engine

Contains:
- tests/unit/          : Unit and property-based tests for individual modules
"""

"""
Test suite for ap-float

Contains:
- tests/unit/          : Unit tests for Magnitude, SignedFloat and contracts
"""

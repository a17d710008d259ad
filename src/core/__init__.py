"""
Core numeric engines, state models, and contracts.

Arbitrary-precision binary floating point built on a block-based
unsigned integer primitive, independent of any external system.
"""

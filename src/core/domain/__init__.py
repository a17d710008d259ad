"""
Domain models and value objects.

Contains the arithmetic configuration and the state enums / snapshot
model of SignedFloat.
"""

from src.core.domain.arithmetic_config import (
    CONSTRUCTOR_MAX_ITERATIONS,
    DECIMAL_EXPONENT_LIMIT,
    DEFAULT_CONFIG,
    DIVISION_ACCURACY,
    SQRT_ACCURACY,
    SQRT_ACCURACY_INCREASE_RATIO,
    ArithmeticConfig,
    load_arithmetic_config,
)
from src.core.domain.float_state import (
    BLOCK_MAX_VALUE,
    FloatSnapshot,
    FloatStatus,
    Ordering,
    Sign,
)

__all__ = [
    # Arithmetic config
    "CONSTRUCTOR_MAX_ITERATIONS",
    "DIVISION_ACCURACY",
    "SQRT_ACCURACY_INCREASE_RATIO",
    "SQRT_ACCURACY",
    "DECIMAL_EXPONENT_LIMIT",
    "DEFAULT_CONFIG",
    "ArithmeticConfig",
    "load_arithmetic_config",
    # Float state
    "BLOCK_MAX_VALUE",
    "Sign",
    "FloatStatus",
    "Ordering",
    "FloatSnapshot",
]

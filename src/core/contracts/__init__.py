"""
Contract Validation Module

Модуль для валидации JSON контрактов: конфигурация арифметики и
снапшот SignedFloat.
"""

from .validators import (
    ArithmeticConfigValidator,
    ContractValidator,
    FloatSnapshotValidator,
    SchemaLoader,
    validate_arithmetic_config,
    validate_float_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ArithmeticConfigValidator",
    "FloatSnapshotValidator",
    # Functions
    "validate_arithmetic_config",
    "validate_float_snapshot",
]

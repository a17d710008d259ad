"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей и типов
- Детекция нарушений constraints (min/max/enum)
- Интеграция с Pydantic моделями и SignedFloat.snapshot()
"""

from pathlib import Path

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    ArithmeticConfigValidator,
    FloatSnapshotValidator,
    SchemaLoader,
    validate_arithmetic_config,
    validate_float_snapshot,
)
from src.core.domain import ArithmeticConfig, Sign
from src.core.math import SignedFloat


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_arithmetic_config():
    """Валидная конфигурация арифметики."""
    return {
        "constructor_max_iterations": 20,
        "division_accuracy": 50,
        "sqrt_accuracy_increase_ratio": 4,
        "sqrt_accuracy": 2.2250738585072014e-308,
        "decimal_exponent_limit": 100000,
    }


@pytest.fixture
def valid_float_snapshot():
    """Валидный снапшот SignedFloat (-1.5)."""
    return {
        "status": "NORMAL",
        "sign": "NEGATIVE",
        "shift": 1,
        "blocks": [3],
    }


# =============================================================================
# TESTS - SCHEMA LOADING
# =============================================================================


def test_schema_loader_loads_all_schemas():
    """Проверка загрузки всех схем."""
    loader = SchemaLoader()

    config_schema = loader.load_schema("arithmetic_config")
    snapshot_schema = loader.load_schema("float_snapshot")

    assert config_schema["title"] == "ArithmeticConfig"
    assert snapshot_schema["required"] == ["status", "sign", "shift", "blocks"]


def test_schema_loader_caches_schemas():
    """Проверка кэширования схем."""
    loader = SchemaLoader()

    schema1 = loader.load_schema("float_snapshot")
    schema2 = loader.load_schema("float_snapshot")

    # Должен вернуть тот же объект (кэш)
    assert schema1 is schema2


def test_schema_loader_raises_on_missing_schema():
    """Проверка ошибки при отсутствующей схеме."""
    loader = SchemaLoader()

    with pytest.raises(FileNotFoundError):
        loader.load_schema("non_existent_schema")


def test_schema_loader_raises_on_missing_directory(tmp_path: Path):
    """Отсутствующая директория схем — ошибка конструктора."""
    with pytest.raises(RuntimeError):
        SchemaLoader(tmp_path / "missing")


def test_schema_loader_rejects_invalid_schema(tmp_path: Path):
    """Невалидная JSON Schema отклоняется meta-валидацией."""
    (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
    loader = SchemaLoader(tmp_path)

    with pytest.raises(ValueError, match="Invalid JSON Schema"):
        loader.load_schema("broken")


# =============================================================================
# TESTS - ARITHMETIC CONFIG VALIDATION
# =============================================================================


def test_arithmetic_config_validator_accepts_valid_data(valid_arithmetic_config):
    """Валидация правильной конфигурации."""
    validator = ArithmeticConfigValidator()
    validator.validate(valid_arithmetic_config)  # Не должно выбросить исключение
    assert validator.is_valid(valid_arithmetic_config)


def test_arithmetic_config_accepts_partial_data():
    """Все поля необязательные (отсутствующие → default)."""
    validate_arithmetic_config({"division_accuracy": 80})
    validate_arithmetic_config({})


def test_arithmetic_config_rejects_unknown_field(valid_arithmetic_config):
    """Неизвестные поля запрещены."""
    data = valid_arithmetic_config.copy()
    data["rounding_mode"] = "nearest"

    with pytest.raises(ValidationError):
        validate_arithmetic_config(data)


def test_arithmetic_config_rejects_wrong_type(valid_arithmetic_config):
    """Дробное значение для целочисленного поля."""
    data = valid_arithmetic_config.copy()
    data["division_accuracy"] = 12.5

    with pytest.raises(ValidationError) as exc_info:
        validate_arithmetic_config(data)
    assert "is not of type 'integer'" in str(exc_info.value)


@pytest.mark.parametrize(
    "field",
    [
        "constructor_max_iterations",
        "division_accuracy",
        "sqrt_accuracy_increase_ratio",
        "sqrt_accuracy",
        "decimal_exponent_limit",
    ],
)
def test_arithmetic_config_rejects_zero(valid_arithmetic_config, field):
    """Все лимиты строго положительные."""
    data = valid_arithmetic_config.copy()
    data[field] = 0

    assert not ArithmeticConfigValidator().is_valid(data)


def test_arithmetic_config_rejects_negative_limit(valid_arithmetic_config):
    """Отрицательный лимит нарушает minimum."""
    data = valid_arithmetic_config.copy()
    data["division_accuracy"] = -1

    with pytest.raises(ValidationError):
        validate_arithmetic_config(data)


# =============================================================================
# TESTS - FLOAT SNAPSHOT VALIDATION
# =============================================================================


def test_float_snapshot_validator_accepts_valid_data(valid_float_snapshot):
    """Валидация правильного снапшота."""
    validator = FloatSnapshotValidator()
    validator.validate(valid_float_snapshot)
    assert validator.is_valid(valid_float_snapshot)


def test_float_snapshot_rejects_missing_required_field(valid_float_snapshot):
    """Валидация отклоняет данные без обязательных полей."""
    data = valid_float_snapshot.copy()
    del data["blocks"]

    with pytest.raises(ValidationError) as exc_info:
        validate_float_snapshot(data)
    assert "'blocks' is a required property" in str(exc_info.value)


def test_float_snapshot_rejects_invalid_status(valid_float_snapshot):
    """Статус вне enum."""
    data = valid_float_snapshot.copy()
    data["status"] = "NAN"

    with pytest.raises(ValidationError):
        validate_float_snapshot(data)


def test_float_snapshot_rejects_block_overflow(valid_float_snapshot):
    """Блок шире 32 бит."""
    data = valid_float_snapshot.copy()
    data["blocks"] = [4294967296]

    with pytest.raises(ValidationError):
        validate_float_snapshot(data)


def test_float_snapshot_rejects_empty_blocks(valid_float_snapshot):
    """Мантисса содержит хотя бы один блок."""
    data = valid_float_snapshot.copy()
    data["blocks"] = []

    with pytest.raises(ValidationError):
        validate_float_snapshot(data)


# =============================================================================
# TESTS - PYDANTIC MODEL INTEGRATION
# =============================================================================


@pytest.mark.parametrize(
    "value",
    [
        SignedFloat.from_string("-12345678901234567890123.0625"),
        SignedFloat.from_float64(5e-324),
        SignedFloat.zero(Sign.NEGATIVE),
        SignedFloat.infinity(Sign.NEGATIVE),
        SignedFloat.error(),
    ],
)
def test_signed_float_snapshot_generates_valid_json(value):
    """Снапшот SignedFloat соответствует JSON Schema."""
    validate_float_snapshot(value.snapshot().model_dump(mode="json"))


def test_arithmetic_config_model_generates_valid_json():
    """Pydantic ArithmeticConfig генерирует валидный JSON."""
    config = ArithmeticConfig(division_accuracy=128)
    validate_arithmetic_config(config.model_dump(mode="json"))

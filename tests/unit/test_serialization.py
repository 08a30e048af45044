"""
Tests for BigInt serialization adapter and JSON Schema contract

Покрывает:
- Pydantic модель BigIntPayload (создание, валидация, immutability)
- JSON сериализация/десериализация
- Валидность самой JSON Schema
- Соответствие payload модели JSON Schema
- Детекция нарушений required полей, типов и constraints
"""

import json

import pytest
from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError

from src.bigint import BigInt
from src.bigint.contracts import (
    BigIntContractValidator,
    SchemaLoader,
    validate_bigint_payload,
)
from src.bigint.serialization import BigIntPayload, PayloadSign, dump_bigint, load_bigint


@pytest.fixture
def valid_payload():
    """Валидный payload для -(2**32 + 5)."""
    return {
        "schema_version": "1",
        "sign": "negative",
        "magnitude": [5, 1],
        "decimal": "-4294967301",
    }


# =============================================================================
# PYDANTIC MODEL
# =============================================================================


class TestBigIntPayload:
    def test_from_bigint(self) -> None:
        payload = BigIntPayload.from_bigint(BigInt.from_int(-(2**32 + 5)))
        assert payload.sign == PayloadSign.NEGATIVE
        assert payload.magnitude == [5, 1]
        assert payload.decimal == "-4294967301"

    def test_round_trip(self) -> None:
        for value in (0, 1, -1, 2**100, -(3**50)):
            original = BigInt.from_int(value)
            assert BigIntPayload.from_bigint(original).to_bigint() == original

    def test_json_round_trip(self) -> None:
        original = BigInt.parse("-123456789012345678901234567890")
        assert load_bigint(dump_bigint(original)) == original

    def test_dump_format(self) -> None:
        data = json.loads(dump_bigint(BigInt.from_int(-5)))
        assert data == {"schema_version": "1", "sign": "negative", "magnitude": [5], "decimal": "-5"}

    def test_frozen(self, valid_payload) -> None:
        payload = BigIntPayload(**valid_payload)
        with pytest.raises(ValidationError):
            payload.decimal = "1"

    def test_limb_out_of_range(self, valid_payload) -> None:
        valid_payload["magnitude"] = [2**32, 1]
        with pytest.raises(ValidationError, match="out of range"):
            BigIntPayload(**valid_payload)

    def test_superfluous_zero_limb(self, valid_payload) -> None:
        valid_payload["magnitude"] = [5, 1, 0]
        with pytest.raises(ValidationError, match="superfluous"):
            BigIntPayload(**valid_payload)

    def test_sign_inconsistent_with_magnitude(self) -> None:
        with pytest.raises(ValidationError, match="inconsistent"):
            BigIntPayload(sign="zero", magnitude=[1], decimal="1")

    def test_decimal_must_match_limbs(self, valid_payload) -> None:
        valid_payload["decimal"] = "-4294967300"
        with pytest.raises(ValidationError, match="does not match"):
            BigIntPayload(**valid_payload)

    def test_non_canonical_decimal_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BigIntPayload(sign="zero", magnitude=[], decimal="-0")

    def test_load_invalid_json(self) -> None:
        with pytest.raises(ValidationError):
            load_bigint('{"sign": "positive"}')


# =============================================================================
# JSON SCHEMA
# =============================================================================


class TestSchema:
    def test_schema_loads_and_is_valid(self) -> None:
        schema = SchemaLoader().load_schema("bigint")
        assert schema["title"] == "BigInt"

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_valid_payload(self, valid_payload) -> None:
        validate_bigint_payload(valid_payload)
        assert BigIntContractValidator().is_valid(valid_payload)

    def test_model_dump_conforms_to_schema(self) -> None:
        validator = BigIntContractValidator()
        for value in (0, 7, -(2**64), 10**30):
            payload = BigIntPayload.from_bigint(BigInt.from_int(value))
            validator.validate(payload.model_dump(mode="json"))

    @pytest.mark.parametrize("field", ["schema_version", "sign", "magnitude", "decimal"])
    def test_required_fields(self, valid_payload, field: str) -> None:
        del valid_payload[field]
        with pytest.raises(SchemaValidationError):
            validate_bigint_payload(valid_payload)

    def test_limb_maximum(self, valid_payload) -> None:
        valid_payload["magnitude"] = [2**32]
        with pytest.raises(SchemaValidationError):
            validate_bigint_payload(valid_payload)

    def test_zero_with_limbs(self) -> None:
        data = {"schema_version": "1", "sign": "zero", "magnitude": [1], "decimal": "0"}
        with pytest.raises(SchemaValidationError):
            validate_bigint_payload(data)

    def test_sign_enum(self, valid_payload) -> None:
        valid_payload["sign"] = "minus"
        with pytest.raises(SchemaValidationError):
            validate_bigint_payload(valid_payload)

    def test_negative_sign_requires_minus(self, valid_payload) -> None:
        valid_payload["decimal"] = "4294967301"
        errors = list(BigIntContractValidator().iter_errors(valid_payload))
        assert errors

    def test_additional_properties(self, valid_payload) -> None:
        valid_payload["extra"] = True
        assert not BigIntContractValidator().is_valid(valid_payload)

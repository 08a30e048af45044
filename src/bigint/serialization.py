"""
Serialization — Адаптер структурированной сериализации BigInt

Внешний по отношению к арифметическому ядру адаптер: выносит sign,
magnitude и десятичную запись в immutable Pydantic модель.
Полная совместимость с JSON Schema (contracts/schema/bigint.json).

Ядро BigInt от этого модуля не зависит.
"""

import logging
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from src.bigint.bigint import BigInt
from src.bigint.conversions import format_decimal
from src.bigint.limbs import LIMB_MASK
from src.bigint.representation import Sign

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class PayloadSign(str, Enum):
    """Знак во внешнем представлении."""

    NEGATIVE = "negative"
    ZERO = "zero"
    POSITIVE = "positive"


_TO_SIGN = {
    PayloadSign.NEGATIVE: Sign.NEGATIVE,
    PayloadSign.ZERO: Sign.ZERO,
    PayloadSign.POSITIVE: Sign.POSITIVE,
}
_FROM_SIGN = {sign: payload for payload, sign in _TO_SIGN.items()}


# =============================================================================
# PAYLOAD MODEL
# =============================================================================


class BigIntPayload(BaseModel):
    """
    Внешнее представление BigInt.

    Immutable модель (frozen=True). Содержит обе формы значения:
    - sign + magnitude (limbs, младший первым) — точная форма
    - decimal — человекочитаемая форма, обязана совпадать с limbs
    """

    schema_version: str = Field("1", pattern="^1$", description="Версия схемы")
    sign: PayloadSign = Field(..., description="Знак (negative/zero/positive)")
    magnitude: list[int] = Field(
        default_factory=list, description="32-битные limbs модуля, младший первым"
    )
    decimal: str = Field(
        ..., pattern=r"^(0|-?[1-9][0-9]*)$", description="Каноническая десятичная запись"
    )

    model_config = {"frozen": True}

    @field_validator("magnitude")
    @classmethod
    def validate_limbs(cls, v: list[int]) -> list[int]:
        """Каждый limb в [0, 2**32), без старших нулевых limbs."""
        for limb in v:
            if not 0 <= limb <= LIMB_MASK:
                raise ValueError(f"limb {limb} out of range [0, 2**32)")
        if v and v[-1] == 0:
            raise ValueError("magnitude has a superfluous most-significant zero limb")
        return v

    @model_validator(mode="after")
    def validate_consistency(self) -> "BigIntPayload":
        """Знак согласован с magnitude, десятичная запись — с limbs."""
        sign = _TO_SIGN[self.sign]
        if (sign == Sign.ZERO) != (not self.magnitude):
            raise ValueError(
                f"sign {self.sign.value} inconsistent with {len(self.magnitude)} limbs"
            )

        expected = format_decimal(sign, self.magnitude)
        if self.decimal != expected:
            logger.debug("payload decimal mismatch: %s != %s", self.decimal, expected)
            raise ValueError(f"decimal {self.decimal!r} does not match limbs ({expected})")
        return self

    @classmethod
    def from_bigint(cls, value: BigInt) -> "BigIntPayload":
        return cls(
            sign=_FROM_SIGN[value.sign],
            magnitude=list(value.magnitude),
            decimal=str(value),
        )

    def to_bigint(self) -> BigInt:
        return BigInt(_TO_SIGN[self.sign], tuple(self.magnitude))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def dump_bigint(value: BigInt) -> str:
    """
    JSON сериализация BigInt.

    Examples:
        >>> dump_bigint(BigInt.from_int(-5))
        '{"schema_version":"1","sign":"negative","magnitude":[5],"decimal":"-5"}'
    """
    return BigIntPayload.from_bigint(value).model_dump_json()


def load_bigint(data: str) -> BigInt:
    """
    JSON десериализация BigInt.

    Raises:
        pydantic.ValidationError: Если payload не соответствует модели
    """
    return BigIntPayload.model_validate_json(data).to_bigint()

"""
Representation — Каноническая форма BigInt

Знак хранится отдельно от magnitude (sign-magnitude представление).

КАНОНИЧЕСКАЯ ФОРМА:
1. sign == ZERO тогда и только тогда, когда magnitude пустой
2. Непустой magnitude не содержит старших нулевых limbs
3. Ноль представлен единственным образом: (ZERO, ()); отрицательного нуля нет
"""

from enum import Enum
from typing import Sequence

from src.bigint.limbs import LIMB_MASK, trim


class Sign(int, Enum):
    """Знак BigInt. Порядок значений совпадает с порядком чисел."""

    NEGATIVE = -1
    ZERO = 0
    POSITIVE = 1

    def negate(self) -> "Sign":
        return Sign(-self.value)

    def times(self, other: "Sign") -> "Sign":
        """Знак произведения (и частного) двух значений."""
        return Sign(self.value * other.value)


def normalize(sign: Sign, magnitude: Sequence[int]) -> tuple[Sign, tuple[int, ...]]:
    """
    Приведение пары (sign, magnitude) к канонической форме.

    Удаляет старшие нулевые limbs; пустой magnitude принудительно
    получает sign = ZERO.

    Args:
        sign: Желаемый знак (игнорируется для нулевого magnitude)
        magnitude: Limbs, младший первым (могут содержать старшие нули)

    Returns:
        Каноническая пара (sign, magnitude)

    Raises:
        ValueError: Если sign == ZERO при ненулевом magnitude

    Examples:
        >>> normalize(Sign.NEGATIVE, [0, 0])
        (<Sign.ZERO: 0>, ())
        >>> normalize(Sign.POSITIVE, [7, 0])
        (<Sign.POSITIVE: 1>, (7,))
    """
    limbs = tuple(trim(magnitude))

    if not limbs:
        return Sign.ZERO, ()

    if sign == Sign.ZERO:
        raise ValueError("non-zero magnitude cannot have sign ZERO")

    return Sign(sign), limbs


def check_canonical(sign: Sign, magnitude: Sequence[int]) -> None:
    """
    Проверка, что пара уже находится в канонической форме.

    Raises:
        ValueError: При нарушении любого инварианта канонической формы
    """
    if not isinstance(sign, Sign):
        raise ValueError(f"sign must be a Sign, got {sign!r}")

    for limb in magnitude:
        if not isinstance(limb, int) or isinstance(limb, bool) or not 0 <= limb <= LIMB_MASK:
            raise ValueError(f"limb out of range [0, 2**32): {limb!r}")

    if (sign == Sign.ZERO) != (len(magnitude) == 0):
        raise ValueError(
            f"sign {sign.name} inconsistent with magnitude of {len(magnitude)} limbs"
        )

    if magnitude and magnitude[-1] == 0:
        raise ValueError("magnitude has a superfluous most-significant zero limb")

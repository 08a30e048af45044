"""
Bitwise — Побитовые операции и сдвиги в семантике two's complement

Хранение sign-magnitude, но побитовые операции определены над
концептуальным бесконечным two's complement представлением: отрицательное
значение имеет бесконечный ряд единичных бит выше своего magnitude.

Вся two's complement логика изолирована в TwosComplementView: остальной
движок работает только с sign-magnitude.

Для -x (x = magnitude > 0) limb i в two's complement равен ~x + 1:
- i < k (k — индекс младшего ненулевого limb x): 0 (перенос от +1 ещё не погашен)
- i == k: (-x[k]) mod 2**32 (здесь перенос поглощается)
- i > k: ~x[i] (только инверсия)
- i >= len(x): 0xFFFFFFFF (расширение знака)
"""

from typing import Callable, Sequence

from src.bigint.limbs import (
    LIMB_BITS,
    LIMB_MASK,
    Limbs,
    add_magnitudes,
    shift_left,
    shift_right,
    sub_magnitudes,
    trim,
)
from src.bigint.representation import Sign

_ONE: Limbs = [1]


# =============================================================================
# TWO'S COMPLEMENT VIEW
# =============================================================================


class TwosComplementView:
    """
    Limb-доступ к бесконечному two's complement представлению значения.

    Limbs отрицательного значения вычисляются по запросу, без
    материализации инвертированного буфера.
    """

    def __init__(self, sign: Sign, magnitude: Sequence[int]):
        self._magnitude = magnitude
        self.negative = sign == Sign.NEGATIVE
        # Значение всех limbs выше magnitude
        self.fill = LIMB_MASK if self.negative else 0

        self._lowest_nonzero = 0
        if self.negative:
            while magnitude[self._lowest_nonzero] == 0:
                self._lowest_nonzero += 1

    def __len__(self) -> int:
        return len(self._magnitude)

    def limb(self, index: int) -> int:
        """Limb с номером index в two's complement представлении."""
        if index >= len(self._magnitude):
            return self.fill

        value = self._magnitude[index]
        if not self.negative:
            return value

        if index < self._lowest_nonzero:
            return 0
        if index == self._lowest_nonzero:
            return (-value) & LIMB_MASK
        return ~value & LIMB_MASK


def from_twos_complement(limbs: Sequence[int], fill: int) -> tuple[Sign, Limbs]:
    """
    Сборка sign-magnitude из конечного two's complement буфера.

    Args:
        limbs: Limbs результата; старший limb должен совпадать с fill
        fill: Limb расширения знака (0 или LIMB_MASK)

    Returns:
        (sign, magnitude) в канонической форме
    """
    if fill == 0:
        magnitude = trim(limbs)
        return (Sign.POSITIVE if magnitude else Sign.ZERO), magnitude

    # Отрицательный результат: magnitude = ~limbs + 1
    magnitude: Limbs = []
    carry = 1
    for limb in limbs:
        total = (~limb & LIMB_MASK) + carry
        magnitude.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS

    return Sign.NEGATIVE, trim(magnitude)


def _combine(
    a_sign: Sign,
    a_mag: Sequence[int],
    b_sign: Sign,
    b_mag: Sequence[int],
    op: Callable[[int, int], int],
) -> tuple[Sign, Limbs]:
    a = TwosComplementView(a_sign, a_mag)
    b = TwosComplementView(b_sign, b_mag)

    # Лишний limb сверху гарантирует, что старший limb буфера равен fill
    width = max(len(a), len(b)) + 1
    limbs = [op(a.limb(i), b.limb(i)) & LIMB_MASK for i in range(width)]
    fill = op(a.fill, b.fill) & LIMB_MASK

    return from_twos_complement(limbs, fill)


# =============================================================================
# ПОБИТОВЫЕ ОПЕРАЦИИ
# =============================================================================


def bit_and(a_sign: Sign, a_mag: Sequence[int], b_sign: Sign, b_mag: Sequence[int]) -> tuple[Sign, Limbs]:
    return _combine(a_sign, a_mag, b_sign, b_mag, lambda x, y: x & y)


def bit_or(a_sign: Sign, a_mag: Sequence[int], b_sign: Sign, b_mag: Sequence[int]) -> tuple[Sign, Limbs]:
    return _combine(a_sign, a_mag, b_sign, b_mag, lambda x, y: x | y)


def bit_xor(a_sign: Sign, a_mag: Sequence[int], b_sign: Sign, b_mag: Sequence[int]) -> tuple[Sign, Limbs]:
    return _combine(a_sign, a_mag, b_sign, b_mag, lambda x, y: x ^ y)


def bit_not(sign: Sign, magnitude: Sequence[int]) -> tuple[Sign, Limbs]:
    """
    Побитовая инверсия: ~x == -x - 1.

    Examples:
        >>> bit_not(Sign.ZERO, [])
        (<Sign.NEGATIVE: -1>, [1])
    """
    if sign == Sign.NEGATIVE:
        result = sub_magnitudes(magnitude, _ONE)
        return (Sign.POSITIVE if result else Sign.ZERO), result
    return Sign.NEGATIVE, add_magnitudes(magnitude, _ONE)


# =============================================================================
# СДВИГИ
# =============================================================================


def shl(sign: Sign, magnitude: Sequence[int], bits: int) -> tuple[Sign, Limbs]:
    """
    Сдвиг влево: умножение на 2**bits без переполнения (ширина растёт).

    Raises:
        ValueError: Если bits < 0
    """
    return sign, shift_left(magnitude, bits)


def shr(sign: Sign, magnitude: Sequence[int], bits: int) -> tuple[Sign, Limbs]:
    """
    Арифметический сдвиг вправо: floor(x / 2**bits), как при расширении знака.

    Для отрицательного x: floor(-m / 2**n) = -(((m - 1) >> n) + 1).

    Raises:
        ValueError: Если bits < 0

    Examples:
        >>> shr(Sign.NEGATIVE, [5], 1)
        (<Sign.NEGATIVE: -1>, [3])
    """
    if sign != Sign.NEGATIVE:
        result = shift_right(magnitude, bits)
        return (Sign.POSITIVE if result else Sign.ZERO), result

    if bits < 0:
        raise ValueError(f"negative shift count: {bits}")

    reduced = shift_right(sub_magnitudes(magnitude, _ONE), bits)
    return Sign.NEGATIVE, add_magnitudes(reduced, _ONE)

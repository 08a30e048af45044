"""
Number Theory — НОД и возведение в степень над magnitude

Все алгоритмы построены строго поверх базовой арифметики limbs
(умножение и длинное деление):
- gcd: алгоритм Евклида через повторное деление с остатком
- pow_mod: бинарное square-and-multiply, биты степени от младшего к старшему,
  редукция по модулю после каждого умножения
- power: то же без модуля (результат растёт)
"""

import logging
from typing import Sequence

from src.bigint.limbs import (
    LIMB_BITS,
    Limbs,
    bit_length,
    divmod_magnitudes,
    mul_magnitudes,
    sub_magnitudes,
    trim,
)
from src.bigint.representation import Sign

logger = logging.getLogger(__name__)


def _exponent_bits(exponent: Sequence[int]):
    """Биты степени от младшего к старшему."""
    for index in range(bit_length(exponent)):
        limb = exponent[index // LIMB_BITS]
        yield (limb >> (index % LIMB_BITS)) & 1


def gcd_magnitudes(a: Sequence[int], b: Sequence[int]) -> Limbs:
    """
    НОД двух magnitude алгоритмом Евклида.

    gcd(0, 0) == 0; gcd(a, 0) == a.
    """
    x = trim(a)
    y = trim(b)
    while y:
        _, remainder = divmod_magnitudes(x, y)
        x, y = y, remainder
    return x


def pow_mod_magnitudes(
    base_sign: Sign,
    base: Sequence[int],
    exponent: Sequence[int],
    modulus: Sequence[int],
) -> Limbs:
    """
    base**exponent mod modulus для неотрицательной степени и положительного модуля.

    Основание сначала приводится в [0, modulus): отрицательный остаток
    корректируется прибавлением модуля, поэтому результат всегда в
    [0, modulus) независимо от знака основания.

    Args:
        base_sign: Знак основания
        base: Magnitude основания
        exponent: Magnitude степени (знак проверяется вызывающим кодом)
        modulus: Magnitude модуля (ненулевой)

    Returns:
        Magnitude результата в [0, modulus)
    """
    _, reduced = divmod_magnitudes(base, modulus)
    if base_sign == Sign.NEGATIVE and reduced:
        reduced = sub_magnitudes(modulus, reduced)

    # 1 mod modulus: для modulus == 1 это ноль
    _, result = divmod_magnitudes([1], modulus)

    logger.debug(
        "pow_mod: exponent=%d bits, modulus=%d limbs",
        bit_length(exponent), len(modulus),
    )

    square = reduced
    bits = bit_length(exponent)
    for index, bit in enumerate(_exponent_bits(exponent)):
        if bit:
            _, result = divmod_magnitudes(mul_magnitudes(result, square), modulus)
        if index + 1 < bits:
            _, square = divmod_magnitudes(mul_magnitudes(square, square), modulus)

    return result


def power_magnitudes(base: Sequence[int], exponent: Sequence[int]) -> Limbs:
    """base**exponent без модуля (square-and-multiply)."""
    result: Limbs = [1]
    square = list(base)
    bits = bit_length(exponent)

    for index, bit in enumerate(_exponent_bits(exponent)):
        if bit:
            result = mul_magnitudes(result, square)
        if index + 1 < bits:
            square = mul_magnitudes(square, square)

    return result

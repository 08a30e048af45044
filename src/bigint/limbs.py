"""
Limbs — Примитивы над magnitude (вектор 32-битных limbs)

Magnitude хранится как последовательность беззнаковых 32-битных limbs,
младший limb первым (little-endian по limbs), в системе счисления 2**32.

Модуль содержит только беззнаковую арифметику над magnitude:
- Нормализация (удаление старших нулевых limbs)
- Сравнение magnitude
- Сложение с переносом / вычитание с заёмом
- Умножение (schoolbook, 64-битный аккумулятор)
- Деление на один limb и длинное деление (нормализация + оценка limb частного)
- Сдвиги на произвольное число бит

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждый limb в диапазоне [0, LIMB_MASK]
2. Промежуточные значения не превышают 64 бит (эмуляция u64 аккумулятора)
3. Функции не мутируют входные последовательности, scratch-буферы локальные
4. Результат всегда без старших нулевых limbs (trim)
"""

import logging
from typing import Final, Sequence

from src.bigint.errors import DivisionByZero

logger = logging.getLogger(__name__)

# =============================================================================
# LIMB-ПАРАМЕТРЫ
# =============================================================================

# Ширина одного limb в битах
LIMB_BITS: Final[int] = 32

# Основание системы счисления magnitude
LIMB_BASE: Final[int] = 1 << LIMB_BITS

# Маска одного limb (0xFFFFFFFF)
LIMB_MASK: Final[int] = LIMB_BASE - 1

Limbs = list[int]


# =============================================================================
# НОРМАЛИЗАЦИЯ И СРАВНЕНИЕ
# =============================================================================


def trim(limbs: Sequence[int]) -> Limbs:
    """
    Удаление старших (хвостовых) нулевых limbs.

    Args:
        limbs: Magnitude (младший limb первым)

    Returns:
        Новый список без старших нулей; пустой список для нуля

    Examples:
        >>> trim([5, 0, 0])
        [5]
        >>> trim([0, 0])
        []
    """
    end = len(limbs)
    while end > 0 and limbs[end - 1] == 0:
        end -= 1
    return list(limbs[:end])


def compare_magnitudes(a: Sequence[int], b: Sequence[int]) -> int:
    """
    Сравнение двух нормализованных magnitude.

    Сначала по длине, затем лексикографически от старшего limb к младшему.

    Returns:
        -1 если a < b, 0 если a == b, +1 если a > b
    """
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1

    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1

    return 0


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


def add_magnitudes(a: Sequence[int], b: Sequence[int]) -> Limbs:
    """
    Сложение magnitude с распространением переноса.

    Длина результата не превышает max(len(a), len(b)) + 1.
    """
    if len(a) < len(b):
        a, b = b, a

    result: Limbs = []
    carry = 0

    for i in range(len(a)):
        total = a[i] + carry
        if i < len(b):
            total += b[i]
        result.append(total & LIMB_MASK)
        carry = total >> LIMB_BITS

    if carry:
        result.append(carry)

    return result


def sub_magnitudes(a: Sequence[int], b: Sequence[int]) -> Limbs:
    """
    Вычитание magnitude a - b с распространением заёма.

    Args:
        a: Уменьшаемое (должно быть >= b)
        b: Вычитаемое

    Returns:
        Нормализованная разность

    Raises:
        ValueError: Если a < b (результат был бы отрицательным)
    """
    result: Limbs = []
    borrow = 0

    for i in range(len(a)):
        diff = a[i] - borrow
        if i < len(b):
            diff -= b[i]
        borrow = 1 if diff < 0 else 0
        result.append(diff & LIMB_MASK)

    if borrow or len(b) > len(a):
        raise ValueError("sub_magnitudes requires a >= b")

    return trim(result)


# =============================================================================
# УМНОЖЕНИЕ
# =============================================================================


def mul_small(a: Sequence[int], multiplier: int, addend: int = 0) -> Limbs:
    """
    Умножение magnitude на один limb с прибавлением одного limb: a * m + c.

    Используется при разборе текста (накопление цифр) и как fast path
    умножения на однолимбовый операнд.
    """
    result: Limbs = []
    carry = addend

    for limb in a:
        # limb * m + carry <= (2^32 - 1)^2 + 2^32 - 1 < 2^64
        acc = limb * multiplier + carry
        result.append(acc & LIMB_MASK)
        carry = acc >> LIMB_BITS

    if carry:
        result.append(carry)

    return trim(result)


def mul_magnitudes(a: Sequence[int], b: Sequence[int]) -> Limbs:
    """
    Schoolbook умножение magnitude.

    Произведение a[i] * b[j] накапливается в 64-битном аккумуляторе на
    позиции i + j, перенос сверх 32 бит уходит в позицию i + j + 1.
    Длина результата не превышает len(a) + len(b). Сложность O(len(a) * len(b)).
    """
    if not a or not b:
        return []

    if len(b) == 1:
        return mul_small(a, b[0])
    if len(a) == 1:
        return mul_small(b, a[0])

    result = [0] * (len(a) + len(b))

    for i, a_limb in enumerate(a):
        if a_limb == 0:
            continue
        carry = 0
        for j, b_limb in enumerate(b):
            acc = result[i + j] + a_limb * b_limb + carry
            result[i + j] = acc & LIMB_MASK
            carry = acc >> LIMB_BITS
        result[i + len(b)] = carry

    return trim(result)


# =============================================================================
# СДВИГИ
# =============================================================================


def _shift_left_within_limb(a: Sequence[int], bits: int) -> Limbs:
    """
    Сдвиг влево на 0 <= bits < LIMB_BITS без trim.

    Результат всегда на один limb длиннее входа (старший limb может быть 0).
    """
    if bits == 0:
        return list(a) + [0]

    result: Limbs = []
    carry = 0
    for limb in a:
        result.append(((limb << bits) & LIMB_MASK) | carry)
        carry = limb >> (LIMB_BITS - bits)
    result.append(carry)
    return result


def shift_left(a: Sequence[int], bits: int) -> Limbs:
    """
    Сдвиг magnitude влево на bits (умножение на 2**bits).

    Raises:
        ValueError: Если bits < 0
    """
    if bits < 0:
        raise ValueError(f"negative shift count: {bits}")
    if not a:
        return []

    limb_shift, bit_shift = divmod(bits, LIMB_BITS)
    return trim([0] * limb_shift + _shift_left_within_limb(a, bit_shift))


def shift_right(a: Sequence[int], bits: int) -> Limbs:
    """
    Логический сдвиг magnitude вправо на bits (floor деления на 2**bits).

    Raises:
        ValueError: Если bits < 0
    """
    if bits < 0:
        raise ValueError(f"negative shift count: {bits}")

    limb_shift, bit_shift = divmod(bits, LIMB_BITS)
    if limb_shift >= len(a):
        return []

    source = a[limb_shift:]
    if bit_shift == 0:
        return trim(source)

    result: Limbs = []
    for i in range(len(source)):
        limb = source[i] >> bit_shift
        if i + 1 < len(source):
            limb |= (source[i + 1] << (LIMB_BITS - bit_shift)) & LIMB_MASK
        result.append(limb)

    return trim(result)


def bit_length(a: Sequence[int]) -> int:
    """Количество значащих бит magnitude (0 для нуля)."""
    if not a:
        return 0
    return (len(a) - 1) * LIMB_BITS + a[-1].bit_length()


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def divmod_small(a: Sequence[int], divisor: int) -> tuple[Limbs, int]:
    """
    Деление magnitude на один ненулевой limb.

    Обработка от старшего limb к младшему: (остаток << 32 | limb) / divisor,
    делимое каждого шага помещается в 64 бита.

    Returns:
        (частное, остаток) — частное нормализовано, остаток в [0, divisor)

    Raises:
        DivisionByZero: Если divisor == 0
    """
    if divisor == 0:
        raise DivisionByZero("division by zero")

    quotient = [0] * len(a)
    remainder = 0

    for i in range(len(a) - 1, -1, -1):
        current = (remainder << LIMB_BITS) | a[i]
        quotient[i], remainder = divmod(current, divisor)

    return trim(quotient), remainder


def divmod_magnitudes(a: Sequence[int], b: Sequence[int]) -> tuple[Limbs, Limbs]:
    """
    Длинное деление magnitude с остатком: a = b * q + r, 0 <= r < b.

    Алгоритм (long division на limbs):
    1. Нормализация: сдвиг обоих operands влево так, чтобы старший бит
       старшего limb делителя был установлен
    2. Для каждой позиции частного (от старшей к младшей) оценка limb
       частного по двум старшим limbs делимого и старшему limb делителя
    3. Коррекция оценки не более чем двумя декрементами (пробное
       умножение на второй limb делителя и сравнение)
    4. Умножение-вычитание; при отрицательном результате — обратное
       прибавление делителя и ещё один декремент
    5. Денормализация остатка сдвигом вправо

    Однолимбовый делитель обрабатывается напрямую через divmod_small.

    Args:
        a: Делимое
        b: Делитель

    Returns:
        (частное, остаток), оба нормализованы

    Raises:
        DivisionByZero: Если b пустой (ноль)
    """
    if not b:
        raise DivisionByZero("division by zero")

    if compare_magnitudes(a, b) < 0:
        return [], list(a)

    if len(b) == 1:
        quotient, remainder = divmod_small(a, b[0])
        return quotient, ([remainder] if remainder else [])

    shift = LIMB_BITS - b[-1].bit_length()
    logger.debug(
        "long division: dividend=%d limbs, divisor=%d limbs, shift=%d",
        len(a), len(b), shift,
    )

    # Локальные scratch-буферы, operands не алиасятся
    divisor = _shift_left_within_limb(b, shift)[:-1]
    dividend = _shift_left_within_limb(a, shift)

    n = len(divisor)
    m = len(dividend) - n
    quotient = [0] * m

    divisor_top = divisor[-1]
    divisor_next = divisor[-2]

    for j in range(m - 1, -1, -1):
        numerator = (dividend[j + n] << LIMB_BITS) | dividend[j + n - 1]
        q_hat, r_hat = divmod(numerator, divisor_top)

        while q_hat >= LIMB_BASE or (
            q_hat * divisor_next > ((r_hat << LIMB_BITS) | dividend[j + n - 2])
        ):
            q_hat -= 1
            r_hat += divisor_top
            if r_hat >= LIMB_BASE:
                break

        # Умножение-вычитание: dividend[j:j+n+1] -= q_hat * divisor
        borrow = 0
        carry = 0
        for i in range(n):
            product = q_hat * divisor[i] + carry
            carry = product >> LIMB_BITS
            diff = dividend[i + j] - (product & LIMB_MASK) - borrow
            dividend[i + j] = diff & LIMB_MASK
            borrow = 1 if diff < 0 else 0

        diff = dividend[j + n] - carry - borrow
        dividend[j + n] = diff & LIMB_MASK

        if diff < 0:
            # Оценка оказалась на единицу больше: возвращаем делитель
            q_hat -= 1
            carry = 0
            for i in range(n):
                total = dividend[i + j] + divisor[i] + carry
                dividend[i + j] = total & LIMB_MASK
                carry = total >> LIMB_BITS
            dividend[j + n] = (dividend[j + n] + carry) & LIMB_MASK

        quotient[j] = q_hat

    remainder = shift_right(trim(dividend[:n]), shift)
    return trim(quotient), remainder

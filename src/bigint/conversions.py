"""
Conversions — Конверсии BigInt во внешние представления и обратно

Модуль работает с парами (sign, limbs) и не зависит от класса BigInt:
- Native int → limbs (разложение модуля на 32-битные limbs)
- Fixed-width диапазоны и сужающие конверсии с проверкой переполнения
- Разбор текста: необязательный '-', необязательный префикс '0x', цифры
- Форматирование: каноническая десятичная и шестнадцатеричная запись
- Импорт/экспорт magnitude как big/little-endian последовательности байт

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сужающая конверсия никогда не оборачивает значение (ConversionOverflow)
2. Форматирование не выдаёт ведущих нулей; ноль — "0"
3. Байтовые конверсии не кодируют знак: он передаётся отдельно
"""

import logging
from typing import Final, Literal, Sequence

from src.bigint.config import DEFAULT_PARSE_CONFIG, ParseConfig
from src.bigint.errors import ConversionOverflow, ParseError
from src.bigint.limbs import (
    LIMB_BITS,
    LIMB_MASK,
    Limbs,
    bit_length,
    divmod_small,
    mul_small,
    trim,
)
from src.bigint.representation import Sign

logger = logging.getLogger(__name__)

ByteOrder = Literal["big", "little"]

# =============================================================================
# ПАРАМЕТРЫ КОНВЕРСИЙ
# =============================================================================

# Поддерживаемые ширины fixed-width целых
FIXED_WIDTHS: Final[tuple[int, ...]] = (8, 16, 32, 64, 128)

# Количество десятичных цифр, обрабатываемых за один шаг (10**9 < 2**32)
DECIMAL_CHUNK_DIGITS: Final[int] = 9
DECIMAL_CHUNK_BASE: Final[int] = 10**DECIMAL_CHUNK_DIGITS

# Количество шестнадцатеричных цифр в одном limb
HEX_DIGITS_PER_LIMB: Final[int] = LIMB_BITS // 4

BYTES_PER_LIMB: Final[int] = LIMB_BITS // 8

_DECIMAL_DIGITS: Final[dict[str, int]] = {c: i for i, c in enumerate("0123456789")}
_HEX_DIGITS: Final[dict[str, int]] = {
    **{c: i for i, c in enumerate("0123456789abcdef")},
    **{c: i for i, c in enumerate("0123456789ABCDEF")},
}


# =============================================================================
# NATIVE INT
# =============================================================================


def int_to_limbs(value: int) -> tuple[Sign, Limbs]:
    """
    Разложение native int на знак и limbs модуля.

    Examples:
        >>> int_to_limbs(-(2**32 + 5))
        (<Sign.NEGATIVE: -1>, [5, 1])
    """
    if value == 0:
        return Sign.ZERO, []

    sign = Sign.NEGATIVE if value < 0 else Sign.POSITIVE
    remaining = -value if value < 0 else value

    limbs: Limbs = []
    while remaining:
        limbs.append(remaining & LIMB_MASK)
        remaining >>= LIMB_BITS

    return sign, limbs


def limbs_to_int(sign: Sign, limbs: Sequence[int]) -> int:
    """Сборка native int из знака и limbs модуля."""
    value = 0
    for limb in reversed(limbs):
        value = (value << LIMB_BITS) | limb
    return -value if sign == Sign.NEGATIVE else value


def fixed_range(bits: int, signed: bool = True) -> tuple[int, int]:
    """
    Диапазон значений fixed-width целого.

    Args:
        bits: Ширина в битах (одна из FIXED_WIDTHS)
        signed: Знаковый (two's complement) или беззнаковый тип

    Returns:
        (min_value, max_value) включительно

    Raises:
        ValueError: Если ширина не поддерживается
    """
    if bits not in FIXED_WIDTHS:
        raise ValueError(f"unsupported width {bits}, expected one of {FIXED_WIDTHS}")

    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def check_fixed(value: int, bits: int, signed: bool = True) -> None:
    """
    Проверка, что native int помещается в fixed-width тип.

    Raises:
        ConversionOverflow: Если значение вне диапазона
    """
    low, high = fixed_range(bits, signed)
    if not low <= value <= high:
        kind = "i" if signed else "u"
        raise ConversionOverflow(f"value {value} does not fit in {kind}{bits}")


def narrow(sign: Sign, limbs: Sequence[int], bits: int, signed: bool = True) -> int:
    """
    Сужающая конверсия в fixed-width целое.

    Проверка выполняется по длине magnitude в битах до сборки значения,
    поэтому огромные значения отклоняются без полной сборки.

    Raises:
        ConversionOverflow: Если значение не помещается в тип
    """
    fixed_range(bits, signed)
    kind = "i" if signed else "u"
    length = bit_length(limbs)

    if signed:
        fits = length <= bits - 1
        if not fits and sign == Sign.NEGATIVE and length == bits:
            # -2**(bits-1) — единственное значение длины bits, которое помещается
            fits = limbs_to_int(Sign.POSITIVE, limbs) == 1 << (bits - 1)
    else:
        fits = sign != Sign.NEGATIVE and length <= bits

    if not fits:
        raise ConversionOverflow(f"value does not fit in {kind}{bits}")

    return limbs_to_int(sign, limbs)


# =============================================================================
# РАЗБОР ТЕКСТА
# =============================================================================


def _parse_decimal_digits(digits: str) -> Limbs:
    magnitude: Limbs = []
    head = len(digits) % DECIMAL_CHUNK_DIGITS or DECIMAL_CHUNK_DIGITS
    start = 0
    end = head

    while start < len(digits):
        chunk = digits[start:end]
        chunk_value = 0
        for char in chunk:
            digit = _DECIMAL_DIGITS.get(char)
            if digit is None:
                raise ParseError(f"invalid decimal digit {char!r}")
            chunk_value = chunk_value * 10 + digit
        magnitude = mul_small(magnitude, 10 ** len(chunk), chunk_value)
        start, end = end, end + DECIMAL_CHUNK_DIGITS

    return magnitude


def _parse_hex_digits(digits: str) -> Limbs:
    magnitude: Limbs = []
    end = len(digits)

    while end > 0:
        start = max(0, end - HEX_DIGITS_PER_LIMB)
        limb = 0
        for char in digits[start:end]:
            digit = _HEX_DIGITS.get(char)
            if digit is None:
                raise ParseError(f"invalid hexadecimal digit {char!r}")
            limb = (limb << 4) | digit
        magnitude.append(limb)
        end = start

    return trim(magnitude)


def parse_text(text: str, config: ParseConfig = DEFAULT_PARSE_CONFIG) -> tuple[Sign, Limbs]:
    """
    Разбор текстового представления целого.

    Формат: необязательный ведущий '-', затем либо '0x'/'0X' и
    шестнадцатеричные цифры (регистр не важен), либо десятичные цифры.
    Пробелы, '+' и разделители не допускаются.

    Args:
        text: Исходная строка
        config: Ограничения разбора

    Returns:
        (sign, limbs); "-0" разбирается в канонический ноль

    Raises:
        ParseError: Пустой ввод, голый '-' или '0x', недопустимая цифра,
            превышение config.max_digits, не строковый ввод

    Examples:
        >>> parse_text("0x1A")
        (<Sign.POSITIVE: 1>, [26])
        >>> parse_text("-0")
        (<Sign.ZERO: 0>, [])
    """
    if not isinstance(text, str):
        raise ParseError(f"expected str, got {type(text).__name__}")

    if not text:
        logger.debug("parse rejected: empty input")
        raise ParseError("empty input")

    negative = text.startswith("-")
    body = text[1:] if negative else text

    if body[:2] in ("0x", "0X"):
        digits = body[2:]
        parse_digits = _parse_hex_digits
    else:
        digits = body
        parse_digits = _parse_decimal_digits

    if not digits:
        logger.debug("parse rejected: no digits in %r", text)
        raise ParseError(f"no digits in {text!r}")

    if config.max_digits and len(digits) > config.max_digits:
        logger.debug("parse rejected: %d digits exceed limit %d", len(digits), config.max_digits)
        raise ParseError(f"{len(digits)} digits exceed the limit of {config.max_digits}")

    magnitude = parse_digits(digits)

    if not magnitude:
        return Sign.ZERO, []
    return (Sign.NEGATIVE if negative else Sign.POSITIVE), magnitude


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


def format_decimal(sign: Sign, limbs: Sequence[int]) -> str:
    """
    Каноническая десятичная запись: один ведущий '-' для отрицательных,
    "0" для нуля, без ведущих нулей.
    """
    if not limbs:
        return "0"

    chunks: list[int] = []
    remaining: Limbs = list(limbs)
    while remaining:
        remaining, chunk = divmod_small(remaining, DECIMAL_CHUNK_BASE)
        chunks.append(chunk)

    text = str(chunks[-1]) + "".join(
        f"{chunk:0{DECIMAL_CHUNK_DIGITS}d}" for chunk in reversed(chunks[:-1])
    )
    return "-" + text if sign == Sign.NEGATIVE else text


def format_hex(sign: Sign, limbs: Sequence[int]) -> str:
    """Шестнадцатеричная запись с префиксом '0x', строчными цифрами."""
    if not limbs:
        return "0x0"

    text = f"{limbs[-1]:x}" + "".join(
        f"{limb:0{HEX_DIGITS_PER_LIMB}x}" for limb in reversed(limbs[:-1])
    )
    return ("-0x" if sign == Sign.NEGATIVE else "0x") + text


# =============================================================================
# БАЙТОВЫЙ ИМПОРТ / ЭКСПОРТ
# =============================================================================


def bytes_to_limbs(data: bytes, byteorder: ByteOrder) -> Limbs:
    """
    Интерпретация байт как беззнакового magnitude.

    Ведущие нулевые байты допускаются и отбрасываются.
    """
    if byteorder not in ("big", "little"):
        raise ValueError(f"byteorder must be 'big' or 'little', got {byteorder!r}")

    little = bytes(data) if byteorder == "little" else bytes(data)[::-1]

    limbs: Limbs = []
    for offset in range(0, len(little), BYTES_PER_LIMB):
        limb = 0
        for shift, byte in enumerate(little[offset:offset + BYTES_PER_LIMB]):
            limb |= byte << (8 * shift)
        limbs.append(limb)

    return trim(limbs)


def limbs_to_bytes(limbs: Sequence[int], byteorder: ByteOrder) -> bytes:
    """
    Экспорт magnitude как беззнаковой последовательности байт минимальной длины.

    Ноль экспортируется как один нулевой байт.

    Examples:
        >>> limbs_to_bytes([300], "big")
        b'\\x01,'
    """
    if byteorder not in ("big", "little"):
        raise ValueError(f"byteorder must be 'big' or 'little', got {byteorder!r}")

    little = bytearray()
    for limb in limbs:
        for shift in range(BYTES_PER_LIMB):
            little.append((limb >> (8 * shift)) & 0xFF)

    while len(little) > 1 and little[-1] == 0:
        little.pop()
    if not little:
        little.append(0)

    return bytes(little) if byteorder == "little" else bytes(little[::-1])

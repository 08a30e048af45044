"""
BigInt — Знаковое целое произвольной точности

Иммутабельное значение (frozen dataclass) в sign-magnitude представлении:
- sign: Sign.NEGATIVE / Sign.ZERO / Sign.POSITIVE
- magnitude: tuple 32-битных limbs, младший первым

Каждая операция создаёт новый канонический BigInt, операнды не мутируются,
общего изменяемого состояния нет. zero() и one() — конструкторы, не синглтоны.

Операторы:
- +, -, * — сложение, вычитание, умножение
- /, // — частное с усечением к нулю; % — остаток со знаком делимого;
  divmod() — пара (частное, остаток)
- &, |, ^, ~, <<, >> — побитовые операции в семантике two's complement
- pow(a, e) и pow(a, e, m) — степень и модульная степень
- <, <=, >, >=, ==, != — полный порядок

В качестве второго операнда принимаются BigInt и native int.

ВАЖНО: / и // усекают к нулю, а не к минус бесконечности, как int:
BigInt.from_int(-7) // 2 == -3, BigInt.from_int(-7) % 2 == -1.
"""

from dataclasses import dataclass
from typing import Optional, Union

from src.bigint import bitwise
from src.bigint.config import DEFAULT_PARSE_CONFIG, ParseConfig
from src.bigint.conversions import (
    ByteOrder,
    bytes_to_limbs,
    check_fixed,
    format_decimal,
    format_hex,
    int_to_limbs,
    limbs_to_bytes,
    limbs_to_int,
    narrow,
    parse_text,
)
from src.bigint.errors import InvalidModulus, NegativeExponent
from src.bigint.limbs import (
    add_magnitudes,
    bit_length,
    compare_magnitudes,
    divmod_magnitudes,
    mul_magnitudes,
    sub_magnitudes,
)
from src.bigint.number_theory import gcd_magnitudes, pow_mod_magnitudes, power_magnitudes
from src.bigint.representation import Sign, check_canonical, normalize

IntLike = Union["BigInt", int]


@dataclass(frozen=True, eq=False)
class BigInt:
    """
    Знаковое целое произвольной точности.

    Прямой конструктор принимает только каноническую пару (sign, magnitude);
    для всего остального есть фабрики from_int, parse, from_bytes_be/le.
    """

    sign: Sign
    magnitude: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "magnitude", tuple(self.magnitude))
        check_canonical(self.sign, self.magnitude)

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def _make(cls, sign: Sign, magnitude) -> "BigInt":
        """Все результаты проходят через normalize."""
        return cls(*normalize(sign, magnitude))

    @classmethod
    def zero(cls) -> "BigInt":
        return cls(Sign.ZERO, ())

    @classmethod
    def one(cls) -> "BigInt":
        return cls(Sign.POSITIVE, (1,))

    @classmethod
    def from_int(cls, value: int) -> "BigInt":
        """
        BigInt из native int любой величины.

        Raises:
            TypeError: Если value не int
        """
        if not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return cls._make(*int_to_limbs(int(value)))

    @classmethod
    def _from_fixed(cls, value: int, bits: int) -> "BigInt":
        if not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        check_fixed(value, bits, signed=True)
        return cls.from_int(value)

    @classmethod
    def from_i8(cls, value: int) -> "BigInt":
        return cls._from_fixed(value, 8)

    @classmethod
    def from_i16(cls, value: int) -> "BigInt":
        return cls._from_fixed(value, 16)

    @classmethod
    def from_i32(cls, value: int) -> "BigInt":
        return cls._from_fixed(value, 32)

    @classmethod
    def from_i64(cls, value: int) -> "BigInt":
        """
        BigInt из значения типа i64.

        Raises:
            ConversionOverflow: Если value вне [-2**63, 2**63 - 1]
        """
        return cls._from_fixed(value, 64)

    @classmethod
    def from_i128(cls, value: int) -> "BigInt":
        return cls._from_fixed(value, 128)

    @classmethod
    def parse(cls, text: str, config: ParseConfig = DEFAULT_PARSE_CONFIG) -> "BigInt":
        """
        Разбор текста: необязательный '-', затем '0x'-шестнадцатеричные
        или десятичные цифры.

        Raises:
            ParseError: При некорректном вводе

        Examples:
            >>> BigInt.parse("0x1A") == 26
            True
        """
        return cls._make(*parse_text(text, config))

    @classmethod
    def from_bytes_be(cls, data: bytes, sign: Sign = Sign.POSITIVE) -> "BigInt":
        """
        Magnitude из big-endian байт; знак передаётся отдельно.

        Для нулевого magnitude знак игнорируется.
        """
        return cls._from_bytes(data, "big", sign)

    @classmethod
    def from_bytes_le(cls, data: bytes, sign: Sign = Sign.POSITIVE) -> "BigInt":
        return cls._from_bytes(data, "little", sign)

    @classmethod
    def _from_bytes(cls, data: bytes, byteorder: ByteOrder, sign: Sign) -> "BigInt":
        magnitude = bytes_to_limbs(data, byteorder)
        if not magnitude:
            return cls.zero()
        if sign == Sign.ZERO:
            raise ValueError("non-zero magnitude cannot have sign ZERO")
        return cls._make(sign, magnitude)

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    def to_bytes_be(self) -> bytes:
        """
        Magnitude как big-endian байты минимальной длины (знак не кодируется).

        Examples:
            >>> BigInt.from_int(300).to_bytes_be()
            b'\\x01,'
        """
        return limbs_to_bytes(self.magnitude, "big")

    def to_bytes_le(self) -> bytes:
        return limbs_to_bytes(self.magnitude, "little")

    def to_fixed(self, bits: int, signed: bool = True) -> int:
        """
        Сужающая конверсия в fixed-width целое.

        Args:
            bits: 8, 16, 32, 64 или 128
            signed: Знаковый или беззнаковый целевой тип

        Raises:
            ConversionOverflow: Если значение не помещается (никогда не оборачивает)
        """
        return narrow(self.sign, self.magnitude, bits, signed)

    def to_i8(self) -> int:
        return self.to_fixed(8)

    def to_i16(self) -> int:
        return self.to_fixed(16)

    def to_i32(self) -> int:
        return self.to_fixed(32)

    def to_i64(self) -> int:
        return self.to_fixed(64)

    def to_i128(self) -> int:
        return self.to_fixed(128)

    def to_u8(self) -> int:
        return self.to_fixed(8, signed=False)

    def to_u16(self) -> int:
        return self.to_fixed(16, signed=False)

    def to_u32(self) -> int:
        return self.to_fixed(32, signed=False)

    def to_u64(self) -> int:
        return self.to_fixed(64, signed=False)

    def to_u128(self) -> int:
        return self.to_fixed(128, signed=False)

    def to_hex(self) -> str:
        """Шестнадцатеричная запись: '0x1a', '-0x1a', '0x0'."""
        return format_hex(self.sign, self.magnitude)

    def __int__(self) -> int:
        return limbs_to_int(self.sign, self.magnitude)

    def __index__(self) -> int:
        return int(self)

    def __str__(self) -> str:
        return format_decimal(self.sign, self.magnitude)

    def __repr__(self) -> str:
        return f"BigInt('{self}')"

    # =========================================================================
    # ПРЕДИКАТЫ И УНАРНЫЕ ОПЕРАЦИИ
    # =========================================================================

    def is_zero(self) -> bool:
        return self.sign == Sign.ZERO

    def is_negative(self) -> bool:
        return self.sign == Sign.NEGATIVE

    def is_positive(self) -> bool:
        return self.sign == Sign.POSITIVE

    def __bool__(self) -> bool:
        return not self.is_zero()

    def bit_length(self) -> int:
        """Количество значащих бит модуля (0 для нуля), как у int."""
        return bit_length(self.magnitude)

    def __neg__(self) -> "BigInt":
        return BigInt(self.sign.negate(), self.magnitude)

    def __pos__(self) -> "BigInt":
        return self

    def abs(self) -> "BigInt":
        if self.sign == Sign.NEGATIVE:
            return BigInt(Sign.POSITIVE, self.magnitude)
        return self

    def __abs__(self) -> "BigInt":
        return self.abs()

    def __invert__(self) -> "BigInt":
        return BigInt._make(*bitwise.bit_not(self.sign, self.magnitude))

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare(self, other: IntLike) -> int:
        """
        Полный порядок: сначала знак, затем magnitude (для отрицательных
        результат сравнения magnitude инвертируется).

        Returns:
            -1, 0 или +1
        """
        other = _coerce_strict(other)

        if self.sign != other.sign:
            return -1 if self.sign < other.sign else 1

        result = compare_magnitudes(self.magnitude, other.magnitude)
        return -result if self.sign == Sign.NEGATIVE else result

    def __eq__(self, other) -> bool:
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return self.sign == other.sign and self.magnitude == other.magnitude

    def __hash__(self) -> int:
        # Совпадает с hash(int), чтобы BigInt(n) и n были одним ключом
        return hash(int(self))

    def __lt__(self, other) -> bool:
        if _coerce(other) is None:
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other) -> bool:
        if _coerce(other) is None:
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other) -> bool:
        if _coerce(other) is None:
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other) -> bool:
        if _coerce(other) is None:
            return NotImplemented
        return self.compare(other) >= 0

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: IntLike) -> "BigInt":
        """
        Сложение для всех комбинаций знаков.

        Одинаковые знаки: сложение magnitude с переносом. Разные знаки:
        из большего magnitude вычитается меньший, знак берётся у операнда
        с большим magnitude, ноль при равенстве.
        """
        other = _coerce_strict(other)

        if other.sign == Sign.ZERO:
            return self
        if self.sign == Sign.ZERO:
            return other

        if self.sign == other.sign:
            return BigInt._make(self.sign, add_magnitudes(self.magnitude, other.magnitude))

        order = compare_magnitudes(self.magnitude, other.magnitude)
        if order == 0:
            return BigInt.zero()
        if order > 0:
            return BigInt._make(self.sign, sub_magnitudes(self.magnitude, other.magnitude))
        return BigInt._make(other.sign, sub_magnitudes(other.magnitude, self.magnitude))

    def sub(self, other: IntLike) -> "BigInt":
        """a - b == a + (-b)."""
        return self.add(-_coerce_strict(other))

    def mul(self, other: IntLike) -> "BigInt":
        other = _coerce_strict(other)
        sign = self.sign.times(other.sign)
        if sign == Sign.ZERO:
            return BigInt.zero()
        return BigInt._make(sign, mul_magnitudes(self.magnitude, other.magnitude))

    def div_mod(self, other: IntLike) -> tuple["BigInt", "BigInt"]:
        """
        Деление с остатком с усечением к нулю: self == other * q + r, |r| < |other|.

        Знак частного: POSITIVE при одинаковых знаках, NEGATIVE при разных,
        ZERO если частное magnitude равно нулю. Знак остатка совпадает со
        знаком делимого (или ZERO).

        Raises:
            DivisionByZero: Если other == 0

        Examples:
            >>> BigInt.from_int(-7).div_mod(2)
            (BigInt('-3'), BigInt('-1'))
        """
        other = _coerce_strict(other)
        quotient, remainder = divmod_magnitudes(self.magnitude, other.magnitude)
        q_sign = self.sign.times(other.sign) if quotient else Sign.ZERO
        return BigInt._make(q_sign, quotient), BigInt._make(self.sign, remainder)

    def gcd(self, other: IntLike) -> "BigInt":
        """Неотрицательный НОД; знаки входов игнорируются; gcd(0, 0) == 0."""
        other = _coerce_strict(other)
        return BigInt._make(Sign.POSITIVE, gcd_magnitudes(self.magnitude, other.magnitude))

    def pow_mod(self, exponent: IntLike, modulus: IntLike) -> "BigInt":
        """
        self**exponent mod modulus, результат в [0, modulus).

        Raises:
            InvalidModulus: Если modulus <= 0
            NegativeExponent: Если exponent < 0
        """
        exponent = _coerce_strict(exponent)
        modulus = _coerce_strict(modulus)

        if modulus.sign != Sign.POSITIVE:
            raise InvalidModulus(f"modulus must be positive, got {modulus}")
        if exponent.sign == Sign.NEGATIVE:
            raise NegativeExponent(f"exponent must be non-negative, got {exponent}")

        result = pow_mod_magnitudes(
            self.sign, self.magnitude, exponent.magnitude, modulus.magnitude
        )
        return BigInt._make(Sign.POSITIVE, result)

    def power(self, exponent: IntLike) -> "BigInt":
        """
        self**exponent без модуля.

        Raises:
            NegativeExponent: Если exponent < 0
        """
        exponent = _coerce_strict(exponent)
        if exponent.sign == Sign.NEGATIVE:
            raise NegativeExponent(f"exponent must be non-negative, got {exponent}")

        magnitude = power_magnitudes(self.magnitude, exponent.magnitude)
        odd = bool(exponent.magnitude) and exponent.magnitude[0] & 1
        sign = Sign.NEGATIVE if self.sign == Sign.NEGATIVE and odd else Sign.POSITIVE
        return BigInt._make(sign, magnitude)

    # =========================================================================
    # ОПЕРАТОРЫ
    # =========================================================================

    def __add__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.sub(other)

    def __rsub__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.sub(self)

    def __mul__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.mul(other)

    def __rmul__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.mul(self)

    def __truediv__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.div_mod(other)[0]

    def __rtruediv__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.div_mod(self)[0]

    __floordiv__ = __truediv__
    __rfloordiv__ = __rtruediv__

    def __mod__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.div_mod(other)[1]

    def __rmod__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.div_mod(self)[1]

    def __divmod__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else self.div_mod(other)

    def __rdivmod__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.div_mod(self)

    def __pow__(self, exponent, modulus=None):
        exponent = _coerce(exponent)
        if exponent is None:
            return NotImplemented
        if modulus is None:
            return self.power(exponent)
        modulus = _coerce(modulus)
        if modulus is None:
            return NotImplemented
        return self.pow_mod(exponent, modulus)

    def __rpow__(self, other):
        other = _coerce(other)
        return NotImplemented if other is None else other.power(self)

    def __and__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return BigInt._make(*bitwise.bit_and(self.sign, self.magnitude, other.sign, other.magnitude))

    def __or__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return BigInt._make(*bitwise.bit_or(self.sign, self.magnitude, other.sign, other.magnitude))

    def __xor__(self, other):
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return BigInt._make(*bitwise.bit_xor(self.sign, self.magnitude, other.sign, other.magnitude))

    __rand__ = __and__
    __ror__ = __or__
    __rxor__ = __xor__

    def __lshift__(self, bits):
        if not isinstance(bits, int):
            return NotImplemented
        return BigInt._make(*bitwise.shl(self.sign, self.magnitude, int(bits)))

    def __rshift__(self, bits):
        if not isinstance(bits, int):
            return NotImplemented
        return BigInt._make(*bitwise.shr(self.sign, self.magnitude, int(bits)))


# =============================================================================
# КОЭРСИЯ ОПЕРАНДОВ
# =============================================================================


def _coerce(value) -> Optional[BigInt]:
    """BigInt или int → BigInt; иначе None (оператор вернёт NotImplemented)."""
    if isinstance(value, BigInt):
        return value
    if isinstance(value, int):
        return BigInt.from_int(value)
    return None


def _coerce_strict(value) -> BigInt:
    result = _coerce(value)
    if result is None:
        raise TypeError(f"expected BigInt or int, got {type(value).__name__}")
    return result


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def compare(a: IntLike, b: IntLike) -> int:
    """Сравнение: -1, 0 или +1."""
    return _coerce_strict(a).compare(b)


def div_mod(a: IntLike, b: IntLike) -> tuple[BigInt, BigInt]:
    """Частное и остаток с усечением к нулю."""
    return _coerce_strict(a).div_mod(b)


def gcd(a: IntLike, b: IntLike) -> BigInt:
    """Неотрицательный НОД."""
    return _coerce_strict(a).gcd(b)


def pow_mod(base: IntLike, exponent: IntLike, modulus: IntLike) -> BigInt:
    """
    Модульное возведение в степень, результат в [0, modulus).

    Examples:
        >>> str(pow_mod(7, 128, 1000))
        '801'
    """
    return _coerce_strict(base).pow_mod(exponent, modulus)

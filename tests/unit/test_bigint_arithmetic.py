"""
Тесты для BigInt — базовая арифметика

Проверяет:
1. Каноническую форму и конструкторы
2. Сложение/вычитание для всех комбинаций знаков
3. Умножение и правила знака
4. Деление с усечением к нулю (знак остатка = знак делимого)
5. Операторы с native int операндами
6. Эталонные сценарии
"""

import pytest

from src.bigint import BigInt, DivisionByZero, Sign, div_mod


def big(value: int) -> BigInt:
    return BigInt.from_int(value)


# =============================================================================
# ТЕСТЫ: Каноническая форма
# =============================================================================


class TestCanonicalForm:
    def test_zero_is_unique(self) -> None:
        assert BigInt.zero() == BigInt(Sign.ZERO, ())
        assert big(0).sign == Sign.ZERO
        assert big(0).magnitude == ()

    def test_negative_zero_is_not_representable(self) -> None:
        with pytest.raises(ValueError):
            BigInt(Sign.NEGATIVE, ())
        assert -BigInt.zero() == BigInt.zero()
        assert (-BigInt.zero()).sign == Sign.ZERO

    def test_high_zero_limb_rejected(self) -> None:
        with pytest.raises(ValueError, match="superfluous"):
            BigInt(Sign.POSITIVE, (1, 0))

    def test_zero_sign_with_limbs_rejected(self) -> None:
        with pytest.raises(ValueError):
            BigInt(Sign.ZERO, (1,))

    def test_limb_out_of_range_rejected(self) -> None:
        with pytest.raises(ValueError, match="out of range"):
            BigInt(Sign.POSITIVE, (2**32,))

    def test_immutable(self) -> None:
        value = big(5)
        with pytest.raises(AttributeError):
            value.sign = Sign.NEGATIVE  # type: ignore[misc]

    def test_zero_and_one_are_constructors(self) -> None:
        assert BigInt.one() == 1
        assert BigInt.zero() == 0
        assert BigInt.zero() is not BigInt.zero()

    def test_from_int_decomposes_into_limbs(self) -> None:
        value = big(-(2**32 + 5))
        assert value.sign == Sign.NEGATIVE
        assert value.magnitude == (5, 1)

    def test_from_int_rejects_non_int(self) -> None:
        with pytest.raises(TypeError):
            BigInt.from_int(1.5)  # type: ignore[arg-type]


# =============================================================================
# ТЕСТЫ: Сложение / вычитание
# =============================================================================


class TestAddSub:
    @pytest.mark.parametrize(
        "a, b",
        [
            (5, 3),
            (-5, -3),
            (5, -3),
            (-5, 3),
            (3, -5),
            (-3, 5),
            (7, -7),
            (0, -9),
            (-9, 0),
            (2**64 - 1, 1),
            (-(2**64), 2**64 - 1),
            (2**96, -(2**32)),
        ],
    )
    def test_all_sign_combinations(self, a: int, b: int) -> None:
        assert int(big(a) + big(b)) == a + b
        assert int(big(a) - big(b)) == a - b

    def test_additive_identity_and_inverse(self) -> None:
        value = big(-123456789012345678901234567890)
        assert value + BigInt.zero() == value
        assert (value + (-value)).is_zero()

    def test_carry_extends_magnitude(self) -> None:
        result = big(2**64 - 1) + 1
        assert result.magnitude == (0, 0, 1)

    def test_opposite_magnitudes_cancel_to_canonical_zero(self) -> None:
        result = big(2**100) - big(2**100)
        assert result.sign == Sign.ZERO
        assert result.magnitude == ()

    def test_golden_sum(self) -> None:
        result = BigInt.from_i64(1234567890123456789) + BigInt.from_i64(987654321098765432)
        assert str(result) == "2222222211222222221"

    def test_int_operands(self) -> None:
        assert 10 + big(5) == 15
        assert 10 - big(5) == 5
        assert big(5) - 10 == -5


# =============================================================================
# ТЕСТЫ: Умножение
# =============================================================================


class TestMultiply:
    @pytest.mark.parametrize(
        "a, b, sign",
        [
            (6, 7, Sign.POSITIVE),
            (-6, -7, Sign.POSITIVE),
            (-6, 7, Sign.NEGATIVE),
            (6, -7, Sign.NEGATIVE),
            (0, -7, Sign.ZERO),
            (-6, 0, Sign.ZERO),
        ],
    )
    def test_sign_rules(self, a: int, b: int, sign: Sign) -> None:
        result = big(a) * big(b)
        assert result.sign == sign
        assert int(result) == a * b

    def test_multi_limb_product(self) -> None:
        a = 2**200 + 12345
        b = -(3**90)
        assert int(big(a) * big(b)) == a * b

    def test_commutative(self) -> None:
        a, b = big(-(7**40)), big(11**33)
        assert a * b == b * a

    def test_int_operand(self) -> None:
        assert 3 * big(-4) == -12


# =============================================================================
# ТЕСТЫ: Деление с усечением к нулю
# =============================================================================


class TestDivision:
    @pytest.mark.parametrize(
        "a, b, q, r",
        [
            (7, 2, 3, 1),
            (-7, 2, -3, -1),
            (7, -2, -3, 1),
            (-7, -2, 3, -1),
            (1, 5, 0, 1),
            (-1, 5, 0, -1),
            (0, 5, 0, 0),
            (10, 5, 2, 0),
            (-10, 5, -2, 0),
        ],
    )
    def test_truncates_toward_zero(self, a: int, b: int, q: int, r: int) -> None:
        quotient, remainder = div_mod(big(a), big(b))
        assert quotient == q
        assert remainder == r

    def test_zero_quotient_has_zero_sign(self) -> None:
        quotient, remainder = big(-3).div_mod(big(10))
        assert quotient.sign == Sign.ZERO
        assert remainder.sign == Sign.NEGATIVE

    def test_golden_quotient(self) -> None:
        quotient = BigInt.parse("-100000000000000000000") / BigInt.from_i32(42)
        assert str(quotient) == "-2380952380952380952"

    def test_division_by_zero(self) -> None:
        with pytest.raises(DivisionByZero):
            div_mod(big(7), big(0))
        with pytest.raises(ZeroDivisionError):
            big(7) % 0
        with pytest.raises(ZeroDivisionError):
            big(0) // BigInt.zero()

    def test_multi_limb_identity(self) -> None:
        a = -(3**300) + 17
        b = 7**60 + 5
        quotient, remainder = div_mod(a, b)
        assert b * quotient + remainder == a
        assert abs(remainder) < abs(big(b))
        assert remainder.sign == Sign.NEGATIVE

    def test_operators(self) -> None:
        assert big(-7) // 2 == -3
        assert big(-7) / 2 == -3
        assert big(-7) % 2 == -1
        assert divmod(big(-7), 2) == (big(-3), big(-1))
        assert 7 // big(-2) == -3
        assert 7 % big(-2) == 1
        assert divmod(-7, big(2)) == (big(-3), big(-1))


# =============================================================================
# ТЕСТЫ: Унарные операции
# =============================================================================


class TestUnary:
    def test_abs(self) -> None:
        assert big(-5).abs() == 5
        assert abs(big(-5)) == 5
        assert abs(big(5)) == 5
        assert abs(BigInt.zero()).is_zero()

    def test_sign_predicates(self) -> None:
        assert big(-1).is_negative()
        assert big(1).is_positive()
        assert BigInt.zero().is_zero()
        assert not BigInt.zero()
        assert big(-1)

    def test_negation(self) -> None:
        assert -big(5) == -5
        assert -(-big(5)) == 5
        assert +big(5) == 5

    def test_unsupported_operand_type(self) -> None:
        with pytest.raises(TypeError):
            big(1) + 1.5  # type: ignore[operator]
        with pytest.raises(TypeError):
            big(1).add("1")  # type: ignore[arg-type]

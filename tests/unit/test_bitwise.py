"""
Тесты для побитовых операций и сдвигов (two's complement семантика)

Эталон — native int Python, который реализует ту же бесконечную
two's complement семантику.
"""

import pytest

from src.bigint import BigInt, Sign
from src.bigint.bitwise import TwosComplementView, from_twos_complement
from src.bigint.limbs import LIMB_MASK

OPERANDS = [
    0,
    1,
    -1,
    5,
    -5,
    0xFFFF_FFFF,
    -0xFFFF_FFFF,
    2**32,
    -(2**32),
    2**64 + 0x1234,
    -(2**64) - 0x1234,
    -(2**96),
    0xDEAD_BEEF_0000_0000_CAFE,
]


def big(value: int) -> BigInt:
    return BigInt.from_int(value)


class TestTwosComplementView:
    def test_positive_limbs_pass_through(self) -> None:
        view = TwosComplementView(Sign.POSITIVE, (7, 3))
        assert [view.limb(i) for i in range(3)] == [7, 3, 0]
        assert view.fill == 0

    def test_negative_limbs_computed_on_demand(self) -> None:
        # -(2**32) == ...FFFFFFFF 00000000
        view = TwosComplementView(Sign.NEGATIVE, (0, 1))
        assert [view.limb(i) for i in range(3)] == [0, LIMB_MASK, LIMB_MASK]

    def test_negative_one(self) -> None:
        view = TwosComplementView(Sign.NEGATIVE, (1,))
        assert view.limb(0) == LIMB_MASK
        assert view.fill == LIMB_MASK

    def test_reassembly(self) -> None:
        assert from_twos_complement([LIMB_MASK, LIMB_MASK], LIMB_MASK) == (Sign.NEGATIVE, [1])
        assert from_twos_complement([0, 0], 0) == (Sign.ZERO, [])


class TestBitwiseOps:
    @pytest.mark.parametrize("a", OPERANDS)
    @pytest.mark.parametrize("b", OPERANDS)
    def test_and_or_xor_match_int(self, a: int, b: int) -> None:
        assert int(big(a) & big(b)) == a & b
        assert int(big(a) | big(b)) == a | b
        assert int(big(a) ^ big(b)) == a ^ b

    @pytest.mark.parametrize("a", OPERANDS)
    def test_invert(self, a: int) -> None:
        assert int(~big(a)) == ~a

    def test_results_canonical(self) -> None:
        result = big(-(2**64)) & big(2**64 - 1)
        assert result.sign == Sign.ZERO
        assert result.magnitude == ()

    def test_int_operands(self) -> None:
        assert 0xF0 & big(0x3C) == 0x30
        assert big(-1) | 5 == -1
        assert 6 ^ big(3) == 5


class TestShifts:
    @pytest.mark.parametrize("a", OPERANDS)
    @pytest.mark.parametrize("bits", [0, 1, 7, 31, 32, 33, 64, 100])
    def test_shifts_match_int(self, a: int, bits: int) -> None:
        assert int(big(a) << bits) == a << bits
        assert int(big(a) >> bits) == a >> bits

    def test_arithmetic_shift_floors(self) -> None:
        assert big(-5) >> 1 == -3
        assert big(-1) >> 100 == -1
        assert big(5) >> 100 == 0

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValueError):
            big(1) << -1
        with pytest.raises(ValueError):
            big(-1) >> -1

    def test_non_int_count_rejected(self) -> None:
        with pytest.raises(TypeError):
            big(1) << 1.0  # type: ignore[operator]

    def test_bit_length(self) -> None:
        assert big(0).bit_length() == 0
        assert big(-(2**40)).bit_length() == 41

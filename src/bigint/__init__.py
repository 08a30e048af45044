"""
Arbitrary-precision signed integers.

Limb-based arithmetic engine (base 2**32, sign-magnitude) with its own
addition, multiplication, long division, gcd, modular exponentiation,
two's-complement bitwise operations and text/byte conversions.
"""

from src.bigint.bigint import BigInt, compare, div_mod, gcd, pow_mod
from src.bigint.config import DEFAULT_PARSE_CONFIG, ParseConfig
from src.bigint.errors import (
    BigIntError,
    ConversionOverflow,
    DivisionByZero,
    InvalidModulus,
    NegativeExponent,
    ParseError,
)
from src.bigint.limbs import LIMB_BASE, LIMB_BITS, LIMB_MASK
from src.bigint.representation import Sign, normalize

__all__ = [
    # Value type
    "BigInt",
    "Sign",
    "normalize",
    # Operations
    "compare",
    "div_mod",
    "gcd",
    "pow_mod",
    # Config
    "ParseConfig",
    "DEFAULT_PARSE_CONFIG",
    # Limb constants
    "LIMB_BITS",
    "LIMB_BASE",
    "LIMB_MASK",
    # Errors
    "BigIntError",
    "ParseError",
    "DivisionByZero",
    "InvalidModulus",
    "NegativeExponent",
    "ConversionOverflow",
]

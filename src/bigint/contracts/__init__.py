"""
Contract Validation Module

Валидация JSON представления BigInt по формальной JSON Schema.
"""

from .validators import (
    BigIntContractValidator,
    ContractValidator,
    SchemaLoader,
    validate_bigint_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BigIntContractValidator",
    # Functions
    "validate_bigint_payload",
]

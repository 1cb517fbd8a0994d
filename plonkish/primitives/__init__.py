"""Primitives - Low-level field arithmetic."""

from plonkish.primitives.field import (
    FF,
    GOLDILOCKS_PRIME,
    MINUS_ONE,
    ONE,
    ZERO,
    add,
    batch_inverse,
    batch_inverse_or_zero,
    eq,
    from_int,
    from_u64,
    inverse,
    invert,
    is_zero,
    mul,
    neg,
    sub,
    to_field,
    to_signed,
)

__all__ = [
    "FF",
    "GOLDILOCKS_PRIME",
    "ZERO",
    "ONE",
    "MINUS_ONE",
    "from_u64",
    "from_int",
    "to_field",
    "to_signed",
    "add",
    "sub",
    "mul",
    "neg",
    "eq",
    "is_zero",
    "invert",
    "inverse",
    "batch_inverse",
    "batch_inverse_or_zero",
]

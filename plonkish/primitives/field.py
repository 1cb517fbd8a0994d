"""Goldilocks prime field GF(p).

Uses galois library for all field arithmetic. FF is the field type; scalars are
0-d FieldArrays and columns are 1-D FieldArrays, so the same helpers work on
single cells and whole columns.

There is no signed representation: "negative one" is p - 1. The prime is large
relative to any circuit length handled here, so honest running sums never wrap.
"""

from typing import Optional, Union

import galois
import numpy as np

from plonkish.errors import FieldInversionOfZero

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Base field GF(p) - Goldilocks prime field."""

ZERO = FF(0)
ONE = FF(1)
MINUS_ONE = FF(GOLDILOCKS_PRIME - 1)

FieldLike = Union[int, FF]


# --- Scalar Operations ---

def from_u64(value: int) -> FF:
    """Embed a non-negative integer into the field, reducing modulo p."""
    value = int(value)
    if value < 0:
        raise ValueError(f"from_u64 expects a non-negative integer, got {value}")
    return FF(value % GOLDILOCKS_PRIME)


def from_int(value: int) -> FF:
    """Embed a signed integer, mapping -k to p - k."""
    return FF(int(value) % GOLDILOCKS_PRIME)


def to_field(value: FieldLike) -> FF:
    """Coerce an int or field element to a field element."""
    if isinstance(value, FF):
        return value
    return from_int(value)


def add(a: FieldLike, b: FieldLike) -> FF:
    return to_field(a) + to_field(b)


def sub(a: FieldLike, b: FieldLike) -> FF:
    return to_field(a) - to_field(b)


def mul(a: FieldLike, b: FieldLike) -> FF:
    return to_field(a) * to_field(b)


def neg(a: FieldLike) -> FF:
    return -to_field(a)


def is_zero(a: FieldLike) -> bool:
    return int(to_field(a)) == 0


def eq(a: FieldLike, b: FieldLike) -> bool:
    return int(to_field(a)) == int(to_field(b))


def invert(a: FieldLike) -> Optional[FF]:
    """Return a^(-1), or None when a is zero."""
    a = to_field(a)
    if is_zero(a):
        return None
    return a ** -1


def inverse(a: FieldLike) -> FF:
    """Return a^(-1).

    Raises:
        FieldInversionOfZero: If a is zero
    """
    result = invert(a)
    if result is None:
        raise FieldInversionOfZero("Cannot invert the zero element")
    return result


def to_signed(a: FieldLike) -> int:
    """Lift a field element to the integer of smallest absolute value.

    Elements above (p - 1) / 2 are read as negative, so p - 1 maps to -1.
    """
    value = int(to_field(a))
    if value > (GOLDILOCKS_PRIME - 1) // 2:
        return value - GOLDILOCKS_PRIME
    return value


# --- Montgomery Batch Inversion ---

def batch_inverse(values):
    """Invert every entry of a galois array with a single field inversion.

    Prefix products are inverted once and unwound from the back. The result
    has the array's own field type, so extension or toy fields work too.

    Raises:
        FieldInversionOfZero: If any entry is zero
    """
    field = type(values)
    n = len(values)
    if n == 0:
        return field.Zeros(0)
    if np.any(values.view(np.ndarray) == 0):
        raise FieldInversionOfZero("Cannot batch-invert an array containing zero")

    prefix = field.Ones(n)
    running = field(1)
    for i, value in enumerate(values):
        running = running * value
        prefix[i] = running

    inverses = field.Zeros(n)
    acc = prefix[-1] ** -1
    for i in range(n - 1, 0, -1):
        inverses[i] = acc * prefix[i - 1]
        acc = acc * values[i]
    inverses[0] = acc
    return inverses


def batch_inverse_or_zero(values: FF) -> FF:
    """Batch inversion where zero entries map to zero.

    This is the witness convention of is-zero gadgets: the inverse column
    holds x^(-1) where x != 0 and 0 where x == 0, so the constraint
    1 - x * inv == 0 fails exactly on the zero rows.
    """
    zeros = values.view(np.ndarray) == 0
    safe = values.copy()
    safe[zeros] = 1
    results = batch_inverse(safe)
    results[zeros] = 0
    return results

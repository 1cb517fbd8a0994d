"""Tests for Goldilocks field helpers."""

import galois
import numpy as np
import pytest

from plonkish.errors import FieldInversionOfZero
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
    to_signed,
)

P = GOLDILOCKS_PRIME


def test_from_u64_reduces_modulo_p() -> None:
    assert int(from_u64(P)) == 0
    assert int(from_u64(P + 5)) == 5
    assert int(from_u64(2**64 - 1)) == (2**64 - 1) % P


def test_from_u64_rejects_negative() -> None:
    with pytest.raises(ValueError):
        from_u64(-1)


def test_from_int_maps_negative_to_p_minus_k() -> None:
    assert int(from_int(-1)) == P - 1
    assert eq(from_int(-1), MINUS_ONE)


def test_arithmetic_wraps_without_overflow() -> None:
    """Results stay in [0, p) at the top of the range."""
    assert int(add(P - 1, 1)) == 0
    assert int(add(P - 1, P - 1)) == P - 2
    assert int(sub(0, 1)) == P - 1
    assert int(mul(P - 1, P - 1)) == 1
    assert int(neg(1)) == P - 1
    assert int(neg(0)) == 0


def test_is_zero() -> None:
    assert is_zero(ZERO)
    assert is_zero(P)
    assert not is_zero(ONE)


def test_invert_returns_none_for_zero() -> None:
    assert invert(0) is None


def test_invert_nonzero() -> None:
    x = FF(1640)
    assert int(invert(x) * x) == 1


def test_inverse_raises_for_zero() -> None:
    with pytest.raises(FieldInversionOfZero):
        inverse(ZERO)
    # Also catchable as the builtin error
    with pytest.raises(ZeroDivisionError):
        inverse(0)


def test_to_signed() -> None:
    assert to_signed(P - 1) == -1
    assert to_signed(3) == 3
    assert to_signed(P - 7) == -7


def test_batch_inverse_matches_individual() -> None:
    values = FF([2, 3, 5, 7, P - 1])
    result = batch_inverse(values)
    assert np.array_equal(result * values, FF.Ones(5))


def test_batch_inverse_rejects_zero() -> None:
    with pytest.raises(FieldInversionOfZero):
        batch_inverse(FF([1, 0, 3]))


def test_batch_inverse_or_zero_maps_zero_to_zero() -> None:
    values = FF([4, 0, 9, 0])
    result = batch_inverse_or_zero(values)
    assert int(result[1]) == 0
    assert int(result[3]) == 0
    assert int(result[0] * values[0]) == 1
    assert int(result[2] * values[2]) == 1


def test_batch_inverse_empty() -> None:
    assert len(batch_inverse_or_zero(FF.Zeros(0))) == 0


def test_batch_inverse_keeps_field_type() -> None:
    """Works for any galois field, not only Goldilocks."""
    GF97 = galois.GF(97)
    values = GF97([3, 10, 96])
    result = batch_inverse(values)
    assert type(result) is GF97
    assert [int(v) for v in result * values] == [1, 1, 1]

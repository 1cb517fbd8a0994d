# tests/test_witness_base.py
import numpy as np
import pytest

from plonkish.constraints.columns import Cell, Column, ColumnKind
from plonkish.constraints.expressions import query
from plonkish.constraints.system import ConstraintSystem
from plonkish.errors import OutOfBounds, ShapeMismatch
from plonkish.primitives.field import FF, GOLDILOCKS_PRIME


def _shape():
    cs = ConstraintSystem()
    q = cs.fixed_column("q")
    a = cs.advice_column("a")
    i = cs.instance_column("i")
    cs.declare_gate("g", q, query(a))
    return cs.finalize(4), q, a, i


def test_witness_module_is_abstract():
    from plonkish.witness.base import WitnessModule

    with pytest.raises(TypeError):
        WitnessModule()  # Can't instantiate abstract class


def test_witness_module_subclass_must_implement_methods():
    from plonkish.witness.base import WitnessModule

    class IncompleteWitness(WitnessModule):
        pass

    with pytest.raises(TypeError):
        IncompleteWitness()


def test_cumulative_sum():
    from plonkish.witness.base import WitnessModule

    class Dummy(WitnessModule):
        def synthesize(self, assignment, private_input):
            pass

    result = Dummy()._compute_cumulative_sum(FF([1, 1, GOLDILOCKS_PRIME - 1, 1]))
    assert [int(v) for v in result] == [1, 2, 1, 2]


def test_assign_advice_and_read_back():
    from plonkish.witness.assignment import Assignment

    shape, q, a, _ = _shape()
    assignment = Assignment(shape)
    cell = assignment.assign_advice(a, 2, 7)
    assert cell == Cell(a, 2)
    assert [int(v) for v in assignment.advice(a)] == [0, 0, 7, 0]


def test_assign_advice_negative_value_wraps():
    from plonkish.witness.assignment import Assignment

    shape, _, a, _ = _shape()
    assignment = Assignment(shape)
    assignment.assign_advice(a, 0, -1)
    assert int(assignment.advice(a)[0]) == GOLDILOCKS_PRIME - 1


def test_assign_advice_out_of_bounds():
    from plonkish.witness.assignment import Assignment

    shape, _, a, _ = _shape()
    assignment = Assignment(shape)
    with pytest.raises(OutOfBounds):
        assignment.assign_advice(a, 4, 1)
    with pytest.raises(OutOfBounds):
        assignment.assign_advice(a, -1, 1)
    with pytest.raises(OutOfBounds):
        assignment.assign_advice_column(a, FF([1, 2, 3]), offset=2)


def test_assign_advice_wrong_kind():
    from plonkish.witness.assignment import Assignment

    shape, q, _, i = _shape()
    assignment = Assignment(shape)
    with pytest.raises(ShapeMismatch):
        assignment.assign_advice(q, 0, 1)
    with pytest.raises(ShapeMismatch):
        assignment.assign_advice(i, 0, 1)
    with pytest.raises(ShapeMismatch):
        assignment.assign_advice(Column(ColumnKind.ADVICE, 7), 0, 1)


def test_into_witness_snapshots_values():
    """Later writes to the assignment do not leak into an earlier witness."""
    from plonkish.witness.assignment import Assignment

    shape, q, a, _ = _shape()
    assignment = Assignment(shape)
    assignment.assign_advice(a, 0, 5)
    witness = assignment.into_witness()
    assignment.assign_advice(a, 0, 6)
    assert int(witness.advice[a][0]) == 5
    with pytest.raises(ValueError):
        witness.advice[a][1] = 1


def test_assignments_share_shape_but_not_storage():
    from plonkish.witness.assignment import Assignment

    shape, _, a, _ = _shape()
    first = Assignment(shape)
    second = Assignment(shape)
    first.assign_advice(a, 0, 9)
    assert first.shape is second.shape
    assert not np.any(second.advice(a).view(np.ndarray))

"""Tests for ConstraintSystem declaration and FrozenShape."""

import numpy as np
import pytest

from plonkish.constraints.columns import Cell, Column, ColumnKind
from plonkish.constraints.expressions import query
from plonkish.constraints.system import ConstraintSystem
from plonkish.constraints.table import BRACKET_TABLE, LookupTable
from plonkish.errors import OutOfBounds, ShapeFrozen, ShapeMismatch


class TestColumns:

    def test_indices_assigned_per_kind_in_order(self):
        cs = ConstraintSystem()
        a0 = cs.advice_column()
        f0 = cs.fixed_column()
        a1 = cs.advice_column()
        i0 = cs.instance_column()
        assert a0 == Column(ColumnKind.ADVICE, 0)
        assert a1 == Column(ColumnKind.ADVICE, 1)
        assert f0 == Column(ColumnKind.FIXED, 0)
        assert i0 == Column(ColumnKind.INSTANCE, 0)

    def test_declarations_are_deterministic(self):
        """Same declaration sequence gives equal handles."""
        def declare():
            cs = ConstraintSystem()
            return [cs.advice_column("x"), cs.fixed_column("q"), cs.advice_column("y")]

        assert declare() == declare()

    def test_name_is_not_part_of_identity(self):
        assert Column(ColumnKind.ADVICE, 0, "a") == Column(ColumnKind.ADVICE, 0, "b")


class TestGates:

    def test_gate_selector_must_be_fixed(self):
        cs = ConstraintSystem()
        a = cs.advice_column()
        with pytest.raises(ShapeMismatch):
            cs.declare_gate("bad", a, query(a))

    def test_gate_rejects_undeclared_column(self):
        cs = ConstraintSystem()
        q = cs.fixed_column()
        stranger = Column(ColumnKind.ADVICE, 5)
        with pytest.raises(ShapeMismatch):
            cs.declare_gate("bad", q, query(stranger))

    def test_gate_rotations(self):
        cs = ConstraintSystem()
        q = cs.fixed_column()
        a = cs.advice_column()
        gate = cs.declare_gate("step", q, query(a) - query(a, -1) - query(a, 1))
        assert gate.rotations() == (-1, 0, 1)


class TestLookups:

    def test_arity_mismatch_raises(self):
        cs = ConstraintSystem()
        a = cs.advice_column()
        b = cs.advice_column()
        t = cs.fixed_column()
        with pytest.raises(ShapeMismatch):
            cs.declare_lookup([query(a), query(b)], [t])

    def test_table_column_must_be_fixed(self):
        cs = ConstraintSystem()
        a = cs.advice_column()
        b = cs.advice_column()
        with pytest.raises(ShapeMismatch):
            cs.declare_lookup([query(a)], [b])

    def test_empty_lookup_raises(self):
        cs = ConstraintSystem()
        with pytest.raises(ShapeMismatch):
            cs.declare_lookup([], [])

    def test_lookup_selector_must_be_fixed(self):
        cs = ConstraintSystem()
        a = cs.advice_column()
        t = cs.fixed_column()
        with pytest.raises(ShapeMismatch):
            cs.declare_lookup([query(a)], [t], selector=a)


class TestTables:

    def test_table_padding_repeats_first_entry(self):
        """Rows past the table keep the value set exactly {40, 41}."""
        cs = ConstraintSystem()
        t = BRACKET_TABLE.load(cs)
        shape = cs.finalize(usable_rows=6)
        values = [int(v) for v in shape.fixed_values[t]]
        assert values[:2] == [40, 41]
        assert set(values) == {40, 41}
        assert shape.tables[t] == (40, 41)

    def test_table_sets_minimum_height(self):
        cs = ConstraintSystem()
        LookupTable("digits", tuple(range(10))).load(cs)
        shape = cs.finalize(usable_rows=3)
        assert shape.n_rows == 10

    def test_table_must_be_fixed_and_nonempty(self):
        cs = ConstraintSystem()
        a = cs.advice_column()
        t = cs.fixed_column()
        with pytest.raises(ShapeMismatch):
            cs.declare_table(a, [1])
        with pytest.raises(ShapeMismatch):
            cs.declare_table(t, [])

    def test_table_cannot_be_reassigned(self):
        cs = ConstraintSystem()
        t = cs.fixed_column()
        cs.declare_table(t, [1, 2])
        with pytest.raises(ShapeMismatch):
            cs.declare_table(t, [3])
        with pytest.raises(ShapeMismatch):
            cs.assign_fixed(t, 0, 5)

    def test_lookup_table_contains(self):
        assert 40 in BRACKET_TABLE
        assert 41 in BRACKET_TABLE
        assert 42 not in BRACKET_TABLE


class TestFinalize:

    def test_declarations_after_finalize_raise(self):
        cs = ConstraintSystem()
        q = cs.fixed_column()
        cs.finalize(4)
        with pytest.raises(ShapeFrozen):
            cs.advice_column()
        with pytest.raises(ShapeFrozen):
            cs.declare_gate("late", q, query(q))
        with pytest.raises(ShapeFrozen):
            cs.finalize(4)

    def test_row_count_covers_static_references(self):
        cs = ConstraintSystem()
        f = cs.fixed_column()
        a = cs.advice_column()
        cs.assign_fixed(f, 6, 1)
        cs.declare_equal(a.cell(8), f.cell(0))
        shape = cs.finalize(usable_rows=2)
        assert shape.n_rows == 9
        assert int(shape.fixed_values[f][6]) == 1

    def test_empty_system_has_one_row(self):
        assert ConstraintSystem().finalize().n_rows == 1

    def test_negative_rows_raise(self):
        cs = ConstraintSystem()
        f = cs.fixed_column()
        with pytest.raises(OutOfBounds):
            cs.assign_fixed(f, -1, 0)
        with pytest.raises(OutOfBounds):
            cs.declare_equal(f.cell(-1), f.cell(0))
        with pytest.raises(OutOfBounds):
            cs.finalize(-3)

    def test_fixed_values_are_read_only(self):
        cs = ConstraintSystem()
        f = cs.fixed_column()
        shape = cs.finalize(4)
        with pytest.raises(ValueError):
            shape.fixed_values[f][0] = 1
        with pytest.raises(TypeError):
            shape.fixed_values[f] = None

    def test_selectors_are_baked_in(self):
        """Selector rows are fixed at finalize; unset rows stay zero."""
        cs = ConstraintSystem()
        q = cs.fixed_column("q")
        a = cs.advice_column()
        cs.declare_gate("g", q, query(a))
        cs.assign_fixed(q, 1, 1)
        cs.assign_fixed(q, 2, 1)
        shape = cs.finalize(4)
        assert [int(v) for v in shape.fixed_values[q]] == [0, 1, 1, 0]

    def test_check_cell(self):
        cs = ConstraintSystem()
        a = cs.advice_column()
        shape = cs.finalize(4)
        shape.check_cell(Cell(a, 3))
        with pytest.raises(OutOfBounds):
            shape.check_cell(Cell(a, 4))
        with pytest.raises(ShapeMismatch):
            shape.check_cell(Cell(Column(ColumnKind.ADVICE, 9), 0))

    def test_unassigned_fixed_cells_are_zero(self):
        cs = ConstraintSystem()
        f = cs.fixed_column()
        shape = cs.finalize(5)
        assert not np.any(shape.fixed_values[f].view(np.ndarray))

"""Polynomial expressions over column queries.

Gates and lookup inputs are built from column queries at relative row
offsets, field constants and the arithmetic operators:

    encoded = query(config.encoded)
    char = query(config.char)
    prev_accum = query(config.accum, -1)
    identity = encoded - (81 - 2 * char)

Python ints are lifted to constants, negatives reduced modulo p. Evaluation is
delegated to a ConstraintContext, so one expression serves every row set.
"""

from dataclasses import dataclass
from typing import Iterator, Union

from plonkish.constraints.columns import Column
from plonkish.primitives.field import GOLDILOCKS_PRIME, FF


class Expression:
    """Base class for expression tree nodes."""

    # Make numpy defer to the reflected operators for FF <op> Expression
    __array_ufunc__ = None

    def evaluate(self, ctx) -> FF:
        """Evaluate at every row of ctx, returning one value per row."""
        raise NotImplementedError("Subclass must implement evaluate")

    def queries(self) -> Iterator["Query"]:
        """Yield every column query in the tree."""
        raise NotImplementedError("Subclass must implement queries")

    def degree(self) -> int:
        raise NotImplementedError("Subclass must implement degree")

    def __add__(self, other) -> "Expression":
        return Sum(self, as_expression(other))

    def __radd__(self, other) -> "Expression":
        return Sum(as_expression(other), self)

    def __sub__(self, other) -> "Expression":
        return Sum(self, Negated(as_expression(other)))

    def __rsub__(self, other) -> "Expression":
        return Sum(as_expression(other), Negated(self))

    def __mul__(self, other) -> "Expression":
        return Product(self, as_expression(other))

    def __rmul__(self, other) -> "Expression":
        return Product(as_expression(other), self)

    def __neg__(self) -> "Expression":
        return Negated(self)


@dataclass(frozen=True, eq=False)
class Constant(Expression):
    value: int

    def __post_init__(self):
        object.__setattr__(self, "value", int(self.value) % GOLDILOCKS_PRIME)

    def evaluate(self, ctx) -> FF:
        return ctx.constant(self.value)

    def queries(self) -> Iterator["Query"]:
        return iter(())

    def degree(self) -> int:
        return 0

    def __repr__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, eq=False)
class Query(Expression):
    """Value of a column at the current row shifted by rotation."""
    column: Column
    rotation: int = 0

    def evaluate(self, ctx) -> FF:
        return ctx.query(self.column, self.rotation)

    def queries(self) -> Iterator["Query"]:
        yield self

    def degree(self) -> int:
        return 1

    def __repr__(self) -> str:
        if self.rotation == 0:
            return str(self.column)
        return f"{self.column}[{self.rotation:+d}]"


def query(column: Column, rotation: int = 0) -> Query:
    """Query column at a relative row offset (-1 previous, 0 current, 1 next)."""
    return Query(column, rotation)


@dataclass(frozen=True, eq=False)
class Sum(Expression):
    left: Expression
    right: Expression

    def evaluate(self, ctx) -> FF:
        return self.left.evaluate(ctx) + self.right.evaluate(ctx)

    def queries(self) -> Iterator["Query"]:
        yield from self.left.queries()
        yield from self.right.queries()

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def __repr__(self) -> str:
        return f"({self.left!r} + {self.right!r})"


@dataclass(frozen=True, eq=False)
class Product(Expression):
    left: Expression
    right: Expression

    def evaluate(self, ctx) -> FF:
        return self.left.evaluate(ctx) * self.right.evaluate(ctx)

    def queries(self) -> Iterator["Query"]:
        yield from self.left.queries()
        yield from self.right.queries()

    def degree(self) -> int:
        return self.left.degree() + self.right.degree()

    def __repr__(self) -> str:
        return f"{self.left!r} * {self.right!r}"


@dataclass(frozen=True, eq=False)
class Negated(Expression):
    inner: Expression

    def evaluate(self, ctx) -> FF:
        return -self.inner.evaluate(ctx)

    def queries(self) -> Iterator["Query"]:
        return self.inner.queries()

    def degree(self) -> int:
        return self.inner.degree()

    def __repr__(self) -> str:
        return f"-{self.inner!r}"


ExpressionLike = Union[Expression, Column, int, FF]


def as_expression(value: ExpressionLike) -> Expression:
    """Lift a column (queried at the current row), int or field element."""
    if isinstance(value, Expression):
        return value
    if isinstance(value, Column):
        return query(value)
    if isinstance(value, (int, FF)):
        return Constant(int(value))
    raise TypeError(f"Cannot build an expression from {type(value).__name__}")

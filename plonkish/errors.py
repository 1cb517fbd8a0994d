"""Exception hierarchy for circuit construction and witness synthesis.

Construction errors (ShapeMismatch, OutOfBounds, ShapeFrozen) are programmer
errors and abort circuit building. Constraint violations are never raised:
a filled matrix that breaks a gate, lookup or copy constraint is reported by
the backend as a rejected verdict.
"""


class PlonkishError(Exception):
    """Base class for all errors raised by this package."""


class ShapeMismatch(PlonkishError, ValueError):
    """A declaration or assignment does not fit the declared column layout.

    Raised for lookups whose input and table arities differ, selectors or
    table columns that are not Fixed, and values written to a column of the
    wrong kind.
    """


class OutOfBounds(PlonkishError, IndexError):
    """A row index (absolute or rotated) lies outside the finalized matrix."""


class FieldInversionOfZero(PlonkishError, ZeroDivisionError):
    """Attempted to invert the zero element."""


class ShapeFrozen(PlonkishError):
    """A declaration was attempted after the constraint system was finalized."""

"""Constraint system declaration and per-circuit layouts.

This package provides the generic PLONKish building blocks (columns,
expressions, gates, lookups, copy constraints, frozen shapes) and the
hand-written circuit layouts built on them. CIRCUIT_REGISTRY maps circuit
names to their circuit classes.
"""

from .base import ConstraintContext, active_rows
from .brackets import BracketCircuit, BracketColumns, BracketConfig
from .columns import Cell, Column, ColumnKind, CopyConstraint
from .expressions import Constant, Expression, Negated, Product, Query, Sum, as_expression, query
from .system import ConstraintSystem, FrozenShape, Gate, Lookup
from .table import BRACKET_TABLE, LookupTable

# Registry mapping circuit names to circuit classes
CIRCUIT_REGISTRY: dict[str, type] = {
    "brackets": BracketCircuit,
}


def get_circuit(circuit_name: str, config=None):
    """Build a circuit by name.

    Args:
        circuit_name: Name of the circuit (e.g., 'brackets')
        config: Circuit-specific configuration, or None for defaults

    Raises:
        KeyError: If no circuit is registered under the name
    """
    if circuit_name in CIRCUIT_REGISTRY:
        return CIRCUIT_REGISTRY[circuit_name](config)
    raise KeyError(
        f"No circuit '{circuit_name}'. "
        f"Available: {list(CIRCUIT_REGISTRY.keys())}"
    )


__all__ = [
    "ConstraintContext",
    "active_rows",
    "Column",
    "ColumnKind",
    "Cell",
    "CopyConstraint",
    "Expression",
    "Constant",
    "Query",
    "Sum",
    "Product",
    "Negated",
    "as_expression",
    "query",
    "ConstraintSystem",
    "FrozenShape",
    "Gate",
    "Lookup",
    "LookupTable",
    "BRACKET_TABLE",
    "BracketCircuit",
    "BracketColumns",
    "BracketConfig",
    "CIRCUIT_REGISTRY",
    "get_circuit",
]

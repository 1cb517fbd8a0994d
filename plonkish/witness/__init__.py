"""Witness generation modules.

Each circuit has its own WitnessModule that fills a per-instance Assignment
directly in readable Python code. The WITNESS_REGISTRY maps circuit names to
their witness module classes.
"""

from .assignment import Assignment
from .base import WitnessModule
from .brackets import BracketWitness

# Registry mapping circuit names to hand-written witness module classes
WITNESS_REGISTRY: dict[str, type[WitnessModule]] = {
    'brackets': BracketWitness,
}


def get_witness_module(circuit_name: str, columns) -> WitnessModule:
    """Get witness module instance for a circuit.

    Args:
        circuit_name: Name of the circuit (e.g., 'brackets')
        columns: Column handles returned by the circuit's configure()

    Returns:
        WitnessModule instance for the circuit

    Raises:
        KeyError: If no witness module is registered for the circuit
    """
    if circuit_name in WITNESS_REGISTRY:
        return WITNESS_REGISTRY[circuit_name](columns)
    raise KeyError(f"No witness module for circuit '{circuit_name}'. "
                   f"Available: {list(WITNESS_REGISTRY.keys())}")


__all__ = [
    'Assignment',
    'WitnessModule',
    'BracketWitness',
    'WITNESS_REGISTRY',
    'get_witness_module',
]

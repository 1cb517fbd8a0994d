"""Drive witness synthesis and hand the results to a backend.

Example:
    circuit = BracketCircuit(BracketConfig(max_len=16))
    result = prove(circuit, "(()())")
    results = prove_many(circuit, ["()", ")(", "(("], max_workers=4)

The circuit caches one FrozenShape per input length and shares it read-only.
Every input gets its own Assignment, so inputs are synthesized independently
on a thread pool.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from plonkish.constraints.brackets import BracketCircuit
from plonkish.protocol.backend import Backend, MockBackend, VerificationResult

logger = logging.getLogger(__name__)


def prove(
    circuit: BracketCircuit,
    text: str,
    backend: Optional[Backend] = None,
) -> VerificationResult:
    """Synthesize a witness for text and submit it to backend.

    The input length is public: it picks the shape the backend checks
    against. The bracket circuit has no Instance columns, so the instance
    vector is empty.

    Raises:
        OutOfBounds: If text is longer than the circuit's max_len
    """
    backend = backend or MockBackend()
    witness = circuit.synthesize(text)
    result = backend.verify(circuit.shape_for(len(text)), {}, witness)
    logger.debug("Input of length %d: %s", len(text), result.verdict.value)
    return result


def prove_many(
    circuit: BracketCircuit,
    inputs: Iterable[str],
    backend: Optional[Backend] = None,
    max_workers: Optional[int] = None,
) -> List[VerificationResult]:
    """Prove independent inputs concurrently, preserving input order."""
    backend = backend or MockBackend()
    inputs = list(inputs)
    logger.info("Proving %d inputs (max_len=%d)", len(inputs), circuit.config.max_len)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(lambda text: prove(circuit, text, backend), inputs))

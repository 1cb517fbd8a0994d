"""Protocol - Witness data and the backends consuming it."""

from plonkish.protocol.backend import (
    Backend,
    CopyFailure,
    GateFailure,
    LookupFailure,
    MockBackend,
    VerificationResult,
    Verdict,
    build_matrix,
)
from plonkish.protocol.data import Witness

__all__ = [
    "Witness",
    "Backend",
    "MockBackend",
    "Verdict",
    "VerificationResult",
    "GateFailure",
    "LookupFailure",
    "CopyFailure",
    "build_matrix",
]

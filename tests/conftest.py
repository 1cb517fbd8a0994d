"""Shared fixtures for plonkish tests."""

import pytest

from plonkish.constraints.brackets import BracketCircuit, BracketConfig
from plonkish.protocol.backend import MockBackend

MAX_LEN = 10


@pytest.fixture(scope="module")
def circuit() -> BracketCircuit:
    """One bracket circuit shared by every test in a module."""
    return BracketCircuit(BracketConfig(max_len=MAX_LEN))


@pytest.fixture
def backend() -> MockBackend:
    return MockBackend()

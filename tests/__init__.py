"""Tests - Test suite for the plonkish package."""

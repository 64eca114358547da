"""Conformance and regression checks for the ENSEK energy-trading API."""

__version__ = "0.1.0"

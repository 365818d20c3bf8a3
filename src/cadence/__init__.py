"""Cadence - recurring to-do engine."""

__version__ = "0.1.0"

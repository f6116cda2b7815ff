"""Sense Layer - element resolution, conditions and descriptions."""

from vigil.layers.sense.resolver import Absent, ElementResolver, Fatal, Found

__all__ = ["ElementResolver", "Found", "Absent", "Fatal"]

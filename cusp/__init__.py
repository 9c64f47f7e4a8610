"""Cusp: cubic spline editor for game motion paths."""

__version__ = "0.9.0"

"""Breakeven report rendering: financial derivation, chart geometry and PDF assembly."""

__version__ = "0.1.0"

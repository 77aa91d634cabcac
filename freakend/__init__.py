"""Freakend -- generate backend code instantly."""

__version__ = "1.0.0"

"""Recursively sign files for secure boot."""

__version__ = "0.1.0"

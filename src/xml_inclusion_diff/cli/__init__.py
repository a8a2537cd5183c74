"""Command-line interface module for XML inclusion diff.

This module provides the xmldiff tool, which compares an expected document
against an actual one and reports the first difference found.
"""

from .main import main

__all__ = ["main"]

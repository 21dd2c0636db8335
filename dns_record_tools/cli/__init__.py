"""
Command-line interface components.

This package contains the dns-records entry point.
"""

from .main import main

__all__ = ["main"]

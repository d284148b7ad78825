"""Command-line interface for genine.

Reads one markup file (``index.html`` by default) and prints its tree.
"""

from .main import main

__all__ = ["main"]

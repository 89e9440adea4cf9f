"""
Command-line interface for refschema.
"""

from .main import app, main

__all__ = ["app", "main"]

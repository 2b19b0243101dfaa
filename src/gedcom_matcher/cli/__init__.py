
"""
CLI package for gedcom_matcher.

Provides the Typer application entrypoint.
"""

from gedcom_matcher.cli.app import app, main

__all__ = [
    "app",
    "main",
]

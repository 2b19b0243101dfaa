
"""
CLI command modules for gedcom_matcher.

Each command module defines a single Typer-compatible command function.
"""

from gedcom_matcher.cli.commands.merge import merge_command

__all__ = [
    "merge_command",
]

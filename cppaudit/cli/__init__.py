from __future__ import annotations

"""Command-line interface for cppaudit.

This package provides the CLI application built with Typer.

Modules
-------
cli : Main CLI implementation

Examples
--------
Run from command line:
    $ python -m cppaudit run

See Also
--------
cppaudit.application : Application logic
"""

from .cli import app

__all__ = ["app"]

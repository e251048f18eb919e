"""Main entry point for running cppaudit as a module.

This module enables running cppaudit via `python -m cppaudit`.

Examples
--------
$ python -m cppaudit --help
$ python -m cppaudit run --mode files

See Also
--------
cppaudit.cli.cli : CLI implementation
"""
from __future__ import annotations

from .main import main


if __name__ == "__main__":
    main()

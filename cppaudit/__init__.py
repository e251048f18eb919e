"""cppaudit - cppcheck diagnostic normalization pipeline.

cppaudit runs cppcheck over a C/C++ source tree and turns its XML report
into a stable JSON list of issues.

The package provides:
- Scope selection of the files declared in ``analysis_config.json``
- cppcheck invocation in directory or explicit file-list mode
- Parsing of cppcheck XML reports
- Mapping of cppcheck diagnostic identifiers onto an internal issue taxonomy
- JSON export of the resulting issues

Examples
--------
Run the pipeline from the command line:
    $ python -m cppaudit run --toolbox /toolbox --code /code

See Also
--------
cppaudit.cli.cli : Command-line interface
cppaudit.application : Application orchestration layer
cppaudit.core : Core domain models and exceptions
"""
from __future__ import annotations

__version__ = "1.0.0"
__author__ = "Anush Krishna"
__license__ = "MIT"

__all__ = ["__version__", "__author__", "__license__"]

from __future__ import annotations

"""cppcheck C/C++ static analyzer wrapper.

Classes
-------
CppcheckTool : cppcheck tool wrapper

Examples
--------
>>> from cppaudit.infra.tools.cppcheck import CppcheckTool
>>> tool = CppcheckTool(report_path="/toolbox/cppcheck_error.xml")
>>> result = tool.audit("/code")

See Also
--------
cppaudit.core.models.parsers.cppcheck : cppcheck report parser
"""

from .base import OUTPUT_FILE, OUTPUT_STDERR, CppcheckTool

__all__ = ["CppcheckTool", "OUTPUT_FILE", "OUTPUT_STDERR"]

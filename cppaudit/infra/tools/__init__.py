from __future__ import annotations

"""Static analysis tool wrapper implementations.

Supported Tools
---------------
- cppcheck : C/C++ static analyzer

Examples
--------
>>> from cppaudit.infra.tools.cppcheck import CppcheckTool
>>> tool = CppcheckTool(report_path="/toolbox/cppcheck_error.xml")
>>> result = tool.audit("/code")

See Also
--------
cppaudit.infra.tools.base : Base tool classes
cppaudit.application.orchestrator : Tool orchestration
"""

from .base import TIMEOUT_RETURNCODE, AuditTool, CommandAuditTool


__all__ = [
    "TIMEOUT_RETURNCODE",
    "AuditTool",
    "CommandAuditTool",
]

"""Analyzer report parsers.

Each parser turns a tool's native output into pydantic models and classifies
those models into :class:`cppaudit.core.models.issue.Issue` records.

Supported Tools
---------------
- cppcheck : C/C++ static analyzer (XML version 2 reports)

Examples
--------
>>> from cppaudit.core.models.parsers import parse_cppcheck_xml
>>> findings = parse_cppcheck_xml(xml_text)

See Also
--------
cppaudit.application.orchestrator : Pipeline that drives the parsers
"""
from __future__ import annotations

from .common import ToolRunResult
from .cppcheck import (
    CppcheckError,
    CppcheckLocation,
    build_issue_text,
    cppcheck_findings_to_issues,
    load_cppcheck_report,
    parse_cppcheck_xml,
)

__all__ = [
    "ToolRunResult",
    "CppcheckError",
    "CppcheckLocation",
    "build_issue_text",
    "cppcheck_findings_to_issues",
    "load_cppcheck_report",
    "parse_cppcheck_xml",
]

"""Data models for cppaudit.

This package holds the pydantic models shared by the pipeline: the decoded
input config, raw cppcheck findings, the issue taxonomy and the emitted
result records.
"""
from __future__ import annotations

from .analysis_config import AnalysisConfig, AnalyzerMeta, load_analysis_config
from .issue import Issue, Location, Mark, Occurrence, Position
from .issue_codes import CPPCHECK_ISSUE_CODES, IssueCode, map_diagnostic
from .parsers import (
    CppcheckError,
    CppcheckLocation,
    ToolRunResult,
    build_issue_text,
    cppcheck_findings_to_issues,
    load_cppcheck_report,
    parse_cppcheck_xml,
)

__all__ = [
    "AnalysisConfig",
    "AnalyzerMeta",
    "load_analysis_config",
    "Issue",
    "Location",
    "Mark",
    "Occurrence",
    "Position",
    "CPPCHECK_ISSUE_CODES",
    "IssueCode",
    "map_diagnostic",
    "CppcheckError",
    "CppcheckLocation",
    "ToolRunResult",
    "build_issue_text",
    "cppcheck_findings_to_issues",
    "load_cppcheck_report",
    "parse_cppcheck_xml",
]

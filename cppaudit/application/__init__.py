"""Application layer for cppaudit.

This package contains the scope filter and the pipeline orchestration.
"""
from __future__ import annotations

from .file import is_in_scope, select_files
from .orchestrator import PipelineReport, run_pipeline

__all__ = [
    "is_in_scope",
    "select_files",
    "PipelineReport",
    "run_pipeline",
]

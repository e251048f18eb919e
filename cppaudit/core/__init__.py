"""Core domain logic for cppaudit.

This package contains the data models, the cppcheck report parser and
classifier, exceptions and logging configuration.
"""
from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    CppAuditError,
    FileSystemError,
    ParserError,
    ToolExecutionError,
)

__all__ = [
    "ConfigurationError",
    "CppAuditError",
    "FileSystemError",
    "ParserError",
    "ToolExecutionError",
]

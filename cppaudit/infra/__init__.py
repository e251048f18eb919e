"""Infrastructure layer for cppaudit.

This package contains the wrappers around external analysis tools.
"""
from __future__ import annotations

__all__ = []

"""Result artifact storage."""
from __future__ import annotations

from .writers import EMPTY_PLACEHOLDER, load_issues, serialize_issues, write_issues

__all__ = ["EMPTY_PLACEHOLDER", "load_issues", "serialize_issues", "write_issues"]

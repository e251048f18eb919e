# cppaudit/storage/writers.py
"""JSON result artifact writer.

The result artifact is a JSON array of issues::

    [{"issue_text": "...", "issue_code": "CXX-E1000",
      "location": {"path": "/code/a.cpp",
                   "position": {"begin": {"line": 10, "column": 3},
                                "end": {"line": 10, "column": 3}}}}]

Every run leaves a parseable artifact behind: when serialization fails, the
placeholder ``{}`` is written instead.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from cppaudit.core.exceptions import FileSystemError, ParserError
from cppaudit.core.models import Issue

logger = logging.getLogger(__name__)

#: Written when the issues cannot be serialized
EMPTY_PLACEHOLDER = "{}"

_ISSUES = TypeAdapter(List[Issue])


def serialize_issues(issues: Sequence[Issue]) -> Tuple[str, bool]:
    """
    Return ``(payload, ok)``. On failure the payload is the empty-object
    placeholder and ``ok`` is False.
    """
    try:
        return _ISSUES.dump_json(list(issues)).decode("utf-8"), True
    except (PydanticSerializationError, ValueError, TypeError) as exc:
        logger.error("Failed to serialize %d issue(s): %s", len(issues), exc)
        return EMPTY_PLACEHOLDER, False


def write_issues(issues: Sequence[Issue], destination: Union[str, Path]) -> bool:
    """
    Serialize ``issues`` and write them to ``destination`` in one write,
    replacing any previous content.

    Returns False when the placeholder had to be written.

    Raises
    ------
    FileSystemError
        If the artifact cannot be written.
    """
    payload, ok = serialize_issues(issues)
    logger.debug("%s", payload)
    path = Path(destination)
    try:
        path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise FileSystemError(str(path), exc.strerror or str(exc)) from exc
    return ok


def load_issues(source: Union[str, Path]) -> List[Issue]:
    """
    Read an artifact written by :func:`write_issues`.

    The empty-object placeholder reads as no issues.
    """
    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileSystemError(str(path), exc.strerror or str(exc)) from exc
    if text.strip() == EMPTY_PLACEHOLDER:
        return []
    try:
        return _ISSUES.validate_json(text)
    except ValidationError as exc:
        raise ParserError("result", f"invalid result artifact {path}: {exc}") from exc


__all__ = ["EMPTY_PLACEHOLDER", "serialize_issues", "write_issues", "load_issues"]

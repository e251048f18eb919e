"""Tests for the issue model and the issue code taxonomy."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cppaudit.core.models import (
    CPPCHECK_ISSUE_CODES,
    Issue,
    IssueCode,
    Mark,
    Occurrence,
    Position,
)
from cppaudit.core.models.issue_codes import MISRA_C2012_IDS


def test_issue_codes_are_unique() -> None:
    values = [code.value for code in IssueCode]
    assert len(values) == len(set(values))


def test_issue_code_str_is_value() -> None:
    assert str(IssueCode.MEMORY_LEAK) == "CXX-E1002"


def test_every_misra_rule_maps_to_one_code() -> None:
    assert "misra-c2012-1.1" in MISRA_C2012_IDS
    assert "misra-c2012-22.10" in MISRA_C2012_IDS
    assert all(CPPCHECK_ISSUE_CODES[i] is IssueCode.MISRA_C2012 for i in MISRA_C2012_IDS)


def test_point_position_has_equal_ends() -> None:
    position = Position.point(4, 2)
    assert position.begin == position.end == Mark(line=4, column=2)


def test_negative_marks_rejected() -> None:
    with pytest.raises(ValidationError):
        Mark(line=-1, column=0)


def test_issue_is_immutable() -> None:
    issue = Issue.at("m", IssueCode.DIVISION_BY_ZERO, path="/a.c", line=1, column=1)
    with pytest.raises(ValidationError):
        issue.issue_text = "changed"


def test_occurrence() -> None:
    issue = Issue.at("m", IssueCode.DIVISION_BY_ZERO, path="/a.c", line=3, column=7)
    assert issue.occurrence() == Occurrence(
        file="/a.c", begin=Mark(line=3, column=7), end=Mark(line=3, column=7)
    )

"""Result data model emitted by the pipeline.

An :class:`Issue` is what consumers see: a message, an internal issue code and
a location. Positions are single points because cppcheck reports a line and
column only, so ``begin`` and ``end`` always carry the same mark.

Classes
-------
Mark : 1-based (line, column) pair
Position : begin/end span of marks
Location : path plus position
Issue : classified finding ready for serialization
Occurrence : lightweight (file, begin, end) record for bookkeeping

Examples
--------
>>> issue = Issue.at(
...     "nullPointer",
...     IssueCode.NULL_POINTER_DEREFERENCE,
...     path="/code/a.cpp",
...     line=10,
...     column=3,
... )
>>> issue.location.position.begin == issue.location.position.end
True

See Also
--------
cppaudit.storage.writers : JSON serialization of issues
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .issue_codes import IssueCode


class Mark(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    column: int = Field(ge=0)


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    begin: Mark
    end: Mark

    @classmethod
    def point(cls, line: int, column: int) -> "Position":
        mark = Mark(line=line, column=column)
        return cls(begin=mark, end=mark)


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    position: Position


class Occurrence(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str
    begin: Mark
    end: Mark


class Issue(BaseModel):
    """A classified finding. Immutable once built."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    issue_text: str
    issue_code: IssueCode
    location: Location

    @classmethod
    def at(
        cls, issue_text: str, issue_code: IssueCode, *, path: str, line: int, column: int
    ) -> "Issue":
        """Build an issue anchored at a single point."""
        return cls(
            issue_text=issue_text,
            issue_code=issue_code,
            location=Location(path=path, position=Position.point(line, column)),
        )

    def occurrence(self) -> Occurrence:
        position = self.location.position
        return Occurrence(file=self.location.path, begin=position.begin, end=position.end)


__all__ = ["Mark", "Position", "Location", "Occurrence", "Issue"]

"""Parser and classifier for cppcheck XML (version 2) reports.

cppcheck's ``--xml`` output looks like::

    <results version="2">
      <cppcheck version="2.13"/>
      <errors>
        <error id="nullPointer" severity="error" msg="Null pointer dereference: p">
          <location file="/code/a.cpp" line="10" column="3"/>
          <symbol>p</symbol>
        </error>
      </errors>
    </results>

:func:`parse_cppcheck_xml` turns that document into :class:`CppcheckError`
models and :func:`cppcheck_findings_to_issues` maps them onto the internal
taxonomy, dropping anything unmapped, unlocated or out of scope.

Functions
---------
parse_cppcheck_xml : Decode report text into raw findings
load_cppcheck_report : Read and decode a report file if it exists
build_issue_text : Message rewriting rule for a single finding
cppcheck_findings_to_issues : Classify raw findings into issues

Examples
--------
>>> findings = parse_cppcheck_xml(report_text)
>>> issues = cppcheck_findings_to_issues(findings, in_scope={Path("/code/a.cpp")})

See Also
--------
cppaudit.infra.tools.cppcheck : cppcheck tool wrapper
cppaudit.core.models.issue_codes : Diagnostic mapping table
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import AbstractSet, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cppaudit.core.exceptions import ParserError

from ..issue import Issue
from ..issue_codes import map_diagnostic

PARSER_NAME = "cppcheck"
MISRA_PREFIX = "misra"


class CppcheckLocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    file: str
    line: int = Field(ge=0)
    column: int = Field(default=0, ge=0)
    info: Optional[str] = None


class CppcheckError(BaseModel):
    """One ``<error>`` entry of the report."""

    model_config = ConfigDict(extra="ignore")

    id: str
    msg: str = ""
    severity: Optional[str] = None
    verbose: Optional[str] = None
    cwe: Optional[int] = None
    symbol: List[str] = []
    location: List[CppcheckLocation] = []

    @property
    def primary_location(self) -> Optional[CppcheckLocation]:
        return self.location[0] if self.location else None


def _fields(element: ET.Element) -> Dict[str, str]:
    """Collect attributes and simple child elements; attributes win."""
    fields: Dict[str, str] = {}
    for child in element:
        if len(child) == 0 and child.text is not None:
            fields.setdefault(child.tag, child.text.strip())
    fields.update(element.attrib)
    return fields


def _error_payload(element: ET.Element) -> Dict[str, object]:
    payload: Dict[str, object] = {
        key: value
        for key, value in _fields(element).items()
        if key not in {"symbol", "location"}
    }
    payload["symbol"] = [
        (symbol.text or "").strip() for symbol in element.findall("symbol")
    ]
    payload["location"] = [_fields(loc) for loc in element.findall("location")]
    return payload


def parse_cppcheck_xml(xml_text: Union[str, bytes]) -> List[CppcheckError]:
    """
    Decode a cppcheck XML report into raw findings, in document order.

    A document without an ``<errors>`` collection yields no findings. Text that
    is not well-formed XML, or entries that do not fit the expected shape,
    raise :class:`ParserError`.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise ParserError(PARSER_NAME, f"report is not well-formed XML: {exc}") from exc

    errors = root if root.tag == "errors" else root.find("errors")
    if errors is None:
        return []

    findings: List[CppcheckError] = []
    for index, element in enumerate(errors.findall("error")):
        try:
            findings.append(CppcheckError.model_validate(_error_payload(element)))
        except ValidationError as exc:
            raise ParserError(
                PARSER_NAME,
                f"malformed <error> entry #{index}: {exc.error_count()} validation error(s)",
                {"index": index, "errors": exc.errors(include_url=False)},
            ) from exc
    return findings


def load_cppcheck_report(path: Union[str, Path]) -> Optional[List[CppcheckError]]:
    """
    Read and parse the report at ``path``.

    Returns None when no report exists, which is how cppcheck signals that it
    had nothing to report. Unreadable or malformed reports raise ParserError.
    """
    report = Path(path)
    if not report.exists():
        return None
    try:
        payload = report.read_bytes()
    except OSError as exc:
        raise ParserError(
            PARSER_NAME, f"cannot read report: {exc}", {"path": str(report)}
        ) from exc
    try:
        return parse_cppcheck_xml(payload)
    except ParserError as exc:
        exc.details.setdefault("path", str(report))
        raise


def build_issue_text(finding: CppcheckError) -> str:
    """
    MISRA addon messages carry no useful text, so they are replaced by
    ``"<id> <first symbol>"``. Anything else keeps the message as-is.
    """
    if finding.msg.startswith(MISRA_PREFIX):
        symbol = finding.symbol[0] if finding.symbol else ""
        return f"{finding.id} {symbol}"
    return finding.msg


def cppcheck_findings_to_issues(
    findings: Sequence[CppcheckError],
    in_scope: Optional[AbstractSet[Path]] = None,
) -> List[Issue]:
    """
    Classify raw findings into issues, preserving input order.

    Findings are dropped when their identifier has no issue code, when they
    carry no location, or when ``in_scope`` is given and the first location's
    file is not in it.
    """
    issues: List[Issue] = []
    for finding in findings:
        issue_code = map_diagnostic(finding.id)
        if issue_code is None:
            continue
        location = finding.primary_location
        if location is None:
            continue
        if in_scope is not None and Path(location.file) not in in_scope:
            continue
        issues.append(
            Issue.at(
                build_issue_text(finding),
                issue_code,
                path=location.file,
                line=location.line,
                column=location.column,
            )
        )
    return issues


__all__ = [
    "CppcheckLocation",
    "CppcheckError",
    "parse_cppcheck_xml",
    "load_cppcheck_report",
    "build_issue_text",
    "cppcheck_findings_to_issues",
]

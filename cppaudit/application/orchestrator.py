"""
cppcheck diagnostic pipeline

This module runs one complete, sequential pass of the pipeline:

1. load ``analysis_config.json`` and reduce its file list to the in-scope set;
2. run cppcheck over the code directory or the scoped files;
3. parse the XML report cppcheck left behind, if any;
4. classify the findings into issues;
5. write the JSON result artifact.

Every step up to the final write is best-effort: a missing config, a crashed
analyzer or a malformed report is logged and the run continues with fewer
(or zero) findings. Only failing to write the result artifact is fatal.

Example:
    Run the pipeline with settings from the environment::

        config = ConfigLoader().load_config()
        report = run_pipeline(config, setup_logging(config.logging.level))

Author: Anush Krishna
License: MIT
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set

from cppaudit.application.file import select_files
from cppaudit.config.config_schema import Config
from cppaudit.core.exceptions import ConfigurationError, ParserError, ToolExecutionError
from cppaudit.core.logging_config import TRACE
from cppaudit.core.models import (
    Issue,
    ToolRunResult,
    cppcheck_findings_to_issues,
    load_analysis_config,
    load_cppcheck_report,
)
from cppaudit.core.models.parsers.cppcheck import CppcheckError
from cppaudit.infra.tools.cppcheck import CppcheckTool
from cppaudit.storage.writers import write_issues


@dataclass
class PipelineReport:
    """Summary of one pipeline run."""

    scoped_files: Set[Path] = field(default_factory=set)
    run: Optional[ToolRunResult] = None
    findings: int = 0
    issues: List[Issue] = field(default_factory=list)
    result_path: Optional[Path] = None
    placeholder_written: bool = False

    @property
    def issues_per_file(self) -> Dict[str, int]:
        return dict(Counter(issue.occurrence().file for issue in self.issues))


def scope_from_config(config: Config, logger: logging.Logger) -> Set[Path]:
    """Load the analysis config and return its in-scope files.

    A missing or invalid analysis config yields an empty scope.
    """
    path = config.paths.analysis_config_path
    try:
        analysis = load_analysis_config(path)
    except ConfigurationError as exc:
        logger.error(
            "Failed to load analysis config, at `%s`, using empty file list: %s",
            path,
            exc.message,
        )
        return set()

    logger.debug(
        "Analyzer meta: name=%r enabled=%s",
        analysis.analyzer_meta.name,
        analysis.analyzer_meta.enabled,
    )
    files = select_files(
        analysis.files,
        extensions=config.scope.extensions,
        max_size=config.scope.max_file_size,
    )
    logger.info("%d of %d declared file(s) in scope", len(files), len(analysis.files))
    logger.debug("Scoped files: %s", sorted(str(f) for f in files))
    return files


def invoke_analyzer(
    config: Config, files: Set[Path], logger: logging.Logger
) -> Optional[ToolRunResult]:
    """Run cppcheck; failures are logged and never raised."""
    tool = CppcheckTool.from_config(config.analyzer, config.paths.report_path)
    if config.analyzer.mode == "files":
        target = sorted(str(f) for f in files)
    else:
        target = config.paths.code

    try:
        run = tool.audit(target)
    except ToolExecutionError as exc:
        logger.error("%s", exc.message)
        return None

    logger.log(TRACE, "%r", run)
    if run.timed_out:
        logger.warning(
            "%s killed after %ss timeout; continuing with its partial output",
            run.tool,
            config.analyzer.timeout,
        )
    elif run.returncode != 0:
        logger.warning("%s exited with status %d", run.tool, run.returncode)
    logger.info("%s finished in %.2fs", run.tool, run.duration_s)
    return run


def read_findings(report_path: Path, logger: logging.Logger) -> List[CppcheckError]:
    """Parse the report if present; a malformed report counts as empty."""
    try:
        findings = load_cppcheck_report(report_path)
    except ParserError as exc:
        logger.warning("Ignoring cppcheck report at `%s`: %s", report_path, exc.message)
        return []
    if findings is None:
        logger.info("No cppcheck report at `%s`; nothing to classify", report_path)
        return []
    logger.debug("Parsed %d finding(s) from `%s`", len(findings), report_path)
    return findings


def run_pipeline(config: Config, logger: logging.Logger) -> PipelineReport:
    """Run the whole pipeline once.

    Parameters
    ----------
    config : Config
        Validated settings.
    logger : logging.Logger
        Logger the run reports through.

    Returns
    -------
    PipelineReport
        Counts and the issues that were written.

    Raises
    ------
    FileSystemError
        If the result artifact cannot be written.
    """
    report = PipelineReport(result_path=config.paths.result_path)
    report.scoped_files = scope_from_config(config, logger)
    report.run = invoke_analyzer(config, report.scoped_files, logger)

    findings = read_findings(config.paths.report_path, logger)
    report.findings = len(findings)

    in_scope = report.scoped_files if config.analyzer.scope_checked else None
    report.issues = cppcheck_findings_to_issues(findings, in_scope)
    logger.info(
        "%d of %d finding(s) classified as issues", len(report.issues), report.findings
    )

    report.placeholder_written = not write_issues(report.issues, config.paths.result_path)
    logger.info("Wrote results to `%s`", config.paths.result_path)
    return report


__all__ = [
    "PipelineReport",
    "scope_from_config",
    "invoke_analyzer",
    "read_findings",
    "run_pipeline",
]

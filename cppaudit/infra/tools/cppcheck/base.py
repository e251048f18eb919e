"""cppcheck static analysis tool implementation.

This module implements the cppcheck wrapper used by the pipeline. cppcheck
runs in one of two modes:

- ``directory``: cppcheck gets the code root and recurses on its own. A build
  directory is passed only when a cache directory is configured.
- ``files``: cppcheck gets the scoped files as separate arguments.

The XML report lands either in a named file (``--output-file=``) or in
cppcheck's stderr, which is then redirected into the report file.

Classes
-------
CppcheckTool : cppcheck tool implementation

Examples
--------
>>> tool = CppcheckTool(report_path="/toolbox/cppcheck_error.xml")
>>> tool.build_cmd("/code")
['cppcheck', '/code', '-l', '6', '--std=c++20', '--addon=misra', '--xml', '--output-file=/toolbox/cppcheck_error.xml']

See Also
--------
cppaudit.infra.tools.base : Base tool class
cppaudit.core.models.parsers.cppcheck : Report parser
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from cppaudit.config.config_schema import AnalyzerConfig
from cppaudit.core.exceptions import ToolExecutionError
from cppaudit.core.models import ToolRunResult

from ..base import CommandAuditTool, Target

logger = logging.getLogger(__name__)

OUTPUT_FILE = "file"
OUTPUT_STDERR = "stderr"


class CppcheckTool(CommandAuditTool):
    """
    Wrapper around ``cppcheck --xml`` that writes its report to ``report_path``.
    """

    @property
    def name(self) -> str:
        return "cppcheck"

    def __init__(
        self,
        *,
        report_path: Union[str, Path],
        executable: str = "cppcheck",
        output: str = OUTPUT_FILE,
        diagnostic_level: Optional[int] = 6,
        std: Optional[str] = "c++20",
        addons: Optional[Sequence[str]] = ("misra",),
        cache_dir: Optional[Union[str, Path]] = None,
        extra_args: Optional[Sequence[str]] = None,
        **kw: Any,
    ) -> None:
        super().__init__(**kw)
        if output not in (OUTPUT_FILE, OUTPUT_STDERR):
            raise ValueError(f"Unknown cppcheck output mode '{output}'")
        self.report_path = Path(report_path)
        self.executable = executable
        self.output = output
        self.diagnostic_level = diagnostic_level
        self.std = std
        self.addons = list(addons or [])
        self.cache_dir = Path(cache_dir) if cache_dir else None
        self.extra_args = list(extra_args or [])

    @classmethod
    def from_config(cls, config: AnalyzerConfig, report_path: Union[str, Path]) -> "CppcheckTool":
        return cls(
            report_path=report_path,
            executable=config.executable,
            output=config.output,
            diagnostic_level=config.diagnostic_level,
            std=config.std,
            addons=config.addons,
            cache_dir=config.cache_dir,
            extra_args=config.extra_args,
            timeout_s=config.timeout,
        )

    def build_cmd(self, target: Target) -> List[str]:
        if isinstance(target, (str, Path)):
            targets = [str(target)]
        else:
            targets = [str(t) for t in target]

        cmd: List[str] = [self.executable, *targets]
        if self.diagnostic_level is not None:
            cmd += ["-l", str(self.diagnostic_level)]
        if self.std:
            cmd.append(f"--std={self.std}")
        cmd += [f"--addon={addon}" for addon in self.addons]
        cmd.append("--xml")
        if self.output == OUTPUT_FILE:
            cmd.append(f"--output-file={self.report_path}")
        # only enable caching if a cache directory is configured
        if self.cache_dir is not None:
            cmd.append(f"--cppcheck-build-dir={self.cache_dir}")
        cmd += self.extra_args
        return cmd

    def _prepare(self) -> None:
        try:
            # A report left over from an earlier run must not be mistaken for ours
            self.report_path.unlink(missing_ok=True)
            self.report_path.parent.mkdir(parents=True, exist_ok=True)
            if self.cache_dir is not None:
                self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ToolExecutionError(
                self.name,
                f"cannot prepare output locations: {e}",
                {"report_path": str(self.report_path)},
            ) from e

    def audit(self, target: Target) -> ToolRunResult:
        self._prepare()
        if self.output == OUTPUT_FILE:
            return super().audit(target)

        cmd = self.build_cmd(target)
        logger.debug("Running %s START (stderr -> %s)", self.name, self.report_path)
        logger.debug("Command: %s", cmd)
        try:
            report = open(self.report_path, "wb")
        except OSError as e:
            raise ToolExecutionError(
                self.name,
                f"cannot open report for writing: {e}",
                {"report_path": str(self.report_path)},
            ) from e
        try:
            with report:
                run = self._run(cmd, stderr=report)
        finally:
            if self.report_path.exists() and self.report_path.stat().st_size == 0:
                # Nothing was written: treat it like a missing report
                self.report_path.unlink()
        logger.debug("Ran %s END :: %.3fs", self.name, run.duration_s)
        return run


__all__ = ["CppcheckTool", "OUTPUT_FILE", "OUTPUT_STDERR"]

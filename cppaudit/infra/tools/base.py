"""Base classes for static analysis tool wrappers.

This module provides abstract base classes for wrapping external static
analysis tools. Tools are executed directly from an argument vector (no
shell), their stdout/stderr are passed through to the parent process, and
only the exit status and wall-clock duration are recorded.

The module supports:
- Command-based tool execution with an optional timeout
- Automatic tool detection (``is_installed``)
- Redirecting the tool's stderr into a file
- Disabled core dumps for the child process (POSIX only)

Examples
--------
Implement a custom tool:

    >>> class MyTool(CommandAuditTool):
    ...     @property
    ...     def name(self) -> str:
    ...         return 'mytool'
    ...     def build_cmd(self, target):
    ...         return ['mytool', *target]

Notes
-----
The core dump limit is only applied on POSIX systems. A timed-out tool is killed
and reported with return code 124, the same convention as ``timeout(1)``.
"""
from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, List, Optional, Sequence, Union

from cppaudit.core.exceptions import ToolExecutionError
from cppaudit.core.models import ToolRunResult

_IS_POSIX = os.name == "posix"
if _IS_POSIX:
    import resource  # type: ignore[attr-defined]

logger = logging.getLogger(__name__)

#: Return code reported for a tool killed after its timeout
TIMEOUT_RETURNCODE = 124

Target = Union[str, Path, Sequence[Union[str, Path]]]

# ---------------------------------------------------------------------------
# Base tool wrappers
# ---------------------------------------------------------------------------


class AuditTool(ABC):
    """Base class for all static analysis tool wrappers.

    Parameters
    ----------
    timeout_s : float, optional
        Process timeout in seconds. Default is DEFAULT_TIMEOUT_S (None, wait
        forever).

    Attributes
    ----------
    DEFAULT_TIMEOUT_S : float or None
        Default per-process time limit in seconds.
    """

    #: default per-process time limit (seconds, None to wait forever)
    DEFAULT_TIMEOUT_S: Optional[float] = None

    def __init__(self, timeout_s: Optional[float] = None) -> None:
        self.timeout_s = timeout_s if timeout_s is not None else self.DEFAULT_TIMEOUT_S

    # ----- Properties to override -------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Lowercase tool name identifier (e.g. 'cppcheck')."""
        raise NotImplementedError

    # ----- Public API -------------------------------------------------------------

    def is_installed(self) -> bool:
        """Check if the tool executable is found in PATH."""
        exe = self.build_cmd(".")[0]
        return shutil.which(exe) is not None

    @abstractmethod
    def audit(self, target: Target) -> ToolRunResult:
        """Run the analyzer against ``target`` and return the run outcome.

        Parameters
        ----------
        target : str, Path or sequence of them
            Directory to analyze, or an explicit list of files.

        Raises
        ------
        ToolExecutionError
            If the tool cannot be started at all.
        """
        raise NotImplementedError

    def build_cmd(self, target: Target) -> List[str]:
        """Build the argument vector for tool execution.

        Optional helper that command-based tools should implement.
        Used by is_installed and CommandAuditTool.
        """
        raise NotImplementedError

    # ----- Utilities --------------------------------------------------------------

    def _preexec_limits(self) -> Optional[Any]:
        if not _IS_POSIX:
            return None

        def _apply():
            # Disable core dumps
            resource.setrlimit(resource.RLIMIT_CORE, (0, 0))

        return _apply

    def _run(
        self,
        cmd: Sequence[str],
        cwd: Optional[str] = None,
        stderr: Optional[IO[Any]] = None,
    ) -> ToolRunResult:
        """Run ``cmd`` with stdout/stderr inherited unless ``stderr`` is given."""
        started = time.monotonic()
        timed_out = False
        try:
            proc = subprocess.run(
                list(cmd),
                cwd=cwd,
                check=False,
                stdout=None,
                stderr=stderr,
                timeout=self.timeout_s,
                preexec_fn=self._preexec_limits(),
            )
            returncode = proc.returncode
        except subprocess.TimeoutExpired:
            # subprocess.run kills the child before re-raising
            timed_out = True
            returncode = TIMEOUT_RETURNCODE
        except OSError as e:
            raise ToolExecutionError(
                self.name,
                e.strerror or str(e),
                {"cmd": list(cmd), "errno": e.errno},
            ) from e
        duration = time.monotonic() - started

        return ToolRunResult(
            tool=self.name,
            cmd=list(cmd),
            cwd=os.path.abspath(cwd or os.getcwd()),
            returncode=returncode,
            duration_s=duration,
            timed_out=timed_out,
        )


class CommandAuditTool(AuditTool):
    """
    Convenience base class for tools that execute a single command built by
    `build_cmd`.
    """

    def audit(self, target: Target) -> ToolRunResult:
        cmd = self.build_cmd(target)
        logger.debug("Running %s START", self.name)
        logger.debug("Command: %s", cmd)
        run = self._run(cmd)
        logger.debug("Ran %s END :: %.3fs", self.name, run.duration_s)
        logger.debug("Return code: %s", run.returncode)
        return run

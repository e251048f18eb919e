from __future__ import annotations

"""Common data models for tool execution results.

This module defines the ToolRunResult model used to represent the outcome of
an analyzer run. cppcheck writes its diagnostics to a report file and its
console output is passed straight through to the parent process, so only the
exit status, duration and timeout flag are recorded.

Classes
-------
ToolRunResult : Standardized tool execution result

Examples
--------
>>> result = ToolRunResult(
...     tool="cppcheck",
...     cmd=["cppcheck", "/code", "--xml"],
...     cwd="/code",
...     returncode=0,
...     duration_s=1.5,
... )
>>> result.succeeded
True

See Also
--------
cppaudit.infra.tools.base : Tool execution
"""

from typing import List

from pydantic import BaseModel


class ToolRunResult(BaseModel):
    tool: str
    cmd: List[str]
    cwd: str
    returncode: int
    duration_s: float
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0 and not self.timed_out

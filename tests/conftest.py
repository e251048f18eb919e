"""Shared test fixtures for cppaudit tests."""

from __future__ import annotations

import json
import logging
import os
import stat
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence
from xml.sax.saxutils import quoteattr

import pytest

from cppaudit.config import Config
from cppaudit.core.logging_config import LOGGER_NAME


def _error_xml(error: Dict[str, object]) -> str:
    attrs = " ".join(
        f"{key}={quoteattr(str(value))}"
        for key, value in error.items()
        if key not in {"locations", "symbols"}
    )
    children = [
        "<location {}/>".format(
            " ".join(f"{k}={quoteattr(str(v))}" for k, v in zip(("file", "line", "column"), loc))
        )
        for loc in error.get("locations", [])
    ]
    children += [f"<symbol>{symbol}</symbol>" for symbol in error.get("symbols", [])]
    return f"<error {attrs}>{''.join(children)}</error>"


@pytest.fixture
def report_xml() -> Callable[..., str]:
    """Build a cppcheck XML v2 report from error dicts.

    Each dict holds XML attributes plus optional ``locations`` (tuples of
    file, line, column) and ``symbols``.
    """

    def build(*errors: Dict[str, object]) -> str:
        body = "".join(_error_xml(e) for e in errors)
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<results version="2"><cppcheck version="2.13.0"/>'
            f"<errors>{body}</errors></results>"
        )

    return build


@pytest.fixture
def workspace(tmp_path: Path) -> Dict[str, Path]:
    """Create empty toolbox and code directories."""
    toolbox = tmp_path / "toolbox"
    code = tmp_path / "code"
    toolbox.mkdir()
    code.mkdir()
    return {"toolbox": toolbox, "code": code}


@pytest.fixture
def write_analysis_config(workspace: Dict[str, Path]) -> Callable[..., Path]:
    def write(files: Sequence[object], **extra: object) -> Path:
        path = workspace["toolbox"] / "analysis_config.json"
        path.write_text(json.dumps({"files": [str(f) for f in files], **extra}))
        return path

    return write


@pytest.fixture
def fake_cppcheck(tmp_path: Path) -> Callable[..., Dict[str, Path]]:
    """Write an executable stand-in for cppcheck.

    The script records its argv as JSON, optionally sleeps, writes ``report``
    to ``--output-file=`` (or to stderr when that flag is absent) and exits
    with ``exit_code``.
    """

    def make(
        report: Optional[str] = None, exit_code: int = 0, sleep: float = 0
    ) -> Dict[str, Path]:
        script = tmp_path / "fake-cppcheck"
        argv_log = tmp_path / "fake-cppcheck-argv.json"
        script.write_text(
            f"#!{sys.executable}\n"
            "import json, sys, time\n"
            "args = sys.argv[1:]\n"
            f"with open({str(argv_log)!r}, 'w') as fh:\n"
            "    json.dump(args, fh)\n"
            f"time.sleep({sleep!r})\n"
            f"report = {report!r}\n"
            "if report is not None:\n"
            "    out = [a.split('=', 1)[1] for a in args if a.startswith('--output-file=')]\n"
            "    if out:\n"
            "        with open(out[0], 'w') as fh:\n"
            "            fh.write(report)\n"
            "    else:\n"
            "        sys.stderr.write(report)\n"
            f"sys.exit({exit_code})\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return {"executable": script, "argv_log": argv_log}

    return make


@pytest.fixture
def recorded_argv(tmp_path: Path) -> Callable[[], List[str]]:
    def read() -> List[str]:
        return json.loads((tmp_path / "fake-cppcheck-argv.json").read_text())

    return read


@pytest.fixture
def make_config(workspace: Dict[str, Path]) -> Callable[..., Config]:
    """Config pointed at the temporary workspace, with overrides per section."""

    def make(**sections: Dict[str, object]) -> Config:
        config = Config.from_dict(
            {
                "paths": {
                    "toolbox": str(workspace["toolbox"]),
                    "code": str(workspace["code"]),
                    **sections.get("paths", {}),
                },
                "scope": sections.get("scope", {}),
                "analyzer": sections.get("analyzer", {}),
                "logging": sections.get("logging", {}),
            }
        )
        config.validate()
        return config

    return make


@pytest.fixture
def test_logger() -> logging.Logger:
    logger = logging.getLogger("cppaudit_tests")
    logger.setLevel(logging.DEBUG)
    logger.propagate = True
    return logger


def _settings_keys() -> List[str]:
    return [
        key
        for key in os.environ
        if key.startswith("CPPAUDIT_")
        or key in {"TOOLBOX_PATH", "CODE_PATH", "CPPCHECK_CACHE_PATH", "CLICOLOR_FORCE"}
    ]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the caller's environment from leaking into settings.

    Variables a test loaded from a ``.env`` file are dropped afterwards;
    monkeypatch then restores whatever the caller had.
    """
    for key in _settings_keys():
        monkeypatch.delenv(key, raising=False)
    yield
    for key in _settings_keys():
        os.environ.pop(key, None)


@pytest.fixture(autouse=True)
def _reset_cppaudit_logger():
    """Undo setup_logging so handlers never outlive the stream they wrap."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

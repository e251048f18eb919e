"""End-to-end pipeline tests against a fake cppcheck executable."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from cppaudit.application.orchestrator import read_findings, run_pipeline, scope_from_config
from cppaudit.core.models import IssueCode
from cppaudit.storage.writers import load_issues


def _sparse(path: Path, size: int) -> Path:
    with open(path, "wb") as fh:
        fh.truncate(size)
    return path


@pytest.fixture
def declared(workspace):
    code = workspace["code"]
    a_cpp = code / "a.cpp"
    a_cpp.write_text("int main() { int *p = 0; return *p; }\n")
    (code / "b.txt").write_text("notes\n")
    _sparse(code / "big.cpp", 30_000_000)
    return [a_cpp, code / "b.txt", code / "big.cpp"]


def test_scope_and_single_issue(
    workspace, declared, write_analysis_config, fake_cppcheck, report_xml, make_config, test_logger
) -> None:
    a_cpp = declared[0]
    write_analysis_config(declared, analyzer_meta={"name": "cxx", "enabled": True})
    fake = fake_cppcheck(
        report=report_xml(
            {"id": "nullPointer", "msg": "Null pointer dereference: p", "locations": [(a_cpp, 10, 3)]}
        )
    )
    config = make_config(analyzer={"executable": str(fake["executable"])})

    report = run_pipeline(config, test_logger)

    assert report.scoped_files == {a_cpp}
    assert report.findings == 1
    (issue,) = load_issues(workspace["toolbox"] / "cppcheck_result.json")
    assert issue.issue_code is IssueCode.NULL_POINTER_DEREFERENCE
    assert issue.location.path == str(a_cpp)
    begin, end = issue.location.position.begin, issue.location.position.end
    assert begin == end
    assert (begin.line, begin.column) == (10, 3)
    assert report.issues_per_file == {str(a_cpp): 1}
    assert report.placeholder_written is False


def test_directory_mode_passes_code_root(
    workspace, declared, write_analysis_config, fake_cppcheck, make_config, test_logger, recorded_argv
) -> None:
    write_analysis_config(declared)
    fake = fake_cppcheck()
    config = make_config(analyzer={"executable": str(fake["executable"])})

    run_pipeline(config, test_logger)

    argv = recorded_argv()
    assert argv[0] == str(workspace["code"])
    assert f"--output-file={workspace['toolbox'] / 'cppcheck_error.xml'}" in argv
    assert "--addon=misra" in argv


def test_files_mode_passes_scoped_files(
    declared, write_analysis_config, fake_cppcheck, make_config, test_logger, recorded_argv
) -> None:
    write_analysis_config(declared)
    fake = fake_cppcheck()
    config = make_config(analyzer={"executable": str(fake["executable"]), "mode": "files"})

    run_pipeline(config, test_logger)

    assert recorded_argv()[:2] == [str(declared[0]), "-l"]


def test_cache_dir_from_environment(
    tmp_path, workspace, declared, write_analysis_config, fake_cppcheck, test_logger, recorded_argv
) -> None:
    from cppaudit.config import ConfigLoader

    write_analysis_config(declared)
    fake = fake_cppcheck()
    cache = tmp_path / "cache"
    config = ConfigLoader(
        environ={
            "TOOLBOX_PATH": str(workspace["toolbox"]),
            "CODE_PATH": str(workspace["code"]),
            "CPPCHECK_CACHE_PATH": str(cache),
            "CPPAUDIT_ANALYZER__EXECUTABLE": str(fake["executable"]),
        }
    ).load_config()

    run_pipeline(config, test_logger)

    assert f"--cppcheck-build-dir={cache}" in recorded_argv()
    assert cache.is_dir()


def test_out_of_scope_findings_dropped(
    workspace, declared, write_analysis_config, fake_cppcheck, report_xml, make_config, test_logger
) -> None:
    header = workspace["code"] / "a.h"
    write_analysis_config(declared)
    fake = fake_cppcheck(
        report=report_xml(
            {"id": "memleak", "msg": "Memory leak: q", "locations": [(header, 2, 1)]},
            {"id": "zerodiv", "msg": "Division by zero.", "locations": [(declared[0], 5, 9)]},
        )
    )
    config = make_config(analyzer={"executable": str(fake["executable"])})

    report = run_pipeline(config, test_logger)

    assert [i.issue_text for i in report.issues] == ["Division by zero."]


def test_scope_check_can_be_disabled_in_directory_mode(
    workspace, declared, write_analysis_config, fake_cppcheck, report_xml, make_config, test_logger
) -> None:
    header = workspace["code"] / "a.h"
    write_analysis_config(declared)
    fake = fake_cppcheck(
        report=report_xml({"id": "memleak", "msg": "Memory leak: q", "locations": [(header, 2, 1)]})
    )
    config = make_config(
        analyzer={"executable": str(fake["executable"]), "check_scope": False}
    )

    assert len(run_pipeline(config, test_logger).issues) == 1


def test_absent_report_yields_empty_array(
    workspace, declared, write_analysis_config, fake_cppcheck, make_config, test_logger
) -> None:
    write_analysis_config(declared)
    fake = fake_cppcheck(report=None)
    config = make_config(analyzer={"executable": str(fake["executable"])})

    report = run_pipeline(config, test_logger)

    assert report.findings == 0
    assert json.loads((workspace["toolbox"] / "cppcheck_result.json").read_text()) == []


@pytest.mark.parametrize("mode", ["directory", "files"])
def test_missing_analysis_config_still_runs_analyzer(
    workspace, fake_cppcheck, make_config, test_logger, recorded_argv, caplog, mode
) -> None:
    fake = fake_cppcheck()
    config = make_config(analyzer={"executable": str(fake["executable"]), "mode": mode})

    with caplog.at_level(logging.ERROR, logger=test_logger.name):
        report = run_pipeline(config, test_logger)

    assert report.scoped_files == set()
    assert report.run is not None and report.run.returncode == 0
    assert "Failed to load analysis config" in caplog.text
    argv = recorded_argv()
    if mode == "directory":
        assert argv[0] == str(workspace["code"])
    else:
        assert argv[0] == "-l"
    assert json.loads((workspace["toolbox"] / "cppcheck_result.json").read_text()) == []


def test_analysis_config_without_files_is_a_load_failure(
    workspace, write_analysis_config, make_config, test_logger, caplog
) -> None:
    (workspace["toolbox"] / "analysis_config.json").write_text('{"analyzer_meta": {}}')
    with caplog.at_level(logging.ERROR, logger=test_logger.name):
        assert scope_from_config(make_config(), test_logger) == set()
    assert "Failed to load analysis config" in caplog.text


def test_malformed_report_yields_empty_array(
    workspace, declared, write_analysis_config, fake_cppcheck, make_config, test_logger, caplog
) -> None:
    write_analysis_config(declared)
    fake = fake_cppcheck(report="<results><errors><error")
    config = make_config(analyzer={"executable": str(fake["executable"])})

    with caplog.at_level(logging.WARNING, logger=test_logger.name):
        report = run_pipeline(config, test_logger)

    assert report.issues == []
    assert "Ignoring cppcheck report" in caplog.text
    assert (workspace["toolbox"] / "cppcheck_result.json").read_text() == "[]"


def test_missing_executable_is_recovered(
    tmp_path, workspace, declared, write_analysis_config, make_config, test_logger, caplog
) -> None:
    write_analysis_config(declared)
    config = make_config(analyzer={"executable": str(tmp_path / "no-cppcheck")})

    with caplog.at_level(logging.ERROR, logger=test_logger.name):
        report = run_pipeline(config, test_logger)

    assert report.run is None
    assert "Tool 'cppcheck' failed" in caplog.text
    assert load_issues(workspace["toolbox"] / "cppcheck_result.json") == []


def test_nonzero_exit_still_classifies(
    workspace, declared, write_analysis_config, fake_cppcheck, report_xml, make_config, test_logger, caplog
) -> None:
    write_analysis_config(declared)
    fake = fake_cppcheck(
        report=report_xml({"id": "uninitvar", "msg": "Uninitialized variable: x", "locations": [(declared[0], 1, 1)]}),
        exit_code=1,
    )
    config = make_config(analyzer={"executable": str(fake["executable"])})

    with caplog.at_level(logging.WARNING, logger=test_logger.name):
        report = run_pipeline(config, test_logger)

    assert "exited with status 1" in caplog.text
    assert [i.issue_code for i in report.issues] == [IssueCode.UNINITIALIZED_VALUE]


def test_timeout_is_recovered(
    workspace, declared, write_analysis_config, fake_cppcheck, make_config, test_logger, caplog
) -> None:
    write_analysis_config(declared)
    fake = fake_cppcheck(sleep=30)
    config = make_config(analyzer={"executable": str(fake["executable"]), "timeout": 0.5})

    with caplog.at_level(logging.WARNING, logger=test_logger.name):
        report = run_pipeline(config, test_logger)

    assert report.run is not None and report.run.timed_out
    assert "timeout" in caplog.text
    assert load_issues(workspace["toolbox"] / "cppcheck_result.json") == []


def test_stderr_output_mode(
    workspace, declared, write_analysis_config, fake_cppcheck, report_xml, make_config, test_logger
) -> None:
    write_analysis_config(declared)
    fake = fake_cppcheck(
        report=report_xml(
            {"id": "misra-c2012-8.4", "msg": "misra violation", "locations": [(declared[0], 3, 5)], "symbols": ["f"]}
        )
    )
    config = make_config(analyzer={"executable": str(fake["executable"]), "output": "stderr"})

    report = run_pipeline(config, test_logger)

    assert [i.issue_text for i in report.issues] == ["misra-c2012-8.4 f"]


def test_read_findings_missing_report(tmp_path, test_logger) -> None:
    assert read_findings(tmp_path / "absent.xml", test_logger) == []


def test_unwritable_stderr_report_is_recovered(
    workspace, declared, write_analysis_config, fake_cppcheck, make_config, test_logger, caplog, monkeypatch
) -> None:
    def refuse(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    write_analysis_config(declared)
    fake = fake_cppcheck()
    config = make_config(analyzer={"executable": str(fake["executable"]), "output": "stderr"})
    monkeypatch.setattr("cppaudit.infra.tools.cppcheck.base.open", refuse, raising=False)

    with caplog.at_level(logging.ERROR, logger=test_logger.name):
        report = run_pipeline(config, test_logger)

    assert report.run is None
    assert "cannot open report for writing" in caplog.text
    assert load_issues(workspace["toolbox"] / "cppcheck_result.json") == []

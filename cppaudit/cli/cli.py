"""cppaudit CLI - Command Line Interface.

Synopsis
--------
run
    Run the whole pipeline: scope, cppcheck, parse, classify, write results
scope
    Print the in-scope files declared by the analysis config
classify
    Parse and classify an existing cppcheck report without running cppcheck

Options
-------
Settings come from (lowest to highest priority) defaults, ``--config``
(YAML or TOML), the environment (``TOOLBOX_PATH``, ``CODE_PATH``,
``CPPCHECK_CACHE_PATH``, ``CPPAUDIT_*``, ``.env``) and the options below.

Examples
--------
Run against the default /toolbox and /code directories:
    $ cppaudit run

Pass the scoped files explicitly and give cppcheck ten minutes:
    $ cppaudit run --mode files --timeout 600

Classify a report produced elsewhere:
    $ cppaudit classify /tmp/cppcheck_error.xml --no-scope

Notes
-----
The exit status is 0 for every completed run, including runs where cppcheck
failed or its report was unusable. It is 1 when the settings are invalid or
the result artifact cannot be written.

Author: Anush Krishna
License: MIT
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from cppaudit.application.file import HEADER_EXTENSIONS
from cppaudit.application.orchestrator import read_findings, run_pipeline, scope_from_config
from cppaudit.config import Config, ConfigLoader
from cppaudit.core.exceptions import ConfigurationError, FileSystemError
from cppaudit.core.logging_config import setup_logging
from cppaudit.core.models import cppcheck_findings_to_issues
from cppaudit.storage.writers import serialize_issues, write_issues


app = typer.Typer(
    help="cppaudit CLI - normalize cppcheck diagnostics into issue records",
    add_completion=False,
)

# Options shared by every command


def _config_option():
    return typer.Option(None, "--config", "-c", help="YAML or TOML settings file")


def _log_level_option():
    return typer.Option(
        None, "--log-level", "-l", help="error, warn, info, debug or trace"
    )


def _color_option():
    return typer.Option(None, "--color", help="auto, always or never")


def _toolbox_option():
    return typer.Option(
        None, "--toolbox", help="Directory holding analysis_config.json and the artifacts"
    )


def _extension_option():
    return typer.Option(
        None, "--extension", "-e", help="Allowed source extension (repeatable)"
    )


def _headers_option():
    return typer.Option(False, "--include-headers", help="Also allow .h and .hpp files")


def _load(
    config_file: Optional[Path], args: Dict[str, Any], include_headers: bool = False
) -> Config:
    """Load settings or exit with status 1.

    ``include_headers`` adds the header extensions on top of the configured
    allow-set, wherever that set came from.
    """
    try:
        config = ConfigLoader().load_config(config_file=config_file, args=args)
    except ConfigurationError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc
    if include_headers:
        extensions = config.scope.extensions
        extensions += sorted(HEADER_EXTENSIONS - set(extensions))
    return config


def _logger(config: Config) -> logging.Logger:
    return setup_logging(level=config.logging.level, color=config.logging.color)


@app.command("run")
def run(
    config_file: Optional[Path] = _config_option(),
    toolbox: Optional[str] = _toolbox_option(),
    code: Optional[str] = typer.Option(None, "--code", help="Root of the C/C++ tree"),
    mode: Optional[str] = typer.Option(
        None, "--mode", "-m", help="directory (cppcheck recurses) or files (scoped list)"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Report redirection: file (--output-file) or stderr"
    ),
    executable: Optional[str] = typer.Option(None, "--executable", help="cppcheck binary"),
    cache_dir: Optional[str] = typer.Option(
        None, "--cache-dir", help="cppcheck build directory; caching is off without it"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Kill cppcheck after this many seconds"
    ),
    check_scope: Optional[bool] = typer.Option(
        None,
        "--check-scope/--no-check-scope",
        help="Drop findings in files outside the scope (always on in files mode)",
    ),
    extension: Optional[List[str]] = _extension_option(),
    include_headers: bool = _headers_option(),
    log_level: Optional[str] = _log_level_option(),
    color: Optional[str] = _color_option(),
) -> None:
    """Run the whole pipeline and write the JSON result artifact.

    Examples
    --------
        $ cppaudit run --toolbox ./toolbox --code ./src --mode files
    """
    config = _load(
        config_file,
        {
            "toolbox": toolbox,
            "code": code,
            "mode": mode,
            "output": output,
            "executable": executable,
            "cache_dir": cache_dir,
            "timeout": timeout,
            "check_scope": check_scope,
            "extensions": extension or None,
            "log_level": log_level,
            "color": color,
        },
        include_headers=include_headers,
    )
    logger = _logger(config)
    try:
        report = run_pipeline(config, logger)
    except FileSystemError as exc:
        logger.error("error raised: %s", exc.message)
        raise typer.Exit(code=1) from exc

    for path, count in sorted(report.issues_per_file.items()):
        logger.debug("%s: %d issue(s)", path, count)


@app.command("scope")
def scope(
    config_file: Optional[Path] = _config_option(),
    toolbox: Optional[str] = _toolbox_option(),
    extension: Optional[List[str]] = _extension_option(),
    include_headers: bool = _headers_option(),
    log_level: Optional[str] = _log_level_option(),
    color: Optional[str] = _color_option(),
) -> None:
    """Print the in-scope files, one per line, sorted."""
    config = _load(
        config_file,
        {
            "toolbox": toolbox,
            "extensions": extension or None,
            "log_level": log_level,
            "color": color,
        },
        include_headers=include_headers,
    )
    for path in sorted(scope_from_config(config, _logger(config))):
        typer.echo(str(path))


@app.command("classify")
def classify(
    report: Path = typer.Argument(..., help="cppcheck XML report"),
    config_file: Optional[Path] = _config_option(),
    toolbox: Optional[str] = _toolbox_option(),
    use_scope: bool = typer.Option(
        True, "--scope/--no-scope", help="Drop findings outside the analysis config scope"
    ),
    json_out: Optional[Path] = typer.Option(
        None, "--json-out", help="Write the issues here instead of stdout"
    ),
    extension: Optional[List[str]] = _extension_option(),
    include_headers: bool = _headers_option(),
    log_level: Optional[str] = _log_level_option(),
    color: Optional[str] = _color_option(),
) -> None:
    """Classify an existing report without running cppcheck."""
    config = _load(
        config_file,
        {
            "toolbox": toolbox,
            "extensions": extension or None,
            "log_level": log_level,
            "color": color,
        },
        include_headers=include_headers,
    )
    logger = _logger(config)
    in_scope = scope_from_config(config, logger) if use_scope else None
    issues = cppcheck_findings_to_issues(read_findings(report, logger), in_scope)

    if json_out is None:
        payload, _ = serialize_issues(issues)
        typer.echo(payload)
        return
    try:
        write_issues(issues, json_out)
    except FileSystemError as exc:
        logger.error("error raised: %s", exc.message)
        raise typer.Exit(code=1) from exc
    logger.info("Wrote %d issue(s) to `%s`", len(issues), json_out)

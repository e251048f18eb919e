# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

from __future__ import annotations

"""Configuration schema definitions.

This module defines the settings sections used by the pipeline. Each section
is a dataclass with a ``validate`` method returning a list of problems;
:class:`Config` aggregates them and raises a single ConfigurationError.

Classes
-------
Config : Main configuration class
PathsConfig : Toolbox/code directories and artifact names
ScopeConfig : Scope filter settings
AnalyzerConfig : cppcheck invocation settings
LoggingConfig : Logging settings

Examples
--------
>>> config = Config()
>>> config.paths.result_path
PosixPath('/toolbox/cppcheck_result.json')
>>> config.validate()
True

See Also
--------
cppaudit.config.config_loader : Configuration loading
"""

from dataclasses import MISSING, asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

#: Files strictly larger than this many bytes are left out of the analysis.
MAX_FILE_SIZE = 25_000_000

DEFAULT_TOOLBOX = "/toolbox"
DEFAULT_CODE = "/code"

ANALYZER_MODES = ("directory", "files")
OUTPUT_MODES = ("file", "stderr")
COLOR_MODES = ("auto", "always", "never")

_BOOL_WORDS = {
    "true": True, "yes": True, "on": True, "1": True,
    "false": False, "no": False, "off": False, "0": False,
}


def _convert(value: Any, kind: type) -> Any:
    """Convert a raw setting (string from the environment, YAML scalar, ...) to ``kind``."""
    if kind is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _BOOL_WORDS:
            return _BOOL_WORDS[value.strip().lower()]
        raise ValueError(value)
    if kind is list:
        if isinstance(value, str):
            return value.split(",")
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        raise TypeError(value)
    if isinstance(value, bool):
        raise TypeError(value)
    if kind is str:
        if isinstance(value, (str, int, float)):
            return str(value)
        raise TypeError(value)
    if kind is int and isinstance(value, float) and not value.is_integer():
        raise ValueError(value)
    return kind(value)


def _coerce_fields(
    obj: Any,
    section: str,
    types: Mapping[str, type],
    optional: tuple = (),
) -> List[str]:
    """
    Convert the fields of a settings section in place.

    A field that cannot be converted is reset to its default and reported in
    the returned list of problems.
    """
    errors = []
    for f in fields(obj):
        kind = types.get(f.name)
        if kind is None:
            continue
        value = getattr(obj, f.name)
        if value is None and f.name in optional:
            continue
        try:
            setattr(obj, f.name, _convert(value, kind))
        except (TypeError, ValueError):
            errors.append(f"{section}.{f.name} must be {kind.__name__}, got {value!r}")
            default = f.default_factory() if f.default_factory is not MISSING else f.default
            setattr(obj, f.name, default)
    return errors


def _remember(obj: Any, errors: List[str]) -> None:
    # Sections are re-normalized after every merge; keep earlier problems.
    obj._type_errors = getattr(obj, "_type_errors", []) + errors


@dataclass
class PathsConfig:
    """Locations of the toolbox directory, code tree and pipeline artifacts."""

    toolbox: str = DEFAULT_TOOLBOX
    code: str = DEFAULT_CODE
    analysis_config: str = "analysis_config.json"
    report: str = "cppcheck_error.xml"
    result: str = "cppcheck_result.json"

    _NAMES = ("toolbox", "code", "analysis_config", "report", "result")

    def __post_init__(self) -> None:
        _remember(self, _coerce_fields(self, "paths", {name: str for name in self._NAMES}))

    @property
    def toolbox_dir(self) -> Path:
        return Path(self.toolbox)

    @property
    def analysis_config_path(self) -> Path:
        return self.toolbox_dir / self.analysis_config

    @property
    def report_path(self) -> Path:
        return self.toolbox_dir / self.report

    @property
    def result_path(self) -> Path:
        return self.toolbox_dir / self.result

    def validate(self) -> List[str]:
        errors = list(self._type_errors)
        for name in self._NAMES:
            if not getattr(self, name).strip():
                errors.append(f"paths.{name} must not be empty")
        return errors


@dataclass
class ScopeConfig:
    """Which declared files count as in scope."""

    extensions: List[str] = field(default_factory=lambda: ["c", "cpp"])
    max_file_size: int = MAX_FILE_SIZE

    def __post_init__(self) -> None:
        _remember(
            self,
            _coerce_fields(self, "scope", {"extensions": list, "max_file_size": int}),
        )
        self.extensions = [e.strip().lstrip(".") for e in self.extensions if e.strip()]

    def validate(self) -> List[str]:
        errors = list(self._type_errors)
        if not self.extensions:
            errors.append("scope.extensions must list at least one extension")
        if self.max_file_size < 0:
            errors.append(f"scope.max_file_size must be >= 0, got {self.max_file_size}")
        return errors


@dataclass
class AnalyzerConfig:
    """How cppcheck is invoked."""

    executable: str = "cppcheck"
    mode: str = "directory"
    output: str = "file"
    diagnostic_level: Optional[int] = 6
    std: Optional[str] = "c++20"
    addons: List[str] = field(default_factory=lambda: ["misra"])
    cache_dir: Optional[str] = None
    timeout: Optional[float] = None
    check_scope: bool = True
    extra_args: List[str] = field(default_factory=list)

    _TYPES = {
        "executable": str,
        "mode": str,
        "output": str,
        "diagnostic_level": int,
        "std": str,
        "addons": list,
        "cache_dir": str,
        "timeout": float,
        "check_scope": bool,
        "extra_args": list,
    }

    def __post_init__(self) -> None:
        if isinstance(self.extra_args, str):
            self.extra_args = self.extra_args.split()
        _remember(
            self,
            _coerce_fields(
                self,
                "analyzer",
                self._TYPES,
                optional=("diagnostic_level", "std", "cache_dir", "timeout"),
            ),
        )
        self.addons = [a.strip() for a in self.addons if a.strip()]
        if self.cache_dir is not None and not self.cache_dir.strip():
            self.cache_dir = None

    @property
    def scope_checked(self) -> bool:
        # cppcheck only sees the scoped files in files mode, but its report
        # may still mention headers outside of them.
        return self.check_scope or self.mode == "files"

    def validate(self) -> List[str]:
        errors = list(self._type_errors)
        if not self.executable.strip():
            errors.append("analyzer.executable must not be empty")
        if self.mode not in ANALYZER_MODES:
            errors.append(f"analyzer.mode must be one of {ANALYZER_MODES}, got {self.mode!r}")
        if self.output not in OUTPUT_MODES:
            errors.append(f"analyzer.output must be one of {OUTPUT_MODES}, got {self.output!r}")
        if self.timeout is not None and self.timeout <= 0:
            errors.append(f"analyzer.timeout must be > 0, got {self.timeout}")
        return errors


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "info"
    color: str = "auto"

    def __post_init__(self) -> None:
        _remember(self, _coerce_fields(self, "logging", {"level": str, "color": str}))

    def validate(self) -> List[str]:
        # Unknown level names are not an error: they resolve to TRACE
        errors = list(self._type_errors)
        if self.color not in COLOR_MODES:
            errors.append(f"logging.color must be one of {COLOR_MODES}, got {self.color!r}")
        return errors



@dataclass
class Config:
    """
    Main configuration class for cppaudit.

    This class aggregates all configuration sections and provides
    validation and conversion helpers.
    """

    paths: PathsConfig = field(default_factory=PathsConfig)
    scope: ScopeConfig = field(default_factory=ScopeConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> bool:
        """
        Validate entire configuration.

        Returns:
            True if valid, raises ConfigurationError if invalid

        Raises:
            ConfigurationError: If any validation fails
        """
        from cppaudit.core.exceptions import ConfigurationError

        all_errors = []
        all_errors.extend(self.paths.validate())
        all_errors.extend(self.scope.validate())
        all_errors.extend(self.analyzer.validate())
        all_errors.extend(self.logging.validate())

        if all_errors:
            error_msg = "\n".join(f"  - {err}" for err in all_errors)
            raise ConfigurationError(
                "configuration",
                f"Configuration validation failed:\n{error_msg}",
                {"errors": all_errors}
            )

        return True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """
        Create configuration from dictionary.

        Args:
            config_dict: Dictionary with configuration values

        Returns:
            Config instance
        """
        return cls(
            paths=PathsConfig(**(config_dict.get("paths") or {})),
            scope=ScopeConfig(**(config_dict.get("scope") or {})),
            analyzer=AnalyzerConfig(**(config_dict.get("analyzer") or {})),
            logging=LoggingConfig(**(config_dict.get("logging") or {})),
        )

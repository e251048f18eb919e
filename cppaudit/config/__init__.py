# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Configuration management for cppaudit.

This package handles settings loading from files, environment variables
(including ``.env`` files) and command-line options.

Modules
-------
config_loader : Configuration loading utilities
config_schema : Configuration data models

Examples
--------
>>> from cppaudit.config import ConfigLoader
>>> config = ConfigLoader().load_config()
>>> config.paths.report_path
PosixPath('/toolbox/cppcheck_error.xml')

See Also
--------
cppaudit.core.exceptions : Configuration errors
"""
from __future__ import annotations

from .config_schema import (
    MAX_FILE_SIZE,
    AnalyzerConfig,
    Config,
    LoggingConfig,
    PathsConfig,
    ScopeConfig,
)
from .config_loader import ConfigLoader

__all__ = [
    'MAX_FILE_SIZE',
    'AnalyzerConfig',
    'Config',
    'LoggingConfig',
    'PathsConfig',
    'ScopeConfig',
    'ConfigLoader',
]

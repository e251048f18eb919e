# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Configuration loader for cppaudit.

This module handles loading configuration from multiple sources with
well-defined precedence rules.

Configuration Sources
---------------------
The loader supports multiple configuration sources with the following priority
order (highest to lowest):

1. Command-line arguments (highest priority)
2. Environment variables (``CPPAUDIT_`` prefixed, then the runtime
   variables ``TOOLBOX_PATH``, ``CODE_PATH`` and ``CPPCHECK_CACHE_PATH``)
3. Configuration file (YAML or TOML)
4. Default values (lowest priority)

A ``.env`` file (searched from the working directory upwards) is read
through python-dotenv before the environment is inspected; variables already
set in the process are kept.

Environment Variables
---------------------
Prefixed variables use double underscores for nesting:
``CPPAUDIT_ANALYZER__MODE=files``. ``CPPAUDIT_LOG`` is a shorthand for
``CPPAUDIT_LOGGING__LEVEL``. Values stay strings here; the schema converts
each option to its declared type (``true``/``off``, numbers, comma separated
lists) and reports values that do not convert as validation problems.

Examples
--------
Load from YAML file:
    >>> loader = ConfigLoader()
    >>> config = loader.load_config('cppaudit.yaml')
    >>> config.analyzer.mode
    'files'

See Also
--------
config_schema : Configuration schema definitions
"""

import os
import tomllib
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from .config_schema import Config
from cppaudit.core.exceptions import ConfigurationError

# Runtime variables understood without the CPPAUDIT_ prefix.
RUNTIME_ENV = {
    "TOOLBOX_PATH": ("paths", "toolbox"),
    "CODE_PATH": ("paths", "code"),
    "CPPCHECK_CACHE_PATH": ("analyzer", "cache_dir"),
}
LOG_LEVEL_ENV = "CPPAUDIT_LOG"


class ConfigLoader:
    """Configuration loader that supports multiple sources.

    Attributes
    ----------
    ENV_PREFIX : str
        Prefix for environment variables ('CPPAUDIT_').
    config : Config
        Configuration being assembled.

    Examples
    --------
    >>> loader = ConfigLoader(environ={"CODE_PATH": "/src"})
    >>> loader.load_config(dotenv=False).paths.code
    '/src'
    """

    ENV_PREFIX = "CPPAUDIT_"

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """Initialize configuration loader with default config.

        ``environ`` defaults to ``os.environ`` and is read at load time.
        """
        self.config = Config()
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def load_from_file(self, file_path: str | Path) -> Config:
        """
        Load configuration from a YAML or TOML file.

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise ConfigurationError(
                "file_path",
                f"Configuration file not found: {file_path}"
            )

        try:
            if path.suffix in ['.yaml', '.yml']:
                with open(path, 'r', encoding='utf-8') as f:
                    config_dict = yaml.safe_load(f) or {}
            elif path.suffix == '.toml':
                with open(path, 'rb') as f:
                    config_dict = tomllib.load(f)
            else:
                raise ConfigurationError(
                    "file_format",
                    f"Unsupported configuration file format: {path.suffix}"
                )
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "yaml_parse",
                f"Failed to parse YAML configuration: {e}"
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                "toml_parse",
                f"Failed to parse TOML configuration: {e}"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                "file_load",
                f"Failed to load configuration file: {e}"
            ) from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                "file_format",
                f"Configuration file must contain a mapping, got {type(config_dict).__name__}"
            )

        # Handle nested 'cppaudit' key if present
        if 'cppaudit' in config_dict:
            config_dict = config_dict['cppaudit'] or {}

        try:
            self.config = Config.from_dict(config_dict)
        except TypeError as e:
            raise ConfigurationError(
                "file_load",
                f"Unknown option in configuration file: {e}"
            ) from e
        return self.config

    def load_from_env(self) -> Config:
        """
        Load configuration from environment variables.

        Example:
            TOOLBOX_PATH=/toolbox
            CPPCHECK_CACHE_PATH=/cache/cppcheck
            CPPAUDIT_SCOPE__EXTENSIONS=c,cpp,h,hpp
            CPPAUDIT_ANALYZER__TIMEOUT=600
        """
        env_config: Dict[str, Dict[str, Any]] = {}
        environ = self.environ

        for key, (section, option) in RUNTIME_ENV.items():
            value = environ.get(key)
            if value is not None:
                env_config.setdefault(section, {})[option] = value

        for key, value in environ.items():
            if key.startswith(self.ENV_PREFIX):
                # Remove prefix and split by double underscore
                config_key = key[len(self.ENV_PREFIX):].lower()
                parts = config_key.split('__')

                if len(parts) == 2:
                    section, option = parts
                    env_config.setdefault(section, {})[option] = value

        log_level = environ.get(LOG_LEVEL_ENV)
        if log_level:
            env_config.setdefault("logging", {})["level"] = log_level

        if env_config:
            self._merge_config(env_config)

        return self.config

    def load_from_args(self, args: Dict[str, Any]) -> Config:
        """
        Load configuration from command-line arguments.

        Args:
            args: Dictionary of argument names and values; None values are ignored
        """
        if not args:
            return self.config

        # Map command-line args to config structure
        arg_mapping = {
            'toolbox': ('paths', 'toolbox'),
            'code': ('paths', 'code'),
            'extensions': ('scope', 'extensions'),
            'executable': ('analyzer', 'executable'),
            'mode': ('analyzer', 'mode'),
            'output': ('analyzer', 'output'),
            'cache_dir': ('analyzer', 'cache_dir'),
            'timeout': ('analyzer', 'timeout'),
            'check_scope': ('analyzer', 'check_scope'),
            'log_level': ('logging', 'level'),
            'color': ('logging', 'color'),
        }

        partial: Dict[str, Dict[str, Any]] = {}
        for arg_name, value in args.items():
            if value is not None and arg_name in arg_mapping:
                section, option = arg_mapping[arg_name]
                partial.setdefault(section, {})[option] = value

        self._merge_config(partial)
        return self.config

    def load_config(
        self,
        config_file: Optional[str | Path] = None,
        env: bool = True,
        args: Optional[Dict[str, Any]] = None,
        dotenv: bool = True,
    ) -> Config:
        """
        Load configuration from multiple sources and validate it.

        Args:
            config_file: Path to configuration file (optional)
            env: Whether to load from environment variables
            args: Command-line arguments dictionary (optional)
            dotenv: Whether to read a ``.env`` file first

        Returns:
            Validated Config instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        # Start with defaults
        self.config = Config()

        if config_file:
            self.load_from_file(config_file)

        if env:
            if dotenv and self._environ is None:
                load_dotenv(find_dotenv(usecwd=True), override=False)
            self.load_from_env()

        if args:
            self.load_from_args(args)

        self.config.validate()

        return self.config

    def _merge_config(self, partial_config: Dict[str, Any]):
        """
        Merge partial configuration into existing config.

        Unknown sections and options are ignored. Sections are re-normalized
        after merging, which converts each option to its declared type and
        records values that do not convert as validation problems.
        """
        for section, values in partial_config.items():
            if not hasattr(self.config, section):
                continue
            section_obj = getattr(self.config, section)
            known = {f.name for f in fields(section_obj)}
            for key, value in values.items():
                if key in known:
                    setattr(section_obj, key, value)
            section_obj.__post_init__()

# Copyright (c) 2025 Anush Krishna
# Licensed under the MIT License. See LICENSE file in the project root.

"""Custom exception hierarchy for cppaudit.

This module defines the exceptions raised across the pipeline. Most of them
are recovered where they are caught (a failed analyzer run or a malformed
report only means fewer findings); only a failure to write the final result
artifact or an invalid configuration ends the run.

All exceptions inherit from CppAuditError to allow catching application-specific
errors separately from standard Python exceptions.

Exception Hierarchy
-------------------
CppAuditError (base)
├── ToolExecutionError
├── ParserError
├── ConfigurationError
└── FileSystemError

Examples
--------
>>> try:
...     raise ToolExecutionError('cppcheck', 'Executable not found')
... except CppAuditError as e:
...     print(f"Tool error: {e.tool_name}")
Tool error: cppcheck
"""


class CppAuditError(Exception):
    """Base exception for all cppaudit errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Dictionary containing additional error context. Default is None.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Additional error context information.

    Examples
    --------
    >>> error = CppAuditError("Something went wrong", {"code": 500})
    >>> error.message
    'Something went wrong'
    >>> error.details['code']
    500
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ToolExecutionError(CppAuditError):
    """Raised when the external analyzer cannot be started.

    A non-zero exit status is not an execution error; only failures to launch
    the process at all (missing executable, permission denied) end up here.

    Parameters
    ----------
    tool_name : str
        Name of the tool that failed.
    message : str
        Error message describing the failure.
    details : dict, optional
        Additional error context (command line, errno, etc.). Default is None.

    Examples
    --------
    >>> error = ToolExecutionError('cppcheck', 'Command not found')
    >>> error.tool_name
    'cppcheck'
    >>> error.details['tool']
    'cppcheck'
    """

    def __init__(self, tool_name: str, message: str, details: dict = None):
        details = details or {}
        details['tool'] = tool_name
        super().__init__(f"Tool '{tool_name}' failed: {message}", details)
        self.tool_name = tool_name


class ParserError(CppAuditError):
    """Raised when an analyzer report cannot be decoded.

    Parameters
    ----------
    parser_name : str
        Name of the parser that failed.
    message : str
        Error message describing the parsing failure.
    details : dict, optional
        Additional context (report path, offending element). Default is None.

    Examples
    --------
    >>> error = ParserError('cppcheck', 'not well-formed')
    >>> error.parser_name
    'cppcheck'
    """

    def __init__(self, parser_name: str, message: str, details: dict = None):
        details = details or {}
        details['parser'] = parser_name
        super().__init__(f"Parser '{parser_name}' failed: {message}", details)
        self.parser_name = parser_name


class ConfigurationError(CppAuditError):
    """Raised for invalid settings or a settings file that cannot be loaded.

    Parameters
    ----------
    config_key : str
        Configuration key that caused the error.
    message : str
        Error message describing the configuration issue.
    details : dict, optional
        Additional context. Default is None.

    Examples
    --------
    >>> error = ConfigurationError('analyzer.mode', 'Invalid mode')
    >>> error.config_key
    'analyzer.mode'
    """

    def __init__(self, config_key: str, message: str, details: dict = None):
        details = details or {}
        details['config_key'] = config_key
        super().__init__(f"Configuration error for '{config_key}': {message}", details)
        self.config_key = config_key


class FileSystemError(CppAuditError):
    """Raised when reading or writing a pipeline artifact fails.

    Parameters
    ----------
    path : str
        File or directory path that caused the error.
    message : str
        Error message describing the file system failure.
    details : dict, optional
        Additional context. Default is None.

    Examples
    --------
    >>> error = FileSystemError('/toolbox/cppcheck_result.json', 'Permission denied')
    >>> error.path
    '/toolbox/cppcheck_result.json'
    """

    def __init__(self, path: str, message: str, details: dict = None):
        details = details or {}
        details['path'] = path
        super().__init__(f"File system error for '{path}': {message}", details)
        self.path = path

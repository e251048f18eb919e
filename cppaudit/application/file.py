"""Scope selection for declared C/C++ files.

The analysis config declares a list of paths; only some of them are worth
handing to cppcheck. A path is in scope when all of the following hold:

- it is not a symbolic link;
- it is a regular file (not a directory, not missing);
- its extension is in the configured allow-set (``c`` and ``cpp`` by default);
- it is at most ``MAX_FILE_SIZE`` bytes. When the size cannot be read the file
  is kept.

Everything else is dropped silently. Only metadata is read, never contents.

Examples
--------
>>> select_files([Path("/code/a.cpp"), Path("/code/b.txt")])
{PosixPath('/code/a.cpp')}

See Also
--------
cppaudit.application.orchestrator : Pipeline using the scoped file set
"""
from __future__ import annotations

from pathlib import Path
from typing import AbstractSet, Iterable, Optional, Set

from cppaudit.config.config_schema import MAX_FILE_SIZE

# Extensions analysed when none are configured
DEFAULT_EXTENSIONS: frozenset[str] = frozenset({"c", "cpp"})
# Header extensions for configurations that also want headers scanned
HEADER_EXTENSIONS: frozenset[str] = frozenset({"h", "hpp"})


def _normalize_extensions(extensions: Optional[Iterable[str]]) -> AbstractSet[str]:
    if extensions is None:
        return DEFAULT_EXTENSIONS
    return {ext.lstrip(".") for ext in extensions}


def _is_oversized(path: Path, max_size: int) -> bool:
    try:
        return path.stat().st_size > max_size
    except OSError:
        # No metadata is not a reason to skip the file
        return False


def is_in_scope(
    path: Path,
    extensions: Optional[Iterable[str]] = None,
    max_size: int = MAX_FILE_SIZE,
) -> bool:
    """Check a single path against every scope predicate.

    Parameters
    ----------
    path : Path
        Declared path.
    extensions : Iterable[str], optional
        Allowed extensions without the leading dot. Matching is
        case-sensitive. Default is ``{"c", "cpp"}``.
    max_size : int, optional
        Inclusive size limit in bytes. Default is 25,000,000.

    Returns
    -------
    bool
        True if the file should be analysed.
    """
    allowed = _normalize_extensions(extensions)
    if path.is_symlink():
        return False
    if not path.is_file():
        return False
    if path.suffix[1:] not in allowed:
        return False
    return not _is_oversized(path, max_size)


def select_files(
    declared_paths: Iterable[Path | str],
    extensions: Optional[Iterable[str]] = None,
    max_size: int = MAX_FILE_SIZE,
) -> Set[Path]:
    """Reduce the declared paths to the set of in-scope files.

    Parameters
    ----------
    declared_paths : Iterable[Path or str]
        Paths listed in the analysis config.
    extensions : Iterable[str], optional
        Allowed extensions; see :func:`is_in_scope`.
    max_size : int, optional
        Inclusive size limit in bytes.

    Returns
    -------
    Set[Path]
        In-scope paths, exactly as declared.

    Examples
    --------
    >>> select_files(["/code/a.cpp", "/code/a.h"], extensions={"c", "cpp", "h", "hpp"})
    {PosixPath('/code/a.cpp'), PosixPath('/code/a.h')}
    """
    allowed = _normalize_extensions(extensions)
    return {
        path
        for path in (Path(p) for p in declared_paths)
        if is_in_scope(path, allowed, max_size)
    }


__all__ = ["DEFAULT_EXTENSIONS", "HEADER_EXTENSIONS", "is_in_scope", "select_files"]

"""Decoded form of the ``analysis_config.json`` input artifact.

The artifact lists the files known to the analysis run and carries an
``analyzer_meta`` block that is parsed but not acted upon yet::

    {
      "files": ["/code/a.cpp", "/code/b.txt"],
      "analyzer_meta": {"name": "cxx", "enabled": true}
    }

Examples
--------
>>> config = AnalysisConfig.model_validate_json('{"files": ["/code/a.cpp"]}')
>>> config.files
[PosixPath('/code/a.cpp')]
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cppaudit.core.exceptions import ConfigurationError


class AnalyzerMeta(BaseModel):
    name: str = ""
    enabled: bool = False


class AnalysisConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    files: List[Path]
    analyzer_meta: AnalyzerMeta = Field(default_factory=AnalyzerMeta)


def load_analysis_config(path: Union[str, Path]) -> AnalysisConfig:
    """
    Read and validate the analysis config at ``path``.

    Raises
    ------
    ConfigurationError
        If the file is missing, unreadable or does not match the schema.
    """
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(
            "analysis_config",
            f"cannot read {source}: {exc.strerror or exc}",
            {"path": str(source)},
        ) from exc
    try:
        return AnalysisConfig.model_validate_json(text)
    except ValidationError as exc:
        raise ConfigurationError(
            "analysis_config",
            f"invalid analysis config at {source}: {exc.error_count()} validation error(s)",
            {"path": str(source), "errors": exc.errors(include_url=False)},
        ) from exc


__all__ = ["AnalyzerMeta", "AnalysisConfig", "load_analysis_config"]

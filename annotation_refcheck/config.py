# annotation_refcheck/config.py
"""
Analysis configuration.

A config file is a JSON object; every key is optional:

    {
      "exceptions": ["Route", "Groups"],
      "presets": ["doctrine"],
      "suppress": ["ConstReferenceConstNotFound"],
      "file_suppressions": {"legacy/*.php": ["AnnotationNotImported"]},
      "checkers": ["annotation"],
      "format": "gcc",
      "severity": {"AnnotationNotImported": "warning"}
    }

Command-line flags override values read from the file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from annotation_refcheck.checkers import (
    EXCEPTION_PRESETS,
    ISSUE_TEMPLATES,
    CheckerRegistry,
    DiagnosticSeverity,
    SuppressionManager,
)
from annotation_refcheck.errors import ConfigError

logger = logging.getLogger(__name__)

OUTPUT_FORMATS: Tuple[str, ...] = ("gcc", "json", "summary")


@dataclass
class AnalysisConfig:
    """Options for one analysis run."""
    exceptions: List[str] = field(default_factory=list)
    presets: List[str] = field(default_factory=list)
    suppress: List[str] = field(default_factory=list)
    file_suppressions: Dict[str, List[str]] = field(default_factory=dict)
    checkers: Optional[List[str]] = None
    format: str = "gcc"
    severity: Dict[str, str] = field(default_factory=dict)

    def effective_exceptions(self, extra: Iterable[str] = ()) -> List[str]:
        """Preset entries, then configured ones, then *extra*; no duplicates."""
        merged: List[str] = []
        for preset in self.presets:
            merged.extend(EXCEPTION_PRESETS.get(preset, ()))
        merged.extend(self.exceptions)
        merged.extend(extra)
        return list(dict.fromkeys(merged))

    def severity_overrides(self) -> Dict[str, DiagnosticSeverity]:
        """Map issue kinds to severities; raises ``ConfigError`` on bad names."""
        result: Dict[str, DiagnosticSeverity] = {}
        for issue, name in self.severity.items():
            try:
                result[issue] = DiagnosticSeverity(name.lower())
            except ValueError:
                raise ConfigError(
                    f"unknown severity {name!r} for {issue}"
                ) from None
        return result

    def build_suppressions(self) -> SuppressionManager:
        sm = SuppressionManager()
        for error_id in self.suppress:
            sm.add_global_suppression(error_id)
        for pattern, error_ids in self.file_suppressions.items():
            for error_id in error_ids:
                sm.add_file_suppression(error_id, pattern)
        return sm

    def checker_options(self, extra_exceptions: Iterable[str] = ()) -> Dict[str, Any]:
        return {
            "exceptions": self.effective_exceptions(extra_exceptions),
            "severity": self.severity_overrides(),
        }

    def validate(self, registry: Optional[CheckerRegistry] = None) -> List[str]:
        """Return a list of validation warnings (empty if valid)."""
        warnings: List[str] = []
        for preset in self.presets:
            if preset not in EXCEPTION_PRESETS:
                warnings.append(f"unknown exception preset {preset!r}")
        for issue in [*self.suppress, *self.severity]:
            if issue not in ISSUE_TEMPLATES:
                warnings.append(f"unknown issue kind {issue!r}")
        if self.format not in OUTPUT_FORMATS:
            warnings.append(f"unknown output format {self.format!r}")
        if registry is not None and self.checkers is not None:
            for name in self.checkers:
                if registry.get_by_name(name) is None:
                    warnings.append(f"unknown checker {name!r}")
        return warnings


def config_from_mapping(raw: Mapping[str, Any], source: str = "") -> AnalysisConfig:
    """Build an ``AnalysisConfig`` from decoded JSON, checking types."""
    known = {f.name for f in fields(AnalysisConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"unknown keys: {', '.join(unknown)}", source=source)

    def _str_list(key: str) -> Optional[List[str]]:
        value = raw.get(key)
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"{key!r} must be a list of strings", source=source)
        return list(value)

    def _str_map(key: str) -> Dict[str, Any]:
        value = raw.get(key, {})
        if not isinstance(value, Mapping) or not all(isinstance(k, str) for k in value):
            raise ConfigError(f"{key!r} must be an object", source=source)
        return dict(value)

    file_suppressions = _str_map("file_suppressions")
    for pattern, ids in file_suppressions.items():
        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            raise ConfigError(
                f"file_suppressions[{pattern!r}] must be a list of strings",
                source=source,
            )

    severity = _str_map("severity")
    if not all(isinstance(v, str) for v in severity.values()):
        raise ConfigError("'severity' values must be strings", source=source)

    fmt = raw.get("format", "gcc")
    if not isinstance(fmt, str):
        raise ConfigError("'format' must be a string", source=source)

    return AnalysisConfig(
        exceptions=_str_list("exceptions") or [],
        presets=_str_list("presets") or [],
        suppress=_str_list("suppress") or [],
        file_suppressions=file_suppressions,
        checkers=_str_list("checkers"),
        format=fmt,
        severity=severity,
    )


def load_config(path: Union[str, Path]) -> AnalysisConfig:
    """Read a JSON config file."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read config: {exc}", source=str(p)) from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON: {exc}", source=str(p)) from exc
    if not isinstance(raw, Mapping):
        raise ConfigError("top level must be an object", source=str(p))

    config = config_from_mapping(raw, source=str(p))
    logger.info("Loaded config %s", p)
    return config


__all__ = [
    "OUTPUT_FORMATS",
    "AnalysisConfig",
    "config_from_mapping",
    "load_config",
]

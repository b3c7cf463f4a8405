# tests/test_config.py
"""
Tests for AnalysisConfig and the JSON config loader.
"""

import json

import pytest

from annotation_refcheck.checkers import (
    ANNOTATION_NOT_IMPORTED,
    DEFAULT_REGISTRY,
    DiagnosticSeverity,
    Diagnostic,
    SourceLocation,
)
from annotation_refcheck.config import AnalysisConfig, config_from_mapping, load_config
from annotation_refcheck.errors import ConfigError


class TestAnalysisConfig:

    def test_defaults(self):
        config = AnalysisConfig()
        assert config.format == "gcc"
        assert config.checkers is None
        assert config.validate(DEFAULT_REGISTRY) == []

    def test_effective_exceptions_order(self):
        config = AnalysisConfig(exceptions=["Route", "Target"], presets=["doctrine"])
        merged = config.effective_exceptions(["Groups", "Route"])
        assert merged[0] == "Annotation"
        assert merged[-2:] == ["Route", "Groups"]
        assert merged.count("Target") == 1

    def test_severity_overrides(self):
        config = AnalysisConfig(severity={ANNOTATION_NOT_IMPORTED: "Warning"})
        assert config.severity_overrides() == {
            ANNOTATION_NOT_IMPORTED: DiagnosticSeverity.WARNING,
        }

    def test_bad_severity(self):
        config = AnalysisConfig(severity={ANNOTATION_NOT_IMPORTED: "fatal"})
        with pytest.raises(ConfigError, match="unknown severity"):
            config.severity_overrides()

    def test_build_suppressions(self):
        config = AnalysisConfig(
            suppress=["ConstReferenceConstNotFound"],
            file_suppressions={"legacy/*": [ANNOTATION_NOT_IMPORTED]},
        )
        sm = config.build_suppressions()
        diag = Diagnostic(
            error_id=ANNOTATION_NOT_IMPORTED,
            message="",
            severity=DiagnosticSeverity.ERROR,
            location=SourceLocation("legacy/Old.php", 1),
        )
        assert sm.is_suppressed(diag)

    def test_validate_warnings(self):
        config = AnalysisConfig(
            presets=["symfony"],
            suppress=["NoSuchIssue"],
            checkers=["nope"],
            format="xml",
        )
        warnings = config.validate(DEFAULT_REGISTRY)
        assert len(warnings) == 4
        assert any("symfony" in w for w in warnings)


class TestConfigFromMapping:

    def test_full(self):
        config = config_from_mapping({
            "exceptions": ["Route"],
            "presets": ["doctrine"],
            "suppress": [ANNOTATION_NOT_IMPORTED],
            "file_suppressions": {"legacy/*": [ANNOTATION_NOT_IMPORTED]},
            "checkers": ["annotation"],
            "format": "json",
            "severity": {ANNOTATION_NOT_IMPORTED: "warning"},
        })
        assert config.exceptions == ["Route"]
        assert config.checkers == ["annotation"]
        assert config.format == "json"

    @pytest.mark.parametrize("raw", [
        {"unknown": 1},
        {"exceptions": "Route"},
        {"exceptions": [1]},
        {"file_suppressions": []},
        {"file_suppressions": {"a": "b"}},
        {"severity": {"A": 1}},
        {"format": 3},
    ])
    def test_rejects(self, raw):
        with pytest.raises(ConfigError):
            config_from_mapping(raw)


class TestLoadConfig:

    def test_load(self, tmp_path):
        path = tmp_path / "refcheck.json"
        path.write_text(json.dumps({"exceptions": ["Route"]}), encoding="utf-8")
        assert load_config(path).exceptions == ["Route"]

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "refcheck.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigError, match="top level"):
            load_config(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "refcheck.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ConfigError, match="invalid JSON"):
            load_config(path)

    def test_missing(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.json")

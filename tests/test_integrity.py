"""
Unit tests for the referential integrity pass.

Tests cover:
- Category refs resolving to audits/groups of the named plugin
- Group refs resolving to audits of their own plugin
- Structural errors short-circuiting the reference pass
- Core config validation with references
"""
import pytest

from core.reportschema.core_config import CORE_CONFIG_SCHEMA, parse_core_config, parse_plugin_config
from core.reportschema.errors import ReportValidationError
from core.reportschema.integrity import (
    check_category_refs,
    check_group_refs,
    check_plugin_group_refs,
    check_references,
    parse_checked_core_config,
    parse_checked_report,
    validate_core_config_references,
    validate_plugin_config_references,
    validate_report_references,
)
from core.reportschema.validation import Invalid, Valid


class TestCategoryRefs:
    def test_valid_report_has_no_reference_errors(self, report):
        assert check_references(report) == []
        assert parse_checked_report(report) == report

    def test_missing_plugin(self, report):
        report["categories"][0]["refs"][0]["plugin"] = "stylelint"
        errors = check_references(report)
        assert [(e.field_path, e.kind, e.family) for e in errors] == [
            ("categories.0.refs.0", "UnknownReference", "ReferentialIntegrityError"),
        ]
        assert "stylelint#problems (group)" in errors[0].message

    def test_type_matters(self, report):
        # "problems" is a group, not an audit
        report["categories"][0]["refs"][0]["type"] = "audit"
        errors = check_category_refs(report["categories"], report["plugins"])
        assert [e.field_path for e in errors] == ["categories.0.refs.0"]
        assert "eslint/problems" in errors[0].message

    def test_audit_of_other_plugin(self, report):
        report["categories"][1]["refs"][1]["plugin"] = "lighthouse"
        errors = check_references(report)
        assert [e.field_path for e in errors] == ["categories.1.refs.1"]


class TestGroupRefs:
    def test_group_ref_to_unknown_audit(self, report):
        report["plugins"][0]["groups"][0]["refs"].append({"slug": "no-console", "weight": 1})
        errors = check_group_refs(report["plugins"])
        assert [(e.field_path, e.kind) for e in errors] == [
            ("plugins.0.groups.0.refs.2.slug", "UnknownReference"),
        ]
        assert "no-console" in errors[0].message

    def test_single_plugin_paths_are_relative(self, plugin_config):
        plugin_config["groups"][0]["refs"][0]["slug"] = "no-console"
        errors = check_plugin_group_refs(plugin_config)
        assert [e.field_path for e in errors] == ["groups.0.refs.0.slug"]
        assert check_group_refs([plugin_config])[0].field_path == "plugins.0.groups.0.refs.0.slug"

    def test_plugin_config_group_refs(self, plugin_config):
        assert isinstance(validate_plugin_config_references(plugin_config), Valid)
        plugin_config["groups"][0]["refs"][0]["slug"] = "no-console"
        result = validate_plugin_config_references(plugin_config)
        assert isinstance(result, Invalid)
        assert [(e.field_path, e.kind) for e in result.errors] == [
            ("groups.0.refs.0.slug", "UnknownReference"),
        ]


class TestReferencePass:
    def test_structural_errors_come_first(self, report):
        report["categories"][0]["refs"][0]["plugin"] = "stylelint"
        report["duration"] = None
        result = validate_report_references(report)
        assert isinstance(result, Invalid)
        assert [(e.field_path, e.kind) for e in result.errors] == [("duration", "MissingField")]

    def test_reference_errors_after_structure_passes(self, report):
        report["categories"][0]["refs"][0]["plugin"] = "stylelint"
        with pytest.raises(ReportValidationError) as exc:
            parse_checked_report(report)
        assert [e.kind for e in exc.value.errors] == ["UnknownReference"]


class TestCoreConfig:
    def test_valid(self, core_config):
        value = parse_checked_core_config(core_config)
        assert value["plugins"][0]["runner"]["outputFile"] == "tmp/eslint.json"

    def test_plugin_config(self, plugin_config):
        assert parse_plugin_config(plugin_config)["runner"]["args"] == ["bin.js"]

    def test_plugins_required(self, core_config):
        core_config["plugins"] = []
        result = CORE_CONFIG_SCHEMA(core_config)
        assert [(e.field_path, e.kind) for e in result.errors] == [("plugins", "TooSmall")]

    def test_persist_and_upload_constraints(self, core_config):
        core_config["persist"]["filename"] = "my report"
        core_config["persist"]["format"] = ["json", "html"]
        core_config["upload"]["server"] = "portal"
        core_config["upload"]["organization"] = "Example Org"
        with pytest.raises(ReportValidationError) as exc:
            parse_core_config(core_config)
        assert [(e.field_path, e.kind) for e in exc.value.errors] == [
            ("persist.filename", "InvalidFileName"),
            ("persist.format.1", "InvalidEnum"),
            ("upload.server", "InvalidUrl"),
            ("upload.organization", "PatternMismatch"),
        ]

    def test_duplicate_plugin_slugs(self, core_config, plugin_config):
        core_config["plugins"].append(plugin_config)
        result = CORE_CONFIG_SCHEMA(core_config)
        assert [(e.field_path, e.kind) for e in result.errors] == [("plugins", "DuplicateReference")]

    def test_category_ref_to_missing_group(self, core_config):
        core_config["categories"][0]["refs"][0]["slug"] = "suggestions"
        result = validate_core_config_references(core_config)
        assert [(e.field_path, e.kind) for e in result.errors] == [("categories.0.refs.0", "UnknownReference")]

    def test_optional_sections(self, core_config):
        del core_config["persist"]
        del core_config["upload"]
        assert isinstance(validate_core_config_references(core_config), Valid)

"""
Unit tests for weighted scoring of validated reports.

Tests cover:
- Weighted average with display-only (weight 0) refs
- Group scores per plugin
- Category scores resolving audits and groups across plugins
"""
import pytest

from core.reportschema.errors import ReportValidationError
from core.reportschema.scoring import calculate_score, score_categories, score_groups


class TestCalculateScore:
    def test_weighted_average(self):
        refs = [{"slug": "a", "weight": 3}, {"slug": "b", "weight": 1}]
        scores = {"a": 1.0, "b": 0.0}
        assert calculate_score(refs, lambda r: scores[r["slug"]]) == pytest.approx(0.75)

    def test_zero_weight_is_display_only(self):
        refs = [{"slug": "a", "weight": 0}, {"slug": "b", "weight": 2}]
        scores = {"a": 0.0, "b": 0.5}
        assert calculate_score(refs, lambda r: scores[r["slug"]]) == pytest.approx(0.5)

    def test_zero_total_weight(self):
        with pytest.raises(ValueError):
            calculate_score([{"slug": "a", "weight": 0}], lambda r: 1.0)


class TestReportScores:
    def test_group_scores(self, plugin_report):
        assert score_groups(plugin_report) == {"problems": pytest.approx(0.5)}

    def test_plugin_without_groups(self, report):
        assert score_groups(report["plugins"][1]) == {}

    def test_category_scores(self, report):
        scores = score_categories(report)
        assert scores == {
            "code-style": pytest.approx(0.5),
            "performance": pytest.approx(0.375),
        }

    def test_unresolvable_refs(self, report):
        report["categories"][1]["refs"][0]["slug"] = "cumulative-layout-shift"
        with pytest.raises(ReportValidationError) as exc:
            score_categories(report)
        assert exc.value.errors[0].kind == "UnknownReference"

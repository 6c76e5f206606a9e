from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Sequence

from core.reportschema.errors import ReportValidationError
from core.reportschema.integrity import check_references


Scores = Dict[str, float]


def calculate_score(refs: Sequence[Mapping[str, Any]], score_of: Callable[[Mapping[str, Any]], float]) -> float:
    """Weighted average of referenced scores; weight 0 refs are display only."""
    total_weight = sum(ref["weight"] for ref in refs)
    if total_weight == 0:
        raise ValueError("Cannot score refs whose weights sum to 0")
    weighted = sum(score_of(ref) * ref["weight"] for ref in refs if ref["weight"])
    return weighted / total_weight


def score_groups(plugin: Mapping[str, Any]) -> Scores:
    audit_scores = {audit["slug"]: audit["score"] for audit in plugin["audits"]}
    return {
        group["slug"]: calculate_score(group["refs"], lambda ref: audit_scores[ref["slug"]])
        for group in plugin.get("groups") or []
    }


def score_categories(report: Mapping[str, Any]) -> Scores:
    """
    Score every category of a validated report.
    Raises ReportValidationError when a ref cannot be resolved.
    """
    errors = check_references(report)
    if errors:
        raise ReportValidationError(errors)

    audits: Dict[tuple, float] = {}
    groups: Dict[tuple, float] = {}
    for plugin in report["plugins"]:
        for audit in plugin["audits"]:
            audits[(plugin["slug"], audit["slug"])] = audit["score"]
        for slug, score in score_groups(plugin).items():
            groups[(plugin["slug"], slug)] = score

    def score_of(ref: Mapping[str, Any]) -> float:
        table = audits if ref["type"] == "audit" else groups
        return table[(ref["plugin"], ref["slug"])]

    return {
        category["slug"]: calculate_score(category["refs"], score_of)
        for category in report["categories"]
    }

"""
Cross-document referential integrity.

Runs after structural validation, on a fully assembled report, a core config
or a single plugin config. Every group ref must name an audit of its own
plugin, and every category ref must name an existing audit or group of the
plugin it points at.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Sequence, Set, Tuple

from core.reportschema.category import format_ref
from core.reportschema.core_config import CORE_CONFIG_SCHEMA
from core.reportschema.errors import FieldError
from core.reportschema.plugin import PLUGIN_CONFIG_SCHEMA
from core.reportschema.report import REPORT_SCHEMA
from core.reportschema.validation import Invalid, Validated, Validator, parse


logger = logging.getLogger(__name__)


def _index_plugins(plugins: Sequence[Mapping[str, Any]]) -> Set[Tuple[str, str, str]]:
    index: Set[Tuple[str, str, str]] = set()
    for plugin in plugins:
        for audit in plugin.get("audits") or []:
            index.add((plugin["slug"], "audit", audit["slug"]))
        for group in plugin.get("groups") or []:
            index.add((plugin["slug"], "group", group["slug"]))
    return index


def check_plugin_group_refs(plugin: Mapping[str, Any]) -> List[FieldError]:
    """Group refs of one plugin that name no audit of that plugin, located relative to the plugin."""
    audit_slugs = {audit["slug"] for audit in plugin.get("audits") or []}
    errors: List[FieldError] = []
    for j, group in enumerate(plugin.get("groups") or []):
        for k, ref in enumerate(group["refs"]):
            if ref["slug"] not in audit_slugs:
                errors.append(FieldError(
                    path=("groups", j, "refs", k, "slug"),
                    kind="UnknownReference",
                    message=(
                        f"Group '{group['slug']}' references audit '{ref['slug']}' "
                        f"which plugin '{plugin['slug']}' does not declare"
                    ),
                ))
    return errors


def check_group_refs(plugins: Sequence[Mapping[str, Any]]) -> List[FieldError]:
    return [e.at("plugins", i) for i, plugin in enumerate(plugins) for e in check_plugin_group_refs(plugin)]


def check_category_refs(
    categories: Sequence[Mapping[str, Any]],
    plugins: Sequence[Mapping[str, Any]],
) -> List[FieldError]:
    known = _index_plugins(plugins)
    errors: List[FieldError] = []
    for i, category in enumerate(categories):
        for k, ref in enumerate(category["refs"]):
            if (ref["plugin"], ref["type"], ref["slug"]) not in known:
                errors.append(FieldError(
                    path=("categories", i, "refs", k),
                    kind="UnknownReference",
                    message=f"Category '{category['slug']}' references missing {ref['type']} {format_ref(ref)}",
                ))
    return errors


def check_references(document: Mapping[str, Any]) -> List[FieldError]:
    """Referential errors of an already structurally valid report or core config."""
    plugins = document.get("plugins") or []
    categories = document.get("categories") or []
    return check_group_refs(plugins) + check_category_refs(categories, plugins)


def with_references(
    schema: Validator,
    check: Callable[[Mapping[str, Any]], List[FieldError]] = check_references,
) -> Validator:
    """Structural validation followed, only on success, by the reference pass."""

    def validate(raw: Any) -> Validated:
        result = schema(raw)
        if isinstance(result, Invalid):
            return result
        errors = check(result.value)
        if errors:
            logger.debug("Reference check failed with %d error(s)", len(errors))
            return Invalid(tuple(errors))
        return result

    return validate


validate_report_references = with_references(REPORT_SCHEMA)
validate_core_config_references = with_references(CORE_CONFIG_SCHEMA)
validate_plugin_config_references = with_references(PLUGIN_CONFIG_SCHEMA, check_plugin_group_refs)


def parse_checked_report(raw: Any) -> Dict[str, Any]:
    return parse(validate_report_references, raw)


def parse_checked_core_config(raw: Any) -> Dict[str, Any]:
    return parse(validate_core_config_references, raw)

"""
Collected report documents.

Each record is the disjoint union of smaller shapes; the schemas below are
assembled at import time, so a field declared twice fails the import with
SchemaConflictError rather than silently shadowing one definition.
"""

from __future__ import annotations

from typing import Any, Dict

from core.reportschema.audit import AUDIT_GROUP_SCHEMA, AUDIT_RESULT_SCHEMA, AUDIT_SCHEMA
from core.reportschema.category import CATEGORY_CONFIG_SCHEMA
from core.reportschema.meta import execution_meta, package_version
from core.reportschema.plugin import PLUGIN_META_SCHEMA
from core.reportschema.scorable import unique_slugs
from core.reportschema.validation import Shape, Validated, array_of, optional, parse, refine


AUDIT_REPORT_SCHEMA = AUDIT_SCHEMA.merge(AUDIT_RESULT_SCHEMA, description="Audit with its result")

PLUGIN_REPORT_SCHEMA = PLUGIN_META_SCHEMA.merge(
    execution_meta(
        date_description="Start date and time of plugin run",
        duration_description="Duration of the plugin run in ms",
    ),
    Shape({
        "audits": refine(array_of(AUDIT_REPORT_SCHEMA, "Audit reports"), unique_slugs("Audit")),
        "groups": optional(refine(array_of(AUDIT_GROUP_SCHEMA, "Audit groups"), unique_slugs("Group"))),
    }),
    description="Plugin report",
)

REPORT_SCHEMA = package_version(required=False, version_description="NPM version of the CLI").merge(
    execution_meta(
        date_description="Start date and time of the collect run",
        duration_description="Duration of the collect run in ms",
    ),
    Shape(
        {
            "categories": refine(array_of(CATEGORY_CONFIG_SCHEMA, "Categories"), unique_slugs("Category")),
            "plugins": refine(array_of(PLUGIN_REPORT_SCHEMA, "Plugin reports"), unique_slugs("Plugin")),
        },
        "Collect output data",
    ),
    description="Collect output data",
)


def validate_report(raw: Any) -> Validated:
    return REPORT_SCHEMA(raw)


def parse_report(raw: Any) -> Dict[str, Any]:
    """Return the normalized report or raise ReportValidationError with every field error."""
    return parse(REPORT_SCHEMA, raw)


def parse_plugin_report(raw: Any) -> Dict[str, Any]:
    return parse(PLUGIN_REPORT_SCHEMA, raw)

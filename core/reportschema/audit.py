from __future__ import annotations

from typing import Sequence

from config import settings
from core.reportschema.fields import (
    enum_field,
    file_path_field,
    number_field,
    positive_int_field,
    slug_field,
    string_field,
)
from core.reportschema.meta import meta_fields
from core.reportschema.scorable import Ref, duplicates_by, find_duplicates, scorable, weighted_ref
from core.reportschema.validation import Shape, array_of, optional


ISSUE_SEVERITIES = ("info", "warning", "error")


AUDIT_SCHEMA = Shape({"slug": slug_field("ID (unique within plugin)")}).merge(
    meta_fields(
        title_description="Descriptive name",
        description_description="Description (markdown)",
        docs_url_description="Link to documentation (rationale)",
    ),
    description="List of audits maintained in a plugin",
)


# -------------------------
# Audit results
# -------------------------

SOURCE_FILE_LOCATION_SCHEMA = Shape(
    {
        "file": file_path_field("Relative path to source file in Git repo"),
        "position": optional(Shape(
            {
                "startLine": positive_int_field("Start line"),
                "startColumn": optional(positive_int_field("Start column")),
                "endLine": optional(positive_int_field("End line")),
                "endColumn": optional(positive_int_field("End column")),
            },
            "Location in file",
        )),
    },
    "Source file location",
)

ISSUE_SCHEMA = Shape(
    {
        "message": string_field("Descriptive error message", lambda: settings.MAX_ISSUE_MESSAGE_LENGTH),
        "severity": enum_field(ISSUE_SEVERITIES, "Severity level of the issue"),
        "source": optional(SOURCE_FILE_LOCATION_SCHEMA),
    },
    "Issue information",
)

# result fields only; the audit identity (slug) comes from the audit itself
AUDIT_RESULT_SCHEMA = Shape(
    {
        "displayValue": optional(string_field("Formatted value (e.g. '0.9 s', '2.1 MB')")),
        "value": positive_int_field("Raw numeric value"),
        "score": number_field("Value between 0 and 1", minimum=0, maximum=1),
        "details": optional(Shape(
            {"issues": array_of(ISSUE_SCHEMA, "List of findings")},
            "Detailed information",
        )),
    },
    "Audit information",
)

AUDIT_OUTPUT_SCHEMA = Shape({"slug": slug_field("Reference to audit")}).merge(
    AUDIT_RESULT_SCHEMA,
    description="Audit information",
)

AUDIT_OUTPUTS_SCHEMA = array_of(
    AUDIT_OUTPUT_SCHEMA,
    "List of JSON formatted audit output emitted by the runner process of a plugin",
)


# -------------------------
# Audit groups
# -------------------------

def duplicate_ref_slugs(refs: Sequence[Ref]) -> str:
    duplicates = sorted(find_duplicates(refs, lambda ref: ref["slug"]))
    return f"In plugin groups the slugs are duplicated: {', '.join(duplicates)}"


AUDIT_GROUP_REF_SCHEMA = weighted_ref("Weighted reference to an audit", "Reference slug to an audit")

AUDIT_GROUP_SCHEMA = scorable(
    'An audit group aggregates a set of audits into a single score which can be referenced from a category. '
    'E.g. the group slug "performance" groups audits and can be referenced in a category',
    AUDIT_GROUP_REF_SCHEMA,
    duplicates_by(lambda ref: ref["slug"]),
    duplicate_ref_slugs,
).merge(
    meta_fields(
        title_description="Descriptive name for the group",
        description_description="Description of the group (markdown)",
        docs_url_description="Group documentation site",
        description="Group metadata",
    ),
)

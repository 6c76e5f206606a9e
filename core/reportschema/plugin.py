from __future__ import annotations

from core.reportschema.audit import AUDIT_GROUP_SCHEMA, AUDIT_SCHEMA
from core.reportschema.fields import enum_field, file_path_field, slug_field, string_array_field, string_field
from core.reportschema.icons import MATERIAL_ICONS
from core.reportschema.meta import meta_fields, package_version
from core.reportschema.scorable import unique_slugs
from core.reportschema.validation import Shape, array_of, optional, refine


PLUGIN_META_SCHEMA = package_version(required=False).merge(
    meta_fields(
        title_description="Descriptive name",
        description_description="Description (markdown)",
        docs_url_description="Plugin documentation site",
        description="Plugin metadata",
    ),
    Shape({
        "slug": slug_field("Unique plugin slug within core config"),
        "icon": enum_field(MATERIAL_ICONS, "Icon from VSCode Material Icons extension"),
    }),
    description="Plugin metadata",
)

RUNNER_CONFIG_SCHEMA = Shape(
    {
        "command": string_field("Shell command to execute"),
        "args": optional(string_array_field("Command arguments")),
        "outputFile": file_path_field("Output path"),
    },
    "How to execute runner",
)

PLUGIN_CONFIG_SCHEMA = PLUGIN_META_SCHEMA.merge(
    Shape({
        "runner": RUNNER_CONFIG_SCHEMA,
        "audits": refine(
            array_of(AUDIT_SCHEMA, "List of audits maintained in a plugin", min_items=1),
            unique_slugs("Audit"),
        ),
        "groups": optional(refine(array_of(AUDIT_GROUP_SCHEMA, "List of groups"), unique_slugs("Group"))),
    }),
    description="Plugin configuration",
)

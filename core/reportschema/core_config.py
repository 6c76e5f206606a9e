from __future__ import annotations

from typing import Any, Dict

from core.reportschema.category import CATEGORY_CONFIG_SCHEMA
from core.reportschema.fields import enum_field, file_name_field, file_path_field, slug_field, string_field, url_field
from core.reportschema.plugin import PLUGIN_CONFIG_SCHEMA
from core.reportschema.scorable import unique_slugs
from core.reportschema.validation import Shape, array_of, optional, parse, refine


FORMATS = ("json", "md", "stdout")


PERSIST_CONFIG_SCHEMA = Shape({
    "outputDir": file_path_field("Artifacts folder"),
    "filename": file_name_field("Artifacts file name (without extension)"),
    "format": optional(array_of(enum_field(FORMATS, "Output format"), "Output formats")),
})

UPLOAD_CONFIG_SCHEMA = Shape(
    {
        "server": url_field("URL of deployed portal API"),
        "apiKey": string_field("API key with write access to portal (read it from the environment)"),
        "organization": slug_field("Organization slug from the portal"),
        "project": slug_field("Project slug from the portal"),
    },
    "Upload configuration",
)

CORE_CONFIG_SCHEMA = Shape(
    {
        "plugins": refine(
            array_of(PLUGIN_CONFIG_SCHEMA, "List of plugins to be used (official, community-provided, or custom)", min_items=1),
            unique_slugs("Plugin"),
        ),
        "persist": optional(PERSIST_CONFIG_SCHEMA),
        "upload": optional(UPLOAD_CONFIG_SCHEMA),
        "categories": refine(array_of(CATEGORY_CONFIG_SCHEMA, "Categorization of individual audits"), unique_slugs("Category")),
    },
    "Core configuration",
)


def parse_plugin_config(raw: Any) -> Dict[str, Any]:
    return parse(PLUGIN_CONFIG_SCHEMA, raw)


def parse_core_config(raw: Any) -> Dict[str, Any]:
    return parse(CORE_CONFIG_SCHEMA, raw)

from __future__ import annotations

from typing import Sequence, Tuple

from core.reportschema.fields import boolean_field, enum_field, slug_field
from core.reportschema.meta import meta_fields
from core.reportschema.scorable import Ref, duplicates_by, find_duplicates, scorable, weighted_ref
from core.reportschema.validation import Shape, optional


REF_TYPES = ("audit", "group")


CATEGORY_REF_SCHEMA = weighted_ref(
    "Weighted references to audits and/or groups for the category",
    "Slug of an audit or group (depending on `type`)",
).extend({
    "type": enum_field(REF_TYPES, "Discriminant for reference kind, affects where `slug` is looked up"),
    "plugin": slug_field("Plugin slug (plugin should contain referenced audit or group)"),
})


def category_ref_key(ref: Ref) -> Tuple[str, str, str]:
    # the same slug may name an audit and a group of one plugin
    return (ref["plugin"], ref["type"], ref["slug"])


def format_ref(ref: Ref) -> str:
    if ref["type"] == "audit":
        return f"{ref['plugin']}/{ref['slug']}"
    return f"{ref['plugin']}#{ref['slug']} ({ref['type']})"


def duplicate_ref_message(refs: Sequence[Ref]) -> str:
    keys = find_duplicates(refs, category_ref_key)
    duplicates = sorted({format_ref(ref) for ref in refs if category_ref_key(ref) in keys})
    return f"In the categories, the following audit or group refs are duplicates: {', '.join(duplicates)}"


CATEGORY_CONFIG_SCHEMA = scorable(
    "Category with a score calculated from audits and groups of various plugins",
    CATEGORY_REF_SCHEMA,
    duplicates_by(category_ref_key),
    duplicate_ref_message,
).merge(
    meta_fields(
        title_description="Category Title",
        docs_url_description="Category docs URL",
        description_description="Category description",
        description="Meta info for category",
    ),
    Shape({
        "isBinary": optional(boolean_field(
            'Is this a binary category (i.e. only a perfect score considered a "pass")'
        )),
    }),
)

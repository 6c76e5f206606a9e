from __future__ import annotations

from typing import Optional

from core.reportschema.fields import (
    description_field,
    docs_url_field,
    number_field,
    string_field,
    title_field,
)
from core.reportschema.validation import Shape


def execution_meta(
    date_description: str = "Execution start date and time",
    duration_description: str = "Execution duration in ms",
) -> Shape:
    return Shape({
        "date": string_field(date_description),
        "duration": number_field(duration_description),
    })


def meta_fields(
    *,
    title_description: Optional[str] = None,
    description_description: Optional[str] = None,
    docs_url_description: Optional[str] = None,
    description: str = "",
) -> Shape:
    """Display metadata shared by plugins, audits, groups and categories."""
    return Shape(
        {
            "title": title_field(title_description) if title_description else title_field(),
            "description": (
                description_field(description_description) if description_description else description_field()
            ),
            "docsUrl": docs_url_field(docs_url_description) if docs_url_description else docs_url_field(),
        },
        description,
    )


_PACKAGE_DESCRIPTION = "NPM package name and version of a published package"


def _required_package_version(version_description: str) -> Shape:
    return Shape(
        {
            "packageName": string_field("NPM package name"),
            "version": string_field(version_description),
        },
        _PACKAGE_DESCRIPTION,
    )


def _optional_package_version(version_description: str) -> Shape:
    return Shape(
        {
            "packageName": string_field("NPM package name").optional(),
            "version": string_field(version_description).optional(),
        },
        _PACKAGE_DESCRIPTION,
    )


def package_version(required: bool = False, version_description: str = "NPM version of the package") -> Shape:
    """
    Package identity. ``required=True`` demands both packageName and version,
    otherwise either may be left out.
    """
    if required:
        return _required_package_version(version_description)
    return _optional_package_version(version_description)

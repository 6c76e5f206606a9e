from __future__ import annotations

import math
import re
from typing import Any, Callable, Iterable, List, Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from config import settings
from core.reportschema.errors import FieldError
from core.reportschema.validation import Invalid, Rule, Valid, Validated, array_of, expected, fail


SLUG_REGEX = re.compile(r"^[0-9a-z]+(-[0-9a-z]+)*$")
FILENAME_REGEX = re.compile(r'^(?!.*[ \\/:*?"<>|]).+$')

_URL_ADAPTER = TypeAdapter(AnyUrl)

StringCheck = Callable[[str], Optional[FieldError]]


def _too_long(
    limit: Callable[[], int],
    template: str = "String must contain at most {maximum} character(s)",
) -> StringCheck:
    # limits are resolved per call so settings overrides apply
    def check(value: str) -> Optional[FieldError]:
        maximum = limit()
        if len(value) > maximum:
            return FieldError(kind="TooLong", message=template.format(maximum=maximum))
        return None

    return check


def _string(description: str, *checks: StringCheck, trim: bool = False, required: bool = True) -> Rule:
    def validate(value: Any) -> Validated:
        if not isinstance(value, str):
            return expected("string", value)
        if trim:
            value = value.strip()
        errors: List[FieldError] = []
        for check in checks:
            e = check(value)
            if e is not None:
                errors.append(e)
                if e.kind == "Empty":
                    break
        if errors:
            return Invalid(tuple(errors))
        return Valid(value)

    return Rule(validate, description, required)


def is_valid_url(value: str) -> bool:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


# -------------------------
# Primitive fields
# -------------------------

def string_field(description: str, max_length: Optional[Callable[[], int]] = None) -> Rule:
    checks = [_too_long(max_length)] if max_length else []
    return _string(description, *checks)


def slug_field(description: str = "Unique ID (human-readable, URL-safe)") -> Rule:
    def pattern(value: str) -> Optional[FieldError]:
        if SLUG_REGEX.fullmatch(value) is None:
            return FieldError(
                kind="PatternMismatch",
                message=(
                    "The slug has to follow the pattern [0-9a-z] followed by multiple "
                    "optional groups of -[0-9a-z]. e.g. my-slug"
                ),
            )
        return None

    return _string(
        description,
        pattern,
        _too_long(lambda: settings.MAX_SLUG_LENGTH, "slug can be max {maximum} characters long"),
    )


def title_field(description: str = "Descriptive name") -> Rule:
    return _string(description, _too_long(lambda: settings.MAX_TITLE_LENGTH))


def description_field(description: str = "Description (markdown)") -> Rule:
    return _string(description, _too_long(lambda: settings.MAX_DESCRIPTION_LENGTH), required=False)


def url_field(description: str) -> Rule:
    def check(value: str) -> Optional[FieldError]:
        if not is_valid_url(value):
            return FieldError(kind="InvalidUrl", message="Invalid url")
        return None

    return _string(description, check)


def docs_url_field(description: str = "Documentation site") -> Rule:
    # empty string means "no docs", anything else must be a URL
    def check(value: str) -> Optional[FieldError]:
        if value != "" and not is_valid_url(value):
            return FieldError(kind="InvalidUrl", message="Invalid url")
        return None

    return _string(description, check, required=False)


def _not_blank(message: str) -> StringCheck:
    def check(value: str) -> Optional[FieldError]:
        if not value:
            return FieldError(kind="Empty", message=message)
        return None

    return check


def file_path_field(description: str) -> Rule:
    return _string(description, _not_blank("path is invalid"), trim=True)


def file_name_field(description: str) -> Rule:
    def pattern(value: str) -> Optional[FieldError]:
        if FILENAME_REGEX.fullmatch(value) is None:
            return FieldError(kind="InvalidFileName", message="The filename has to be valid")
        return None

    return _string(description, _not_blank("file name is invalid"), pattern, trim=True)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _not_a_number(value: Any) -> Optional[Invalid]:
    if not _is_number(value):
        return expected("number", value)
    if isinstance(value, float) and math.isnan(value):
        return fail("InvalidType", "Expected number, received nan")
    return None


def positive_int_field(description: str) -> Rule:
    """Non-negative integer. Integral floats (e.g. ``3.0``) are accepted as-is."""

    def validate(value: Any) -> Validated:
        failure = _not_a_number(value)
        if failure is not None:
            return failure
        errors: List[FieldError] = []
        if isinstance(value, float) and not value.is_integer():
            errors.append(FieldError(kind="NotInteger", message="Expected integer, received float"))
        if value < 0:
            errors.append(FieldError(kind="Negative", message="Number must be greater than or equal to 0"))
        if errors:
            return Invalid(tuple(errors))
        return Valid(value)

    return Rule(validate, description)


def number_field(
    description: str,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> Rule:
    def validate(value: Any) -> Validated:
        failure = _not_a_number(value)
        if failure is not None:
            return failure
        if minimum is not None and value < minimum:
            return fail("OutOfRange", f"Number must be greater than or equal to {minimum}")
        if maximum is not None and value > maximum:
            return fail("OutOfRange", f"Number must be less than or equal to {maximum}")
        return Valid(value)

    return Rule(validate, description)


def boolean_field(description: str) -> Rule:
    def validate(value: Any) -> Validated:
        if not isinstance(value, bool):
            return expected("boolean", value)
        return Valid(value)

    return Rule(validate, description)


def enum_field(values: Iterable[str], description: str) -> Rule:
    allowed = frozenset(values)

    def validate(value: Any) -> Validated:
        if not isinstance(value, str):
            return expected("string", value)
        if value not in allowed:
            shown = ", ".join(f"'{v}'" for v in sorted(allowed)[:10])
            more = ", ..." if len(allowed) > 10 else ""
            return fail("InvalidEnum", f"Invalid enum value. Expected {shown}{more}, received '{value}'")
        return Valid(value)

    return Rule(validate, description)


def string_array_field(description: str) -> Rule:
    return array_of(_string(description), description)

"""
Validation primitives shared by every schema.

A validator is a plain callable taking a raw value and returning either
``Valid(value)`` or ``Invalid(errors)``. Composite validators (objects, arrays)
run every child and collect all errors instead of stopping at the first one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from core.reportschema.errors import (
    ErrorKind,
    FieldError,
    PathItem,
    ReportValidationError,
    SchemaConflictError,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Valid:
    value: Any


@dataclass(frozen=True)
class Invalid:
    errors: Tuple[FieldError, ...]


Validated = Union[Valid, Invalid]
Validator = Callable[[Any], Validated]
Check = Callable[[Any], Optional[Invalid]]


def fail(kind: ErrorKind, message: str, path: Tuple[PathItem, ...] = ()) -> Invalid:
    return Invalid((FieldError(path=path, kind=kind, message=message),))


def type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def expected(kind: str, value: Any) -> Invalid:
    return fail("InvalidType", f"Expected {kind}, received {type_name(value)}")


@dataclass(frozen=True)
class Rule:
    """A validator plus its documentation text and presence requirement."""

    check: Validator
    description: str = ""
    required: bool = True

    def __call__(self, value: Any) -> Validated:
        return self.check(value)

    def optional(self) -> "Rule":
        return replace(self, required=False)


def optional(rule: Union["Rule", "Shape"]) -> Rule:
    if isinstance(rule, Shape):
        return Rule(rule, rule.description, required=False)
    return rule.optional()


def refine(rule: Rule, *checks: Check) -> Rule:
    """Run ``checks`` in order on an already valid value, stopping at the first failure."""

    def validate(value: Any) -> Validated:
        result = rule(value)
        if isinstance(result, Invalid):
            return result
        for check in checks:
            failure = check(result.value)
            if failure is not None:
                return failure
        return result

    return Rule(validate, rule.description, rule.required)


def array_of(item: Union[Rule, "Shape"], description: str = "", min_items: int = 0) -> Rule:
    def validate(value: Any) -> Validated:
        if not isinstance(value, (list, tuple)):
            return expected("array", value)
        if len(value) < min_items:
            return fail("TooSmall", f"Array must contain at least {min_items} element(s)")
        items: List[Any] = []
        errors: List[FieldError] = []
        for i, raw in enumerate(value):
            result = item(raw)
            if isinstance(result, Invalid):
                errors.extend(e.at(i) for e in result.errors)
            else:
                items.append(result.value)
        if errors:
            return Invalid(tuple(errors))
        return Valid(items)

    return Rule(validate, description)


class Shape:
    """An object schema: an ordered set of named field rules.

    Unknown keys pass through untouched. A required field that is absent or
    holds ``None`` is reported as missing. An absent optional field is skipped,
    but an explicit ``None`` in one is validated like any other value.
    """

    def __init__(self, fields: Mapping[str, Union[Rule, "Shape"]], description: str = ""):
        self.fields: Dict[str, Rule] = {
            name: Rule(rule, rule.description) if isinstance(rule, Shape) else rule
            for name, rule in fields.items()
        }
        self.description = description

    def __call__(self, value: Any) -> Validated:
        if not isinstance(value, Mapping):
            return expected("object", value)
        out = dict(value)
        errors: List[FieldError] = []
        for name, rule in self.fields.items():
            raw = value.get(name)
            if rule.required and raw is None:
                errors.append(FieldError(path=(name,), kind="MissingField", message="Required"))
                continue
            if name not in value:
                continue
            result = rule(raw)
            if isinstance(result, Invalid):
                errors.extend(e.at(name) for e in result.errors)
            else:
                out[name] = result.value
        if errors:
            return Invalid(tuple(errors))
        return Valid(out)

    def merge(self, *others: "Shape", description: Optional[str] = None) -> "Shape":
        """Disjoint union of field sets. Raises SchemaConflictError on overlap."""
        return merge(self, *others, description=description or self.description)

    def extend(self, fields: Mapping[str, Union[Rule, "Shape"]], description: Optional[str] = None) -> "Shape":
        return self.merge(Shape(fields), description=description)

    def __repr__(self) -> str:
        return f"Shape({list(self.fields)})"


def merge(*shapes: Shape, description: str = "") -> Shape:
    fields: Dict[str, Rule] = {}
    conflicts = set()
    for shape in shapes:
        for name, rule in shape.fields.items():
            if name in fields:
                conflicts.add(name)
            fields[name] = rule
    if conflicts:
        raise SchemaConflictError(conflicts, description)
    return Shape(fields, description)


def parse(validator: Validator, value: Any) -> Any:
    """Validate ``value`` and return the normalized copy, or raise ReportValidationError."""
    result = validator(value)
    if isinstance(result, Invalid):
        logger.debug("Validation failed with %d error(s)", len(result.errors))
        raise ReportValidationError(result.errors)
    return result.value

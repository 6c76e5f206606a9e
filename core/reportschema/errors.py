from __future__ import annotations

from typing import Dict, Iterable, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict


ErrorKind = Literal[
    "InvalidType",
    "PatternMismatch",
    "TooLong",
    "TooSmall",
    "InvalidUrl",
    "Empty",
    "InvalidFileName",
    "NotInteger",
    "Negative",
    "OutOfRange",
    "InvalidEnum",
    "MissingField",
    "DuplicateReference",
    "ZeroWeightGroup",
    "UnknownReference",
]

PathItem = Union[str, int]


ERROR_FAMILIES: Dict[str, str] = {
    "InvalidType": "FieldConstraintError",
    "PatternMismatch": "FieldConstraintError",
    "TooLong": "FieldConstraintError",
    "TooSmall": "FieldConstraintError",
    "InvalidUrl": "FieldConstraintError",
    "Empty": "FieldConstraintError",
    "InvalidFileName": "FieldConstraintError",
    "NotInteger": "FieldConstraintError",
    "Negative": "FieldConstraintError",
    "OutOfRange": "FieldConstraintError",
    "InvalidEnum": "FieldConstraintError",
    "MissingField": "MissingFieldError",
    "DuplicateReference": "DuplicateReferenceError",
    "ZeroWeightGroup": "ZeroWeightGroupError",
    "UnknownReference": "ReferentialIntegrityError",
}


class FieldError(BaseModel):
    """A single violated constraint, located by its path inside the document."""

    model_config = ConfigDict(frozen=True)

    path: Tuple[PathItem, ...] = ()
    kind: ErrorKind
    message: str

    @property
    def field_path(self) -> str:
        return ".".join(str(p) for p in self.path)

    @property
    def family(self) -> str:
        return ERROR_FAMILIES[self.kind]

    def at(self, *prefix: PathItem) -> "FieldError":
        return self.model_copy(update={"path": tuple(prefix) + self.path})

    def __str__(self) -> str:
        location = self.field_path or "<root>"
        return f"{location}: {self.message} ({self.kind})"


class SchemaConflictError(Exception):
    """Two merged shapes declare the same field. Raised while schemas are built."""

    def __init__(self, fields: Iterable[str], description: str = ""):
        self.fields = sorted(fields)
        target = f" in '{description}'" if description else ""
        super().__init__(f"Merged shapes redeclare field(s){target}: {', '.join(self.fields)}")


class ReportValidationError(ValueError):
    """Aggregate failure holding every field error found in one document."""

    def __init__(self, errors: Iterable[FieldError]):
        self.errors: Tuple[FieldError, ...] = tuple(errors)
        lines = format_errors(self.errors)
        summary = f"{len(self.errors)} validation error(s)"
        super().__init__("\n".join([summary] + lines))

    def by_family(self) -> Dict[str, List[FieldError]]:
        grouped: Dict[str, List[FieldError]] = {}
        for e in self.errors:
            grouped.setdefault(e.family, []).append(e)
        return grouped


def format_errors(errors: Iterable[FieldError]) -> List[str]:
    """One line per field error, for rendering on a terminal."""
    return [f"- {e}" for e in errors]

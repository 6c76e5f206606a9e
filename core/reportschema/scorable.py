"""
Weighted reference lists.

A scorable container (category, audit group) references audits or groups
with integer weights. Its refs must be non-empty, free of duplicates under
the container's own identity rule, and carry a positive total weight.
Duplicates are always reported in preference to the weight sum.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Set, Union

from core.reportschema.fields import positive_int_field, slug_field
from core.reportschema.validation import Invalid, Rule, Shape, array_of, fail, refine


Ref = Dict[str, Any]
DuplicateCheck = Callable[[Sequence[Ref]], Union[bool, Set[Hashable]]]
DuplicateMessage = Callable[[Sequence[Ref]], str]

ZERO_WEIGHT_MESSAGE = "In a category there has to be at least one ref with weight > 0"


def weight_field(
    description: str = "Coefficient for the given score (use weight 0 if only for display)",
) -> Rule:
    return positive_int_field(description)


def weighted_ref(description: str, slug_description: str) -> Shape:
    return Shape(
        {
            "slug": slug_field(slug_description),
            "weight": weight_field("Weight used to calculate score"),
        },
        description,
    )


def find_duplicates(items: Sequence[Any], key: Callable[[Any], Hashable]) -> Set[Hashable]:
    counts = Counter(key(item) for item in items)
    return {k for k, n in counts.items() if n > 1}


def duplicates_by(key: Callable[[Ref], Hashable]) -> DuplicateCheck:
    """Build a duplicate check returning False or the set of repeated identities."""

    def check(refs: Sequence[Ref]) -> Union[bool, Set[Hashable]]:
        return find_duplicates(refs, key) or False

    return check


def has_positive_weight(refs: Sequence[Ref]) -> bool:
    return sum(ref["weight"] for ref in refs) != 0


def scorable(
    description: str,
    ref: Shape,
    duplicate_check: DuplicateCheck,
    duplicate_message: DuplicateMessage,
) -> Shape:
    def no_duplicates(refs: List[Ref]) -> Optional[Invalid]:
        if duplicate_check(refs):
            return fail("DuplicateReference", duplicate_message(refs))
        return None

    def positive_weight(refs: List[Ref]) -> Optional[Invalid]:
        if not has_positive_weight(refs):
            return fail("ZeroWeightGroup", ZERO_WEIGHT_MESSAGE)
        return None

    refs = refine(array_of(ref, ref.description, min_items=1), no_duplicates, positive_weight)
    return Shape(
        {
            "slug": slug_field('Human-readable unique ID, e.g. "performance"'),
            "refs": refs,
        },
        description,
    )


def unique_slugs(label: str) -> Callable[[List[Ref]], Optional[Invalid]]:
    """List-level check that no two entries share a slug."""

    def check(items: List[Ref]) -> Optional[Invalid]:
        duplicates = sorted(find_duplicates(items, lambda item: item["slug"]))
        if duplicates:
            return fail("DuplicateReference", f"{label} slugs are not unique: {', '.join(duplicates)}")
        return None

    return check

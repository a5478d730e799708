"""Rendering of predicates as natural-language rules.

The renderer classifies a predicate exactly as evaluation does (scalar,
token or full-term), so the explanation always describes the decision that
`Predicate.apply` makes.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from treekit.fields import Fields, get_field
from treekit.version_compare import validate_operator

if TYPE_CHECKING:
    from treekit.predicate import Predicate

RELATIONS: Final[MappingProxyType[str, str]] = MappingProxyType({
    "<=": "no more than {count} {times}",
    ">=": "{count} {times} at most",
    ">": "more than {count} {times}",
    "<": "less than {count} {times}",
    "=": "exactly {count} {times}",
    "!=": "other than {count} {times}",
})


def plural(text: str, num: float) -> str:
    """Pluralize `text` unless `num` is exactly one.

    Args:
        text (str): Singular word.
        num (float): The quantity the word refers to.

    Returns:
        str: `text` or `text + "s"`.

    Examples:
        >>> plural("time", 1)
        'time'
        >>> plural("time", 0)
        'times'
    """
    return text if num == 1 else f"{text}s"


def _is_negation(operator: str, value: float) -> bool:
    return (operator == "<" and value <= 1) or (operator == "<=" and value == 0)


def render_rule(predicate: Predicate, fields: Fields, label: str = "name") -> str:
    """Build the rule string for a predicate.

    Args:
        predicate (Predicate): The predicate to describe.
        fields (Fields): Field metadata keyed by field id.
        label (str): Field attribute used as the display name.

    Returns:
        str: The rule, e.g. `"age >= 30"`, `"city is equal to new york"` or
            `"review does not contain free"`.

    Raises:
        InvalidOperatorError: If the operator is not recognized.
        MissingFieldError: If the field is not in `fields`.
        MissingKeyError: If the field has no attribute named `label`.
    """
    validate_operator(predicate.operator)
    name = get_field(fields, predicate.field).display_name(label)

    if predicate.term is None:
        return f"{name} {predicate.operator} {predicate.value}"

    # Term predicates always carry an integer count.
    count = int(predicate.value)
    full_term = predicate.is_full_term(fields)

    if _is_negation(predicate.operator, count):
        relation = "is not equal to" if full_term else "does not contain"
        return f"{name} {relation} {predicate.term}"

    if full_term:
        return f"{name} is equal to {predicate.term}"

    rule = f"{name} contains {predicate.term}"
    if predicate.operator != ">" or count != 0:
        quantity = RELATIONS[predicate.operator].format(count=count, times=plural("time", count))
        rule = f"{rule} {quantity}"
    return rule

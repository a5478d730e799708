"""Ordered-segment comparison shared by every predicate evaluation.

Values are compared the way version strings are: both sides are rendered as
strings, split into dot-separated segments, and compared segment by segment.
Digit segments compare numerically; textual segments are ranked by a small
table of release-stage words. For non-negative integers this is ordinary
integer comparison, but for other values it is not:

    >>> compare_versions("1.10", "1.9")
    1
    >>> version_compare(2.5, 2.25, "<")
    True

Match counts are compared with the same primitive, so the quirks above apply
uniformly to scalar and term predicates.
"""

from __future__ import annotations

import math
import operator
import re
from collections.abc import Callable
from types import MappingProxyType
from typing import Any, Final

from treekit.exceptions import InvalidOperatorError

# Prefix-matched in order; unknown words rank -1, below "dev".
_SPECIAL_FORMS: Final[tuple[tuple[str, int], ...]] = (
    ("dev", 0),
    ("alpha", 1),
    ("a", 1),
    ("beta", 2),
    ("b", 2),
    ("RC", 3),
    ("rc", 3),
    ("#", 4),
    ("pl", 5),
    ("p", 5),
)
_NUMBER_FORM: Final[str] = "#N#"
_SEPARATORS: Final[frozenset[str]] = frozenset("-_+")
_LEADING_DIGITS: Final[re.Pattern[str]] = re.compile(r"[0-9]+")

OPERATORS: Final[MappingProxyType[str, Callable[[int, int], bool]]] = MappingProxyType({
    "<": operator.lt,
    "<=": operator.le,
    "=": operator.eq,
    "!=": operator.ne,
    ">=": operator.ge,
    ">": operator.gt,
})


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_non_digit(char: str) -> bool:
    return not _is_digit(char) and char != "."


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def to_version_string(value: Any) -> str:
    """Render a scalar as the string the comparison operates on.

    Integral floats drop their fractional part so that `30.0` and `30`
    compare equal.

    Args:
        value (Any): A number, string, bool or None.

    Returns:
        str: The string form of `value`.

    Examples:
        >>> to_version_string(30.0)
        '30'
        >>> to_version_string(True)
        '1'
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float):
        if not math.isfinite(value):
            return str(value).upper()
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def canonicalize_version(version: str) -> str:
    """Insert separators so that every segment is all digits or all non-digits.

    `-`, `_` and `+` (and any other non-alphanumeric character) become `.`,
    a `.` is inserted wherever digits meet non-digits, and runs of dots
    collapse. The first character is kept as-is.

    Args:
        version (str): The raw string.

    Returns:
        str: The canonical form.

    Examples:
        >>> canonicalize_version("1.0rc1")
        '1.0.rc.1'
        >>> canonicalize_version("foo_bar-2")
        'foo.bar.2'
    """
    if not version:
        return version
    out = [version[0]]
    previous = version[0]
    for char in version[1:]:
        if char in _SEPARATORS:
            if out[-1] != ".":
                out.append(".")
        elif (_is_non_digit(previous) and _is_digit(char)) or (_is_digit(previous) and _is_non_digit(char)):
            if out[-1] != ".":
                out.append(".")
            out.append(char)
        elif not _is_alnum(char):
            if out[-1] != ".":
                out.append(".")
        else:
            out.append(char)
        previous = char
    return "".join(out)


def _special_form_rank(form: str) -> int:
    for name, rank in _SPECIAL_FORMS:
        if form.startswith(name):
            return rank
    return -1


def _sign(number: int) -> int:
    return (number > 0) - (number < 0)


def _compare_segment(left: str, right: str) -> int:
    left_is_number = bool(left) and _is_digit(left[0])
    right_is_number = bool(right) and _is_digit(right[0])
    if left_is_number and right_is_number:
        left_match = _LEADING_DIGITS.match(left)
        right_match = _LEADING_DIGITS.match(right)
        # Both matches exist: each segment starts with a digit.
        return _sign(int(left_match.group()) - int(right_match.group()))  # type: ignore[union-attr]
    if left_is_number:
        return _sign(_special_form_rank(_NUMBER_FORM) - _special_form_rank(right))
    if right_is_number:
        return _sign(_special_form_rank(left) - _special_form_rank(_NUMBER_FORM))
    return _sign(_special_form_rank(left) - _special_form_rank(right))


def _has_rest(segments: list[str], position: int) -> bool:
    # False only for a trailing empty segment, i.e. nothing left after the last dot.
    return position < len(segments) - 1 or bool(segments[position])


def _compare_segments(left: list[str], right: list[str]) -> int:
    left_pos = right_pos = 0
    left_more = right_more = True
    while left_more and right_more and _has_rest(left, left_pos) and _has_rest(right, right_pos):
        left_more = left_pos + 1 < len(left)
        right_more = right_pos + 1 < len(right)
        compare = _compare_segment(left[left_pos], right[right_pos])
        if compare != 0:
            return compare
        if left_more:
            left_pos += 1
        if right_more:
            right_pos += 1

    # The left remainder is checked first even when both sides have one left.
    if left_more:
        rest = ".".join(left[left_pos:])
        if rest and _is_digit(rest[0]):
            return 1
        return compare_versions(rest, _NUMBER_FORM)
    if right_more:
        rest = ".".join(right[right_pos:])
        if rest and _is_digit(rest[0]):
            return -1
        return compare_versions(_NUMBER_FORM, rest)
    return 0


def _segments(version: str) -> list[str]:
    if not version.startswith("#"):
        version = canonicalize_version(version)
    return version.split(".")


def compare_versions(left: str, right: str) -> int:
    """Three-way ordered-segment comparison of two strings.

    Args:
        left (str): Left operand.
        right (str): Right operand.

    Returns:
        int: -1 if `left` sorts first, 0 if equal, 1 if `right` sorts first.

    Examples:
        >>> compare_versions("1.0rc1", "1.0")
        -1
        >>> compare_versions("10", "9")
        1
    """
    if not left or not right:
        if not left and not right:
            return 0
        return 1 if left else -1
    return _compare_segments(_segments(left), _segments(right))


def validate_operator(op: str) -> Callable[[int, int], bool]:
    """Return the relation for a comparison operator symbol.

    Args:
        op (str): One of `<`, `<=`, `=`, `!=`, `>=`, `>`.

    Returns:
        Callable[[int, int], bool]: The relation applied to a three-way result and 0.

    Raises:
        InvalidOperatorError: If `op` is not a recognized symbol.
    """
    try:
        return OPERATORS[op]
    except KeyError:
        raise InvalidOperatorError(op, valid_operators=OPERATORS.keys()) from None


def version_compare(left: Any, right: Any, op: str) -> bool:
    """Compare two scalars with an operator using ordered-segment semantics.

    Args:
        left (Any): Left operand (record value or match count).
        right (Any): Right operand (predicate value).
        op (str): One of `<`, `<=`, `=`, `!=`, `>=`, `>`.

    Returns:
        bool: Whether `left op right` holds.

    Raises:
        InvalidOperatorError: If `op` is not a recognized symbol.

    Examples:
        >>> version_compare(3, 2, ">=")
        True
        >>> version_compare("1.0.0", "1.0", "=")
        False
    """
    relation = validate_operator(op)
    return relation(compare_versions(to_version_string(left), to_version_string(right)), 0)

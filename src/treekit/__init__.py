"""treekit: Predicate evaluation and rule rendering for trained decision trees."""

from loguru import logger

from treekit.exceptions import (
    IncompatibleValueError,
    InvalidOperatorError,
    MalformedTermFormsError,
    MissingFieldError,
    MissingKeyError,
)
from treekit.fields import FieldMetadata, TermAnalysis, parse_fields
from treekit.logging import PACKAGE_NAME, enable_logging
from treekit.predicate import Predicate
from treekit.terms import full_term_match, term_matches, term_matches_tokens

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the treekit module by default

__all__ = [
    "FieldMetadata",
    "IncompatibleValueError",
    "InvalidOperatorError",
    "MalformedTermFormsError",
    "MissingFieldError",
    "MissingKeyError",
    "Predicate",
    "TermAnalysis",
    "enable_logging",
    "full_term_match",
    "parse_fields",
    "term_matches",
    "term_matches_tokens",
]

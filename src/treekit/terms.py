"""Term matching for text-field predicates.

A text predicate asks how many times a term (or one of its synonyms) occurs
in a record's text. How an occurrence is defined depends on the field's
`TermAnalysis`:

- `tokens_only`: every boundary-delimited occurrence of any candidate term
  counts. Underscores delimit tokens just like spaces and punctuation, so
  `"foo_bar"` holds the tokens `"foo"` and `"bar"`.
- `full_terms_only`: the whole text must equal the canonical term (0 or 1).
- `all`: a lone multi-token term is matched as a full term; anything else is
  matched as tokens.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final

from loguru import logger

from treekit.fields import TM_ALL, TM_FULL_TERM, TermAnalysis

# A term with an interior word boundary is made of more than one token.
FULL_TERM_PATTERN: Final[re.Pattern[str]] = re.compile(r"^.+\b.+$")

# Token edges: not preceded or followed by a letter or digit.
_TOKEN_START: Final[str] = r"(?<![^\W_])"
_TOKEN_END: Final[str] = r"(?![^\W_])"


def is_full_term_pattern(term: str) -> bool:
    """Return whether `term` has the shape of a full (multi-token) term.

    Args:
        term (str): The term to classify.

    Returns:
        bool: True if the term contains an interior word boundary.

    Examples:
        >>> is_full_term_pattern("new york")
        True
        >>> is_full_term_pattern("york")
        False
    """
    return FULL_TERM_PATTERN.search(term) is not None


def full_term_match(text: str, term: str, case_sensitive: bool = False) -> int:
    """Return 1 if `text` equals `term` as a whole string, else 0.

    Args:
        text (str): The record's text.
        term (str): The full term.
        case_sensitive (bool): Compare without lower-casing when True.

    Returns:
        int: 1 on an exact match, 0 otherwise.
    """
    if not case_sensitive:
        text = text.lower()
        term = term.lower()
    return 1 if text == term else 0


def term_matches_tokens(text: str, terms: Sequence[str], case_sensitive: bool = False) -> int:
    """Count boundary-delimited occurrences of any of `terms` in `text`.

    Terms are matched literally and tried in order at each position; the
    result is the number of non-overlapping matches.

    Args:
        text (str): The record's text.
        terms (Sequence[str]): Candidate terms, canonical term first.
        case_sensitive (bool): Match case exactly when True.

    Returns:
        int: The number of occurrences.

    Examples:
        >>> term_matches_tokens("the_quick_fox", ["quick", "slow"])
        1
        >>> term_matches_tokens("Spam, spam and SPAM", ["spam"])
        3
    """
    if not terms:
        return 0
    alternatives = "|".join(re.escape(term) for term in terms)
    flags = 0 if case_sensitive else re.IGNORECASE
    expression = re.compile(f"{_TOKEN_START}(?:{alternatives}){_TOKEN_END}", flags)
    return sum(1 for _ in expression.finditer(text))


def term_matches(text: str, terms: Sequence[str], options: TermAnalysis | None = None) -> int:
    """Count the occurrences of a term and its synonyms according to `options`.

    Args:
        text (str): The record's text.
        terms (Sequence[str]): Candidate terms; the first is the canonical term
            and the rest are its term forms.
        options (TermAnalysis | None): The field's text-analysis options.
            Defaults to token matching, case-insensitive.

    Returns:
        int: A non-negative count; 0 or 1 when matched as a full term.
    """
    if options is None:
        options = TermAnalysis()
    if not terms:
        return 0
    first_term = terms[0]

    if options.token_mode == TM_FULL_TERM:
        count = full_term_match(text, first_term, options.case_sensitive)
    elif options.token_mode == TM_ALL and len(terms) == 1 and is_full_term_pattern(first_term):
        count = full_term_match(text, first_term, options.case_sensitive)
    else:
        count = term_matches_tokens(text, terms, options.case_sensitive)

    logger.debug(
        "Term matches counted",
        term=first_term,
        forms=len(terms) - 1,
        token_mode=options.token_mode,
        count=count,
    )
    return count

"""Demonstrates how to enable and configure logging in treekit.

treekit logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, treekit logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. The custom ``EVALUATION`` level
  (numeric value 15, between DEBUG and INFO) records every predicate
  evaluation and is the default. ``DEBUG`` adds term match counts.
- ``log_format``: ``"short"`` shows ``time | level | function [field operator] - message``;
  ``"full"`` adds the module and line number.
- Error logging: evaluating a record that lacks the predicate's field logs a
  warning before ``MissingFieldError`` is raised.
"""

import polars as pl

from treekit import MissingFieldError, Predicate, enable_logging, parse_fields
from treekit.frame import apply_frame, rules_frame

fields = parse_fields({
    "000000": {"name": "age", "optype": "numeric"},
    "000001": {
        "name": "review",
        "optype": "text",
        "term_analysis": {"token_mode": "all"},
        "summary": {"term_forms": {"free": ["freely", "freedom"]}},
    },
})

predicates = [
    Predicate(operator=">=", field="000000", value=30),
    Predicate(operator=">", field="000001", value=1, term="free"),
    Predicate(operator="<", field="000001", value=1, term="free"),
]

with enable_logging(level="DEBUG", log_format="full"):
    record = {"000000": 42, "000001": "Free shipping, freely returned"}
    for predicate in predicates:
        print(f"{predicate.to_rule(fields)!r}: {predicate.apply(record, fields)}")

    frame = pl.DataFrame({
        "000000": [25, 41, 67],
        "000001": ["free shipping", "nothing special", "Free and freely given"],
    })
    print(frame.with_columns(apply_frame(predicates[1], frame, fields).alias("matches")))
    print(rules_frame(predicates, fields))

    # Try an error to show error logging
    try:
        predicates[0].apply({}, fields)
    except MissingFieldError as exc:
        print(f"\n{exc}")

# Logging automatically disabled here

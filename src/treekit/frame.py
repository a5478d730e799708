"""Batch evaluation and rendering of predicates over Polars DataFrames."""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl
from loguru import logger

from treekit.exceptions import MissingFieldError
from treekit.fields import Fields
from treekit.predicate import Predicate


def apply_frame(predicate: Predicate, frame: pl.DataFrame, fields: Fields) -> pl.Series:
    """Evaluate a predicate against every row of a DataFrame.

    Columns are named by field id. Each row is passed to `Predicate.apply`,
    so per-row semantics (term matching, ordered-segment comparison) are
    identical to single-record evaluation.

    Args:
        predicate (Predicate): The predicate to evaluate.
        frame (pl.DataFrame): Input records, one per row.
        fields (Fields): Field metadata keyed by field id.

    Returns:
        pl.Series: Boolean series named after the predicate, one entry per row.

    Raises:
        MissingFieldError: If the predicate's field is not a column of
            `frame`, or a row holds a null for it.

    Examples:
        >>> from treekit.fields import FieldMetadata
        >>> fields = {"age": FieldMetadata(name="age")}
        >>> frame = pl.DataFrame({"age": [25, 40]})
        >>> apply_frame(Predicate(operator=">", field="age", value=30), frame, fields).to_list()
        [False, True]
    """
    if predicate.field not in frame.columns:
        raise MissingFieldError(predicate.field, source="record", available=frame.columns)

    results = [predicate.apply(row, fields) for row in frame.select(predicate.field).iter_rows(named=True)]
    logger.debug("Predicate applied to frame", predicate=str(predicate), rows=frame.height, matches=sum(results))
    return pl.Series(str(predicate), results, dtype=pl.Boolean)


def filter_frame(predicate: Predicate, frame: pl.DataFrame, fields: Fields) -> pl.DataFrame:
    """Keep the rows of a DataFrame that satisfy a predicate.

    Args:
        predicate (Predicate): The predicate to evaluate.
        frame (pl.DataFrame): Input records, one per row.
        fields (Fields): Field metadata keyed by field id.

    Returns:
        pl.DataFrame: The matching rows, in their original order.
    """
    return frame.filter(apply_frame(predicate, frame, fields))


def rules_frame(predicates: Sequence[Predicate], fields: Fields, label: str = "name") -> pl.DataFrame:
    """Tabulate predicates alongside their rendered rules.

    Args:
        predicates (Sequence[Predicate]): Predicates to render.
        fields (Fields): Field metadata keyed by field id.
        label (str): Field attribute used as the display name.

    Returns:
        pl.DataFrame: Columns `field`, `operator`, `value`, `term` and `rule`;
            `value` is rendered as a string since predicates mix value types.
    """
    return pl.DataFrame(
        {
            "field": [p.field for p in predicates],
            "operator": [p.operator for p in predicates],
            "value": [str(p.value) for p in predicates],
            "term": [p.term for p in predicates],
            "rule": [p.to_rule(fields, label) for p in predicates],
        },
        schema={
            "field": pl.String,
            "operator": pl.String,
            "value": pl.String,
            "term": pl.String,
            "rule": pl.String,
        },
    )

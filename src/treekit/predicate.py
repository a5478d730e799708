"""The Predicate model: a single decision-node condition of a trained tree."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, model_validator

from treekit.exceptions import IncompatibleValueError, MissingFieldError
from treekit.fields import TM_ALL, TM_FULL_TERM, Fields, get_field, get_term_forms
from treekit.logging import EVALUATION_LEVEL
from treekit.rules import render_rule
from treekit.terms import is_full_term_pattern, term_matches
from treekit.version_compare import validate_operator, version_compare


class Predicate(BaseModel):
    """A single comparison condition on one field, optionally term-based.

    Scalar predicates compare the record's field value to `value`, e.g.
    `age >= 30`. Text predicates (those with a `term`) count how often the
    term, or one of its term forms, occurs in the record's text and compare
    that count to `value`.

    Predicates are immutable and may be evaluated concurrently.

    Attributes:
        operator (str): One of `<`, `<=`, `=`, `!=`, `>=`, `>`. Checked when
            the predicate is applied or rendered.
        field (str): Id of the field the condition applies to.
        value (int | float | str): Comparison target, or the match-count
            threshold for text predicates.
        term (str | None): Term to count in text fields; None for scalar predicates.

    Examples:
        >>> from treekit.fields import FieldMetadata
        >>> fields = {"000001": FieldMetadata(name="age")}
        >>> p = Predicate(operator=">=", field="000001", value=30)
        >>> p.apply({"000001": 42}, fields)
        True
        >>> p.to_rule(fields)
        'age >= 30'
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    operator: str = Field(description="Comparison operator: one of '<', '<=', '=', '!=', '>=', '>'.")
    field: str = Field(description="Id of the field the condition applies to.")
    value: int | float | str = Field(
        description="Comparison target, or the match-count threshold when a term is set.",
    )
    term: str | None = Field(
        default=None,
        min_length=1,
        description="Term counted in the field's text; None for scalar predicates.",
    )

    @model_validator(mode="before")
    @classmethod
    def _reject_bool_count(cls, data: Any) -> Any:
        """Reject booleans as match-count thresholds before they coerce to 0 or 1.

        Args:
            data (Any): Raw constructor input.

        Returns:
            Any: `data`, unchanged.

        Raises:
            ValueError: If a term is set and `value` is a bool.
        """
        if isinstance(data, Mapping) and data.get("term") is not None and isinstance(data.get("value"), bool):
            raise ValueError(f"Term predicates require a non-negative integer count, got {data['value']!r}")
        return data

    @model_validator(mode="after")
    def _validate_term_count(self) -> Predicate:
        """Validate that text predicates carry a non-negative integer threshold.

        Returns:
            Predicate: The validated model instance.

        Raises:
            ValueError: If `term` is set and `value` is not an integer >= 0.
        """
        if self.term is not None and (not isinstance(self.value, int) or self.value < 0):
            raise ValueError(f"Term predicates require a non-negative integer count, got {self.value!r}")
        return self

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> Predicate:
        """Build a predicate from a serialized tree node's predicate mapping.

        Args:
            node (Mapping[str, Any]): Mapping with `operator`, `field`, `value`
                and optionally `term` keys. Other keys are ignored.

        Returns:
            Predicate: The validated predicate.

        Raises:
            pydantic.ValidationError: If required keys are missing or invalid.
        """
        return cls.model_validate(node)

    def __str__(self) -> str:
        """Return a compact representation using the field id.

        Returns:
            str: `"<field> <operator> <value>"`, with `" (term: <term>)"`
                appended for text predicates.
        """
        text = f"{self.field} {self.operator} {self.value}"
        if self.term is not None:
            text += f" (term: {self.term})"
        return text

    def is_full_term(self, fields: Fields) -> bool:
        """Return whether the term is matched against the whole field value.

        Args:
            fields (Fields): Field metadata keyed by field id.

        Returns:
            bool: True for a text predicate on a `full_terms_only` field, or on
                an `all` field when the term has several tokens.

        Raises:
            MissingFieldError: If the field is not in `fields`.
        """
        if self.term is None:
            return False
        token_mode = get_field(fields, self.field).term_analysis.token_mode
        if token_mode == TM_FULL_TERM:
            return True
        if token_mode == TM_ALL:
            return is_full_term_pattern(self.term)
        return False

    def to_rule(self, fields: Fields, label: str = "name") -> str:
        """Render the predicate as a human-readable rule.

        Args:
            fields (Fields): Field metadata keyed by field id.
            label (str): Field attribute used as the display name. Defaults to `"name"`.

        Returns:
            str: E.g. `"age >= 30"` or `"review contains free more than 3 times"`.
        """
        return render_rule(self, fields, label)

    def apply(self, input_data: Mapping[str, Any], fields: Fields) -> bool:
        """Evaluate the predicate against one input record.

        Args:
            input_data (Mapping[str, Any]): Record values keyed by field id.
            fields (Fields): Field metadata keyed by field id.

        Returns:
            bool: Whether the record satisfies the condition.

        Raises:
            InvalidOperatorError: If the operator is not recognized.
            MissingFieldError: If the field is absent from `fields` or has no
                value in `input_data`.
            MalformedTermFormsError: If the field's term forms are malformed.
            IncompatibleValueError: If a scalar predicate on a numeric field
                has a non-numeric value.
        """
        validate_operator(self.operator)
        field = get_field(fields, self.field)
        log = logger.bind(field=self.field, operator=self.operator, term=self.term)
        record_value = input_data.get(self.field)
        if record_value is None:
            log.warning("Predicate field missing from record")
            raise MissingFieldError(
                self.field,
                source="record",
                available=[key for key, val in input_data.items() if val is not None],
            )

        if self.term is not None:
            terms = [self.term, *get_term_forms(fields, self.field, self.term)]
            count = term_matches(str(record_value), terms, field.term_analysis)
            result = version_compare(count, self.value, self.operator)
        else:
            if field.optype == "numeric" and isinstance(self.value, str):
                log.warning("Non-numeric value {value!r} for numeric field", value=self.value)
                raise IncompatibleValueError(self.field, field.optype, self.value)
            result = version_compare(record_value, self.value, self.operator)

        log.log(EVALUATION_LEVEL, "Predicate applied: {predicate} -> {result}", predicate=str(self), result=result)
        return result

"""Tests for rendering predicates as human-readable rules."""

from __future__ import annotations

import pytest
from pytest_check import check

from treekit.exceptions import InvalidOperatorError, MissingFieldError, MissingKeyError
from treekit.fields import FieldMetadata, parse_fields
from treekit.predicate import Predicate
from treekit.rules import RELATIONS, plural, render_rule


@pytest.fixture
def fields() -> dict[str, FieldMetadata]:
    """Field metadata with one numeric field and text fields in each token mode.

    Returns:
        dict[str, FieldMetadata]: Field metadata keyed by field id.
    """
    return parse_fields({
        "age": {"name": "age", "optype": "numeric", "label": "Age (years)"},
        "body": {"name": "body", "optype": "text", "term_analysis": {"token_mode": "tokens_only"}},
        "city": {"name": "city", "optype": "text", "term_analysis": {"token_mode": "all"}},
        "tag": {"name": "tag", "optype": "text", "term_analysis": {"token_mode": "full_terms_only"}},
    })


class TestPlural:
    """Tests for the time/times pluralizer."""

    @pytest.mark.parametrize(("num", "expected"), [(0, "times"), (1, "time"), (2, "times"), (10, "times")])
    def test_plural(self, num: int, expected: str) -> None:
        """Only a count of exactly one should be singular.

        Args:
            num (int): The count.
            expected (str): Expected word.
        """
        # Act / Assert
        assert plural("time", num) == expected


class TestScalarRules:
    """Tests for scalar predicate rules."""

    def test_scalar_rule(self, fields: dict[str, FieldMetadata]) -> None:
        """Scalar predicates render as 'name operator value'.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
        """
        # Act / Assert
        assert Predicate(operator=">=", field="age", value=30).to_rule(fields) == "age >= 30"

    def test_custom_label(self, fields: dict[str, FieldMetadata]) -> None:
        """The label argument should select another display attribute.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
        """
        # Act / Assert
        assert Predicate(operator="<", field="age", value=18).to_rule(fields, label="label") == "Age (years) < 18"

    def test_string_value(self) -> None:
        """String comparison values are rendered verbatim."""
        # Arrange
        plan_fields = {"plan": FieldMetadata(name="plan", optype="categorical")}

        # Act / Assert
        assert Predicate(operator="=", field="plan", value="basic").to_rule(plan_fields) == "plan = basic"


class TestNegatedTermRules:
    """Tests for the negation phrasing of term predicates."""

    @pytest.mark.parametrize(
        ("op", "value"),
        [("<", 0), ("<", 1), ("<=", 0)],
    )
    def test_token_negation(self, fields: dict[str, FieldMetadata], op: str, value: int) -> None:
        """Thresholds meaning 'zero occurrences' render as 'does not contain'.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
            op (str): `<` or `<=`.
            value (int): Threshold.
        """
        # Act
        rule = Predicate(operator=op, field="body", value=value, term="free").to_rule(fields)

        # Assert
        assert rule == "body does not contain free"

    def test_full_term_negation(self, fields: dict[str, FieldMetadata]) -> None:
        """Full-term predicates render negation as 'is not equal to'.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
        """
        # Act / Assert
        with check:
            assert Predicate(operator="<", field="tag", value=1, term="urgent").to_rule(fields) == (
                "tag is not equal to urgent"
            )
        with check:
            assert Predicate(operator="<=", field="city", value=0, term="new york").to_rule(fields) == (
                "city is not equal to new york"
            )

    @pytest.mark.parametrize(
        ("op", "value"),
        [("<", 2), ("<=", 1), (">", 0), (">=", 0), ("=", 0), ("!=", 1)],
    )
    def test_negation_not_triggered(self, fields: dict[str, FieldMetadata], op: str, value: int) -> None:
        """Every other operator/threshold pair uses positive phrasing.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
            op (str): Comparison operator.
            value (int): Threshold.
        """
        # Act
        rule = Predicate(operator=op, field="body", value=value, term="free").to_rule(fields)

        # Assert
        assert rule.startswith("body contains free")


class TestPositiveTermRules:
    """Tests for positive phrasing with quantity clauses."""

    def test_more_than_zero_omits_quantity(self, fields: dict[str, FieldMetadata]) -> None:
        """'more than 0 times' is implied by 'contains' and is omitted.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
        """
        # Act / Assert
        assert Predicate(operator=">", field="body", value=0, term="free").to_rule(fields) == "body contains free"

    @pytest.mark.parametrize(
        ("op", "value", "expected"),
        [
            (">", 3, "body contains free more than 3 times"),
            (">", 1, "body contains free more than 1 time"),
            ("<=", 2, "body contains free no more than 2 times"),
            ("<=", 1, "body contains free no more than 1 time"),
            (">=", 1, "body contains free 1 time at most"),
            (">=", 4, "body contains free 4 times at most"),
            ("<", 5, "body contains free less than 5 times"),
            ("=", 2, "body contains free exactly 2 times"),
            ("!=", 0, "body contains free other than 0 times"),
        ],
    )
    def test_quantity_clause(self, fields: dict[str, FieldMetadata], op: str, value: int, expected: str) -> None:
        """Token predicates append a relation phrase with correct pluralization.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
            op (str): Comparison operator.
            value (int): Threshold.
            expected (str): Expected rule.
        """
        # Act / Assert
        assert Predicate(operator=op, field="body", value=value, term="free").to_rule(fields) == expected

    def test_full_term_positive(self, fields: dict[str, FieldMetadata]) -> None:
        """Full-term predicates render as 'is equal to' without a quantity clause.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
        """
        # Act / Assert
        with check:
            assert Predicate(operator=">", field="tag", value=0, term="urgent").to_rule(fields) == (
                "tag is equal to urgent"
            )
        with check:
            assert Predicate(operator=">=", field="city", value=1, term="new york").to_rule(fields) == (
                "city is equal to new york"
            )

    def test_all_mode_single_token_is_token_predicate(self, fields: dict[str, FieldMetadata]) -> None:
        """A single-token term on an 'all' field renders as a token predicate.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
        """
        # Act / Assert
        assert Predicate(operator=">", field="city", value=2, term="york").to_rule(fields) == (
            "city contains york more than 2 times"
        )

    def test_relation_table_covers_every_operator(self) -> None:
        """Every recognized operator should have a relation phrase."""
        # Act / Assert
        assert set(RELATIONS) == {"<", "<=", "=", "!=", ">=", ">"}


class TestRuleErrors:
    """Tests for rendering failures."""

    def test_missing_field(self, fields: dict[str, FieldMetadata]) -> None:
        """An unknown field id should raise MissingFieldError.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
        """
        # Act / Assert
        with pytest.raises(MissingFieldError):
            render_rule(Predicate(operator=">", field="nope", value=1), fields)

    def test_missing_label(self, fields: dict[str, FieldMetadata]) -> None:
        """An unknown label should raise MissingKeyError.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
        """
        # Act / Assert
        with pytest.raises(MissingKeyError):
            Predicate(operator=">", field="body", value=1, term="free").to_rule(fields, label="description")

    def test_invalid_operator(self, fields: dict[str, FieldMetadata]) -> None:
        """An unrecognized operator should raise InvalidOperatorError.

        Args:
            fields (dict[str, FieldMetadata]): Field metadata fixture.
        """
        # Act / Assert
        with pytest.raises(InvalidOperatorError):
            Predicate(operator="=>", field="age", value=1).to_rule(fields)

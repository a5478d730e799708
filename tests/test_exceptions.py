"""Tests for custom exceptions.

This module checks inheritance, stored attributes, and messages of the errors
raised by predicate evaluation and rule rendering.
"""

from __future__ import annotations

import pytest
from pytest_check import check

from treekit.exceptions import (
    IncompatibleValueError,
    InvalidOperatorError,
    MalformedTermFormsError,
    MissingFieldError,
    MissingKeyError,
)


class TestMissingFieldError:
    """Tests for MissingFieldError."""

    def test_is_lookup_error(self) -> None:
        """MissingFieldError should be catchable as LookupError."""
        # Act / Assert
        with pytest.raises(LookupError):
            raise MissingFieldError("000001", source="fields")

    def test_stores_attributes(self) -> None:
        """The field id, source and sorted available fields should be stored."""
        # Act
        error = MissingFieldError("000002", source="record", available={"b", "a"})

        # Assert
        with check:
            assert error.field_id == "000002"
        with check:
            assert error.source == "record"
        with check:
            assert error.available == ["a", "b"]
        with check:
            assert str(error) == "Field '000002' not found in record. Available fields: ['a', 'b']"


class TestMissingKeyError:
    """Tests for MissingKeyError."""

    def test_stores_attributes(self) -> None:
        """The key and sorted available keys should be stored."""
        # Act
        error = MissingKeyError("label", available=["name", "description"])

        # Assert
        with check:
            assert isinstance(error, LookupError)
        with check:
            assert error.key == "label"
        with check:
            assert error.available == ["description", "name"]
        with check:
            assert "label" in str(error)


class TestInvalidOperatorError:
    """Tests for InvalidOperatorError."""

    def test_is_value_error(self) -> None:
        """InvalidOperatorError should be catchable as ValueError."""
        # Act
        error = InvalidOperatorError("~=", valid_operators=["<", ">"])

        # Assert
        with check:
            assert isinstance(error, ValueError)
        with check:
            assert error.operator == "~="
        with check:
            assert error.valid_operators == ["<", ">"]
        with check:
            assert str(error) == "Invalid operator '~='. Valid operators: <, >"


class TestMalformedTermFormsError:
    """Tests for MalformedTermFormsError."""

    def test_stores_attributes(self) -> None:
        """The field, term and offending value should be stored."""
        # Act
        error = MalformedTermFormsError("000001", "free", {"not": "a list"})

        # Assert
        with check:
            assert isinstance(error, ValueError)
        with check:
            assert error.field_id == "000001"
        with check:
            assert error.term == "free"
        with check:
            assert error.term_forms == {"not": "a list"}


class TestIncompatibleValueError:
    """Tests for IncompatibleValueError."""

    def test_is_type_error(self) -> None:
        """IncompatibleValueError should be catchable as TypeError."""
        # Act
        error = IncompatibleValueError("000000", "numeric", "thirty")

        # Assert
        with check:
            assert isinstance(error, TypeError)
        with check:
            assert error.value == "thirty"
        with check:
            assert str(error) == "Value 'thirty' is not compatible with numeric field '000000'"

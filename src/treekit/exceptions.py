"""Custom exceptions for predicate evaluation and rule rendering.

All errors are caller data-contract violations and are raised synchronously
from the evaluation or rendering call that detected them:

Lookup exceptions (subclass LookupError):
- MissingFieldError: Raised when a field is absent from the input record or
  from the field metadata.
- MissingKeyError: Raised when a display attribute requested by label is not
  present on a field's metadata.

Value exceptions:
- InvalidOperatorError: Raised when a predicate operator is not one of the
  six recognized comparison symbols.
- MalformedTermFormsError: Raised when a field's term forms entry is not a
  list of strings.
- IncompatibleValueError: Raised when a scalar comparison mixes a numeric
  field with a non-numeric value.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, Literal

type FieldSource = Literal["record", "fields"]


class MissingFieldError(LookupError):
    """Raised when a field id cannot be resolved.

    Attributes:
        field_id (str): The field id that was looked up.
        source (FieldSource): Where the lookup failed, either `"record"` for
            the input data or `"fields"` for the field metadata.
        available (list[str]): Sorted field ids present in the searched source.

    Examples:
        >>> err = MissingFieldError("000002", source="record", available=["000001"])
        >>> str(err)
        "Field '000002' not found in record. Available fields: ['000001']"
    """

    field_id: str
    source: FieldSource
    available: list[str]

    def __init__(
        self,
        field_id: str,
        *,
        source: FieldSource,
        available: Collection[str] = (),
    ) -> None:
        """Initialize MissingFieldError.

        Args:
            field_id (str): The field id that was looked up.
            source (FieldSource): Either `"record"` or `"fields"`.
            available (Collection[str]): Field ids present in the searched source.
        """
        self.field_id = field_id
        self.source = source
        self.available = sorted(available)
        super().__init__(f"Field {field_id!r} not found in {source}. Available fields: {self.available}")

    def __str__(self) -> str:
        """Return the message without the quoting KeyError-style lookups add.

        Returns:
            str: The error message.
        """
        return str(self.args[0])


class MissingKeyError(LookupError):
    """Raised when a field's metadata does not carry the requested attribute.

    Attributes:
        key (str): The attribute label that was requested, e.g. `"name"`.
        available (list[str]): Sorted attribute labels present on the field.
    """

    key: str
    available: list[str]

    def __init__(self, key: str, available: Collection[str] = ()) -> None:
        """Initialize MissingKeyError.

        Args:
            key (str): The attribute label that was requested.
            available (Collection[str]): Attribute labels present on the field.
        """
        self.key = key
        self.available = sorted(available)
        super().__init__(f"Key {key!r} not found. Available keys: {self.available}")

    def __str__(self) -> str:
        """Return the error message.

        Returns:
            str: The error message.
        """
        return str(self.args[0])


class InvalidOperatorError(ValueError):
    """Raised when a predicate operator is not a recognized comparison symbol.

    Attributes:
        operator (str): The offending operator.
        valid_operators (list[str]): The accepted operator symbols.

    Examples:
        >>> err = InvalidOperatorError("~=", valid_operators=["<", "<=", "=", "!=", ">=", ">"])
        >>> err.operator
        '~='
    """

    operator: str
    valid_operators: list[str]

    def __init__(self, operator: str, *, valid_operators: Collection[str]) -> None:
        """Initialize InvalidOperatorError.

        Args:
            operator (str): The offending operator.
            valid_operators (Collection[str]): The accepted operator symbols.
        """
        super().__init__(f"Invalid operator {operator!r}. Valid operators: {', '.join(valid_operators)}")
        self.operator = operator
        self.valid_operators = list(valid_operators)


class MalformedTermFormsError(ValueError):
    """Raised when a term forms entry is present but is not a list of strings.

    Attributes:
        field_id (str): The field whose summary holds the malformed entry.
        term (str): The canonical term whose synonyms were requested.
        term_forms (Any): The malformed value found for `term`.
    """

    field_id: str
    term: str
    term_forms: Any

    def __init__(self, field_id: str, term: str, term_forms: Any) -> None:
        """Initialize MalformedTermFormsError.

        Args:
            field_id (str): The field whose summary holds the malformed entry.
            term (str): The canonical term whose synonyms were requested.
            term_forms (Any): The malformed value found for `term`.
        """
        super().__init__(
            f"Term forms for {term!r} in field {field_id!r} must be a list of strings, got {term_forms!r}"
        )
        self.field_id = field_id
        self.term = term
        self.term_forms = term_forms


class IncompatibleValueError(TypeError):
    """Raised when a scalar comparison value does not fit the field's data type.

    Attributes:
        field_id (str): The field being compared.
        optype (str): The field's declared optype, e.g. `"numeric"`.
        value (Any): The value that does not fit `optype`.
    """

    field_id: str
    optype: str
    value: Any

    def __init__(self, field_id: str, optype: str, value: Any) -> None:
        """Initialize IncompatibleValueError.

        Args:
            field_id (str): The field being compared.
            optype (str): The field's declared optype.
            value (Any): The value that does not fit `optype`.
        """
        super().__init__(f"Value {value!r} is not compatible with {optype} field {field_id!r}")
        self.field_id = field_id
        self.optype = optype
        self.value = value

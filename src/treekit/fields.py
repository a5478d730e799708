"""Pydantic models for the field metadata that predicates are evaluated against.

A trained model ships a `fields` structure keyed by field id. Each entry
carries display attributes (at least `name`), the text-analysis options used
when the field was tokenized, and a summary that may hold term forms
(synonyms) for text fields::

    {
        "000001": {
            "name": "review",
            "optype": "text",
            "term_analysis": {"token_mode": "all", "case_sensitive": False},
            "summary": {"term_forms": {"free": ["freely", "freedom"]}},
        }
    }

The models here are read-only views over that structure.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field

from treekit.exceptions import MalformedTermFormsError, MissingFieldError, MissingKeyError

type TokenMode = Literal["tokens_only", "full_terms_only", "all"]

TM_TOKENS: Final[str] = "tokens_only"
TM_FULL_TERM: Final[str] = "full_terms_only"
TM_ALL: Final[str] = "all"


class TermAnalysis(BaseModel):
    """Text-analysis options for a text field.

    Absent keys resolve to the defaults below, so an empty mapping describes
    a case-insensitive, token-based field.

    Attributes:
        token_mode (TokenMode): How term matching treats the text.
            `"tokens_only"` counts delimited tokens, `"full_terms_only"`
            compares the whole value, and `"all"` does both depending on the
            term. Defaults to `"tokens_only"`.
        case_sensitive (bool): Whether matching respects case. Defaults to False.

    Examples:
        >>> TermAnalysis.model_validate({})
        TermAnalysis(token_mode='tokens_only', case_sensitive=False)
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    token_mode: TokenMode = Field(
        default="tokens_only",
        description="Tokenization policy: 'tokens_only', 'full_terms_only' or 'all'.",
    )
    case_sensitive: bool = Field(
        default=False,
        description="Whether term matching respects case.",
    )


class FieldSummary(BaseModel):
    """Summary statistics attached to a field; only term forms are used here.

    Attributes:
        term_forms (dict[str, Any]): Mapping from a canonical term to its
            synonym list. Entries are validated when looked up by
            `get_term_forms`, not on construction.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    term_forms: dict[str, Any] = Field(
        default_factory=dict,
        description="Mapping from a canonical term to the ordered list of its synonyms.",
    )


class FieldMetadata(BaseModel):
    """Metadata for one model field.

    Extra keys are kept so that any display attribute present in the model
    (e.g. `"label"` or `"description"`) can be used as a rule label.

    Attributes:
        name (str): Display name of the field.
        optype (str | None): Declared data type, e.g. `"numeric"`,
            `"categorical"` or `"text"`.
        term_analysis (TermAnalysis): Text-analysis options.
        summary (FieldSummary): Field summary holding term forms.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = Field(description="Display name of the field.")
    optype: str | None = Field(default=None, description="Declared data type of the field.")
    term_analysis: TermAnalysis = Field(
        default_factory=TermAnalysis,
        description="Text-analysis options used when matching terms.",
    )
    summary: FieldSummary = Field(
        default_factory=FieldSummary,
        description="Field summary; only term forms are consulted.",
    )

    def display_name(self, label: str = "name") -> str:
        """Return the display attribute named by `label`.

        Args:
            label (str): Attribute to read. Defaults to `"name"`.

        Returns:
            str: The attribute value.

        Raises:
            MissingKeyError: If the field has no string attribute called `label`.

        Examples:
            >>> meta = FieldMetadata(name="age", label="Age (years)")
            >>> meta.display_name("label")
            'Age (years)'
        """
        attributes = {name: getattr(self, name) for name in type(self).model_fields} | (self.model_extra or {})
        value = attributes.get(label)
        if not isinstance(value, str):
            raise MissingKeyError(label, available=[k for k, v in attributes.items() if isinstance(v, str)])
        return value


type Fields = Mapping[str, FieldMetadata]


def parse_fields(raw: Mapping[str, Mapping[str, Any]]) -> dict[str, FieldMetadata]:
    """Validate a raw `{field_id: {...}}` mapping into `FieldMetadata` models.

    Args:
        raw (Mapping[str, Mapping[str, Any]]): Field structure as found in a
            serialized model.

    Returns:
        dict[str, FieldMetadata]: Field metadata keyed by field id.

    Raises:
        pydantic.ValidationError: If an entry is missing its name or has
            invalid term analysis options.
    """
    return {field_id: FieldMetadata.model_validate(entry) for field_id, entry in raw.items()}


def get_field(fields: Fields, field_id: str) -> FieldMetadata:
    """Look up a field's metadata by id.

    Args:
        fields (Fields): Field metadata keyed by field id.
        field_id (str): The field to resolve.

    Returns:
        FieldMetadata: The field's metadata.

    Raises:
        MissingFieldError: If `field_id` is not in `fields`.
    """
    try:
        return fields[field_id]
    except KeyError:
        raise MissingFieldError(field_id, source="fields", available=fields.keys()) from None


def get_term_forms(fields: Fields, field_id: str, term: str) -> list[str]:
    """Return the synonyms recorded for `term` on a field.

    Args:
        fields (Fields): Field metadata keyed by field id.
        field_id (str): The field whose summary is consulted.
        term (str): The canonical term.

    Returns:
        list[str]: The synonyms in model order, or an empty list if none are recorded.

    Raises:
        MissingFieldError: If `field_id` is not in `fields`.
        MalformedTermFormsError: If the entry for `term` is not a list of strings.
    """
    term_forms = get_field(fields, field_id).summary.term_forms
    if term not in term_forms:
        return []
    forms = term_forms[term]
    if not isinstance(forms, list) or not all(isinstance(form, str) for form in forms):
        raise MalformedTermFormsError(field_id, term, forms)
    return list(forms)

"""Autocomplete types: how an entity is projected into a search suggestion."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AutocompleteFieldMapping:
    """Static projection config for one entity type.

    ``code`` and ``value`` name the identifier and display-label fields.
    ``search_fields`` lists the fields the backend matches free text against.
    When ``meta_fields`` is ``None`` every other field is surfaced as meta.
    """

    code: str
    value: str
    search_fields: tuple[str, ...] = ()
    meta_fields: tuple[str, ...] | None = None


@dataclass(frozen=True)
class AutocompleteOption:
    """A search suggestion: identifier, display label and extra raw fields."""

    code: str
    value: str
    meta: dict[str, Any] = field(default_factory=dict, hash=False, compare=True)

"""Descriptor for one entity type exposed by the ONERP gateway."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from onerp_admin.domain.entities.autocomplete import AutocompleteFieldMapping


class ModuleKind(str, Enum):
    """Which action factory backs a module."""

    PAGINATED = "paginated"
    LIST = "list"
    SEARCH_ONLY = "search_only"


@dataclass(frozen=True)
class EntityModule:
    """Wiring for an entity: cache namespace, REST root and identifier field."""

    key: str
    base_path: str
    kind: ModuleKind = ModuleKind.PAGINATED
    id_field: str = "id"
    search_mapping: AutocompleteFieldMapping | None = None
    label: str = ""

    def identify(self, record: dict[str, Any]) -> str:
        """Return the record's identifier as a string.

        Raises:
            KeyError: If the record has no value for the identifier field.
        """
        value = record.get(self.id_field)
        if value is None or value == "":
            raise KeyError(f"{self.key} record has no '{self.id_field}'")
        return str(value)

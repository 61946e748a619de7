from __future__ import annotations

from dataclasses import dataclass

from .errors import FieldNotFound, InvalidFieldID, InvalidSelection
from .extract import CUSTOM_FIELD_PREFIX
from .models import FieldCatalog, FieldDefinition


@dataclass
class FieldQuery:
    name: str | None = None
    field_id: str | None = None


def normalize_field_id(raw: str) -> str:
    """Accept ``customfield_10011`` or the bare ``10011`` and return the prefixed form."""
    if raw.startswith(CUSTOM_FIELD_PREFIX):
        return raw
    # ASCII digits only.
    if not (raw.isascii() and raw.isdigit()):
        raise InvalidFieldID(raw)
    return f"{CUSTOM_FIELD_PREFIX}{raw}"


def build_query(name: str | None = None, field_id: str | None = None) -> FieldQuery:
    name = name or None
    field_id = field_id or None
    if name is not None and field_id is not None:
        raise InvalidSelection("Please specify either name or ID (not both)")
    if field_id is not None:
        field_id = normalize_field_id(field_id)
    return FieldQuery(name=name, field_id=field_id)


def select_fields(catalog: FieldCatalog, query: FieldQuery) -> list[FieldDefinition]:
    if query.name is not None:
        found = catalog.get(query.name)
        if found is None:
            raise FieldNotFound("name", query.name)
        return [found]

    if query.field_id is not None:
        # Catalog is keyed by name, so id lookups scan the values.
        for definition in catalog.values():
            if definition.id == query.field_id:
                return [definition]
        raise FieldNotFound("id", query.field_id)

    return list(catalog.values())

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FieldValue:
    value: str
    id: str


@dataclass
class FieldDefinition:
    name: str
    id: str
    values: list[FieldValue] = field(default_factory=list)


# Keyed by display name; first definition encountered wins.
FieldCatalog = dict[str, FieldDefinition]

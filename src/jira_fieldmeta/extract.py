from __future__ import annotations

import json
import logging
from typing import Any

from .errors import MalformedResponse
from .models import FieldCatalog, FieldDefinition, FieldValue


CUSTOM_FIELD_PREFIX = "customfield_"

logger = logging.getLogger(__name__)


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _allowed_values(field_obj: dict[str, Any]) -> list[FieldValue]:
    values: list[FieldValue] = []
    for item in _as_list(field_obj.get("allowedValues")):
        item = _as_dict(item)
        values.append(FieldValue(value=_as_str(item.get("value")), id=_as_str(item.get("id"))))
    return values


def _collect_fields(issue_type: dict[str, Any], catalog: FieldCatalog) -> None:
    for key, raw_field in _as_dict(issue_type.get("fields")).items():
        if not key.startswith(CUSTOM_FIELD_PREFIX):
            continue
        field_obj = _as_dict(raw_field)
        name = _as_str(field_obj.get("name"))
        if name in catalog:
            logger.debug(
                "duplicate field name skipped",
                extra={"extra": {"name": name, "id": key, "kept_id": catalog[name].id}},
            )
            continue
        catalog[name] = FieldDefinition(name=name, id=key, values=_allowed_values(field_obj))


def build_catalog(document: dict[str, Any]) -> FieldCatalog:
    """Walk projects -> issuetypes -> fields and index custom fields by display name.

    Traversal follows document order, so the first definition of a name wins and
    later ones are skipped, not merged. Missing or oddly typed members are read as
    empty rather than treated as errors.
    """
    projects = document.get("projects")
    if not isinstance(projects, list):
        raise MalformedResponse("createmeta response has no 'projects' array")

    catalog: FieldCatalog = {}
    for project in projects:
        for issue_type in _as_list(_as_dict(project).get("issuetypes")):
            _collect_fields(_as_dict(issue_type), catalog)
    logger.info("custom field catalog built", extra={"extra": {"fields": len(catalog), "projects": len(projects)}})
    return catalog


def parse_createmeta(raw: bytes | str) -> FieldCatalog:
    try:
        document = json.loads(raw)
    except ValueError as exc:
        raise MalformedResponse(f"createmeta response is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise MalformedResponse("createmeta response must be a JSON object")
    return build_catalog(document)

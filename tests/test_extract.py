import json

import pytest

from jira_fieldmeta.errors import MalformedResponse
from jira_fieldmeta.extract import build_catalog, parse_createmeta
from jira_fieldmeta.models import FieldDefinition, FieldValue


def _severity_payload() -> dict:
    return {
        "projects": [
            {
                "issuetypes": [
                    {
                        "fields": {
                            "customfield_100": {
                                "name": "Severity",
                                "allowedValues": [{"value": "High", "id": "1"}, {"value": "Low", "id": "2"}],
                            },
                            "status": {"name": "Status", "allowedValues": [{"value": "Open", "id": "3"}]},
                        }
                    }
                ]
            }
        ]
    }


def test_parse_createmeta_extracts_custom_field_and_skips_system_fields() -> None:
    catalog = parse_createmeta(json.dumps(_severity_payload()).encode("utf-8"))

    assert catalog == {
        "Severity": FieldDefinition(
            name="Severity",
            id="customfield_100",
            values=[FieldValue(value="High", id="1"), FieldValue(value="Low", id="2")],
        )
    }


def test_build_catalog_keeps_first_definition_for_duplicate_names() -> None:
    document = {
        "projects": [
            {
                "issuetypes": [
                    {"fields": {"customfield_1": {"name": "Team", "allowedValues": [{"value": "A", "id": "10"}]}}},
                    {"fields": {"customfield_2": {"name": "Team", "allowedValues": [{"value": "B", "id": "20"}]}}},
                ]
            },
            {"issuetypes": [{"fields": {"customfield_3": {"name": "Team"}}}]},
        ]
    }

    catalog = build_catalog(document)

    assert list(catalog) == ["Team"]
    assert catalog["Team"].id == "customfield_1"
    assert catalog["Team"].values == [FieldValue(value="A", id="10")]


def test_build_catalog_never_includes_keys_without_prefix() -> None:
    document = {
        "projects": [
            {
                "issuetypes": [
                    {
                        "fields": {
                            "priority": {"name": "Priority", "allowedValues": [{"value": "P1", "id": "1"}]},
                            "Customfield_5": {"name": "Wrong Case"},
                            "x_customfield_6": {"name": "Embedded"},
                            "customfield_7": {"name": "Kept"},
                        }
                    }
                ]
            }
        ]
    }

    catalog = build_catalog(document)

    assert list(catalog) == ["Kept"]


def test_build_catalog_tolerates_missing_and_malformed_members() -> None:
    document = {
        "projects": [
            {},
            "not-a-project",
            {"issuetypes": [{}, {"fields": None}, {"fields": ["x"]}]},
            {
                "issuetypes": [
                    {
                        "fields": {
                            "customfield_1": {"allowedValues": [{"value": 3}, "junk", {"id": "9"}]},
                            "customfield_2": "not-an-object",
                            "customfield_3": {"name": "Text", "allowedValues": None},
                        }
                    }
                ]
            },
        ]
    }

    catalog = build_catalog(document)

    # customfield_1 and customfield_2 both read as the empty name; the first wins.
    assert catalog[""].id == "customfield_1"
    assert catalog[""].values == [FieldValue("", ""), FieldValue("", ""), FieldValue("", "9")]
    assert catalog["Text"].values == []


def test_parse_createmeta_empty_projects_is_empty_catalog() -> None:
    assert parse_createmeta(b'{"projects": []}') == {}


@pytest.mark.parametrize(
    "raw",
    [
        b"not json",
        b"[]",
        b'{"expand": "projects"}',
        b'{"projects": {"key": "ABC"}}',
    ],
)
def test_parse_createmeta_rejects_malformed_documents(raw: bytes) -> None:
    with pytest.raises(MalformedResponse):
        parse_createmeta(raw)

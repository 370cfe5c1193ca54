"""Shared fixtures: a search-results schema and payloads shaped like the API's."""

from __future__ import annotations

from typing import Any

import pytest

from modelparser import CollectingSink


def _split_tags(value: Any) -> list[str] | None:
    if value:
        return value.split("\n")
    return None


PAGE_SCHEMA: list[dict[str, Any]] = [
    {"field": "@id", "name": "id", "transform": "number"},
    {"field": "title"},
    {"field": ["path", "#text"], "name": "path"},
]

SEARCH_SCHEMA: list[dict[str, Any]] = [
    {"field": "@ranking", "name": "ranking"},
    {"field": "@queryid", "name": "queryId", "transform": "number"},
    {"field": "@count", "name": "count", "transform": "number"},
    {"field": "parsedQuery"},
    {
        "field": "result",
        "name": "results",
        "is_array": True,
        "transform": [
            {"field": "title"},
            {"field": "date.modified", "name": "dateModified", "transform": "date"},
            {"field": "id", "transform": "number"},
            {"field": "page", "transform": PAGE_SCHEMA},
            {"field": "tag", "name": "tags", "transform": _split_tags},
        ],
    },
    {
        "field": "summary",
        "transform": [
            {"field": "@path", "name": "path"},
            {
                "field": "results",
                "is_array": True,
                "transform": [
                    {"field": "@path", "name": "path"},
                    {"field": "@count", "name": "count", "transform": "number"},
                ],
            },
        ],
    },
]


@pytest.fixture
def search_schema() -> list[dict[str, Any]]:
    return SEARCH_SCHEMA


@pytest.fixture
def search_payload() -> dict[str, Any]:
    return {
        "@ranking": "adaptive",
        "@queryid": "1234",
        "@count": "2",
        "parsedQuery": "foo",
        "result": [
            {
                "title": "First",
                "date.modified": "Mon, 05 Oct 2015 18:44:27 GMT",
                "id": "7",
                "page": {"@id": "7", "title": "First", "path": "first"},
                "tag": "a\nb",
            },
            {
                "title": "Second",
                "date.modified": "Tue, 06 Oct 2015 10:00:00 GMT",
                "id": "8",
                "page": {"@id": "8", "title": "Second", "path": {"#text": "second"}},
            },
        ],
        "summary": {
            "@path": "/",
            "results": {"@path": "/docs", "@count": "2"},
        },
    }


@pytest.fixture
def sink() -> CollectingSink:
    return CollectingSink()

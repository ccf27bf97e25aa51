#!/usr/bin/env python3
import pytest

from fscontent.core.schema.registry import ModelRegistry


MODEL_DATA = [
    {
        "name": "post",
        "fields": [
            {"name": "title", "type": "string"},
            {"name": "slug", "type": "slug"},
            {"name": "body", "type": "markdown"},
            {"name": "views", "type": "number"},
            {"name": "featured", "type": "boolean"},
            {"name": "date", "type": "date"},
            {"name": "tags", "type": "list"},
            {"name": "author", "type": "model", "models": ["author"]},
            {"name": "hero", "type": "image"},
            {"name": "related", "type": "reference", "models": ["post"]},
            {
                "name": "seo",
                "type": "object",
                "fields": [
                    {"name": "description", "type": "text"},
                    {"name": "keywords", "type": "list", "items": {"type": "string"}},
                ],
            },
            {
                "name": "sections",
                "type": "list",
                "items": {"type": "model", "models": ["hero_section", "cta_section"]},
            },
        ],
    },
    {
        "name": "author",
        "fields": [
            {"name": "name", "type": "string"},
            {"name": "bio", "type": "markdown"},
        ],
    },
    {
        "name": "hero_section",
        "fields": [
            {"name": "heading", "type": "string"},
            {"name": "image", "type": "image"},
        ],
    },
    {
        "name": "cta_section",
        "fields": [
            {"name": "label", "type": "string"},
            {"name": "link", "type": "url"},
        ],
    },
]


@pytest.fixture
def registry() -> ModelRegistry:
    return ModelRegistry.from_data(MODEL_DATA)

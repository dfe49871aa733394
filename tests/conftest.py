"""
Pytest fixtures for schema audit tests: sample payloads, schemas and entry counts.
"""

from __future__ import annotations

import pytest

from schema_audit.config import AuditConfig
from schema_audit.schema_graph import EntryCount, EnumType, Field, ModelType, Schema, load_schema

BRAND_VALUES = ["Acme", "Globex", "Initech", "Umbrella", "Hooli", "Wayne", "Stark", "Tyrell"]


def _ref(name: str, target: str, *, is_list: bool = False, is_required: bool = False) -> Field:
    return Field(name=name, type_name=target, related_model=target, is_list=is_list, is_required=is_required)


@pytest.fixture
def config():
    return AuditConfig()


@pytest.fixture
def sample_payload():
    """Small marketing-site schema in the introspection layer's camelCase shape."""
    return {
        "models": [
            {
                "name": "Article",
                "pluralApiId": "articles",
                "fields": [
                    {"name": "title", "type": "String", "isRequired": True},
                    {"name": "slug", "type": "String", "isRequired": True, "isUnique": True},
                    {"name": "body", "type": "RichText"},
                    {"name": "author", "type": "Author", "relatedModel": "Author"},
                    {"name": "category", "type": "Category", "relatedModel": "Category"},
                    {"name": "seo", "type": "Seo", "relatedModel": "Seo"},
                    {"name": "brand", "type": "Brand"},
                ],
            },
            {
                "name": "Author",
                "fields": [
                    {"name": "name", "type": "String", "isRequired": True},
                    {"name": "email", "type": "String"},
                    {"name": "articles", "type": "Article", "relatedModel": "Article", "isList": True},
                ],
            },
            {
                "name": "Category",
                "fields": [
                    {"name": "name", "type": "String", "isRequired": True},
                    {"name": "slug", "type": "String", "isUnique": True},
                ],
            },
            {"name": "Asset", "isSystem": True, "fields": [{"name": "url", "type": "String"}]},
        ],
        "components": [
            {
                "name": "Seo",
                "fields": [
                    {"name": "metaTitle", "type": "String"},
                    {"name": "metaDescription", "type": "String"},
                ],
            },
        ],
        "enums": [
            {"name": "Brand", "values": BRAND_VALUES[:3]},
            {"name": "Stage", "values": ["DRAFT", "PUBLISHED"]},
        ],
    }


@pytest.fixture
def sample_schema(sample_payload):
    return load_schema(sample_payload)


@pytest.fixture
def sample_counts():
    return {
        "Article": EntryCount(draft=4, published=36),
        "Author": EntryCount(draft=0, published=5),
        "Category": EntryCount(draft=0, published=8),
    }


@pytest.fixture
def empty_schema():
    return Schema.from_types()


@pytest.fixture
def chain_schema():
    """Page -> Section -> Card -> Teaser -> Image: one five-model reference chain."""
    names = ["Page", "Section", "Card", "Teaser", "Image"]
    models = []
    for current, nxt in zip(names, names[1:] + [None]):
        fields = [Field(name="title", type_name="String", is_required=True)]
        if nxt is not None:
            fields.append(_ref(nxt.lower(), nxt))
        models.append(ModelType(name=current, fields=tuple(fields)))
    return Schema.from_types(models)


@pytest.fixture
def brand_schema():
    """Brand enum with eight proper-noun values used by four models."""
    payload = {
        "models": [
            {
                "name": name,
                "fields": [
                    {"name": "title", "type": "String", "isRequired": True},
                    {"name": "brand", "type": "Brand"},
                ],
            }
            for name in ("Article", "Banner", "Campaign", "Product")
        ],
        "enums": [{"name": "Brand", "values": BRAND_VALUES}],
    }
    return load_schema(payload)


@pytest.fixture
def versioned_schema():
    """Product and ProductV2 share a name stem; Review is unrelated."""
    product_fields = (
        Field(name="name", type_name="String", is_required=True),
        Field(name="price", type_name="Float"),
        Field(name="sku", type_name="String"),
        Field(name="stock", type_name="Int"),
    )
    return Schema.from_types(
        [
            ModelType(name="ProductV2", fields=product_fields + (Field(name="badge", type_name="String"),)),
            ModelType(name="Product", fields=product_fields),
            ModelType(name="Review", fields=(Field(name="rating", type_name="Int"),)),
        ]
    )


def _s(name: str, **kwargs) -> Field:
    return Field(name=name, type_name="String", **kwargs)


@pytest.fixture
def rich_schema():
    """Touches every dimension: deep chain, mutual refs, tenancy enum, versions, locales, SEO gaps."""
    models = [
        ModelType(
            name="Page",
            fields=(
                _s("title", is_required=True),
                _s("slug", is_unique=True),
                _s("locale"),
                _s("bg_color"),
                _ref("seo", "Seo"),
                _ref("hero", "Hero"),
                _ref("section", "Section"),
                Field(name="brand", type_name="Brand"),
            ),
        ),
        ModelType(name="Section", fields=(_s("title"), _ref("card", "Card"))),
        ModelType(name="Card", fields=(_s("title"), _s("imageUrl"), _ref("teaser", "Teaser"))),
        ModelType(name="Teaser", fields=(_s("title"), _ref("image", "Image"))),
        ModelType(name="Image", fields=(_s("title"), _s("url"))),
        ModelType(
            name="Article",
            fields=(
                _s("title", is_required=True),
                _s("handle"),
                _s("metaTitle"),
                _s("ogTitle"),
                _s("translation"),
                _s("status"),
                _ref("author", "Author"),
                _ref("category", "Category"),
                Field(name="brand", type_name="Brand"),
            ),
        ),
        ModelType(
            name="ArticleV2",
            fields=(
                _s("title", is_required=True),
                _s("handle"),
                _s("metaTitle"),
                _s("ogTitle"),
                _s("translation"),
                _s("status"),
                _ref("author", "Author"),
            ),
        ),
        ModelType(name="Author", fields=(_s("name"), _s("email"), _ref("articles", "Article", is_list=True))),
        ModelType(name="Category", fields=(_s("name"), _s("slug"), _ref("parent", "Category"))),
        ModelType(name="Content", fields=(_s("value"),)),
        ModelType(name="SiteSettings", fields=(_s("twitter_handle"), Field(name="brand", type_name="Brand"))),
        ModelType(name="Asset", is_system=True, fields=(_s("url"),)),
    ]
    components = [
        ModelType(name="Seo", is_component=True, fields=(_s("metaTitle"), _s("metaDescription"), _s("canonicalUrl"))),
        ModelType(name="Hero", is_component=True, fields=(_s("title"), _s("subtitle"), _s("ctaLabel"))),
        ModelType(name="Banner", is_component=True, fields=(_s("title"), _s("subtitle"), _s("ctaLabel"))),
        ModelType(name="UnusedWidget", is_component=True, fields=(_s("label"),)),
    ]
    enums = [
        EnumType(name="Brand", values=tuple(BRAND_VALUES)),
        EnumType(name="Locale", values=("en", "de", "fr")),
        EnumType(name="ButtonColor", values=("primary", "secondary")),
        EnumType(name="Stage", values=("DRAFT", "PUBLISHED")),
    ]
    return Schema.from_types(models, components, enums)


@pytest.fixture
def rich_counts():
    return {
        "Article": EntryCount(draft=30, published=10),
        "Author": EntryCount(draft=0, published=5),
        "Page": EntryCount(draft=1, published=200),
    }

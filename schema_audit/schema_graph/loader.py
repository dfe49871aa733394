"""
Input boundary: validate raw JSON-shaped payloads into a Schema.

Payloads come from an external introspection layer and use its camelCase
keys. Validation happens here, once; everything past this module works on
frozen value objects and never raises on shape problems.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field as PydanticField, ValidationError

from schema_audit.audit_logging import get_logger
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry
from schema_audit.schema_graph.models import EntryCount, EnumType, Field, ModelType, Schema

logger = get_logger(__name__)


class SchemaLoadError(ValueError):
    """Raised when a schema or entry-count payload cannot be validated."""


class _FieldIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = PydanticField(..., min_length=1)
    type: str = PydanticField("String", validation_alias=AliasChoices("type", "typeName", "type_name"))
    is_required: bool = PydanticField(False, validation_alias=AliasChoices("isRequired", "is_required"))
    is_list: bool = PydanticField(False, validation_alias=AliasChoices("isList", "is_list"))
    is_unique: bool = PydanticField(False, validation_alias=AliasChoices("isUnique", "is_unique"))
    related_model: str | None = PydanticField(
        None, validation_alias=AliasChoices("relatedModel", "related_model")
    )
    enum_values: list[str] | None = PydanticField(
        None, validation_alias=AliasChoices("enumValues", "enum_values")
    )
    description: str | None = None


class _TypeIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = PydanticField(..., min_length=1)
    fields: list[_FieldIn] = PydanticField(default_factory=list)
    is_component: bool = PydanticField(False, validation_alias=AliasChoices("isComponent", "is_component"))
    is_system: bool = PydanticField(False, validation_alias=AliasChoices("isSystem", "is_system"))
    api_id: str | None = PydanticField(None, validation_alias=AliasChoices("apiId", "api_id"))
    plural_api_id: str | None = PydanticField(
        None, validation_alias=AliasChoices("pluralApiId", "plural_api_id")
    )


class _EnumIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = PydanticField(..., min_length=1)
    values: list[str] = PydanticField(default_factory=list)


class _SchemaIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    models: list[_TypeIn] = PydanticField(default_factory=list)
    components: list[_TypeIn] = PydanticField(default_factory=list)
    enums: list[_EnumIn] = PydanticField(default_factory=list)


class _EntryCountIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    draft: int = PydanticField(0, ge=0, validation_alias=AliasChoices("draft", "draftCount", "draft_count"))
    published: int = PydanticField(
        0, ge=0, validation_alias=AliasChoices("published", "publishedCount", "published_count")
    )


def _convert_type(raw: _TypeIn, enum_values: Mapping[str, tuple[str, ...]], *, is_component: bool) -> ModelType:
    fields = []
    for f in raw.fields:
        values = tuple(f.enum_values) if f.enum_values is not None else enum_values.get(f.type)
        fields.append(
            Field(
                name=f.name,
                type_name=f.type,
                is_required=f.is_required,
                is_list=f.is_list,
                is_unique=f.is_unique,
                related_model=f.related_model,
                enum_values=values,
                description=f.description,
            )
        )
    return ModelType(
        name=raw.name,
        fields=tuple(fields),
        is_component=is_component or raw.is_component,
        is_system=raw.is_system,
        api_id=raw.api_id,
        plural_api_id=raw.plural_api_id,
    )


def load_schema(payload: Mapping[str, Any], registry: PatternRegistry = DEFAULT_REGISTRY) -> Schema:
    """
    Validate {models, components, enums} and build the frozen Schema.

    Fields typed with a declared enum inherit its values when the payload
    does not list enumValues itself.
    """
    try:
        parsed = _SchemaIn.model_validate(payload)
    except ValidationError as e:
        logger.warning("schema_payload_invalid", errors=e.error_count())
        raise SchemaLoadError(f"Invalid schema payload: {e}") from e

    enums = tuple(EnumType(name=e.name, values=tuple(e.values)) for e in parsed.enums)
    enum_values = {e.name: e.values for e in enums}
    models = tuple(_convert_type(m, enum_values, is_component=False) for m in parsed.models)
    components = tuple(_convert_type(c, enum_values, is_component=True) for c in parsed.components)
    schema = Schema.from_types(models, components, enums, registry=registry)
    logger.info(
        "schema_loaded",
        models=len(models),
        components=len(components),
        enums=len(enums),
    )
    return schema


def load_entry_counts(payload: Mapping[str, Any] | None) -> dict[str, EntryCount]:
    """Validate {model: {draft, published}} (or draftCount/publishedCount)."""
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise SchemaLoadError("Entry counts must be an object keyed by model name")
    out: dict[str, EntryCount] = {}
    for name, raw in payload.items():
        try:
            parsed = _EntryCountIn.model_validate(raw)
        except ValidationError as e:
            raise SchemaLoadError(f"Invalid entry count for {name!r}: {e}") from e
        out[str(name)] = EntryCount(draft=parsed.draft, published=parsed.published)
    return out

"""
Detection of platform-generated types.

The content platform injects asset, user, scheduling and input types into
every schema. They are not the customer's design and must not be scored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry, PatternTag

if TYPE_CHECKING:
    from schema_audit.schema_graph.models import ModelType


def is_system_model(model: ModelType, registry: PatternRegistry = DEFAULT_REGISTRY) -> bool:
    return model.is_system or registry.matches(PatternTag.SYSTEM_MODEL, model.name)


def is_system_component(name: str, registry: PatternRegistry = DEFAULT_REGISTRY) -> bool:
    return registry.matches(PatternTag.SYSTEM_COMPONENT, name)


def is_system_enum(name: str, registry: PatternRegistry = DEFAULT_REGISTRY) -> bool:
    return registry.matches(PatternTag.SYSTEM_ENUM, name)


def is_embedded_wrapper(name: str, registry: PatternRegistry = DEFAULT_REGISTRY) -> bool:
    """RichText / EmbeddedAsset / Link wrapper types generated per model."""
    return registry.matches(PatternTag.EMBEDDED_WRAPPER, name)


def is_system_reference(name: str, registry: PatternRegistry = DEFAULT_REGISTRY) -> bool:
    """Reference targets that are valid even though they are not user models."""
    return registry.matches(PatternTag.SYSTEM_REFERENCE, name)

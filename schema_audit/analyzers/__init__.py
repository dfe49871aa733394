"""
Dimension analyzers: one module per audit dimension.

Every module exposes analyze(schema, entry_counts, config, registry) and
returns a DimensionResult. ANALYZERS fixes the order dimensions appear in
the report.
"""

from schema_audit.analysis_engine.models import Dimension
from schema_audit.analyzers import (
    best_practices,
    components,
    content_health,
    duplicates_assessment,
    enum_architecture,
    localization,
    performance,
    relationships,
    seo_readiness,
    structure,
)

ANALYZERS = (
    (Dimension.STRUCTURE, structure.analyze),
    (Dimension.COMPONENTS, components.analyze),
    (Dimension.CONTENT, content_health.analyze),
    (Dimension.PERFORMANCE, performance.analyze),
    (Dimension.RELATIONSHIPS, relationships.analyze),
    (Dimension.ENUM_ARCHITECTURE, enum_architecture.analyze),
    (Dimension.DUPLICATES, duplicates_assessment.analyze),
    (Dimension.BEST_PRACTICES, best_practices.analyze),
    (Dimension.LOCALIZATION, localization.analyze),
    (Dimension.SEO, seo_readiness.analyze),
)

__all__ = [
    "ANALYZERS",
    "best_practices",
    "components",
    "content_health",
    "duplicates_assessment",
    "enum_architecture",
    "localization",
    "performance",
    "relationships",
    "seo_readiness",
    "structure",
]

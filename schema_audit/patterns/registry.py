"""
Named classification predicates shared by every analyzer.

One registry maps a PatternTag (taxonomy, presentation, tenancy, status, ...)
to an ordered list of Matchers. A Matcher is a pure predicate over a name and
an optional context (enum values, for instance). Within a tag the matchers are
tried in order; across tags, classify() walks a caller-supplied priority order
and the first tag with a matching predicate wins.

Analyzers never hardcode name regexes of their own: they ask the registry, so
"what counts as X" is decided in exactly one place and can be overridden in
tests by passing a different registry.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

REGISTRY_VERSION = "1.0"

Context = Sequence[str] | None
Predicate = Callable[[str, Context], bool]


class PatternTag(str, Enum):
    # Enum purpose categories
    STYLING = "styling"
    LAYOUT = "layout"
    CONTENT_TYPE = "content-type"
    STATUS = "status"
    TENANCY = "tenancy"
    BUSINESS_LOGIC = "business-logic"
    # Enum-based architecture patterns
    MULTI_BRAND = "multi-brand"
    MULTI_REGION = "multi-region"
    MULTI_TENANT = "multi-tenant"
    MULTI_SITE = "multi-site"
    # Model archetypes
    CORE_CONTENT = "core-content"
    CONTENT = "content"
    TAXONOMY = "taxonomy"
    TENANCY_MODEL = "tenancy-model"
    PEOPLE = "people"
    ECOMMERCE = "e-commerce"
    FORMS = "forms"
    CONFIGURATION = "configuration"
    VAGUE_MODEL = "vague-model"
    PAGE_MODEL = "page-model"
    REUSABLE_CONTENT = "reusable-content"
    # Field roles
    PRESENTATION = "presentation"
    CONFIG_FIELD = "config-field"
    BOOLEAN_TOGGLE = "boolean-toggle"
    SHOULD_BE_REQUIRED = "should-be-required"
    UNIQUE_CANDIDATE = "unique-candidate"
    KEY_REFERENCE = "key-reference"
    REVERSE_EXPECTED = "reverse-expected"
    SEO_FIELD = "seo-field"
    MEDIA_FIELD = "media-field"
    CTA_FIELD = "cta-field"
    SECTION_SPECIFIC = "section-specific"
    INLINE_MEDIA = "inline-media"
    ENUM_CANDIDATE = "enum-candidate"
    FORMAT_VALIDATION = "format-validation"
    LOCALIZED_FIELD = "localized-field"
    LOCALE_ENUM = "locale-enum"
    META_FIELD = "meta-field"
    SLUG_FIELD = "slug-field"
    OPEN_GRAPH_FIELD = "open-graph-field"
    TWITTER_FIELD = "twitter-field"
    CANONICAL_FIELD = "canonical-field"
    # SEO and strengths archetypes
    NON_PAGE_MODEL = "non-page-model"
    STRUCTURED_DATA = "structured-data"
    BLOCK_COMPONENT = "block-component"
    FORM_COMPONENT = "form-component"
    SEO_COMPONENT = "seo-component"
    # Platform-generated types
    SYSTEM_MODEL = "system-model"
    SYSTEM_COMPONENT = "system-component"
    SYSTEM_ENUM = "system-enum"
    SYSTEM_REFERENCE = "system-reference"
    EMBEDDED_WRAPPER = "embedded-wrapper"
    VERSION_SUFFIX = "version-suffix"


@dataclass(frozen=True)
class Matcher:
    """
    Single named predicate.

    label identifies the rule in findings and logs; description is the
    human-readable meaning (enum purpose text, required-field reason, ...).
    """

    label: str
    predicate: Predicate
    description: str = ""

    def __call__(self, name: str, context: Context = None) -> bool:
        return bool(self.predicate(name, context))


def name_pattern(label: str, pattern: str, description: str = "", *, ignore_case: bool = True) -> Matcher:
    """Matcher that searches the name with a compiled regex."""
    compiled = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
    return Matcher(label, lambda name, _ctx: compiled.search(name) is not None, description)


def any_value(label: str, pattern: str, description: str = "") -> Matcher:
    """Matcher that is true when any context value matches (case-insensitive, anchored at start)."""
    compiled = re.compile(pattern, re.IGNORECASE)
    return Matcher(
        label,
        lambda _name, ctx: bool(ctx) and any(compiled.match(v) for v in ctx),
        description,
    )


def name_in(label: str, names: Iterable[str], description: str = "") -> Matcher:
    """Matcher for an exact-name set."""
    exact = frozenset(names)
    return Matcher(label, lambda name, _ctx: name in exact, description)


def either(label: str, *matchers: Matcher, description: str = "") -> Matcher:
    """Matcher that is true when any of the given matchers is."""
    return Matcher(label, lambda name, ctx: any(m(name, ctx) for m in matchers), description)


class PatternRegistry:
    """Versioned mapping PatternTag -> ordered matchers."""

    def __init__(self, categories: Mapping[PatternTag, Sequence[Matcher]], version: str = REGISTRY_VERSION) -> None:
        self.version = version
        self._categories: dict[PatternTag, tuple[Matcher, ...]] = {
            tag: tuple(matchers) for tag, matchers in categories.items()
        }

    def tags(self) -> tuple[PatternTag, ...]:
        return tuple(self._categories)

    def matchers(self, tag: PatternTag) -> tuple[Matcher, ...]:
        return self._categories.get(tag, ())

    def first_match(self, tag: PatternTag, name: str, context: Context = None) -> Matcher | None:
        """First matcher of tag that accepts name, in registry order."""
        for matcher in self._categories.get(tag, ()):
            if matcher(name, context):
                return matcher
        return None

    def matches(self, tag: PatternTag, name: str, context: Context = None) -> bool:
        return self.first_match(tag, name, context) is not None

    def classify(
        self,
        name: str,
        context: Context = None,
        *,
        order: Sequence[PatternTag],
    ) -> PatternTag | None:
        """Walk order and return the first tag with a matching predicate."""
        for tag in order:
            if self.matches(tag, name, context):
                return tag
        return None

    def with_overrides(self, overrides: Mapping[PatternTag, Sequence[Matcher]]) -> PatternRegistry:
        """Copy of this registry with some tags replaced."""
        merged = dict(self._categories)
        merged.update({tag: tuple(m) for tag, m in overrides.items()})
        return PatternRegistry(merged, version=f"{self.version}+custom")


# ---------------------------------------------------------------------------
# Platform-generated type detection
# ---------------------------------------------------------------------------

SYSTEM_COMPONENT_NAMES = frozenset({
    "AssetUpload",
    "AssetUploadError",
    "AssetUploadRequestPostData",
    "AssetUploadWhereInput",
    "BatchPayload",
    "Color",
    "ColorInput",
    "ConnectPositionInput",
    "DocumentOutputInput",
    "DocumentTransformationInput",
    "DocumentVersion",
    "ImageResizeInput",
    "ImageTransformationInput",
    "Location",
    "LocationInput",
    "PageInfo",
    "RGBA",
    "RGBAInput",
    "RichText",
    "RichTextAST",
    "Version",
    "VersionWhereInput",
})

_GENERATED_INPUT_MARKERS = (
    "WhereInput",
    "OrderByInput",
    "CreateInput",
    "UpdateInput",
    "ConnectInput",
    "UpsertInput",
    "ManyInlineInput",
)

_SYSTEM_SUFFIXES = (
    "ScheduledRelease",
    "ScheduledOperation",
    "User",
    "Version",
    "Asset",
    "Connection",
    "Edge",
    "Aggregate",
)

SYSTEM_ENUM_NAMES = frozenset({
    "DocumentFileTypes",
    "ImageFit",
    "Locale",
    "Stage",
    "ScheduledOperationStatus",
    "ScheduledReleaseStatus",
    "SystemDateTimeFieldVariation",
    "EntityTypeName",
    "UserKind",
    "BatchPayloadType",
    "ColorInput",
    "ConnectPositionInput",
    "DocumentOutputInput",
    "DocumentTransformationInput",
    "ImageResizeInput",
    "ImageTransformationInput",
    "LocationInput",
    "PublishLocaleInput",
    "RGBAInput",
    "RGBAHue",
    "RGBATransparency",
    "UnpublishLocaleInput",
})

SYSTEM_MODEL_NAMES = frozenset({"Asset", "User", "ScheduledOperation", "ScheduledRelease"})

SYSTEM_REFERENCE_NAMES = frozenset({
    "Asset",
    "RichText",
    "Workflow",
    "User",
    "ScheduledOperation",
    "ScheduledRelease",
    "Location",
    "Color",
    "RGBA",
})


def _is_generated_asset_type(name: str, _ctx: Context) -> bool:
    return name.startswith("Asset") and any(part in name for part in ("Upload", "Transform", "Output"))


def _has_system_suffix(name: str, _ctx: Context) -> bool:
    for suffix in _SYSTEM_SUFFIXES:
        if name == suffix or name.endswith(f"_{suffix}"):
            return True
        if name.endswith(f"{suffix}Connection") or name.endswith(f"{suffix}Edge"):
            return True
    return False


def _has_system_enum_suffix(name: str, _ctx: Context) -> bool:
    return any(name.endswith(f"_{sys_enum}") for sys_enum in SYSTEM_ENUM_NAMES)


def _suffixed(suffix: str) -> Predicate:
    return lambda name, _ctx: name.endswith(suffix) and len(name) > len(suffix)


# ---------------------------------------------------------------------------
# Tenancy detection
# ---------------------------------------------------------------------------

TENANCY_NAMES = (
    r"^(shop|brand|store|merchant|vendor|partner|client|tenant|organization"
    r"|site|domain|channel|region|country|locale|market)s?$"
)
_GENERIC_VALUE = re.compile(
    r"^(xs|sm|md|lg|xl|left|right|center|top|bottom|primary|secondary|dark|light"
    r"|active|inactive|draft|published)",
    re.IGNORECASE,
)


def _values_look_like_names(_name: str, ctx: Context) -> bool:
    """Most values read like proper nouns (capitalised or snake identifiers)."""
    if not ctx:
        return False
    non_generic = [v for v in ctx if len(v) > 2 and not _GENERIC_VALUE.match(v)]
    if len(non_generic) < 3 or len(non_generic) / len(ctx) <= 0.8:
        return False
    looks_like_names = [v for v in non_generic if v[:1].isupper() or "_" in v]
    return len(looks_like_names) >= 3


_TENANCY_BY_NAME = name_pattern("tenancy-name", TENANCY_NAMES)


def _content_type_name(name: str, ctx: Context) -> bool:
    return re.search(r"type|kind|category|format|mode", name, re.IGNORECASE) is not None and not _TENANCY_BY_NAME(name, ctx)


VERSION_SUFFIX_PATTERN = re.compile(r"^(.+?)[_\s]?[vV]?\d+$")


def version_stem(name: str) -> str | None:
    """Stem of a version-suffixed name (ProductV2 -> Product), else None."""
    match = VERSION_SUFFIX_PATTERN.match(name)
    return match.group(1) if match else None


def build_default_registry() -> PatternRegistry:
    """The built-in registry. Order inside each list is the tie-break order."""
    categories: dict[PatternTag, list[Matcher]] = {
        PatternTag.STYLING: [
            either(
                "styling-color",
                name_pattern("styling-color-name", r"color|theme|tone|shade"),
                any_value("styling-color-values", r"^(light|dark|primary|secondary|accent|neutral|muted|vibrant)"),
                description="Controls visual appearance/theming.",
            ),
            either(
                "styling-size",
                name_pattern("styling-size-name", r"size|scale|weight"),
                any_value("styling-size-values", r"^(xs|sm|md|lg|xl|xxl|small|medium|large|thin|regular|bold)"),
                description="Controls size/scale options.",
            ),
            name_pattern(
                "styling-variant",
                r"variant|style|appearance",
                "Defines visual variants for components.",
            ),
        ],
        PatternTag.LAYOUT: [
            name_pattern(
                "layout-name",
                r"layout|grid|column|row|flex|alignment|position|direction|spacing|width|background",
                "Controls layout configuration without code changes.",
            ),
            any_value(
                "layout-values",
                r"^(left|right|center|top|bottom|full|half|third|quarter)",
                "Position/alignment control for content placement.",
            ),
        ],
        PatternTag.CONTENT_TYPE: [
            Matcher(
                "content-type-name",
                _content_type_name,
                "Categorizes content into types for filtering and conditional display.",
            ),
        ],
        PatternTag.STATUS: [
            either(
                "status-lifecycle",
                name_pattern("status-lifecycle-name", r"status|state|phase|stage"),
                any_value(
                    "status-lifecycle-values",
                    r"^(draft|published|pending|approved|rejected|active|inactive|archived)",
                ),
                description="Tracks content lifecycle or workflow state.",
            ),
            either(
                "status-priority",
                name_pattern("status-priority-name", r"level|priority|importance"),
                any_value("status-priority-values", r"^(high|medium|low|critical|normal|urgent)"),
                description="Indicates priority/importance level.",
            ),
            either(
                "status-visibility",
                name_pattern("status-visibility-name", r"visibility|access"),
                any_value("status-visibility-values", r"^(public|private|internal|restricted|members)"),
                description="Controls content visibility/access.",
            ),
        ],
        PatternTag.TENANCY: [
            Matcher(
                "tenancy-name",
                _TENANCY_BY_NAME.predicate,
                "Segments content by brand/site/tenant through an enum.",
            ),
            Matcher(
                "tenancy-values",
                _values_look_like_names,
                "Values read like brand or site names; segments content through an enum.",
            ),
        ],
        PatternTag.BUSINESS_LOGIC: [
            name_pattern(
                "business-commerce",
                r"payment|shipping|delivery|subscription|plan|tier",
                "Business process configuration (commerce or subscription options).",
            ),
            name_pattern(
                "business-automation",
                r"action|trigger|event|hook",
                "Business actions or triggers for automation.",
            ),
        ],
        PatternTag.MULTI_BRAND: [
            name_pattern("multi-brand", r"^(shop|brand|store|merchant|vendor|partner|client)s?$", "brands/shops"),
        ],
        PatternTag.MULTI_REGION: [
            name_pattern(
                "multi-region",
                r"^(region|country|locale|language|market|territory|geo|location)s?$",
                "regions/locales",
            ),
        ],
        PatternTag.MULTI_TENANT: [
            name_pattern(
                "multi-tenant",
                r"^(tenant|organization|org|company|workspace|account|site|instance)s?$",
                "tenants/organizations",
            ),
        ],
        PatternTag.MULTI_SITE: [
            name_pattern("multi-site", r"^(site|domain|subdomain|channel|platform|portal)s?$", "sites/domains"),
        ],
        PatternTag.CORE_CONTENT: [
            name_pattern("core-content", r"^(page|article|post|product|form|event)s?$"),
        ],
        PatternTag.CONTENT: [
            name_pattern("content-page", r"^(page|article|post|blog|news|story|content)s?$", "Website pages and articles"),
        ],
        PatternTag.TAXONOMY: [
            name_pattern("taxonomy", r"^(category|categories|topic|tag|taxonomy|type)s?$", "Content classification"),
        ],
        PatternTag.TENANCY_MODEL: [
            name_pattern("tenancy-model", r"^(site|brand|shop|store|tenant)s?$", "Site/brand configuration"),
        ],
        PatternTag.PEOPLE: [
            name_pattern("people", r"^(author|person|people|team|member|staff|contributor)s?$", "People/authors"),
        ],
        PatternTag.ECOMMERCE: [
            name_pattern("e-commerce", r"^(product|item|order|cart|checkout|payment)s?$", "Product catalog and orders"),
        ],
        PatternTag.FORMS: [
            name_pattern("forms", r"^(form|submission|lead|contact)s?$", "Form definitions and submissions"),
        ],
        PatternTag.CONFIGURATION: [
            name_pattern(
                "configuration",
                r"^(seo|setting|settings|config|navigation|menu|footer|header|global)s?$",
                "Global settings and navigation",
            ),
        ],
        PatternTag.PAGE_MODEL: [
            name_pattern(
                "page-model",
                r"^(home|about|contact|service|product|landing|blog|news|faq|team|career|privacy|terms|error|404|500)?\s?page$",
            ),
            name_pattern("page-in-name", r"page"),
        ],
        PatternTag.REUSABLE_CONTENT: [
            name_pattern(
                "reusable-content",
                r"^(author|person|article|post|testimonial|review|faq|category|tag|topic|product|event"
                r"|location|address|seo|meta|cta|button|link|image|video|media|asset)s?$",
            ),
        ],
        PatternTag.VAGUE_MODEL: [
            name_pattern("vague-model", r"^(content|data|item|entry|record|object|thing|element|block|section)s?$"),
        ],
        PatternTag.PRESENTATION: [
            name_pattern("presentation-color", r"^(background|bg)(color|image|gradient|style)?$", "Styling field (color)"),
            name_pattern("presentation-font", r"^(font|border)(color|size|weight|style)?$", "Styling field (typography)"),
            name_pattern("presentation-text", r"^text(color|size|weight|style)$", "Styling field (typography)"),
            name_pattern("presentation-spacing", r"^(padding|margin)(top|bottom|left|right|x|y)?$", "Layout spacing field"),
            name_pattern("presentation-align", r"^(align|alignment|justify|textalign)$", "Alignment field"),
            name_pattern(
                "presentation-dimension",
                r"^(width|height|maxwidth|minwidth|maxheight|minheight)$",
                "Dimension field",
            ),
            name_pattern("presentation-flex", r"^(flex|grid)(direction|wrap|gap|basis)?$", "Layout field"),
            name_pattern("presentation-border", r"^(border)(radius|width)?$", "Styling field (border)"),
            name_pattern("presentation-misc", r"^(opacity|zindex|position|display)$", "Presentation field"),
            name_pattern("presentation-theme", r"^(theme|colorscheme|variant|style)$", "Theme/variant field"),
            name_pattern("presentation-grid", r"^(columns?|rows?|gap|spacing)$", "Layout spacing field"),
            name_pattern("presentation-motion", r"^(animation|transition|transform)$", "Presentation field"),
        ],
        PatternTag.CONFIG_FIELD: [
            name_pattern(
                "config-toggle",
                r"^(show|hide|enable|disable|is)(visible|hidden|enabled|disabled|active)?[A-Z]",
                "Toggle/visibility config",
                ignore_case=False,
            ),
            name_pattern("config-flag", r"^(display|visible|hidden|enabled|disabled|active)$", "Toggle/visibility config"),
            name_pattern("config-order", r"^(order|sortorder|priority|weight|index)$", "Ordering config"),
            name_pattern("config-limit", r"^(limit|max|min|count|perpage|pagesize)$", "Limit/count config"),
            name_pattern("config-media", r"^(autoplay|loop|muted|controls)$", "Configuration field"),
            name_pattern("config-link", r"^(target|rel|download)$", "Configuration field"),
        ],
        PatternTag.BOOLEAN_TOGGLE: [
            name_pattern("show", r"^show[A-Z]", ignore_case=False),
            name_pattern("hide", r"^hide[A-Z]", ignore_case=False),
            name_pattern("enable", r"^enable[A-Z]", ignore_case=False),
            name_pattern("disable", r"^disable[A-Z]", ignore_case=False),
            name_pattern("is", r"^is[A-Z]", ignore_case=False),
        ],
        PatternTag.SHOULD_BE_REQUIRED: [
            name_pattern("required-identifier", r"^(title|name|headline)$", "Primary identifier"),
            name_pattern("required-slug", r"^slug$", "URL routing"),
            name_pattern("required-type", r"^type$", "Content classification"),
        ],
        PatternTag.UNIQUE_CANDIDATE: [
            name_pattern("unique-slug", r"^slug$", "Slug fields should be unique for URL routing"),
            name_pattern("unique-sku", r"^sku$", "SKU should be unique for product identification"),
            name_pattern("unique-email", r"^email$", "Email addresses should typically be unique"),
            name_pattern("unique-code", r"^code$", "Codes are often unique identifiers"),
            name_pattern("unique-handle", r"^handle$", "Handles should be unique like slugs"),
            name_pattern("unique-permalink", r"^permalink$", "Permalinks should be unique"),
        ],
        PatternTag.KEY_REFERENCE: [
            name_pattern("key-reference", r"^(author|category|site|brand|parent|owner)$"),
        ],
        PatternTag.REVERSE_EXPECTED: [
            name_pattern("reverse-expected", r"^(category|tag|topic|author|site|brand)$"),
        ],
        PatternTag.SEO_FIELD: [name_pattern("seo-field", r"seo|meta|og|twitter")],
        PatternTag.MEDIA_FIELD: [name_pattern("media-field", r"image|video|media|thumbnail|cover|banner")],
        PatternTag.CTA_FIELD: [name_pattern("cta-field", r"cta|button|link|action")],
        PatternTag.SECTION_SPECIFIC: [name_pattern("section-specific", r"^(section|block|area|zone|row|column)\d+")],
        PatternTag.INLINE_MEDIA: [
            name_pattern(
                "inline-media",
                r"^(image|video|media|file|asset|thumbnail|cover|banner|logo|icon)(url|uri|path)?$",
                "Inline URL field; should reference the Asset model",
            ),
        ],
        PatternTag.ENUM_CANDIDATE: [
            name_pattern(
                "enum-candidate",
                r"^(status|type|category|state|priority|visibility|role|gender|size|color|layout|alignment|position|theme|variant)$",
            ),
        ],
        PatternTag.FORMAT_VALIDATION: [
            name_pattern("validation-email", r"email", "Add email format validation"),
            name_pattern("validation-url", r"url", "Add URL format validation"),
            name_pattern("validation-phone", r"phone", "Add phone number format validation"),
            name_pattern("validation-postal", r"zip|postal", "Add postal code format validation"),
        ],
        PatternTag.LOCALIZED_FIELD: [
            name_pattern("localized-field", r"locale|localization|translation|language", "Locale-aware field"),
        ],
        PatternTag.LOCALE_ENUM: [name_pattern("locale-enum", r"locales?$", "Enumerates supported locales")],
        PatternTag.META_FIELD: [
            name_pattern("meta-seo", r"seo|meta", "SEO or meta field"),
            name_pattern("meta-social", r"og(title|description|image)|twitter(title|description|image)", "Social meta field"),
            name_pattern("meta-canonical", r"canonical", "Canonical URL field"),
        ],
        PatternTag.SLUG_FIELD: [
            name_pattern("slug", r"^slug$", "URL slug"),
            name_pattern("slug-handle", r"^handle$", "URL slug"),
            name_pattern("slug-url-path", r"^urlpath$", "URL slug"),
            name_pattern("slug-path", r"^path$", "URL slug"),
            name_pattern("slug-permalink", r"^permalink$", "URL slug"),
        ],
        PatternTag.OPEN_GRAPH_FIELD: [
            name_pattern("open-graph", r"og(title|description|image)|opengraph|socialimage|shareimage", "Open Graph field"),
        ],
        PatternTag.TWITTER_FIELD: [name_pattern("twitter-card", r"twitter", "Twitter Card field")],
        PatternTag.CANONICAL_FIELD: [name_pattern("canonical", r"canonical", "Canonical URL field")],
        PatternTag.NON_PAGE_MODEL: [
            name_pattern("non-page-model", r"setting|config|navigation|menu", "Settings or navigation; never rendered as a page"),
        ],
        PatternTag.STRUCTURED_DATA: [
            name_pattern("schema-org-article", r"article|post|blog|news", "Article"),
            name_pattern("schema-org-product", r"product", "Product"),
            name_pattern("schema-org-faq", r"faq", "FAQPage"),
            name_pattern("schema-org-event", r"event", "Event"),
            name_pattern("schema-org-person", r"person|author|team", "Person"),
            name_pattern("schema-org-organization", r"organization|company", "Organization"),
            name_pattern("schema-org-review", r"review|testimonial", "Review"),
            name_pattern("schema-org-recipe", r"recipe", "Recipe"),
            name_pattern("schema-org-video", r"video", "VideoObject"),
            name_pattern("schema-org-job", r"job|career|position", "JobPosting"),
            name_pattern("schema-org-course", r"course|class", "Course"),
            name_pattern("schema-org-book", r"book", "Book"),
        ],
        PatternTag.BLOCK_COMPONENT: [name_pattern("block-component", r"block|card|banner|section|hero|cta")],
        PatternTag.FORM_COMPONENT: [
            name_pattern("form-component", r"form|input|field|validator|checkbox|radio|select|textarea"),
        ],
        PatternTag.SEO_COMPONENT: [name_pattern("seo-component", r"^seo$")],
        PatternTag.SYSTEM_MODEL: [
            name_in("system-model-name", SYSTEM_MODEL_NAMES),
            Matcher("system-model-richtext", lambda n, _c: n.endswith("RichText") and len(n) > 8),
            Matcher("system-model-embedded-asset", lambda n, _c: n.endswith("EmbeddedAsset") and len(n) > 13),
        ],
        PatternTag.SYSTEM_COMPONENT: [
            name_in("system-component-name", SYSTEM_COMPONENT_NAMES),
            Matcher("system-component-asset", _is_generated_asset_type),
            Matcher("system-component-richtext", _suffixed("RichText")),
            Matcher("system-component-input", lambda n, _c: any(m in n for m in _GENERATED_INPUT_MARKERS)),
            Matcher("system-component-suffix", _has_system_suffix),
            Matcher("system-component-remote", lambda n, _c: "FromAnotherProject_" in n),
        ],
        PatternTag.SYSTEM_ENUM: [
            Matcher("system-enum-underscore", lambda n, _c: n.startswith("_")),
            name_in("system-enum-name", SYSTEM_ENUM_NAMES),
            Matcher("system-enum-remote-suffix", _has_system_enum_suffix),
            Matcher("system-enum-variation", lambda n, _c: n.endswith("Variation")),
            Matcher("system-enum-remote", lambda n, _c: "FromAnotherProject_" in n),
            Matcher("system-enum-order-by", lambda n, _c: n.endswith("OrderByInput")),
        ],
        PatternTag.SYSTEM_REFERENCE: [
            name_in("system-reference-name", SYSTEM_REFERENCE_NAMES),
            Matcher("system-reference-richtext", lambda n, _c: n.endswith("RichText")),
            Matcher("system-reference-embedded-asset", lambda n, _c: n.endswith("EmbeddedAsset")),
            Matcher("system-reference-workflow", lambda n, _c: "Workflow" in n),
        ],
        PatternTag.EMBEDDED_WRAPPER: [
            Matcher("embedded-richtext", _suffixed("RichText")),
            Matcher("embedded-asset", _suffixed("EmbeddedAsset")),
            Matcher("embedded-link", _suffixed("Link")),
        ],
        PatternTag.VERSION_SUFFIX: [
            Matcher("version-suffix", lambda n, _c: version_stem(n) is not None),
        ],
    }
    return PatternRegistry(categories)


DEFAULT_REGISTRY = build_default_registry()

ENUM_CATEGORY_ORDER: tuple[PatternTag, ...] = (
    PatternTag.STYLING,
    PatternTag.LAYOUT,
    PatternTag.CONTENT_TYPE,
    PatternTag.STATUS,
    PatternTag.TENANCY,
    PatternTag.BUSINESS_LOGIC,
)
"""Styling wins over layout, layout over content-type, and so on. Unmatched enums are 'other'."""

FIELD_ROLE_ORDER: tuple[PatternTag, ...] = (PatternTag.PRESENTATION, PatternTag.CONFIG_FIELD)
"""Presentation beats configuration; fields matching neither are content."""

CLUSTER_ORDER: tuple[tuple[PatternTag, str, str], ...] = (
    (PatternTag.CONTENT, "Content", "Primary content models for pages and articles"),
    (PatternTag.TAXONOMY, "Taxonomy", "Content classification and organization"),
    (PatternTag.TENANCY_MODEL, "Multi-Site/Brand", "Site or brand configuration"),
    (PatternTag.PEOPLE, "People", "Author and team information"),
    (PatternTag.ECOMMERCE, "E-Commerce", "Product and order management"),
    (PatternTag.FORMS, "Forms", "Form definitions and submissions"),
    (PatternTag.CONFIGURATION, "Configuration", "Global settings and navigation"),
)
"""Archetype clusters in display order. A model may sit in several clusters."""

ENUM_ARCHITECTURE_PATTERNS: tuple[PatternTag, ...] = (
    PatternTag.MULTI_BRAND,
    PatternTag.MULTI_REGION,
    PatternTag.MULTI_TENANT,
    PatternTag.MULTI_SITE,
)

NODE_IMPORTANCE_ORDER: tuple[tuple[str, str], ...] = (
    ("core-content-with-entries", "core"),
    ("configuration-name", "config"),
    ("high-entry-volume", "core"),
    ("highly-referenced", "core"),
    ("has-entries-or-referrers", "supporting"),
)
"""(rule, importance) pairs evaluated first-match-wins; unmatched nodes are 'utility'."""

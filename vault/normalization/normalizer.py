"""Component record normalizer.

Collapses raw records from any provider (code-authored registry entries,
Supabase rows with embedded relations, browser-exported JSON) into the
canonical :class:`~vault.models.component.Component` shape.

Every dual-spelled field is resolved through ``FIELD_SOURCES`` once, here.
Nothing past this boundary needs to check both camelCase and snake_case.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any, Optional

from vault.media.types import MediaType, resolve_media_type
from vault.models.component import Component, ComponentContent, ComponentSource
from vault.normalization.slug import slugify

# canonical attribute -> source keys, camelCase first
FIELD_SOURCES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "slug": ("slug",),
    "title": ("title",),
    "description": ("description",),
    "category": ("category",),
    "author": ("author",),
    "date": ("date",),
    "featured": ("featured",),
    "preview_image": ("previewImage", "preview_image"),
    "preview_video": ("previewVideo", "preview_video"),
    "media_type": ("mediaType", "media_type"),
    "implementation": ("implementation",),
    "more_information": ("moreInformation", "more_information"),
    "external_source_url": ("externalSourceUrl", "external_source_url"),
    "demo_url": ("demoUrl", "demo_url"),
    "github_url": ("githubUrl", "github_url"),
    "code_snippet": ("codeSnippet", "code_snippet"),
    "created_at": ("createdAt", "created_at"),
    "updated_at": ("updatedAt", "updated_at"),
    "source": ("source",),
}

CONTENT_SOURCES: dict[str, tuple[str, ...]] = {
    "html": ("html",),
    "css": ("css",),
    "js": ("js",),
    "external_scripts": ("externalScripts", "external_scripts"),
}

# flat editor fields used when no content object or rows exist
FLAT_CONTENT_SOURCES: dict[str, tuple[str, ...]] = {
    "html": ("htmlContent", "html_content"),
    "css": ("cssContent", "css_content"),
    "js": ("jsContent", "js_content"),
    "external_scripts": ("externalScriptsContent", "external_scripts_content"),
}

# per-row type discriminators in component_content
CONTENT_ROW_TYPES: dict[str, str] = {
    "html": "html",
    "css": "css",
    "js": "js",
    "javascript": "js",
    "external": "external_scripts",
    "external_scripts": "external_scripts",
    "externalscripts": "external_scripts",
}

_TRUE_STRINGS = {"true", "1", "yes", "on"}


# =============================================================================
# Field Helpers
# =============================================================================


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def pick(raw: Mapping[str, Any], names: Iterable[str]) -> Any:
    """First non-blank value among ``names``; None if every spelling is blank."""
    for name in names:
        value = raw.get(name)
        if not _is_blank(value):
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value if isinstance(value, str) else str(value)


def _as_optional_text(value: Any) -> Optional[str]:
    text = _as_text(value).strip()
    return text or None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def normalize_tags(tags: Any) -> list[str]:
    """Lowercase, strip and de-duplicate tags, keeping first-seen order.

    Accepts strings, ``{"name": ...}`` objects, or a comma-separated string.
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    elif isinstance(tags, Mapping):
        tags = [tags]
    elif not isinstance(tags, Iterable):
        return []

    result: list[str] = []
    for tag in tags:
        if isinstance(tag, Mapping):
            tag = tag.get("name")
        if not isinstance(tag, str):
            continue
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in result:
            result.append(cleaned)
    return result


def _tags_from_relation(relation: Any) -> list[str]:
    """Flatten ``component_tags[].tags.name`` into a list of names."""
    if isinstance(relation, Mapping):
        relation = [relation]
    if not isinstance(relation, Iterable) or isinstance(relation, str):
        return []

    names: list[Any] = []
    for link in relation:
        if not isinstance(link, Mapping):
            continue
        tag = link.get("tags", link.get("tag"))
        if isinstance(tag, Mapping):
            names.append(tag.get("name"))
        elif isinstance(tag, list):
            names.extend(t.get("name") for t in tag if isinstance(t, Mapping))
        elif isinstance(tag, str):
            names.append(tag)
    return normalize_tags(names)


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, Iterable):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


# =============================================================================
# Content
# =============================================================================


def _content_from_mapping(data: Mapping[str, Any]) -> dict[str, str]:
    return {
        field: _as_text(pick(data, names))
        for field, names in CONTENT_SOURCES.items()
    }


def _content_from_rows(rows: Any) -> dict[str, str]:
    """Fold component_content rows into the four content fields.

    Rows are either per-type (``{"type": "css", "content": ...}``) or the
    columnar shape (``{"html": ..., "css": ..., "js": ..., "external_scripts": ...}``).
    """
    if isinstance(rows, Mapping):
        rows = [rows]

    folded = {field: "" for field in CONTENT_SOURCES}
    if not isinstance(rows, Iterable) or isinstance(rows, str):
        return folded

    for row in rows:
        if not isinstance(row, Mapping):
            continue
        row_type = row.get("type")
        if isinstance(row_type, str):
            field = CONTENT_ROW_TYPES.get(row_type.strip().lower())
            if field and not folded[field]:
                folded[field] = _as_text(pick(row, ("content", "code", "value")))
            continue
        for field, value in _content_from_mapping(row).items():
            if not folded[field]:
                folded[field] = value
    return folded


def _collect_content(raw: Mapping[str, Any]) -> ComponentContent:
    content = raw.get("content")
    if isinstance(content, ComponentContent):
        fields = content.model_dump()
    elif isinstance(content, Mapping):
        fields = _content_from_mapping(content)
    else:
        rows = pick(raw, ("component_content", "componentContent"))
        fields = _content_from_rows(rows)

    for field, names in FLAT_CONTENT_SOURCES.items():
        if not fields[field]:
            fields[field] = _as_text(pick(raw, names))

    return ComponentContent(**fields)


# =============================================================================
# Media
# =============================================================================


def derive_media_type(
    preview_image: Optional[str],
    preview_video: Optional[str],
    declared: Any = None,
) -> MediaType:
    """Media type consistent with the preview URLs actually present.

    A declared value is kept only if the matching preview URL exists and does
    not resolve to the opposite type. Otherwise a video preview wins over an
    image preview; with neither the result is unknown.
    """
    declared_type = resolve_declared_media_type(declared)

    if declared_type is MediaType.VIDEO and preview_video:
        if resolve_media_type(preview_video) is not MediaType.IMAGE:
            return MediaType.VIDEO
    if declared_type is MediaType.IMAGE and preview_image:
        if resolve_media_type(preview_image) is not MediaType.VIDEO:
            return MediaType.IMAGE

    if preview_video and resolve_media_type(preview_video) is not MediaType.IMAGE:
        return MediaType.VIDEO
    if preview_image and resolve_media_type(preview_image) is not MediaType.VIDEO:
        return MediaType.IMAGE
    return MediaType.UNKNOWN


def resolve_declared_media_type(value: Any) -> MediaType:
    """Map a stored media_type value ('image', 'video', 'auto', ...) to MediaType."""
    if isinstance(value, MediaType):
        return value
    if isinstance(value, str):
        try:
            return MediaType(value.strip().lower())
        except ValueError:
            return MediaType.UNKNOWN
    return MediaType.UNKNOWN


def _resolve_source(value: Any, default: ComponentSource) -> ComponentSource:
    if isinstance(value, ComponentSource):
        return value
    if isinstance(value, str):
        try:
            return ComponentSource(value)
        except ValueError:
            return default
    return default


# =============================================================================
# Normalizer
# =============================================================================


def normalize_component(
    raw: Any,
    source: Optional[ComponentSource] = None,
) -> Component:
    """Normalize a raw record into a fully populated Component.

    Pure and total: missing optional data never raises, and
    ``normalize_component(normalize_component(x))`` equals
    ``normalize_component(x)``.

    Args:
        raw: Mapping in either spelling, or an existing Component.
        source: Provider to stamp on the result. When omitted the record's own
            ``source`` is kept, defaulting to dynamic.

    Returns:
        Canonical Component.
    """
    if isinstance(raw, Component):
        raw = raw.model_dump(mode="json", by_alias=True)
    if not isinstance(raw, Mapping):
        raw = {}

    values = {field: pick(raw, names) for field, names in FIELD_SOURCES.items()}

    title = _as_text(values["title"]).strip()
    record_id = _as_text(values["id"]).strip()
    slug = _as_text(values["slug"]).strip() or slugify(title) or slugify(record_id)
    if not record_id:
        record_id = slug

    preview_image = _as_optional_text(values["preview_image"])
    preview_video = _as_optional_text(values["preview_video"])

    tags = raw.get("tags")
    if tags is None:
        tag_list = _tags_from_relation(
            pick(raw, ("component_tags", "componentTags"))
        )
    else:
        tag_list = normalize_tags(tags)

    return Component(
        id=record_id,
        slug=slug,
        title=title,
        description=_as_text(values["description"]),
        category=_as_text(values["category"]).strip(),
        tags=tag_list,
        author=_as_text(values["author"]),
        date=_as_text(values["date"]).strip(),
        featured=_as_bool(values["featured"]),
        preview_image=preview_image,
        preview_video=preview_video,
        media_type=derive_media_type(
            preview_image, preview_video, values["media_type"]
        ),
        content=_collect_content(raw),
        implementation=_as_text(values["implementation"]),
        more_information=_as_text(values["more_information"]),
        external_source_url=_as_text(values["external_source_url"]),
        dependencies=_string_list(raw.get("dependencies")),
        demo_url=_as_text(values["demo_url"]),
        github_url=_as_text(values["github_url"]),
        code_snippet=_as_text(values["code_snippet"]),
        created_at=_as_optional_text(values["created_at"]),
        updated_at=_as_optional_text(values["updated_at"]),
        source=source or _resolve_source(values["source"], ComponentSource.DYNAMIC),
    )

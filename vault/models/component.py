"""Pydantic models for catalog components.

Attributes are snake_case in Python and serialize to the camelCase JSON shape
the pages and admin screens consume. Both spellings are accepted on input.
"""

from datetime import date as date_type, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from vault.media.types import MediaType


class ComponentSource(str, Enum):
    """Provider a component record came from."""

    REGISTRY = "registry"
    LOCAL = "local"
    DYNAMIC = "dynamic"


# =============================================================================
# Base Models
# =============================================================================


class CamelModel(BaseModel):
    """Base model that reads either spelling and dumps camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_dict(self) -> dict:
        """JSON-ready camelCase dict."""
        return self.model_dump(mode="json", by_alias=True)


class ComponentContent(CamelModel):
    """The four code blobs of a component. Never partially absent."""

    html: str = ""
    css: str = ""
    js: str = ""
    external_scripts: str = ""


class Component(CamelModel):
    """Canonical component shape shared by every provider."""

    id: str
    slug: str
    title: str = ""
    description: str = ""
    category: str = ""
    tags: list[str] = Field(default_factory=list)
    author: str = ""
    date: str = ""
    featured: bool = False

    # Media
    preview_image: Optional[str] = None
    preview_video: Optional[str] = None
    media_type: MediaType = MediaType.UNKNOWN

    # Code payload
    content: ComponentContent = Field(default_factory=ComponentContent)

    # Documentation
    implementation: str = ""
    more_information: str = ""
    external_source_url: str = ""
    dependencies: list[str] = Field(default_factory=list)
    demo_url: str = ""
    github_url: str = ""
    code_snippet: str = ""

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    source: ComponentSource = ComponentSource.DYNAMIC


def tag_names(value: object) -> Optional[list]:
    """Accept tags as strings, {"name": ...} objects or one comma-separated string."""
    if value is None:
        return None
    if isinstance(value, str):
        return [part for part in value.split(",") if part.strip()]
    if isinstance(value, dict):
        value = [value]
    if isinstance(value, (list, tuple)):
        names = [item.get("name") if isinstance(item, dict) else item for item in value]
        return [name for name in names if isinstance(name, str)]
    return value


# =============================================================================
# Write Models
# =============================================================================


class ComponentCreate(CamelModel):
    """Input for creating a dynamic component.

    Required fields are checked by the service so the error can name every
    missing field at once.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None
    featured: Optional[bool] = None
    author: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    content: Optional[ComponentContent] = None
    preview_image: Optional[str] = None
    preview_video: Optional[str] = None
    media_type: Optional[str] = None
    implementation: Optional[str] = None
    more_information: Optional[str] = None
    external_source_url: Optional[str] = None
    dependencies: list[str] = Field(default_factory=list)
    demo_url: Optional[str] = None
    github_url: Optional[str] = None
    code_snippet: Optional[str] = None

    # Flat editor fields, used when no content object is given
    html_content: Optional[str] = None
    css_content: Optional[str] = None
    js_content: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tag_names(cls, value):
        return tag_names(value) or []


class ComponentUpdate(CamelModel):
    """Partial update. Only fields that were explicitly set are applied."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None
    featured: Optional[bool] = None
    author: Optional[str] = None
    tags: Optional[list[str]] = None
    content: Optional[ComponentContent] = None
    preview_image: Optional[str] = None
    preview_video: Optional[str] = None
    media_type: Optional[str] = None
    implementation: Optional[str] = None
    more_information: Optional[str] = None
    external_source_url: Optional[str] = None
    dependencies: Optional[list[str]] = None
    demo_url: Optional[str] = None
    github_url: Optional[str] = None
    code_snippet: Optional[str] = None
    regenerate_slug: bool = Field(
        default=False,
        description="Re-derive the slug from the title when no slug is given",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tag_names(cls, value):
        return tag_names(value)

    def changes(self) -> dict:
        """Fields the caller set, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, exclude={"regenerate_slug"})


# =============================================================================
# Derived Read Models
# =============================================================================


class CategorySummary(CamelModel):
    """A category with the number of components filed under it."""

    name: str
    slug: str
    description: str = ""
    count: int = 0


class TagSummary(CamelModel):
    """A tag with its reference count."""

    name: str
    count: int = 0


# =============================================================================
# Helpers
# =============================================================================

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def parse_component_date(value: object) -> datetime:
    """Parse an ISO date or datetime string into an aware datetime.

    Unparseable or empty values sort as the oldest possible date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date_type):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return _EPOCH
    else:
        return _EPOCH

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sort_by_date(components: list[Component]) -> list[Component]:
    """Most recent first. Stable for equal dates."""
    return sorted(
        components,
        key=lambda component: parse_component_date(component.date),
        reverse=True,
    )

"""Publication metadata resolution.

Merges resource defaults with optional per-resource overrides into the
metadata sent to YouTube. Any non-empty override field wins; empty or
zero fields leave the default in place.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any

from app.config.publication import PublicationConfig
from app.infrastructure.youtube_api import UploadMetadata
from app.models.resource import Resource, ResourceCategory
from app.models.video_metadata import VideoMetadata


@dataclass(frozen=True)
class ResourceSnapshot:
    """Immutable copy of the resource fields a publication needs.

    Captured when approval is recorded; the live row is not read again
    until reconciliation.

    Attributes:
        resource_id: Resource ID
        title: Resource title
        category: Resource category
        summary: Resource summary (empty if unset)
        subjects: Subject tags
        drive_link: Source link (empty if unset)
        approved_by: Reviewer whose approval triggered publication
    """

    resource_id: uuid.UUID
    title: str
    category: ResourceCategory | str
    summary: str = ""
    subjects: tuple[str, ...] = ()
    drive_link: str = ""
    approved_by: uuid.UUID | None = None

    @classmethod
    def from_resource(
        cls, resource: Resource, approved_by: uuid.UUID | None = None
    ) -> "ResourceSnapshot":
        """Capture a snapshot of a resource row."""
        return cls(
            resource_id=resource.id,
            title=resource.title,
            category=resource.category,
            summary=resource.summary or "",
            subjects=tuple(resource.subjects or ()),
            drive_link=resource.drive_link or "",
            approved_by=approved_by,
        )

    @property
    def is_video(self) -> bool:
        """Check if the snapshot belongs to a Video resource."""
        return self.category == ResourceCategory.VIDEO

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict (Celery payload)."""
        category = self.category
        return {
            "resource_id": str(self.resource_id),
            "title": self.title,
            "category": category.value if isinstance(category, ResourceCategory) else category,
            "summary": self.summary,
            "subjects": list(self.subjects),
            "drive_link": self.drive_link,
            "approved_by": str(self.approved_by) if self.approved_by else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResourceSnapshot":
        """Rebuild a snapshot serialized with to_dict()."""
        return cls(
            resource_id=uuid.UUID(str(data["resource_id"])),
            title=data["title"],
            category=data["category"],
            summary=data.get("summary") or "",
            subjects=tuple(data.get("subjects") or ()),
            drive_link=data.get("drive_link") or "",
            approved_by=uuid.UUID(str(data["approved_by"])) if data.get("approved_by") else None,
        )


@dataclass(frozen=True)
class PublicationOverrides:
    """Per-resource overrides for publication metadata.

    All fields default to "empty", which means "use the resource default".
    """

    title: str = ""
    description: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)
    privacy_status: str = ""
    made_for_kids: bool = False
    category_id: int = 0

    @classmethod
    def from_model(cls, metadata: VideoMetadata) -> "PublicationOverrides":
        """Build overrides from a stored VideoMetadata row."""
        return cls(
            title=metadata.youtube_title or "",
            description=metadata.youtube_description or "",
            tags=tuple(metadata.tags or ()),
            privacy_status=metadata.privacy_status or "",
            made_for_kids=bool(metadata.made_for_kids),
            category_id=metadata.category_id or 0,
        )


def build_default_description(summary: str, subjects: tuple[str, ...] | list[str]) -> str:
    """Build the default video description.

    Args:
        summary: Resource summary
        subjects: Subject tags

    Returns:
        Summary, followed by a readable subjects line when subjects exist
    """
    description = summary
    if subjects:
        description += "\n\nSubjects: " + ", ".join(subjects)
    return description


def resolve_metadata(
    snapshot: ResourceSnapshot,
    overrides: PublicationOverrides | None = None,
    config: PublicationConfig | None = None,
) -> UploadMetadata:
    """Resolve final upload metadata for a resource.

    Args:
        snapshot: Resource snapshot providing defaults
        overrides: Optional overrides (None is the same as all-empty)
        config: Publication config supplying category/privacy defaults

    Returns:
        UploadMetadata ready for the YouTube client
    """
    config = config or PublicationConfig()
    overrides = overrides or PublicationOverrides()

    title = overrides.title or snapshot.title
    description = overrides.description or build_default_description(
        snapshot.summary, snapshot.subjects
    )
    tags = list(overrides.tags)
    privacy_status = overrides.privacy_status or config.default_privacy
    category_id = str(overrides.category_id) if overrides.category_id else config.default_category_id

    return UploadMetadata(
        title=title,
        description=description,
        tags=tags,
        category_id=category_id,
        privacy_status=privacy_status,
        made_for_kids=overrides.made_for_kids,
    )


__all__ = [
    "PublicationOverrides",
    "ResourceSnapshot",
    "build_default_description",
    "resolve_metadata",
]

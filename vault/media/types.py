"""Media type classification for preview assets.

Classifies a MIME type, filename or URL as image, video or unknown. Every
function here is total: unrecognized or malformed input yields
``MediaType.UNKNOWN`` rather than an exception.
"""

from enum import Enum
from pathlib import PurePosixPath
from urllib.parse import urlsplit
from uuid import uuid4


class MediaType(str, Enum):
    """Classification of a preview asset."""

    IMAGE = "image"
    VIDEO = "video"
    UNKNOWN = "unknown"


IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp", "svg"})
VIDEO_EXTENSIONS = frozenset({"mp4", "webm", "ogg", "mov"})

# Folder names used by both storage backends; also honoured as URL hints.
IMAGE_FOLDER = "images"
VIDEO_FOLDER = "videos"
OTHER_FOLDER = "other"

_FOLDERS = {
    MediaType.IMAGE: IMAGE_FOLDER,
    MediaType.VIDEO: VIDEO_FOLDER,
    MediaType.UNKNOWN: OTHER_FOLDER,
}


def file_extension(name: str) -> str:
    """Return the lowercase extension of a filename or URL path, without the dot."""
    try:
        path = urlsplit(name).path
    except ValueError:
        path = name
    return PurePosixPath(path).suffix.lower().lstrip(".")


def media_type_from_mime(mime_type: str) -> MediaType:
    """Classify a MIME type string by its top-level type."""
    value = (mime_type or "").strip().lower()
    if value.startswith("image/"):
        return MediaType.IMAGE
    if value.startswith("video/"):
        return MediaType.VIDEO
    return MediaType.UNKNOWN


def media_type_from_filename(name: str) -> MediaType:
    """Classify a filename or URL by extension (case-insensitive)."""
    ext = file_extension(name or "")
    if ext in IMAGE_EXTENSIONS:
        return MediaType.IMAGE
    if ext in VIDEO_EXTENSIONS:
        return MediaType.VIDEO
    return MediaType.UNKNOWN


def resolve_media_type(value: object) -> MediaType:
    """Classify a MIME type, filename or URL.

    MIME prefixes are checked first, then ``/images/`` and ``/videos/`` path
    segments, then the extension allow-lists.

    Args:
        value: Any object; non-strings and empty strings are unknown.

    Returns:
        The resolved MediaType.
    """
    if not isinstance(value, str) or not value.strip():
        return MediaType.UNKNOWN

    text = value.strip()

    by_mime = media_type_from_mime(text)
    if by_mime is not MediaType.UNKNOWN:
        return by_mime

    lowered = text.lower()
    if f"/{IMAGE_FOLDER}/" in lowered:
        return MediaType.IMAGE
    if f"/{VIDEO_FOLDER}/" in lowered:
        return MediaType.VIDEO

    return media_type_from_filename(text)


def resolve_upload_media_type(filename: str, mime_type: str) -> MediaType:
    """Classify an upload: the declared MIME type wins, the filename is the fallback."""
    by_mime = media_type_from_mime(mime_type)
    if by_mime is not MediaType.UNKNOWN:
        return by_mime
    return media_type_from_filename(filename)


def folder_for(media_type: MediaType) -> str:
    """Storage folder for a media type (images/, videos/ or other/)."""
    return _FOLDERS[media_type]


def generate_unique_filename(original_filename: str) -> str:
    """Random filename that keeps the original extension."""
    ext = file_extension(original_filename or "")
    return f"{uuid4()}.{ext}" if ext else str(uuid4())

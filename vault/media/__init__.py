"""
Media helpers.

- types: MediaType enum and the image/video/unknown resolver
"""

from vault.media.types import (
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
    MediaType,
    file_extension,
    folder_for,
    generate_unique_filename,
    media_type_from_filename,
    media_type_from_mime,
    resolve_media_type,
    resolve_upload_media_type,
)

__all__ = [
    "IMAGE_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "MediaType",
    "file_extension",
    "folder_for",
    "generate_unique_filename",
    "media_type_from_filename",
    "media_type_from_mime",
    "resolve_media_type",
    "resolve_upload_media_type",
]

"""Content types for uploaded images and project files."""

from __future__ import annotations

_IMAGE_TYPES = {
    "bmp": "image/bmp",
    "gif": "image/gif",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
}

_PROJECT_FILE_TYPES = {
    "jar": "application/java-archive",
    "zip": "application/zip",
    "litemod": "application/zip",
    "mrpack": "application/x-modrinth-modpack+zip",
}


def get_image_content_type(extension: str) -> str | None:
    """Return the MIME type of an image extension, or None if not allowed."""
    return _IMAGE_TYPES.get(extension)


def project_file_type(ext: str) -> str | None:
    """Return the MIME type of a project file extension, or None if not allowed."""
    return _PROJECT_FILE_TYPES.get(ext)
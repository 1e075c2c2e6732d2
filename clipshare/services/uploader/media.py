"""
Type gate for uploaded videos
"""

import os
from typing import Optional

from clipshare.core.errors import UnsupportedMediaType

ALLOWED_VIDEO_EXTENSIONS = {".mp4", ".mov", ".avi", ".mkv"}

ALLOWED_VIDEO_MIME_TYPES = {
    "video/mp4",
    "video/quicktime",
    "video/mov",
    "video/x-msvideo",
    "video/avi",
    "video/msvideo",
    "video/x-matroska",
    "video/mkv",
}

ONLY_VIDEOS = "Only video files are allowed!"


def file_extension(filename: Optional[str]) -> str:
    """Extension of the last path component, as supplied (dot included)"""
    if not filename:
        return ""
    basename = filename.replace("\\", "/").rsplit("/", 1)[-1]
    return os.path.splitext(basename)[1]


def normalize_mime_type(content_type: Optional[str]) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def check_video_type(filename: Optional[str], content_type: Optional[str]) -> str:
    """
    Both the extension and the declared MIME type must be allowed.

    Returns:
        The original extension, used to name the stored file
    """
    extension = file_extension(filename)
    if extension.lower() not in ALLOWED_VIDEO_EXTENSIONS:
        raise UnsupportedMediaType(ONLY_VIDEOS, detail=f"extension {extension or '(none)'} not allowed")

    mime_type = normalize_mime_type(content_type)
    if mime_type not in ALLOWED_VIDEO_MIME_TYPES:
        raise UnsupportedMediaType(ONLY_VIDEOS, detail=f"content type {mime_type or '(none)'} not allowed")

    return extension

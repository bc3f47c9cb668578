"""
Media type detection for asset uploads.

The extension table is static so the result does not depend on the
platform's mimetypes database.
"""

from pathlib import Path
from typing import Union

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES = {
    # Video
    ".mp4": "video/mp4",
    ".m4v": "video/x-m4v",
    ".mov": "video/quicktime",
    ".webm": "video/webm",
    ".avi": "video/x-msvideo",
    ".mkv": "video/x-matroska",
    # Image
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    # Audio
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    # Fonts
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
}

ASSET_TYPES = ("video", "image", "audio", "font")


def detect_mime_type(path: Union[str, Path]) -> str:
    """MIME type for a file name, from its lowercased extension."""
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


def detect_asset_type(mime_type: str) -> str:
    """Asset category from the MIME prefix; unknown prefixes count as video."""
    prefix = mime_type.split("/", 1)[0].lower()
    if prefix in ASSET_TYPES:
        return prefix
    return "video"

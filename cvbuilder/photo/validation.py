"""
Pre-read checks applied to a selected photo.
"""

from __future__ import annotations

from dataclasses import dataclass

from .candidate import PhotoCandidate
from .data_uri import normalize_media_type
from .errors import PhotoUploadError, UploadErrorKind

MAX_PHOTO_BYTES = 2 * 1024 * 1024
IMAGE_MIME_CATEGORY = "image/"


@dataclass(frozen=True)
class PhotoLimits:
    """Accepted MIME category and maximum size of an uploaded photo."""
    max_bytes: int = MAX_PHOTO_BYTES
    mime_category: str = IMAGE_MIME_CATEGORY

    def accepts_type(self, mime_type: object) -> bool:
        # Parameters are ignored; the rest must be a bare type/subtype
        return normalize_media_type(mime_type).startswith(self.mime_category)

    def accepts_size(self, size: object) -> bool:
        return isinstance(size, int) and not isinstance(size, bool) and 0 <= size <= self.max_bytes


DEFAULT_PHOTO_LIMITS = PhotoLimits()


def validate_photo_candidate(candidate: PhotoCandidate, limits: PhotoLimits = DEFAULT_PHOTO_LIMITS) -> None:
    """
    Check type first, then size.

    Raises:
        PhotoUploadError: UnsupportedType or TooLarge
    """
    mime_type = getattr(candidate, "type", None)
    if not limits.accepts_type(mime_type):
        raise PhotoUploadError(UploadErrorKind.UnsupportedType, f"type={mime_type!r}")
    size = getattr(candidate, "size", None)
    if not limits.accepts_size(size):
        raise PhotoUploadError(UploadErrorKind.TooLarge, f"size={size!r} limit={limits.max_bytes}")

"""
Photo upload failures.

The taxonomy is closed: every rejected selection carries exactly one
UploadErrorKind and a message suitable for display under the avatar.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class UploadErrorKind(str, Enum):
    UnsupportedType = "UnsupportedType"
    TooLarge = "TooLarge"
    ReadFailure = "ReadFailure"


_MESSAGES = {
    UploadErrorKind.UnsupportedType: "Please select an image file (PNG, JPG, JPEG)",
    UploadErrorKind.TooLarge: "Image size should be less than 2MB",
    UploadErrorKind.ReadFailure: "Could not read the selected image. Please try another file.",
}


class PhotoUploadError(Exception):
    """A rejected photo selection."""

    def __init__(self, kind: UploadErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail
        super().__init__(_MESSAGES[kind])

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind]

    def __repr__(self) -> str:
        return f"PhotoUploadError({self.kind.value!r}, detail={self.detail!r})"

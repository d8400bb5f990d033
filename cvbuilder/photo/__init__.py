"""
Photo ingestion: validation, data URI encoding and the controller that
commits a selected photo into the form state.
"""

from .candidate import PhotoCandidate, PhotoFile
from .controller import (
    AttemptOutcome,
    AvatarKind,
    AvatarView,
    PhotoIngestionController,
    PhotoSlotState,
)
from .data_uri import decode_data_uri, encode_data_uri, is_image_data_uri, normalize_media_type
from .errors import PhotoUploadError, UploadErrorKind
from .validation import (
    DEFAULT_PHOTO_LIMITS,
    IMAGE_MIME_CATEGORY,
    MAX_PHOTO_BYTES,
    PhotoLimits,
    validate_photo_candidate,
)

__all__ = [
    "AttemptOutcome",
    "AvatarKind",
    "AvatarView",
    "DEFAULT_PHOTO_LIMITS",
    "IMAGE_MIME_CATEGORY",
    "MAX_PHOTO_BYTES",
    "PhotoCandidate",
    "PhotoFile",
    "PhotoIngestionController",
    "PhotoLimits",
    "PhotoSlotState",
    "PhotoUploadError",
    "UploadErrorKind",
    "decode_data_uri",
    "encode_data_uri",
    "is_image_data_uri",
    "normalize_media_type",
    "validate_photo_candidate",
]

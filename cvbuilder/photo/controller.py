"""
Photo ingestion for the personal-information step.

Turns a file selection into either a committed photo (a data URI stored
at personal.photoUrl) or a rejected attempt with a displayable reason,
and keeps the avatar preview equal to the committed value at all times.

Slot lifecycle:
    EMPTY -> VALIDATING -> COMMITTED | EMPTY (with upload_error)
    COMMITTED -> EMPTY          remove_photo()
    COMMITTED -> VALIDATING     a new selection; the previous photo stays
                                the value of record until the new one
                                commits or is rejected

Only the most recently started attempt may commit or report an error.
Reads that complete after being superseded are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from ..form_state import FieldPath, FormState
from ..logging_utils import LOG
from ..shared import derive_initials, safe_text
from .candidate import PhotoCandidate
from .data_uri import encode_data_uri
from .errors import PhotoUploadError, UploadErrorKind
from .validation import DEFAULT_PHOTO_LIMITS, PhotoLimits, validate_photo_candidate


class PhotoSlotState(str, Enum):
    EMPTY = "empty"
    VALIDATING = "validating"
    COMMITTED = "committed"


class AttemptOutcome(str, Enum):
    IGNORED = "ignored"          # no file (picker cancelled) or controller closed
    REJECTED = "rejected"        # validation or read failure, upload_error set
    COMMITTED = "committed"
    SUPERSEDED = "superseded"    # a newer attempt or a removal happened meanwhile


class AvatarKind(str, Enum):
    PHOTO = "photo"
    INITIALS = "initials"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class AvatarView:
    kind: AvatarKind
    value: str = ""


class PhotoIngestionController:
    """
    Owns the single optional photo attachment of a CV form.

    Reads and writes only personal.photoUrl; reads personal.firstName and
    personal.lastName for the initials fallback. Preview and upload error
    are local to the controller and end with close().
    """

    def __init__(self, form: FormState, limits: PhotoLimits = DEFAULT_PHOTO_LIMITS):
        self._form = form
        self._limits = limits
        self._attempt = 0
        self._pending: Optional[int] = None
        self._upload_error: Optional[PhotoUploadError] = None
        self._closed = False
        # A resumed session starts COMMITTED
        self._preview = self._preview_for(self._form.get(FieldPath.PHOTO_URL))
        self._unwatch: Callable[[], None] = form.watch(FieldPath.PHOTO_URL, self._on_photo_url_changed)

    # ---------------------- observable state ----------------------

    @property
    def preview(self) -> Optional[str]:
        return self._preview

    @property
    def photo_url(self) -> str:
        return safe_text(self._form.get(FieldPath.PHOTO_URL))

    @property
    def upload_error(self) -> Optional[PhotoUploadError]:
        return self._upload_error

    @property
    def upload_error_message(self) -> Optional[str]:
        return self._upload_error.message if self._upload_error else None

    @property
    def state(self) -> PhotoSlotState:
        if self._pending is not None:
            return PhotoSlotState.VALIDATING
        return PhotoSlotState.COMMITTED if self._preview else PhotoSlotState.EMPTY

    @property
    def can_remove(self) -> bool:
        return self._preview is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def get_fallback_identity(self) -> str:
        return derive_initials(
            self._form.get(FieldPath.FIRST_NAME),
            self._form.get(FieldPath.LAST_NAME),
        )

    def avatar(self) -> AvatarView:
        """What the avatar shows: the preview if any, else initials, else a placeholder glyph."""
        if self._preview is not None:
            return AvatarView(AvatarKind.PHOTO, self._preview)
        initials = self.get_fallback_identity()
        if initials:
            return AvatarView(AvatarKind.INITIALS, initials)
        return AvatarView(AvatarKind.PLACEHOLDER)

    # ---------------------- operations ----------------------

    async def on_file_selected(self, file: Optional[PhotoCandidate]) -> AttemptOutcome:
        """
        Validate, read and commit a selected photo.

        A missing file (cancelled picker) changes nothing. Failures are
        recorded in upload_error; prior committed state is left as is.
        """
        if file is None or self._closed:
            return AttemptOutcome.IGNORED

        self._attempt += 1
        attempt = self._attempt
        self._upload_error = None
        LOG.debug("Photo attempt %d: %s (%s, %s bytes)", attempt,
                  getattr(file, "name", "<unnamed>"), getattr(file, "type", None), getattr(file, "size", None))

        try:
            validate_photo_candidate(file, self._limits)
        except PhotoUploadError as e:
            self._pending = None
            return self._reject(attempt, e)

        self._pending = attempt
        try:
            raw = await file.read()
            if not isinstance(raw, (bytes, bytearray)):
                raise TypeError(f"read() returned {type(raw).__name__}")
        except Exception as e:
            if attempt != self._attempt:
                return self._drop_stale(attempt)
            self._pending = None
            return self._reject(attempt, PhotoUploadError(UploadErrorKind.ReadFailure, f"{type(e).__name__}: {e}"))

        if attempt != self._attempt:
            return self._drop_stale(attempt)

        self._pending = None
        # The file may have grown between selection and read
        if len(raw) > self._limits.max_bytes:
            return self._reject(attempt, PhotoUploadError(
                UploadErrorKind.TooLarge, f"read {len(raw)} bytes limit={self._limits.max_bytes}"))
        data_uri = encode_data_uri(file.type, bytes(raw))
        self._commit(data_uri)
        LOG.info("Photo committed (%s, %d bytes)", file.type, len(raw))
        return AttemptOutcome.COMMITTED

    def remove_photo(self) -> None:
        """Clear the photo, its preview and any upload error. Idempotent; a no-op once closed."""
        if self._closed:
            return
        # A removal also invalidates any read still in flight
        self._attempt += 1
        self._pending = None
        self._upload_error = None
        self._preview = None
        self._form.set(FieldPath.PHOTO_URL, "")

    def close(self) -> None:
        """Detach from the form; pending reads complete as SUPERSEDED."""
        if self._closed:
            return
        self._closed = True
        self._attempt += 1
        self._pending = None
        self._unwatch()

    def __enter__(self) -> "PhotoIngestionController":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ---------------------- internals ----------------------

    def _commit(self, data_uri: str) -> None:
        self._upload_error = None
        self._preview = data_uri
        self._form.set(FieldPath.PHOTO_URL, data_uri)

    def _reject(self, attempt: int, error: PhotoUploadError) -> AttemptOutcome:
        self._upload_error = error
        LOG.warning("Photo attempt %d rejected: %s (%s)", attempt, error.kind.value, error.detail)
        return AttemptOutcome.REJECTED

    def _drop_stale(self, attempt: int) -> AttemptOutcome:
        LOG.debug("Photo attempt %d superseded by %d; result dropped", attempt, self._attempt)
        return AttemptOutcome.SUPERSEDED

    def _on_photo_url_changed(self, _path: FieldPath, value: Any) -> None:
        self._preview = self._preview_for(value)

    @staticmethod
    def _preview_for(photo_url: Any) -> Optional[str]:
        return safe_text(photo_url) or None

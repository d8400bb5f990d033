"""cvbuilder: CV form state, profile photo ingestion and template selection."""

from .form_state import FieldPath, FormState
from .photo import PhotoFile, PhotoIngestionController, PhotoUploadError, UploadErrorKind
from .templates import TemplateFormBinding, TemplateSelectionPanel, TemplateType
from .cv_record import build_cv_record

__all__ = [
    "FieldPath",
    "FormState",
    "PhotoFile",
    "PhotoIngestionController",
    "PhotoUploadError",
    "UploadErrorKind",
    "TemplateFormBinding",
    "TemplateSelectionPanel",
    "TemplateType",
    "build_cv_record",
]

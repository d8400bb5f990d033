"""
Field-level verifier for the CV form.

Checks the serialized form (FormState.to_dict()) and reports one message
per failing field, keyed by its dotted path, so the form can show it next
to the input.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

from ..form_state import FieldPath
from ..photo.data_uri import is_image_data_uri
from ..shared import VerificationResult, safe_text
from .base import CVVerifier

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

REQUIRED_FIELDS: Dict[FieldPath, str] = {
    FieldPath.FIRST_NAME: "First name is required",
    FieldPath.LAST_NAME: "Last name is required",
    FieldPath.PROFESSIONAL_TITLE: "Professional title is required",
    FieldPath.EMAIL: "Email is required",
    FieldPath.PHONE: "Phone number is required",
}


def _field(data: Mapping[str, Any], path: FieldPath) -> Any:
    section, key = path.value.split(".", 1)
    values = data.get(section)
    if not isinstance(values, Mapping):
        return None
    return values.get(key)


class FormFieldsVerifier(CVVerifier):
    """
    Verifier for required personal fields, email format and the stored photo.
    """

    def verify(self, data: Dict[str, Any], **kwargs) -> VerificationResult:
        errs: List[str] = []
        warns: List[str] = []
        field_errors: Dict[str, str] = {}

        for path, message in REQUIRED_FIELDS.items():
            if not safe_text(_field(data, path)).strip():
                field_errors[path.value] = message

        email = safe_text(_field(data, FieldPath.EMAIL)).strip()
        if email and not _EMAIL_RE.match(email):
            field_errors[FieldPath.EMAIL.value] = "Please enter a valid email address"

        photo_url = safe_text(_field(data, FieldPath.PHOTO_URL))
        if photo_url and not is_image_data_uri(photo_url):
            field_errors[FieldPath.PHOTO_URL.value] = "Stored photo is not a valid image"

        if _field(data, FieldPath.TEMPLATE_INCLUDE_PHOTO) is True and not photo_url:
            warns.append("photo inclusion enabled but no photo uploaded")

        errs.extend(f"{path}: {message}" for path, message in field_errors.items())
        return VerificationResult(ok=not errs, errors=errs, warnings=warns, field_errors=field_errors)

"""
Structured CV record.

Projects the form state into the record consumed by verifiers and
renderers. The photo is carried only when the template includes one and
a photo has been committed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .form_state import FieldPath, FormState
from .logging_utils import LOG
from .photo.data_uri import decode_data_uri
from .shared import clean_text, safe_text

LINKEDIN_PROFILE_PREFIX = "https://linkedin.com/in/"
CV_RECORD_SCHEMA_PATH = Path(__file__).parent / "contracts" / "cv_record_schema.json"


def _photo_entry(form: FormState) -> Optional[Dict[str, str]]:
    if not form.get(FieldPath.TEMPLATE_INCLUDE_PHOTO):
        return None
    data_uri = safe_text(form.get(FieldPath.PHOTO_URL))
    if not data_uri:
        return None
    try:
        mime_type, _ = decode_data_uri(data_uri)
    except ValueError:
        LOG.warning("Stored photo is not a data URI; leaving it out of the record")
        return None
    return {"mime_type": mime_type, "data_uri": data_uri}


def build_cv_record(form: FormState) -> Dict[str, Any]:
    first_name = clean_text(form.get(FieldPath.FIRST_NAME))
    last_name = clean_text(form.get(FieldPath.LAST_NAME))
    linkedin = clean_text(form.get(FieldPath.LINKEDIN))

    contact: Dict[str, str] = {
        "email": clean_text(form.get(FieldPath.EMAIL)),
        "phone": clean_text(form.get(FieldPath.PHONE)),
        "linkedin": linkedin,
    }
    if linkedin:
        contact["linkedin_url"] = LINKEDIN_PROFILE_PREFIX + linkedin.strip("/")

    return {
        "identity": {
            "title": clean_text(form.get(FieldPath.PROFESSIONAL_TITLE)),
            "full_name": " ".join(p for p in (first_name, last_name) if p),
            "first_name": first_name,
            "last_name": last_name,
        },
        "contact": contact,
        "photo": _photo_entry(form),
        "template": {
            "id": safe_text(form.get(FieldPath.TEMPLATE_SELECTED)),
            "include_photo": bool(form.get(FieldPath.TEMPLATE_INCLUDE_PHOTO)),
        },
    }


def write_cv_record(record: Dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(record, f, ensure_ascii=False, indent=2)
    return path

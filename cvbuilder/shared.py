"""
Shared models and text utilities.

Defines the verification result model and total text helpers used by the
form state, the photo controller, record building and rendering.
"""

from __future__ import annotations

import re

from dataclasses import dataclass, field
from typing import Any, Dict, List

# ------------------------- Models -------------------------
@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    errors: List[str]
    warnings: List[str]
    field_errors: Dict[str, str] = field(default_factory=dict)


# ------------------------- Derived display values -------------------------

def safe_text(value: Any) -> str:
    """Return value if it is a string, otherwise an empty string."""
    return value if isinstance(value, str) else ""


def derive_initials(first_name: Any, last_name: Any) -> str:
    """
    Two-character initials for the avatar fallback.

    Uppercased first character of each name, concatenated. Returns "" when
    either name is missing, blank or not a string.
    """
    first = safe_text(first_name).strip()
    last = safe_text(last_name).strip()
    if not first or not last:
        return ""
    return (first[0] + last[0]).upper()


# ------------------------- XML helpers -------------------------

_WS_RE = re.compile(r"\s+")

def _strip_invalid_xml_1_0_chars(s: str) -> str:
    """
    Remove characters invalid in XML 1.0.
    Valid:
      #x9 | #xA | #xD |
      [#x20-#xD7FF] |
      [#xE000-#xFFFD] |
      [#x10000-#x10FFFF]
    """
    out: List[str] = []
    for ch in s:
        cp = ord(ch)
        if (
            cp == 0x9
            or cp == 0xA
            or cp == 0xD
            or (0x20 <= cp <= 0xD7FF)
            or (0xE000 <= cp <= 0xFFFD)
            or (0x10000 <= cp <= 0x10FFFF)
        ):
            out.append(ch)
    return "".join(out)

def normalize_text_for_processing(s: str) -> str:
    """
    Normalize typed form text:
    - convert NBSP to normal space
    - replace soft hyphen with real hyphen
    - normalize newlines
    - strip invalid XML chars
    """
    s = s.replace("\u00A0", " ")
    s = s.replace("\u00AD", "-")  # preserve "high-quality"
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    s = _strip_invalid_xml_1_0_chars(s)
    return s

def clean_text(text: Any) -> str:
    """Collapse whitespace of a form value for the CV record."""
    text = normalize_text_for_processing(safe_text(text))
    text = _WS_RE.sub(" ", text)
    return text.strip()

def sanitize_for_xml_in_obj(obj: Any) -> Any:
    """
    Sanitize strings for insertion into docxtpl (XML-safe):
    - normalize NBSP
    - strip invalid XML 1.0 chars
    """
    def _sanitize(x: Any) -> Any:
        if isinstance(x, str):
            return normalize_text_for_processing(x)
        if isinstance(x, list):
            return [_sanitize(i) for i in x]
        if isinstance(x, dict):
            return {k: _sanitize(v) for k, v in x.items()}
        return x
    return _sanitize(obj)

"""
Data URI encoding for committed photos.

A stored photo is a self-describing `data:<mime>;base64,<payload>` string;
the empty string means "no photo".
"""

from __future__ import annotations

import base64
import re
from typing import Tuple

_MEDIA_TYPE = r"[\w.+-]+/[\w.+-]+"
_MEDIA_TYPE_RE = re.compile(rf"^{_MEDIA_TYPE}$")
_DATA_URI_RE = re.compile(rf"^data:(?P<mime>{_MEDIA_TYPE});base64,(?P<payload>[A-Za-z0-9+/=\s]*)$")


def normalize_media_type(mime_type: object) -> str:
    """
    Reduce a reported MIME type to a bare lowercase `type/subtype`.

    Parameters such as `; name=p.png` are dropped. Returns "" when what is
    left is not a `type/subtype` token a data URI can carry (e.g. `image/*`).
    """
    if not isinstance(mime_type, str):
        return ""
    essence = mime_type.split(";", 1)[0].strip().lower()
    return essence if _MEDIA_TYPE_RE.match(essence) else ""


def encode_data_uri(mime_type: str, raw: bytes) -> str:
    """
    Raises:
        ValueError: If the MIME type has no usable `type/subtype`
    """
    media_type = normalize_media_type(mime_type)
    if not media_type:
        raise ValueError(f"not a media type: {mime_type!r}")
    payload = base64.b64encode(raw).decode("ascii")
    return f"data:{media_type};base64,{payload}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URI into (mime_type, bytes).

    Raises:
        ValueError: If the string is not a base64 data URI
    """
    match = _DATA_URI_RE.match(uri or "")
    if match is None:
        raise ValueError("not a base64 data URI")
    try:
        raw = base64.b64decode(match.group("payload"), validate=False)
    except ValueError as e:
        raise ValueError(f"invalid base64 payload: {e}") from e
    return match.group("mime").lower(), raw


def is_image_data_uri(uri: object) -> bool:
    """True for a decodable data URI whose media type is image/*."""
    if not isinstance(uri, str):
        return False
    try:
        mime, _ = decode_data_uri(uri)
    except ValueError:
        return False
    return mime.startswith("image/")

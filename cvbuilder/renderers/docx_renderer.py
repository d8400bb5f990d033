"""
DOCX-based CV renderer implementation.

Renders a CV record to a Word .docx file using docxtpl templates. The
committed photo is handed to the template as an inline image.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Union

from .base import CVRenderer
from ..logging_utils import LOG
from ..photo.data_uri import decode_data_uri
from ..shared import sanitize_for_xml_in_obj
from ..templates import TemplateType, parse_template_id

from docx.shared import Mm
from docxtpl import DocxTemplate, InlineImage

PHOTO_WIDTH_MM = 35


def resolve_template_path(templates_dir: Path, template_id: Union[TemplateType, str]) -> Path:
    """Template file for a gallery id: <templates_dir>/<id>.docx."""
    return templates_dir / f"{parse_template_id(template_id).value}.docx"


class DocxCVRenderer(CVRenderer):
    """
    CV renderer for Microsoft Word .docx files.

    Template context is the sanitized record plus `photo_image`, an
    InlineImage of the record's photo or "" when there is none.
    """

    def __init__(self, photo_width_mm: int = PHOTO_WIDTH_MM):
        self.photo_width_mm = photo_width_mm

    def render(self, cv_data: Dict[str, Any], template_path: Path, output_path: Path) -> Path:
        """
        Raises:
            FileNotFoundError: If the template file does not exist
            ValueError: If the template is not a .docx file
        """
        if not template_path.exists():
            raise FileNotFoundError(f"Template file not found: {template_path}")

        if not template_path.is_file() or template_path.suffix.lower() != ".docx":
            raise ValueError(f"Template must be a .docx file: {template_path}")

        photo = cv_data.get("photo")
        context = sanitize_for_xml_in_obj({k: v for k, v in cv_data.items() if k != "photo"})

        tpl = DocxTemplate(str(template_path))
        context["photo_image"] = self._photo_image(tpl, photo)
        tpl.render(context, autoescape=True)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        tpl.save(str(output_path))
        LOG.info("Rendered %s with %s", output_path.name, template_path.name)
        return output_path

    def _photo_image(self, tpl: DocxTemplate, photo: Any) -> Union[InlineImage, str]:
        if not isinstance(photo, dict) or not photo.get("data_uri"):
            return ""
        _, raw = decode_data_uri(photo["data_uri"])
        return InlineImage(tpl, BytesIO(raw), width=Mm(self.photo_width_mm))

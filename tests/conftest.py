import base64
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cvbuilder.form_state import FieldPath, FormState  # noqa: E402


# 1x1 transparent PNG
PNG_1X1 = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_1X1


@pytest.fixture
def form_state() -> FormState:
    form = FormState()
    form.set(FieldPath.FIRST_NAME, "John")
    form.set(FieldPath.LAST_NAME, "Doe")
    return form


@pytest.fixture
def complete_form(form_state: FormState) -> FormState:
    form_state.set(FieldPath.PROFESSIONAL_TITLE, "Software Engineer")
    form_state.set(FieldPath.EMAIL, "john.doe@example.com")
    form_state.set(FieldPath.PHONE, "+1 (555) 123-4567")
    form_state.set(FieldPath.LINKEDIN, "johndoe")
    return form_state


@pytest.fixture
def make_docx_template(tmp_path: Path):
    """Write a minimal docxtpl template whose paragraphs are the given lines."""
    from docx import Document

    def _make(lines, name: str = "template.docx") -> Path:
        doc = Document()
        for line in lines:
            doc.add_paragraph(line)
        path = tmp_path / name
        doc.save(str(path))
        return path

    return _make

"""
Template gallery.

TemplateSelectionPanel is stateless: it is built from the current
selection and photo toggle and forwards user intent through two
callbacks. TemplateFormBinding is the caller that stores that intent in
the form state and hands out a fresh panel per render.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Tuple, Union

from .form_state import FieldPath, FormState
from .logging_utils import LOG


class TemplateType(str, Enum):
    PROFESSIONAL = "professional"
    MODERN = "modern"
    MINIMAL = "minimal"


@dataclass(frozen=True)
class TemplateOption:
    id: TemplateType
    name: str
    description: str


TEMPLATE_OPTIONS: Tuple[TemplateOption, ...] = (
    TemplateOption(
        TemplateType.PROFESSIONAL,
        "Professional",
        "Classic professional design with elegant typography and consistent spacing",
    ),
    TemplateOption(
        TemplateType.MODERN,
        "Modern",
        "Contemporary design with bold typography and striking visual elements",
    ),
    TemplateOption(
        TemplateType.MINIMAL,
        "Minimal",
        "Clean, minimalist design with ample whitespace and centered typography",
    ),
)


def parse_template_id(template_id: Union[TemplateType, str]) -> TemplateType:
    """
    Raises:
        ValueError: If the identifier is not one of the gallery's templates
    """
    try:
        return TemplateType(template_id)
    except ValueError:
        allowed = ", ".join(t.value for t in TemplateType)
        raise ValueError(f"unknown template {template_id!r} (expected one of: {allowed})") from None


@dataclass(frozen=True)
class TemplateCard:
    option: TemplateOption
    selected: bool


@dataclass(frozen=True)
class TemplateSelectionPanel:
    selected_template: TemplateType
    include_photo: bool
    on_template_change: Callable[[TemplateType], None]
    on_photo_inclusion_change: Callable[[bool], None]

    @property
    def cards(self) -> List[TemplateCard]:
        return [TemplateCard(option, option.id == self.selected_template) for option in TEMPLATE_OPTIONS]

    def select(self, template_id: Union[TemplateType, str]) -> None:
        template = parse_template_id(template_id)
        LOG.debug("Template selected: %s", template.value)
        self.on_template_change(template)

    def toggle_photo(self) -> None:
        new_value = not self.include_photo
        LOG.debug("Photo inclusion toggled: %s", new_value)
        self.on_photo_inclusion_change(new_value)


class TemplateFormBinding:
    """Connects the gallery to template.selected and template.includePhoto."""

    def __init__(self, form: FormState):
        self._form = form

    def panel(self) -> TemplateSelectionPanel:
        try:
            selected = parse_template_id(self._form.get(FieldPath.TEMPLATE_SELECTED))
        except ValueError:
            LOG.warning("Unknown template in form state; showing %s", TemplateType.PROFESSIONAL.value)
            selected = TemplateType.PROFESSIONAL
        return TemplateSelectionPanel(
            selected_template=selected,
            include_photo=bool(self._form.get(FieldPath.TEMPLATE_INCLUDE_PHOTO)),
            on_template_change=self._set_template,
            on_photo_inclusion_change=self._set_include_photo,
        )

    def _set_template(self, template: TemplateType) -> None:
        self._form.set(FieldPath.TEMPLATE_SELECTED, template.value)

    def _set_include_photo(self, include: bool) -> None:
        self._form.set(FieldPath.TEMPLATE_INCLUDE_PHOTO, include)

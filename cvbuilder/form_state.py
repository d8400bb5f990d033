"""
Form state container for the CV builder.

Holds every CV field of the multi-step form in a typed record and exposes
it through a closed set of dotted field paths. Components read and write
fields by path, subscribe to changes of a single path, and display
field-level validation messages recorded against a path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from .logging_utils import LOG
from .shared import VerificationResult


class FieldPath(str, Enum):
    """Addressable fields of the form."""
    FIRST_NAME = "personal.firstName"
    LAST_NAME = "personal.lastName"
    PROFESSIONAL_TITLE = "personal.professionalTitle"
    EMAIL = "personal.email"
    PHONE = "personal.phone"
    LINKEDIN = "personal.linkedin"
    PHOTO_URL = "personal.photoUrl"
    TEMPLATE_SELECTED = "template.selected"
    TEMPLATE_INCLUDE_PHOTO = "template.includePhoto"


PathLike = Union[FieldPath, str]
Watcher = Callable[[FieldPath, Any], None]


@dataclass
class PersonalInfo:
    first_name: str = ""
    last_name: str = ""
    professional_title: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    photo_url: str = ""


@dataclass
class TemplateSettings:
    # Plain string here; the closed set lives in cvbuilder.templates
    selected: str = "professional"
    include_photo: bool = True


@dataclass
class CVFormData:
    personal: PersonalInfo = field(default_factory=PersonalInfo)
    template: TemplateSettings = field(default_factory=TemplateSettings)


# FieldPath -> (section attribute, field attribute, expected type)
_ACCESSORS: Dict[FieldPath, Tuple[str, str, type]] = {
    FieldPath.FIRST_NAME: ("personal", "first_name", str),
    FieldPath.LAST_NAME: ("personal", "last_name", str),
    FieldPath.PROFESSIONAL_TITLE: ("personal", "professional_title", str),
    FieldPath.EMAIL: ("personal", "email", str),
    FieldPath.PHONE: ("personal", "phone", str),
    FieldPath.LINKEDIN: ("personal", "linkedin", str),
    FieldPath.PHOTO_URL: ("personal", "photo_url", str),
    FieldPath.TEMPLATE_SELECTED: ("template", "selected", str),
    FieldPath.TEMPLATE_INCLUDE_PHOTO: ("template", "include_photo", bool),
}

# camelCase key used in the serialized form for each field
_SERIALIZED_KEYS: Dict[FieldPath, str] = {path: path.value.split(".", 1)[1] for path in FieldPath}


def resolve_path(path: PathLike) -> FieldPath:
    """
    Normalize a FieldPath member or dotted string to a FieldPath.

    Raises:
        KeyError: If the path is not one of the form's fields
    """
    if isinstance(path, FieldPath):
        return path
    try:
        return FieldPath(path)
    except ValueError:
        raise KeyError(f"unknown form field: {path}") from None


class FormState:
    """
    Mutable, path-addressable CV form record.

    Watchers are called synchronously, in registration order, after a
    value actually changes. All mutation happens on the caller's thread.
    """

    def __init__(self, data: Optional[CVFormData] = None):
        self._data = data or CVFormData()
        self._watchers: Dict[FieldPath, List[Watcher]] = {}
        self._errors: Dict[FieldPath, str] = {}

    @property
    def data(self) -> CVFormData:
        return self._data

    def get(self, path: PathLike) -> Any:
        section, attr, _ = _ACCESSORS[resolve_path(path)]
        return getattr(getattr(self._data, section), attr)

    def set(self, path: PathLike, value: Any) -> None:
        """
        Assign a field and notify its watchers if the value changed.

        Raises:
            KeyError: If the path is unknown
            TypeError: If the value has the wrong type for the field
        """
        key = resolve_path(path)
        section, attr, expected = _ACCESSORS[key]
        if not isinstance(value, expected):
            raise TypeError(f"{key.value} expects {expected.__name__}, got {type(value).__name__}")
        target = getattr(self._data, section)
        if getattr(target, attr) == value:
            return
        setattr(target, attr, value)
        for callback in list(self._watchers.get(key, ())):
            callback(key, value)

    def watch(self, path: PathLike, callback: Watcher) -> Callable[[], None]:
        """Subscribe to changes of one field. Returns an unsubscribe callable."""
        key = resolve_path(path)
        self._watchers.setdefault(key, []).append(callback)

        def _unsubscribe() -> None:
            callbacks = self._watchers.get(key, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return _unsubscribe

    # ---------------------- field-level messages ----------------------

    def set_error(self, path: PathLike, message: str) -> None:
        self._errors[resolve_path(path)] = message

    def clear_error(self, path: PathLike) -> None:
        self._errors.pop(resolve_path(path), None)

    def get_error(self, path: PathLike) -> Optional[str]:
        return self._errors.get(resolve_path(path))

    @property
    def errors(self) -> Dict[FieldPath, str]:
        return dict(self._errors)

    def apply_validation(self, result: VerificationResult) -> None:
        """Replace all field messages with those of a verification result."""
        self._errors.clear()
        for path, message in result.field_errors.items():
            try:
                self._errors[resolve_path(path)] = message
            except KeyError:
                LOG.warning("Ignoring validation message for unknown field %s", path)

    # ---------------------- serialization ----------------------

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        out: Dict[str, Dict[str, Any]] = {}
        for path in FieldPath:
            section = path.value.split(".", 1)[0]
            out.setdefault(section, {})[_SERIALIZED_KEYS[path]] = self.get(path)
        return out

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "FormState":
        """
        Build a form from its serialized shape.

        Missing sections or fields, and values of the wrong type, keep
        their defaults.
        """
        state = cls()
        for path in FieldPath:
            section_name = path.value.split(".", 1)[0]
            section = raw.get(section_name) if isinstance(raw, Mapping) else None
            if not isinstance(section, Mapping):
                continue
            value = section.get(_SERIALIZED_KEYS[path])
            _, _, expected = _ACCESSORS[path]
            if isinstance(value, expected):
                state.set(path, value)
            elif value is not None:
                LOG.debug("Ignoring %s value of type %s", path.value, type(value).__name__)
        return state

"""
Schema verifier for built CV records.

Validates a record against the JSON schema in contracts/cv_record_schema.json.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..shared import VerificationResult
from .base import CVVerifier

_JSON_TYPES = {
    "string": str,
    "boolean": bool,
    "object": dict,
    "null": type(None),
}


class CVRecordSchemaVerifier(CVVerifier):
    """
    Verifier that validates CV records against cv_record_schema.json.

    Checks required keys, value types and enumerations of the schema's
    properties one level below each top-level section.
    """

    def __init__(self, schema_path: Optional[Path] = None):
        if schema_path is None:
            schema_path = Path(__file__).parent.parent / "contracts" / "cv_record_schema.json"
        self.schema_path = schema_path
        self._schema: Optional[Dict[str, Any]] = None

    def _load_schema(self) -> Dict[str, Any]:
        if self._schema is None:
            with self.schema_path.open("r", encoding="utf-8") as f:
                self._schema = json.load(f)
        return self._schema

    def verify(self, data: Dict[str, Any], **kwargs) -> VerificationResult:
        schema = self._load_schema()
        errs: List[str] = []
        warns: List[str] = []

        if not isinstance(data, dict):
            return VerificationResult(ok=False, errors=["record must be an object"], warnings=[])

        for field in schema.get("required", []):
            if field not in data:
                errs.append(f"missing required field: {field}")

        for section, section_schema in schema.get("properties", {}).items():
            if section not in data:
                continue
            errs.extend(self._check_value(section, data[section], section_schema))

        return VerificationResult(ok=not errs, errors=errs, warnings=warns)

    def _check_value(self, name: str, value: Any, schema: Dict[str, Any]) -> List[str]:
        errs: List[str] = []
        expected = schema.get("type")
        if expected is not None:
            allowed = expected if isinstance(expected, list) else [expected]
            # bool is an int subclass; exact type match keeps them apart
            if not any(type(value) is _JSON_TYPES[t] for t in allowed):
                return [f"{name} must be {' or '.join(allowed)}"]

        if "enum" in schema and value not in schema["enum"]:
            errs.append(f"{name} must be one of: {', '.join(schema['enum'])}")

        if isinstance(value, dict):
            for field in schema.get("required", []):
                if field not in value:
                    errs.append(f"{name} missing required field: {field}")
            for field, field_schema in schema.get("properties", {}).items():
                if field in value:
                    errs.extend(self._check_value(f"{name}.{field}", value[field], field_schema))
        return errs

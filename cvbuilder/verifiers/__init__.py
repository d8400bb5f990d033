"""
CV verification interfaces and implementations.

This module provides pluggable verifiers and registers the built-in ones.
"""

from .base import CVVerifier
from .form_fields_verifier import FormFieldsVerifier
from .record_schema_verifier import CVRecordSchemaVerifier
from .verifier_registry import (
    get_verifier,
    list_verifiers,
    register_verifier,
    unregister_verifier,
)

register_verifier("form-fields", FormFieldsVerifier)
register_verifier("cv-record-schema", CVRecordSchemaVerifier)

__all__ = [
    "CVVerifier",
    "CVRecordSchemaVerifier",
    "FormFieldsVerifier",
    "get_verifier",
    "list_verifiers",
    "register_verifier",
    "unregister_verifier",
]

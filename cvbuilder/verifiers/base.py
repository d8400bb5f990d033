"""
Base interface for CV verifiers.

Defines the contract for pluggable verification of form data and CV records.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from ..shared import VerificationResult


class CVVerifier(ABC):
    """
    Abstract base class for CV verifiers.

    Implementations check a serialized form or a built CV record and
    report errors, warnings and, where they apply to one input field,
    per-field messages keyed by dotted form path.
    """

    @abstractmethod
    def verify(self, data: Dict[str, Any], **kwargs) -> VerificationResult:
        """
        Verify CV data.

        Args:
            data: Serialized form (FormState.to_dict()) or CV record
            **kwargs: Verifier-specific options

        Returns:
            VerificationResult describing the problems found
        """
        ...

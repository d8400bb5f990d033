"""
Base interface for CV renderers.

Defines the contract for pluggable CV rendering implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict


class CVRenderer(ABC):
    """
    Abstract base class for CV renderers.

    Implementations turn a CV record into a document using a template of
    their own format.
    """

    @abstractmethod
    def render(self, cv_data: Dict[str, Any], template_path: Path, output_path: Path) -> Path:
        """
        Render a CV record to an output file using the given template.

        Args:
            cv_data: CV record as built by cvbuilder.cv_record.build_cv_record
                Structure:
                {
                    "identity": {"title", "full_name", "first_name", "last_name"},
                    "contact": {"email", "phone", "linkedin", "linkedin_url"?},
                    "photo": {"mime_type", "data_uri"} | None,
                    "template": {"id", "include_photo"}
                }
            template_path: Path to the template file to use for rendering
            output_path: Path where the rendered output should be saved

        Returns:
            Path to the rendered output file

        Raises:
            FileNotFoundError: If the template file does not exist
            Exception: For rendering-specific errors
        """
        pass

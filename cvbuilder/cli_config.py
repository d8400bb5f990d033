"""
CLI configuration data structures.

Defines the UserConfig produced by argument parsing and consumed by the
prepare and execute phases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class PersonalDetails:
    """Personal fields given on the command line (None = keep form value)."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    professional_title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None


@dataclass
class RenderStage:
    """Configuration for the optional render stage."""
    output: Path  # Output DOCX
    template: Optional[Path] = None  # Explicit template DOCX
    templates_dir: Optional[Path] = None  # Or a folder holding <template-id>.docx


@dataclass
class UserConfig:
    """Configuration gathered from user input."""

    output: Path  # CV record JSON
    personal: PersonalDetails = field(default_factory=PersonalDetails)

    # Resumed form (FormState.to_dict() shape)
    form_data: Optional[Path] = None

    photo: Optional[Path] = None
    remove_photo: bool = False
    template: Optional[str] = None
    include_photo: Optional[bool] = None

    render: Optional[RenderStage] = None

    # Execution settings
    strict: bool = False
    debug: bool = False
    verbosity: int = 0
    log_file: Optional[str] = None

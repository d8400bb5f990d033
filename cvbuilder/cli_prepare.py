"""
CLI Phase 2: Prepare execution environment.

Validates inputs and prepares directories for execution.
No actual execution - just setup.
"""

from __future__ import annotations

from .cli_config import UserConfig
from .logging_utils import LOG


def prepare_execution_environment(config: UserConfig) -> UserConfig:
    """
    Phase 2: Validate inputs and prepare execution environment.

    - Validates the saved form and photo files exist
    - Validates an explicit render template is a .docx (a templates folder
      is resolved after the template choice is known)
    - Creates output directories

    Returns the same config (for chaining).
    """
    if config.form_data is not None and not config.form_data.is_file():
        LOG.error("Form data not found: %s", config.form_data)
        raise FileNotFoundError(f"Form data not found: {config.form_data}")

    if config.photo is not None and not config.photo.is_file():
        LOG.error("Photo not found: %s", config.photo)
        raise FileNotFoundError(f"Photo not found: {config.photo}")

    if config.render:
        template = config.render.template
        if template is not None and (not template.is_file() or template.suffix.lower() != ".docx"):
            LOG.error("Template not found or not a .docx: %s", template)
            raise ValueError(f"Invalid template: {template}")
        templates_dir = config.render.templates_dir
        if templates_dir is not None and not templates_dir.is_dir():
            LOG.error("Templates folder not found: %s", templates_dir)
            raise ValueError(f"Invalid templates folder: {templates_dir}")
        config.render.output.parent.mkdir(parents=True, exist_ok=True)

    config.output.parent.mkdir(parents=True, exist_ok=True)
    return config

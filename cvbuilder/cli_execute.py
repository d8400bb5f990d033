"""
CLI Phase 3: Execute.

Builds the form state from the configuration, ingests the photo through
the same controller a form host uses, verifies the result, writes the CV
record and optionally renders it.
"""

from __future__ import annotations

import asyncio
import json
import traceback
from pathlib import Path
from typing import List, Optional, Tuple

from .cli_config import UserConfig
from .cv_record import build_cv_record, write_cv_record
from .form_state import FieldPath, FormState
from .logging_utils import LOG, fmt_issues
from .photo import AttemptOutcome, PhotoFile, PhotoIngestionController, PhotoUploadError
from .renderers import get_renderer, resolve_template_path
from .templates import TemplateFormBinding, TemplateType
from .verifiers import get_verifier

_PERSONAL_PATHS = (
    ("first_name", FieldPath.FIRST_NAME),
    ("last_name", FieldPath.LAST_NAME),
    ("professional_title", FieldPath.PROFESSIONAL_TITLE),
    ("email", FieldPath.EMAIL),
    ("phone", FieldPath.PHONE),
    ("linkedin", FieldPath.LINKEDIN),
)


def build_form_state(config: UserConfig) -> FormState:
    """Saved form (if any) overlaid with values given on the command line."""
    if config.form_data is not None:
        with config.form_data.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"Form data must be a JSON object: {config.form_data}")
        form = FormState.from_dict(raw)
    else:
        form = FormState()

    for attr, path in _PERSONAL_PATHS:
        value = getattr(config.personal, attr)
        if value is not None:
            form.set(path, value)

    binding = TemplateFormBinding(form)
    if config.template is not None:
        binding.panel().select(config.template)
    if config.include_photo is not None and config.include_photo != binding.panel().include_photo:
        binding.panel().toggle_photo()
    return form


async def ingest_photo(
    form: FormState, photo: Optional[Path], remove: bool = False
) -> Tuple[AttemptOutcome, Optional[PhotoUploadError]]:
    with PhotoIngestionController(form) as controller:
        if remove:
            controller.remove_photo()
        if photo is None:
            return AttemptOutcome.IGNORED, None
        outcome = await controller.on_file_selected(PhotoFile.from_path(photo))
        return outcome, controller.upload_error


def execute_pipeline(config: UserConfig) -> int:
    """
    Phase 3: Execute based on user configuration.

    Returns exit code (0 = success, 1 = failure, 2 = strict mode warnings).
    """
    form = build_form_state(config)

    outcome, upload_error = asyncio.run(ingest_photo(form, config.photo, remove=config.remove_photo))
    if outcome == AttemptOutcome.REJECTED:
        LOG.error("Photo rejected: %s", upload_error.message if upload_error else "unknown error")
        return 1

    errors: List[str] = []
    warnings: List[str] = []

    form_result = get_verifier("form-fields").verify(form.to_dict())
    form.apply_validation(form_result)
    errors.extend(form_result.errors)
    warnings.extend(form_result.warnings)

    record = build_cv_record(form)
    record_result = get_verifier("cv-record-schema").verify(record)
    errors.extend(record_result.errors)
    warnings.extend(record_result.warnings)

    if errors:
        LOG.error("CV record not written | %s", fmt_issues(errors, warnings))
        return 1

    write_cv_record(record, config.output)
    LOG.info("CV record written: %s", config.output)

    if config.render:
        template_path = config.render.template
        if template_path is None:
            template_path = resolve_template_path(
                config.render.templates_dir, record["template"]["id"] or TemplateType.PROFESSIONAL
            )
        try:
            get_renderer("docx").render(record, template_path, config.render.output)
        except Exception as e:
            LOG.error("Render failed: %s", e)
            if config.debug:
                LOG.error(traceback.format_exc())
            return 1

    if warnings:
        LOG.warning(fmt_issues([], warnings))
        if config.strict:
            return 2
    return 0

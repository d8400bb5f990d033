"""
CLI Phase 1: Gather user requirements.

Parses command-line arguments and returns UserConfig dataclass.
No side effects - just parsing and conversion.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Optional

from .cli_config import PersonalDetails, RenderStage, UserConfig
from .templates import TemplateType


def _parse_stage_params(param_str: str) -> Dict[str, str]:
    """
    Parse stage parameter string into a dictionary.

    Format: key=value key2=value2
    Example: "template=modern.docx output=cv.docx"
    """
    params = {}
    if not param_str:
        return params

    for part in param_str.split():
        if '=' in part:
            key, value = part.split('=', 1)
            params[key.strip()] = value.strip()

    return params


def gather_user_requirements(argv: Optional[List[str]] = None) -> UserConfig:
    """
    Phase 1: Parse command-line arguments and return user configuration.
    """
    parser = argparse.ArgumentParser(
        description="Assemble a CV record from personal data, a profile photo and a template choice.",
        epilog="""
Examples:
  Build a CV record with a photo:
    python -m cvbuilder.cli \\
      --first-name John --last-name Doe --title "Software Engineer" \\
      --email john.doe@example.com --phone "+1 555 123 4567" \\
      --photo me.jpg --template modern \\
      --output out/cv.json

  Resume a saved form, drop its photo and render it:
    python -m cvbuilder.cli \\
      --form-data saved_form.json --remove-photo \\
      --render templates-dir=templates/ output=out/cv.docx \\
      --output out/cv.json
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--form-data", help="Saved form JSON to start from.")
    parser.add_argument("--first-name")
    parser.add_argument("--last-name")
    parser.add_argument("--title", help="Professional title, e.g. \"Senior Project Manager\".")
    parser.add_argument("--email")
    parser.add_argument("--phone")
    parser.add_argument("--linkedin", help="LinkedIn handle (linkedin.com/in/<handle>).")

    photo = parser.add_mutually_exclusive_group()
    photo.add_argument("--photo", help="Profile photo (image/*, at most 2 MB).")
    photo.add_argument("--remove-photo", action="store_true",
                       help="Remove the photo carried by --form-data.")

    parser.add_argument("--template", choices=[t.value for t in TemplateType],
                        help="CV template.")
    inclusion = parser.add_mutually_exclusive_group()
    inclusion.add_argument("--include-photo", dest="include_photo", action="store_const", const=True,
                           help="Include the photo in the CV (default).")
    inclusion.add_argument("--no-photo", dest="include_photo", action="store_const", const=False,
                           help="Leave the photo out of the CV.")

    parser.add_argument("--render", nargs='*', metavar="PARAM",
                        help="Render stage: Render the CV record to DOCX. "
                             "Parameters: (template=<path> | templates-dir=<dir>) output=<path>")

    parser.add_argument("--output", required=True, help="Output path of the CV record JSON.")
    parser.add_argument("--strict", action="store_true",
                        help="Treat warnings as failure (non-zero exit code).")
    parser.add_argument("--debug", action="store_true",
                        help="Verbose logs + stack traces on failure.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase output verbosity (-v, -vv).")
    parser.add_argument("--log-file",
                        help="Optional path to a log file. If set, all output is also written there.")

    args = parser.parse_args(argv)

    render_stage = None
    if args.render is not None:
        params = _parse_stage_params(' '.join(args.render))
        if 'output' not in params:
            raise ValueError("--render requires 'output' parameter")
        if ('template' in params) == ('templates-dir' in params):
            raise ValueError("--render requires exactly one of 'template' or 'templates-dir'")
        render_stage = RenderStage(
            output=Path(params['output']),
            template=Path(params['template']) if 'template' in params else None,
            templates_dir=Path(params['templates-dir']) if 'templates-dir' in params else None,
        )

    return UserConfig(
        output=Path(args.output),
        personal=PersonalDetails(
            first_name=args.first_name,
            last_name=args.last_name,
            professional_title=args.title,
            email=args.email,
            phone=args.phone,
            linkedin=args.linkedin,
        ),
        form_data=Path(args.form_data) if args.form_data else None,
        photo=Path(args.photo) if args.photo else None,
        remove_photo=args.remove_photo,
        template=args.template,
        include_photo=args.include_photo,
        render=render_stage,
        strict=args.strict,
        debug=args.debug,
        verbosity=args.verbose,
        log_file=args.log_file,
    )

"""
CV rendering interfaces and implementations.

This module provides pluggable CV renderers and registers the built-in ones.
"""

from .base import CVRenderer
from .docx_renderer import DocxCVRenderer, resolve_template_path
from .renderer_registry import (
    get_renderer,
    list_renderers,
    register_renderer,
    unregister_renderer,
)

register_renderer("docx", DocxCVRenderer)

__all__ = [
    "CVRenderer",
    "DocxCVRenderer",
    "get_renderer",
    "list_renderers",
    "register_renderer",
    "resolve_template_path",
    "unregister_renderer",
]

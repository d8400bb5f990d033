"""
Renderer registry for managing named CV renderers.
"""

from __future__ import annotations

from typing import Dict, List, Type, Optional

from .base import CVRenderer

# Global renderer registry
_RENDERER_REGISTRY: Dict[str, Type[CVRenderer]] = {}

def register_renderer(name: str, renderer_class: Type[CVRenderer]) -> None:
    """Register a renderer class under a name (e.g., "docx")."""
    _RENDERER_REGISTRY[name] = renderer_class

def get_renderer(name: str, **kwargs) -> Optional[CVRenderer]:
    """
    Instantiate the renderer registered under name.

    Returns:
        Renderer instance, or None for an unknown name
    """
    renderer_class = _RENDERER_REGISTRY.get(name)
    if renderer_class is None:
        return None
    return renderer_class(**kwargs)

def list_renderers() -> List[Dict[str, str]]:
    """Registered renderers sorted by name, with the first docstring line as description."""
    renderers = []
    for name, renderer_class in _RENDERER_REGISTRY.items():
        doc = (renderer_class.__doc__ or "").strip()
        renderers.append({
            'name': name,
            'description': doc.split('\n')[0] if doc else "No description available",
        })
    return sorted(renderers, key=lambda x: x['name'])

def unregister_renderer(name: str) -> None:
    _RENDERER_REGISTRY.pop(name, None)

__all__ = [
    "register_renderer",
    "get_renderer",
    "list_renderers",
    "unregister_renderer",
]

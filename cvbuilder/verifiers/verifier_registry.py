"""
Verifier registry for managing named CV verifiers.

Lets callers (the CLI, a host application) pick verifications by name
instead of importing concrete classes.
"""

from __future__ import annotations

from typing import Dict, List, Type, Optional

from .base import CVVerifier


# Global verifier registry
_VERIFIER_REGISTRY: Dict[str, Type[CVVerifier]] = {}


def register_verifier(name: str, verifier_class: Type[CVVerifier]) -> None:
    """
    Register a verifier class under a name (e.g., "form-fields").

    Registering an existing name replaces the previous class.
    """
    _VERIFIER_REGISTRY[name] = verifier_class


def get_verifier(name: str, **kwargs) -> Optional[CVVerifier]:
    """
    Instantiate the verifier registered under name.

    Args:
        name: Registered verifier name ("form-fields", "cv-record-schema")
        **kwargs: Passed to the verifier constructor

    Returns:
        Verifier instance, or None for an unknown name
    """
    verifier_class = _VERIFIER_REGISTRY.get(name)
    if verifier_class is None:
        return None
    return verifier_class(**kwargs)


def list_verifiers() -> List[Dict[str, str]]:
    """
    Registered verifiers sorted by name, each as {'name', 'description'}.

    The description is the first line of the class docstring.
    """
    verifiers = []
    for name, verifier_class in _VERIFIER_REGISTRY.items():
        doc = (verifier_class.__doc__ or "").strip()
        verifiers.append({
            'name': name,
            'description': doc.split('\n')[0] if doc else "No description available",
        })
    return sorted(verifiers, key=lambda x: x['name'])


def unregister_verifier(name: str) -> None:
    _VERIFIER_REGISTRY.pop(name, None)


__all__ = [
    "register_verifier",
    "get_verifier",
    "list_verifiers",
    "unregister_verifier",
]

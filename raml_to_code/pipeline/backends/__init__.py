"""
Backend profiles.

Contains the per-language primitive tables and annotation styles.
"""

from __future__ import annotations

from .base import BackendProfile
from .java_backend import JavaBackend
from .python_backend import PythonBackend

BACKENDS: dict[str, type[BackendProfile]] = {
    JavaBackend.LANGUAGE: JavaBackend,
    PythonBackend.LANGUAGE: PythonBackend,
}


def get_backend(language: str, annotations: str = "") -> BackendProfile:
    """Create the backend profile for a language."""
    backend_class = BACKENDS.get(language)
    if backend_class is None:
        raise ValueError(f"Language '{language}' is not supported")
    return backend_class(annotations)


__all__ = [
    "BACKENDS",
    "BackendProfile",
    "JavaBackend",
    "PythonBackend",
    "get_backend",
]

"""
Java backend profile.
"""

from __future__ import annotations

from ..config import ANNOTATION_GSON, ANNOTATION_JACKSON
from .base import BackendProfile


class JavaBackend(BackendProfile):
    """Java backend profile (Jackson or GSON annotations)."""

    LANGUAGE = "java"

    TYPE_MAP = {
        "string": "String",
        # not dealing with floats here
        "integer": "Integer",
        "number": "Integer",
        "boolean": "Boolean",
        "datetime": "Instant",
        "object": "Map<String, Object>",
        "UUID": "UUID",
    }

    ANNOTATION_STYLES = (ANNOTATION_JACKSON, ANNOTATION_GSON)

    NATIVE_TYPES = ("UUID",)

"""
Python backend profile.
"""

from __future__ import annotations

from .base import BackendProfile


class PythonBackend(BackendProfile):
    """Python backend profile."""

    LANGUAGE = "python"

    TYPE_MAP = {
        "string": "str",
        "integer": "int",
        "number": "float",
        "boolean": "bool",
        "datetime": "datetime",
        "date-only": "date",
        "time-only": "time",
        "datetime-only": "datetime",
        "file": "bytes",
        "object": "dict",
        "any": "Any",
        "nil": "None",
    }

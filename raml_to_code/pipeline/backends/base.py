"""
Base class for backend profiles.

A backend profile is the per-ecosystem configuration the resolver needs:
the primitive lookup table and the set of annotation styles the backend
understands. Rendering stays with the emitters.
"""

from __future__ import annotations

from dataclasses import replace

from ..config import ResolverConfig, normalize_annotations


class BackendProfile:
    """Base class for backend profiles."""

    # Backend name, as accepted by get_backend()
    LANGUAGE: str = ""

    # Type mapping from schema scalar keywords to backend types
    TYPE_MAP: dict[str, str] = {}

    # Annotation styles this backend can emit
    ANNOTATION_STYLES: tuple[str, ...] = ()

    # Types the backend provides natively and never generates
    NATIVE_TYPES: tuple[str, ...] = ()

    def __init__(self, annotations: str = ""):
        """
        Initialize the profile.

        Args:
            annotations: Requested annotation style; unsupported styles
                are dropped
        """
        annotations = normalize_annotations(annotations)
        self.annotations = annotations if annotations in self.ANNOTATION_STYLES else ""

    def lookup(self, name: str) -> str | None:
        """
        Look up a schema type name in the primitive table.

        Args:
            name: Declared type string, matched exactly

        Returns:
            The backend primitive name, or None if not a primitive
        """
        return self.TYPE_MAP.get(name)

    def configure(self, config: ResolverConfig) -> ResolverConfig:
        """
        Return a copy of a resolver config with the backend requirements applied.

        Native types are ignored and the annotation style is restricted to
        the ones this backend supports.
        """
        annotations = normalize_annotations(config.annotations) or self.annotations
        ignore_classes = list(config.ignore_classes)
        ignore_classes.extend(t for t in self.NATIVE_TYPES if t not in ignore_classes)
        return replace(
            config,
            annotations=annotations if annotations in self.ANNOTATION_STYLES else "",
            ignore_classes=ignore_classes,
        )

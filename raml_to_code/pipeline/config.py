"""
Configuration for the type resolution pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Supported annotation styles ("" means no annotations)
ANNOTATION_JACKSON = "jackson"
ANNOTATION_GSON = "gson"
ANNOTATION_STYLES = (ANNOTATION_JACKSON, ANNOTATION_GSON)


@dataclass
class ResolverConfig:
    """Configuration options for type resolution."""

    # Types to leave out of the resolved model
    ignore_classes: list[str] = field(default_factory=list)

    # Fields to ignore globally across all classes
    global_ignore_fields: list[str] = field(default_factory=list)

    # Order in which to emit classes (empty = declaration order)
    order_classes: list[str] = field(default_factory=list)

    # Serialization annotation style, enables custom deserializers
    annotations: str = ""

    # Result of common ancestor resolution when members share no ancestor
    universal_base_type: str = "Object"

    # Compute required child overrides as a positional suffix of the
    # sorted name lists instead of a set difference
    legacy_required_overrides: bool = True

    @staticmethod
    def from_dict(d: dict) -> ResolverConfig:
        """Create a config from a dictionary."""
        config = ResolverConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        config.annotations = normalize_annotations(config.annotations)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "ignore_classes": self.ignore_classes,
            "global_ignore_fields": self.global_ignore_fields,
            "order_classes": self.order_classes,
            "annotations": self.annotations,
            "universal_base_type": self.universal_base_type,
            "legacy_required_overrides": self.legacy_required_overrides,
        }


def normalize_annotations(annotations: str | None) -> str:
    """Lower-case an annotation style, dropping unknown ones."""
    annotations = (annotations or "").lower()
    if annotations in ANNOTATION_STYLES:
        return annotations
    return ""

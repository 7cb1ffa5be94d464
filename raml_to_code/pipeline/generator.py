"""
Pipeline resolver - main entry point for the type resolution pipeline.

Orchestrates the phases:
1. Parse the document into an ApiSchema
2. Build the normalized TypeGraph
3. Resolve the graph into a ResolvedModel for one backend profile
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from .analyzer import TypeResolver
from .analyzer.ir_nodes import ResolvedModel
from .backends import get_backend
from .config import ResolverConfig
from .schema_ast import SchemaParser, TypeGraphBuilder
from .schema_ast.nodes import TypeGraph

logger = logging.getLogger(__name__)


class PipelineResolver:
    """
    Resolves a RAML document for a backend profile.

    Example:
        resolver = PipelineResolver(document, config, "java", "jackson")
        model = resolver.resolve()
    """

    def __init__(
        self,
        document: dict[str, Any],
        config: ResolverConfig | None = None,
        language: str = "java",
        annotations: str = "",
    ):
        """
        Initialize the pipeline resolver.

        Args:
            document: The loaded RAML document mapping
            config: Resolver configuration
            language: Backend profile ("java" or "python")
            annotations: Annotation style, overrides the config when set
        """
        self.document = document
        self.language = language
        self.backend = get_backend(language, annotations)

        config = config or ResolverConfig()
        if annotations:
            config = replace(config, annotations=annotations)
        self.config = self.backend.configure(config)

    def build_graph(self) -> TypeGraph:
        """Run the parse and graph phases only."""
        schema = SchemaParser().parse(self.document)
        return TypeGraphBuilder().build(schema)

    def resolve(self) -> ResolvedModel:
        """
        Run the whole pipeline.

        Returns:
            The resolved model

        Raises:
            SchemaError: for malformed declarations
            CycleError: for cyclic inheritance
        """
        graph = self.build_graph()
        logger.info("Resolving %d types for %s", len(graph.nodes), self.language)

        resolver = TypeResolver(self.backend, self.config, self.language)
        return resolver.analyze(graph)

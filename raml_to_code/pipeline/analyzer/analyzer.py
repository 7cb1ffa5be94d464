"""
Type resolver that transforms the type graph into the resolved model.

Phase 2 of the pipeline: compute hierarchies, map field types, analyze
polymorphism and assemble one ResolvedClass per declared type. The whole
graph is resolved before anything is returned, so a fatal error never
leaves a partial model behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import ResolverConfig
from ..errors import FieldMappingError, UnsupportedConstructError
from ..schema_ast.nodes import PropertySpec, TypeGraph, TypeKind, UnionType
from .common_ancestor import CommonAncestorResolver
from .field_mapper import FieldTypeMapper, PrimitiveLookup, union_member_name
from .hierarchy import HierarchyResolver
from .ir_nodes import (
    FieldWarning,
    ObjectRef,
    ResolvedClass,
    ResolvedDeserializer,
    ResolvedEnum,
    ResolvedField,
    ResolvedModel,
    TargetType,
    UnionRef,
    WarningKind,
)
from .polymorphism import DISCRIMINANT_FIELD, PolymorphismAnalyzer, deserializer_name

logger = logging.getLogger(__name__)

# Kinds whose declared type string is itself the type's definition
ALIAS_KINDS = {TypeKind.SCALAR, TypeKind.ARRAY, TypeKind.UNION, TypeKind.MAP, TypeKind.REFERENCE}


@dataclass
class ResolutionContext:
    """Everything one resolution run works with."""

    graph: TypeGraph
    hierarchy: HierarchyResolver
    mapper: FieldTypeMapper
    polymorphism: PolymorphismAnalyzer
    enums: list[ResolvedEnum] = field(default_factory=list)
    warnings: list[FieldWarning] = field(default_factory=list)


class TypeResolver:
    """Resolves a TypeGraph into a ResolvedModel."""

    def __init__(self, primitives: PrimitiveLookup, config: ResolverConfig | None = None, backend_name: str = ""):
        """
        Initialize the resolver.

        Args:
            primitives: The backend's primitive lookup table
            config: Resolution configuration
            backend_name: Name recorded on the model
        """
        self.primitives = primitives
        self.config = config or ResolverConfig()
        self.backend_name = backend_name

    def analyze(self, graph: TypeGraph) -> ResolvedModel:
        """
        Resolve every type of the graph.

        Args:
            graph: The type graph

        Returns:
            ResolvedModel ready for emitters

        Raises:
            CycleError: if any inheritance chain is cyclic
            SchemaError: if a declaration cannot be resolved
        """
        ctx = self._create_context(graph)

        # Walk every chain first so a cycle anywhere aborts the run
        for name in graph.names():
            ctx.hierarchy.ancestor_chain(name)

        classes = []
        for name in self._collect_types_to_resolve(graph):
            classes.append(self._resolve_class(ctx, name))

        deserializers = []
        for class_def in classes:
            if ctx.polymorphism.needs_custom_deserializer(class_def.name):
                deserializers.append(
                    ResolvedDeserializer(
                        name=deserializer_name(class_def.name),
                        base=class_def.name,
                        children=class_def.children,
                        discriminant_field=DISCRIMINANT_FIELD,
                    )
                )

        logger.debug(
            "Resolved %d classes, %d enums, %d deserializers (%d warnings)",
            len(classes),
            len(ctx.enums),
            len(deserializers),
            len(ctx.warnings),
        )

        return ResolvedModel(
            title=graph.title,
            backend=self.backend_name,
            classes=tuple(classes),
            enums=tuple(ctx.enums),
            deserializers=tuple(deserializers),
            warnings=tuple(ctx.warnings),
            parents={name: node.parent_name for name, node in graph.nodes.items()},
        )

    def _create_context(self, graph: TypeGraph) -> ResolutionContext:
        hierarchy = HierarchyResolver(graph, self.config.legacy_required_overrides)
        ancestor_resolver = CommonAncestorResolver(hierarchy, self.config.universal_base_type)
        return ResolutionContext(
            graph=graph,
            hierarchy=hierarchy,
            mapper=FieldTypeMapper(self.primitives, ancestor_resolver),
            polymorphism=PolymorphismAnalyzer(hierarchy, self.config.annotations),
        )

    def _collect_types_to_resolve(self, graph: TypeGraph) -> list[str]:
        """Collect type names in the order they should be emitted."""
        ordered = []
        remaining = [n for n in graph.names() if n not in self.config.ignore_classes]

        # First, add in specified order
        for name in self.config.order_classes:
            if name in remaining:
                ordered.append(name)
                remaining.remove(name)

        # Then add remaining in declaration order
        ordered.extend(remaining)
        return ordered

    def _resolve_class(self, ctx: ResolutionContext, name: str) -> ResolvedClass:
        """Resolve a single declared type."""
        node = ctx.graph.nodes[name]
        chain = ctx.hierarchy.ancestor_chain(name)
        children = ctx.hierarchy.children_of(name)

        enum_def = None
        if node.is_enum:
            enum_def = ctx.mapper.map_enum(name, "", node.enum_values, node.declared_type.raw)
            ctx.enums.append(enum_def)

        alias_target = None
        if node.kind in ALIAS_KINDS:
            alias_target = self._map_or_warn(ctx, name, "", lambda: ctx.mapper.map_expression(node.declared_type))

        fields = {}
        for prop_name, prop in ctx.hierarchy.flatten_properties(chain).items():
            if prop_name in self.config.global_ignore_fields:
                continue
            resolved_field = self._resolve_field(ctx, name, prop)
            if resolved_field is not None:
                fields[prop_name] = resolved_field

        return ResolvedClass(
            name=name,
            kind=node.kind,
            parent_name=node.parent_name,
            ancestors=tuple(chain[1:]),
            fields=fields,
            children=tuple(children),
            is_abstract=ctx.polymorphism.is_abstract(name),
            has_children=bool(children),
            has_required_properties=any(p.required for p in node.properties.values()),
            deserializer_target=ctx.polymorphism.deserializer_target(name),
            enum_def=enum_def,
            alias_target=alias_target,
            description=tuple(line.rstrip() for line in node.description.splitlines()),
        )

    def _resolve_field(self, ctx: ResolutionContext, owner: str, prop: PropertySpec) -> ResolvedField | None:
        """Resolve one flattened property; None when the field is dropped."""
        target_type = self._map_or_warn(ctx, owner, prop.name, lambda: ctx.mapper.map_property(owner, prop))
        if target_type is None:
            return None

        if prop.is_enum:
            ctx.enums.append(ctx.mapper.map_enum(owner, prop.name, prop.enum_values, prop.declared_type.raw))

        union_members = None
        if isinstance(target_type, UnionRef) and isinstance(prop.declared_type, UnionType):
            union_members = tuple(union_member_name(m) for m in prop.declared_type.members)

        return ResolvedField(
            name=prop.name,
            target_type=target_type,
            required=prop.required,
            is_member=ctx.hierarchy.is_member(owner, prop),
            required_child_overrides=tuple(ctx.hierarchy.required_child_overrides(prop, self._referenced_type(target_type))),
            union_members=union_members,
            description=prop.description,
        )

    def _referenced_type(self, target_type: TargetType) -> str | None:
        """The declared type a field refers to, if any."""
        if isinstance(target_type, ObjectRef):
            return target_type.type_name
        if isinstance(target_type, UnionRef):
            return target_type.common_ancestor
        return None

    def _map_or_warn(self, ctx: ResolutionContext, type_name: str, field_name: str, map_type) -> TargetType | None:
        """Run a mapping, turning field-level failures into warnings."""
        try:
            return map_type()
        except UnsupportedConstructError as e:
            kind = WarningKind.UNSUPPORTED_CONSTRUCT
            message = str(e)
        except FieldMappingError as e:
            kind = WarningKind.FIELD_MAPPING
            message = str(e)

        location = f"{type_name}.{field_name}" if field_name else type_name
        logger.warning("%s: %s", location, message)
        ctx.warnings.append(FieldWarning(kind=kind, type_name=type_name, field_name=field_name, message=message))
        return None

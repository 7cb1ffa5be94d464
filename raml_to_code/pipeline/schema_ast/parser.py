"""
RAML document parser.

Phase 1 of the pipeline: turn an already-loaded RAML (or equivalent JSON)
mapping into an ``ApiSchema`` without interpreting any type expression.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..errors import SchemaError
from .nodes import ApiSchema, RawMethod, RawResource, RawType

logger = logging.getLogger(__name__)


def load_schema_document(path: str | Path) -> dict[str, Any]:
    """
    Load a schema document from disk.

    JSON files are read with ``json``; everything else (``.raml``, ``.yaml``)
    is read as YAML.

    Args:
        path: Path to the schema document

    Returns:
        The loaded document mapping

    Raises:
        SchemaError: if the file is not valid YAML/JSON or not a mapping
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            if path.suffix == ".json":
                document = json.load(f)
            else:
                document = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaError(f"Cannot load schema document: {e}", str(path)) from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise SchemaError("Schema document must be a mapping", str(path))
    return document


class SchemaParser:
    """Parses a RAML document mapping into an ApiSchema."""

    # HTTP methods a resource may declare
    HTTP_METHODS = {"get", "post", "put", "patch", "delete", "head", "options"}

    def parse(self, document: dict[str, Any]) -> ApiSchema:
        """
        Parse a schema document.

        Args:
            document: The loaded RAML/JSON mapping

        Returns:
            ApiSchema with raw types and the resource tree
        """
        schema = ApiSchema(
            title=str(document.get("title") or ""),
            raw_document=document,
        )

        types = document.get("types") or {}
        if not isinstance(types, dict):
            raise SchemaError("'types' must be a mapping", "types")

        for name, declaration in types.items():
            name = str(name)
            schema.types[name] = self._parse_type(name, declaration)

        for key, value in document.items():
            if isinstance(key, str) and key.startswith("/"):
                schema.resources.append(self._parse_resource(key, value))

        logger.debug("Parsed %d types and %d root resources", len(schema.types), len(schema.resources))
        return schema

    def _parse_type(self, name: str, declaration: Any) -> RawType:
        """Parse one entry of the `types` section."""
        path = f"types/{name}"

        # `Cats: Cat[]` shorthand
        if declaration is None or isinstance(declaration, str):
            return RawType(name=name, type=declaration)

        if not isinstance(declaration, dict):
            raise SchemaError(f"Unsupported type declaration of kind {type(declaration).__name__}", path)

        properties = declaration.get("properties") or {}
        if not isinstance(properties, dict):
            raise SchemaError("'properties' must be a mapping", path)

        enum = declaration.get("enum")
        if enum is not None and not isinstance(enum, list):
            raise SchemaError("'enum' must be a list", path)

        return RawType(
            name=name,
            type=self._parse_type_reference(declaration.get("type"), path),
            properties={str(k): v for k, v in properties.items()},
            enum=enum,
            description=str(declaration.get("description") or ""),
            items=self._parse_items(declaration.get("items"), path),
        )

    def _parse_type_reference(self, value: Any, path: str) -> str | None:
        """Parse the `type` facet of a declaration."""
        if value is None:
            return None

        # Single inheritance written as a one-element list
        if isinstance(value, list):
            if len(value) != 1:
                raise SchemaError(f"Multiple inheritance is not supported: {value}", path)
            value = value[0]

        if not isinstance(value, str):
            raise SchemaError(f"'type' must be a string, got {type(value).__name__}", path)
        return value

    def _parse_items(self, value: Any, path: str) -> str | None:
        """Parse the `items` facet of an array declaration."""
        if value is None:
            return None
        if isinstance(value, dict):
            return self._parse_type_reference(value.get("type"), f"{path}/items")
        return self._parse_type_reference(value, f"{path}/items")

    def _parse_resource(self, uri: str, body: Any) -> RawResource:
        """Parse a resource node and its nested resources."""
        resource = RawResource(uri=uri)
        if body is None:
            return resource
        if not isinstance(body, dict):
            raise SchemaError("Resource must be a mapping", uri)

        for key, value in body.items():
            if not isinstance(key, str):
                continue
            if key.startswith("/"):
                resource.children.append(self._parse_resource(key, value))
            elif key.lower() in self.HTTP_METHODS:
                resource.methods.append(self._parse_method(key, value or {}, f"{uri}/{key}"))

        return resource

    def _parse_method(self, verb: str, body: Any, path: str) -> RawMethod:
        """Parse a resource method."""
        if not isinstance(body, dict):
            raise SchemaError("Method must be a mapping", path)

        method = RawMethod(
            verb=verb.upper(),
            display_name=str(body.get("displayName") or ""),
            request_body_type=self._body_type(body.get("body"), path),
        )

        responses = body.get("responses") or {}
        if not isinstance(responses, dict):
            raise SchemaError("'responses' must be a mapping", path)

        for code, response in responses.items():
            if isinstance(response, dict):
                body_type = self._body_type(response.get("body"), f"{path}/responses/{code}")
                if body_type:
                    method.response_body_types.append(body_type)

        return method

    def _body_type(self, body: Any, path: str) -> str:
        """Extract the payload type reference of a body declaration."""
        if body is None:
            return ""
        if isinstance(body, str):
            return body
        if not isinstance(body, dict):
            raise SchemaError("'body' must be a mapping", path)

        if "type" in body:
            return self._parse_type_reference(body["type"], path) or ""

        # Media-type keyed bodies, JSON first
        media_types = sorted(body, key=lambda k: (0 if "json" in str(k) else 1, str(k)))
        for media_type in media_types:
            declaration = body[media_type]
            if isinstance(declaration, str):
                return declaration
            if isinstance(declaration, dict) and "type" in declaration:
                return self._parse_type_reference(declaration["type"], f"{path}/{media_type}") or ""

        return ""

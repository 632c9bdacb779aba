"""Canonical JSON rendering of schema trees and resource documents.

Key order is fixed per node kind so repeated generation yields identical
text suitable for version control and contract tests.
"""

import json
from typing import Any

from pydantic import BaseModel

from resource_schema.schema.base import TypeTag
from resource_schema.schema.nodes import ArrayNode, LeafNode, ObjectNode, SchemaNode

INDENT = 2


def to_schema_dict(node: SchemaNode) -> dict:
    """Convert a schema node into a JSON Schema mapping with canonical key order."""
    if isinstance(node, ObjectNode):
        result: dict[str, Any] = {"type": "object"}
        _put_text(result, node.title, node.description)
        result["properties"] = {name: to_schema_dict(child) for name, child in node.properties.items()}
        if node.required:
            result["required"] = list(node.required)
        return _nullable(result, node)

    if isinstance(node, ArrayNode):
        result = {"type": "array"}
        _put_text(result, node.title, node.description)
        result["items"] = to_schema_dict(node.items)
        return _nullable(result, node)

    if isinstance(node, LeafNode):
        return _leaf_dict(node)

    raise TypeError(f"Unsupported schema node: {type(node).__name__}")


def format_schema(node: SchemaNode) -> str:
    """Render a schema tree as pretty-printed JSON text."""
    return _dumps(to_schema_dict(node))


def format_document(document: Any) -> str:
    """Render a resource document (a model or plain data) as pretty-printed JSON text."""
    if isinstance(document, BaseModel):
        document = document.model_dump(mode="json", by_alias=True)
    return _dumps(document)


def _nullable(result: dict, node: ObjectNode | ArrayNode) -> dict:
    # containers also documented as null become a union with null
    if TypeTag.NULL in node.documented_types:
        return {"oneOf": [result, {"type": "null"}]}
    return result


def _leaf_dict(node: LeafNode) -> dict:
    result: dict[str, Any] = {}
    if len(node.types) == 1:
        result["type"] = node.types[0].value
    _put_text(result, None, node.description)
    if node.enum:
        result["enum"] = list(node.enum)
    if len(node.types) > 1:
        result["oneOf"] = [{"type": t.value} for t in node.types]
    return result


def _put_text(result: dict, title: str | None, description: str | None) -> None:
    if title:
        result["title"] = title
    if description:
        result["description"] = description


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=INDENT, ensure_ascii=False)

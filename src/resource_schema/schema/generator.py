"""Schema generation entry points.

Runs the full pipeline: reduce -> build -> unwrap root array -> format.
"""

import logging

from resource_schema.schema.base import FieldDescriptor
from resource_schema.schema.builder import SchemaTreeBuilder
from resource_schema.schema.formatter import format_schema, to_schema_dict
from resource_schema.schema.nodes import SchemaNode
from resource_schema.schema.reducer import reduce_descriptors
from resource_schema.schema.unwrap import unwrap_root_array

logger = logging.getLogger(__name__)


def build_schema(descriptors: list[FieldDescriptor], title: str | None = None) -> SchemaNode:
    """Build the final schema tree for a list of field descriptors."""
    reduced = reduce_descriptors(descriptors)
    root = SchemaTreeBuilder().build(reduced, title=title)
    return unwrap_root_array(root, reduced)


def generate_schema(descriptors: list[FieldDescriptor], title: str | None = None) -> str:
    """Generate JSON Schema text for a list of field descriptors."""
    logger.debug(f"Generating schema from {len(descriptors)} field descriptors (title={title!r})")
    return format_schema(build_schema(descriptors, title=title))


def generate_schema_dict(descriptors: list[FieldDescriptor], title: str | None = None) -> dict:
    """Like generate_schema, but returns the schema as a mapping for embedding."""
    return to_schema_dict(build_schema(descriptors, title=title))


def generate_multipart_schema(parts: dict[str, list[FieldDescriptor]]) -> str:
    """Generate one schema covering the fields of every multipart part."""
    fields = [field for part_fields in parts.values() for field in part_fields]
    logger.debug(f"Generating multipart schema from {len(parts)} parts")
    return generate_schema(fields)

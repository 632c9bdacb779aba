"""Root array unwrapping."""

from resource_schema.schema.base import ArrayWildcard, ReducedDescriptor
from resource_schema.schema.builder import ROOT_ARRAY_PROPERTY
from resource_schema.schema.nodes import ObjectNode, SchemaNode


def unwrap_root_array(root: SchemaNode, reduced: list[ReducedDescriptor]) -> SchemaNode:
    """Replace the object wrapper with its array when the whole document is an array.

    Applies only when every path starts with a root-level ``[]``; the root
    title moves onto the array. Any other shape is returned unchanged.
    """
    if not reduced:
        return root
    if not all(isinstance(entry.segments[0], ArrayWildcard) for entry in reduced):
        return root
    if not isinstance(root, ObjectNode) or list(root.properties) != [ROOT_ARRAY_PROPERTY]:
        return root

    array = root.properties[ROOT_ARRAY_PROPERTY]
    return array.model_copy(update={"title": root.title})

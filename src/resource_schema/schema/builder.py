"""Schema tree builder.

Building happens in two passes over an arena of slots keyed by path prefix:
the first pass walks every reduced descriptor from the root and fixes the
kind of each position, the second assembles immutable schema nodes by
recursive descent from the root.
"""

import logging

from pydantic import BaseModel

from resource_schema.errors import ConflictingPathError
from resource_schema.schema.base import (
    ARRAY_WILDCARD,
    ArrayWildcard,
    CompiledPath,
    PathSegment,
    ReducedDescriptor,
    render_path,
)
from resource_schema.schema.nodes import ArrayNode, LeafNode, ObjectNode, SchemaNode
from resource_schema.schema.reducer import check_documented_kind, container_kinds

logger = logging.getLogger(__name__)

# Synthetic property holding a root-level array until it is unwrapped
ROOT_ARRAY_PROPERTY = "[]"


class _Slot(BaseModel):
    kind: str  # object / array / leaf
    children: list[PathSegment] = []
    descriptor: ReducedDescriptor | None = None


class SchemaTreeBuilder:
    """Builds a nested schema tree from reduced descriptors."""

    def build(self, reduced: list[ReducedDescriptor], title: str | None = None) -> ObjectNode:
        """Build the tree; the root is always an ObjectNode carrying the title."""
        kinds = container_kinds(reduced)
        arena: dict[CompiledPath, _Slot] = {(): _Slot(kind="object")}

        for entry in reduced:
            self._insert(arena, kinds, entry)

        root = self._assemble(arena, ())
        logger.debug(f"Built schema tree with {len(arena) - 1} nodes")
        return root.model_copy(update={"title": title})

    def _insert(self, arena: dict[CompiledPath, _Slot], kinds: dict[CompiledPath, str], entry: ReducedDescriptor) -> None:
        for depth in range(1, len(entry.segments) + 1):
            prefix = entry.segments[:depth]
            kind = kinds.get(prefix, "leaf")
            slot = arena.get(prefix)
            if slot is None:
                parent = arena[prefix[:-1]]
                self._check_child(parent, prefix, entry)
                arena[prefix] = _Slot(kind=kind)
                parent.children.append(prefix[-1])
            elif slot.kind != kind:
                raise ConflictingPathError(entry.path, f"{render_path(prefix)!r} is both {slot.kind} and {kind}")

        slot = arena[entry.segments]
        if slot.descriptor is not None:
            raise ConflictingPathError(entry.path, "documented more than once; reduce descriptors before building")
        if slot.kind != "leaf":
            check_documented_kind(entry, kinds)
        slot.descriptor = entry

    def _check_child(self, parent: _Slot, prefix: CompiledPath, entry: ReducedDescriptor) -> None:
        is_array_step = isinstance(prefix[-1], ArrayWildcard)
        if parent.kind == "leaf":
            raise ConflictingPathError(entry.path, f"{render_path(prefix[:-1])!r} is a leaf and cannot hold children")
        if parent.kind == "array" and not is_array_step:
            raise ConflictingPathError(entry.path, f"{render_path(prefix[:-1])!r} is an array, not an object")
        # only the root object may hold the synthetic array property
        if parent.kind == "object" and is_array_step and len(prefix) > 1:
            raise ConflictingPathError(entry.path, f"{render_path(prefix[:-1])!r} is an object, not an array")

    def _assemble(self, arena: dict[CompiledPath, _Slot], prefix: CompiledPath) -> SchemaNode:
        slot = arena[prefix]
        entry = slot.descriptor
        description = entry.description if entry else None
        documented_types = list(entry.types) if entry else []

        if slot.kind == "leaf":
            return LeafNode(types=list(entry.types), description=description, enum=list(entry.enum))

        if slot.kind == "array":
            items = self._assemble(arena, prefix + (ARRAY_WILDCARD,))
            return ArrayNode(items=items, description=description, documented_types=documented_types)

        properties = {}
        required = []
        for segment in slot.children:
            child = prefix + (segment,)
            if isinstance(segment, ArrayWildcard):
                # root-level array: the child slot holds the elements
                name = ROOT_ARRAY_PROPERTY
                properties[name] = ArrayNode(items=self._assemble(arena, child))
            else:
                name = segment.name
                properties[name] = self._assemble(arena, child)
            if self._is_required(arena, child):
                required.append(name)
        return ObjectNode(
            properties=properties,
            required=required,
            description=description,
            documented_types=documented_types,
        )

    def _is_required(self, arena: dict[CompiledPath, _Slot], prefix: CompiledPath) -> bool:
        """A documented position follows its descriptor; an implicit one is
        required when any of its children is."""
        slot = arena[prefix]
        if slot.descriptor is not None:
            return not slot.descriptor.optional
        return any(self._is_required(arena, prefix + (segment,)) for segment in slot.children)

"""Descriptor reduction: one canonical descriptor per distinct structural path."""

import logging

from resource_schema.errors import ConflictingPathError
from resource_schema.schema.base import (
    SCALAR_TYPES,
    ArrayWildcard,
    CompiledPath,
    FieldDescriptor,
    ReducedDescriptor,
    TypeTag,
    render_path,
    resolve_type,
)
from resource_schema.schema.path import compile_path

logger = logging.getLogger(__name__)

# Documented types a container may carry besides its own kind
_CONTAINER_TYPES = {
    "object": frozenset({TypeTag.OBJECT, TypeTag.NULL}),
    "array": frozenset({TypeTag.ARRAY, TypeTag.NULL}),
}


def reduce_descriptors(descriptors: list[FieldDescriptor]) -> list[ReducedDescriptor]:
    """Merge descriptors sharing a compiled path and reject contradictory structure.

    Ignored descriptors are dropped. Output keeps first-appearance order.
    """
    groups: dict[CompiledPath, ReducedDescriptor] = {}

    for descriptor in descriptors:
        if descriptor.ignored:
            logger.debug(f"Dropping ignored field {descriptor.path!r}")
            continue

        segments = compile_path(descriptor.path)
        type_tag = resolve_type(descriptor.type, descriptor.path)
        existing = groups.get(segments)
        if existing is None:
            groups[segments] = ReducedDescriptor(
                path=descriptor.path,
                segments=segments,
                types=(type_tag,),
                optional=descriptor.optional,
                description=_non_blank(descriptor.description),
                enum=_unique(descriptor.enum),
            )
        else:
            groups[segments] = _merge(existing, descriptor, type_tag)

    reduced = list(groups.values())
    kinds = container_kinds(reduced)
    for entry in reduced:
        check_documented_kind(entry, kinds)

    logger.debug(f"Reduced {len(descriptors)} descriptors to {len(reduced)} paths")
    return reduced


def container_kinds(reduced: list[ReducedDescriptor]) -> dict[CompiledPath, str]:
    """Map every path prefix that has children to 'object' or 'array'.

    A prefix followed by a key is an object, one followed by an array marker is
    an array; a prefix followed by both raises ConflictingPathError.
    """
    kinds: dict[CompiledPath, str] = {}
    for entry in reduced:
        for depth, segment in enumerate(entry.segments):
            prefix = entry.segments[:depth]
            kind = "array" if isinstance(segment, ArrayWildcard) else "object"
            seen = kinds.setdefault(prefix, kind)
            if seen != kind:
                raise ConflictingPathError(
                    render_path(prefix) or "<root>",
                    f"used as both {seen} and {kind} (via {entry.path!r})",
                )
    return kinds


def check_documented_kind(entry: ReducedDescriptor, kinds: dict[CompiledPath, str]) -> None:
    """Reject documented types that contradict the children nested below a path.

    A path ending in ``[]`` may be typed ``array``: REST Docs style, it then
    documents the enclosing array rather than its elements.
    """
    kind = kinds.get(entry.segments)
    if kind is None:
        return
    scalars = [t.value for t in entry.types if t in SCALAR_TYPES]
    if scalars:
        raise ConflictingPathError(
            entry.path, f"documented as {', '.join(scalars)} but other fields are nested below it"
        )
    allowed = _CONTAINER_TYPES[kind]
    if entry.segments and isinstance(entry.segments[-1], ArrayWildcard):
        allowed = allowed | {TypeTag.ARRAY}
    unexpected = [t.value for t in entry.types if t not in allowed]
    if unexpected:
        raise ConflictingPathError(
            entry.path, f"documented as {', '.join(unexpected)} but nested fields make it an {kind}"
        )


def _merge(existing: ReducedDescriptor, descriptor: FieldDescriptor, type_tag: TypeTag) -> ReducedDescriptor:
    types = existing.types if type_tag in existing.types else existing.types + (type_tag,)
    # first non-blank description wins
    description = existing.description or _non_blank(descriptor.description)
    return existing.model_copy(
        update={
            "types": types,
            "optional": existing.optional or descriptor.optional,
            "description": description,
            "enum": _unique(list(existing.enum) + list(descriptor.enum)),
        }
    )


def _non_blank(text: str | None) -> str | None:
    if text is None or not text.strip():
        return None
    return text


def _unique(values: list) -> tuple:
    result = []
    for value in values:
        if value not in result:
            result.append(value)
    return tuple(result)

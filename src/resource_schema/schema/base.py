"""Data models shared by the schema pipeline.

Field descriptors come in flat; everything downstream works on compiled
paths (tuples of segments) and reduced descriptors.
"""

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict

from resource_schema.errors import UnknownTypeError


class TypeTag(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"


SCALAR_TYPES = frozenset({TypeTag.STRING, TypeTag.NUMBER, TypeTag.INTEGER, TypeTag.BOOLEAN})

TYPE_ALIASES = {
    "int": TypeTag.INTEGER,
    "long": TypeTag.INTEGER,
    "short": TypeTag.INTEGER,
    "biginteger": TypeTag.INTEGER,
    "float": TypeTag.NUMBER,
    "double": TypeTag.NUMBER,
    "decimal": TypeTag.NUMBER,
    "bigdecimal": TypeTag.NUMBER,
    "bool": TypeTag.BOOLEAN,
    "map": TypeTag.OBJECT,
    "list": TypeTag.ARRAY,
    "set": TypeTag.ARRAY,
    "collection": TypeTag.ARRAY,
    "str": TypeTag.STRING,
    "char": TypeTag.STRING,
    "text": TypeTag.STRING,
}


def resolve_type(type_name: str, path: str | None = None) -> TypeTag:
    """Map a free-form type name (e.g. REST Docs' ``STRING``) onto a TypeTag."""
    normalized = type_name.strip().lower()
    try:
        return TypeTag(normalized)
    except ValueError:
        pass
    if normalized in TYPE_ALIASES:
        return TYPE_ALIASES[normalized]
    raise UnknownTypeError(type_name, path)


class FieldDescriptor(BaseModel):
    """A single documented payload field, e.g. ``items[].name``."""

    path: str
    type: str  # free-form, resolved via resolve_type
    optional: bool = False
    ignored: bool = False
    description: str | None = None
    enum: list[Any] = []


class Key(BaseModel):
    """Object member segment."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["key"] = "key"
    name: str

    def __str__(self) -> str:
        return self.name


class ArrayWildcard(BaseModel):
    """Every element of the array reached so far."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"

    def __str__(self) -> str:
        return "[]"


PathSegment = Union[Key, ArrayWildcard]

ARRAY_WILDCARD = ArrayWildcard()

CompiledPath = tuple[PathSegment, ...]


def render_path(segments: CompiledPath) -> str:
    """Render compiled segments back into canonical path text (``a[].b``)."""
    text = ""
    for segment in segments:
        if isinstance(segment, ArrayWildcard):
            text += "[]"
        elif text:
            text += f".{segment.name}"
        else:
            text = segment.name
    return text


class ReducedDescriptor(BaseModel):
    """One canonical descriptor per distinct compiled path."""

    model_config = ConfigDict(frozen=True)

    path: str  # first textual form seen
    segments: CompiledPath
    types: tuple[TypeTag, ...]
    optional: bool
    description: str | None = None
    enum: tuple[Any, ...] = ()

"""Schema tree nodes produced by the builder and consumed by the formatter."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from resource_schema.schema.base import TypeTag


class LeafNode(BaseModel):
    kind: Literal["leaf"] = "leaf"
    types: list[TypeTag]
    description: str | None = None
    enum: list[Any] = []


class ArrayNode(BaseModel):
    kind: Literal["array"] = "array"
    items: "SchemaNode"
    title: str | None = None
    description: str | None = None
    documented_types: list[TypeTag] = []


class ObjectNode(BaseModel):
    kind: Literal["object"] = "object"
    properties: dict[str, "SchemaNode"] = {}
    required: list[str] = []
    title: str | None = None
    description: str | None = None
    documented_types: list[TypeTag] = []


SchemaNode = Annotated[Union[ObjectNode, ArrayNode, LeafNode], Field(discriminator="kind")]

ArrayNode.model_rebuild()
ObjectNode.model_rebuild()

"""Data models for resource documents.

Inputs come from collaborators (documented parameters, the captured
operation); outputs serialise with camelCase keys.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny
from pydantic.alias_generators import to_camel

from resource_schema.schema.base import FieldDescriptor


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HeaderDescriptor(_CamelModel):
    name: str
    description: str = ""
    type: str = "string"
    optional: bool = False
    ignored: bool = False
    example: str | None = None


class ParameterDescriptor(_CamelModel):
    """A path or query parameter."""

    name: str
    description: str = ""
    type: str = "string"
    optional: bool = False
    ignored: bool = False
    default_value: Any = None


class SecurityRequirements(_CamelModel):
    type: str  # OAUTH2 / BASIC / API_KEY / JWT_BEARER
    required_scopes: list[str] = []


class SchemaRef(_CamelModel):
    """Named schema reference, e.g. for component naming downstream."""

    name: str


class RequestPartDescriptor(_CamelModel):
    name: str
    description: str = ""


# Declared request models: a closed set, selected by ``kind``


class PlainRequest(_CamelModel):
    kind: Literal["plain"] = "plain"


class RequestBody(_CamelModel):
    kind: Literal["body"] = "body"
    request_fields: list[FieldDescriptor] = []
    request_schema: SchemaRef | None = None


class MultipartRequest(_CamelModel):
    kind: Literal["multipart"] = "multipart"
    request_parts: list[RequestPartDescriptor] = []
    request_part_fields: dict[str, list[FieldDescriptor]] = {}
    request_parts_schemas: dict[str, SchemaRef] = {}


RequestObject = Annotated[Union[PlainRequest, RequestBody, MultipartRequest], Field(discriminator="kind")]


class ResourceParameters(_CamelModel):
    """Everything the caller documents about one operation."""

    summary: str | None = None
    description: str | None = None
    private_resource: bool = False
    deprecated: bool = False
    tags: list[str] = []
    request_headers: list[HeaderDescriptor] = []
    response_headers: list[HeaderDescriptor] = []
    path_parameters: list[ParameterDescriptor] = []
    request_parameters: list[ParameterDescriptor] = []
    request: RequestObject | None = None
    response_fields: list[FieldDescriptor] = []
    response_schema: SchemaRef | None = None


# Captured exchange, as handed over by the capturing layer


class CapturedPart(_CamelModel):
    name: str
    body: str = ""
    headers: dict[str, str] = {}


class CapturedRequest(_CamelModel):
    method: str
    uri_template: str | None = None
    headers: dict[str, str] = {}
    body: str = ""
    parts: list[CapturedPart] = []


class CapturedResponse(_CamelModel):
    status: int = 200
    headers: dict[str, str] = {}
    body: str = ""


class CapturedOperation(_CamelModel):
    name: str
    request: CapturedRequest
    response: CapturedResponse
    security_requirements: SecurityRequirements | None = None


# Assembled resource document


class BaseRequestModel(_CamelModel):
    path: str
    method: str
    content_type: str | None = None
    headers: list[HeaderDescriptor] = []
    path_parameters: list[ParameterDescriptor] = []
    request_parameters: list[ParameterDescriptor] = []
    security_requirements: SecurityRequirements | None = None


class RequestBodyModel(BaseRequestModel):
    schema_ref: SchemaRef | None = Field(default=None, alias="schema")
    json_schema: dict | None = None
    request_fields: list[FieldDescriptor] = []
    example: str | None = None


class RequestPartModel(_CamelModel):
    schema_ref: SchemaRef | None = Field(default=None, alias="schema")
    json_schema: dict | None = None
    example: str | None = None
    part_name: str
    description: str | None = None
    request_fields: list[FieldDescriptor] = []


class MultipartRequestModel(BaseRequestModel):
    request_parts: list[RequestPartModel] = []


class ResponseModel(_CamelModel):
    status: int
    content_type: str | None = None
    schema_ref: SchemaRef | None = Field(default=None, alias="schema")
    json_schema: dict | None = None
    headers: list[HeaderDescriptor] = []
    response_fields: list[FieldDescriptor] = []
    example: str | None = None


class ResourceModel(_CamelModel):
    operation_id: str
    summary: str | None = None
    description: str | None = None
    private_resource: bool = False
    deprecated: bool = False
    tags: list[str] = []
    request: SerializeAsAny[BaseRequestModel]
    response: ResponseModel

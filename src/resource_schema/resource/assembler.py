"""Resource model assembler.

Combines documented parameters with a captured operation into one resource
document, generating JSON schemas for the request body (or each multipart
part) and the response body.
"""

import logging
from urllib.parse import urlsplit

from resource_schema.errors import (
    MissingRequestModelError,
    MissingUrlTemplateError,
    RequestModelMismatchError,
    UndocumentedRequestPartError,
)
from resource_schema.resource.base import (
    BaseRequestModel,
    CapturedOperation,
    HeaderDescriptor,
    MultipartRequest,
    MultipartRequestModel,
    PlainRequest,
    RequestBody,
    RequestBodyModel,
    RequestPartModel,
    ResourceModel,
    ResourceParameters,
    ResponseModel,
    SchemaRef,
)
from resource_schema.schema.base import FieldDescriptor
from resource_schema.schema.generator import generate_schema_dict

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/json"
MULTIPART_FORM_DATA = "multipart/form-data"


class ResourceModelAssembler:
    """Builds a ResourceModel for one captured operation."""

    def __init__(self, parameters: ResourceParameters):
        self.parameters = parameters

    def assemble(self, operation: CapturedOperation) -> ResourceModel:
        params = self.parameters
        logger.debug(f"Assembling resource model for operation {operation.name!r}")

        response = operation.response
        has_response_body = bool(response.body)
        response_fields = _active(params.response_fields) if has_response_body else []

        return ResourceModel(
            operation_id=operation.name,
            summary=params.summary or params.description,
            description=params.description or params.summary,
            private_resource=params.private_resource,
            deprecated=params.deprecated,
            tags=self._tags(operation),
            request=self._request_model(operation),
            response=ResponseModel(
                status=response.status,
                content_type=_content_type(response.headers) if has_response_body else None,
                schema_ref=params.response_schema,
                json_schema=_schema_for(response_fields, params.response_schema),
                headers=with_header_examples(params.response_headers, response.headers),
                response_fields=response_fields,
                example=response.body if has_response_body else None,
            ),
        )

    def _tags(self, operation: CapturedOperation) -> list[str]:
        if self.parameters.tags:
            return list(dict.fromkeys(self.parameters.tags))
        segments = [s for s in _uri_path(operation).split("/") if s]
        return segments[:1]

    def _request_model(self, operation: CapturedOperation) -> BaseRequestModel:
        params = self.parameters
        captured = operation.request
        has_body = bool(captured.body) or bool(captured.parts)
        content_type = _content_type(captured.headers) if has_body else None

        verify_request_model(content_type, params.request)

        common = dict(
            path=_uri_path(operation),
            method=captured.method.upper(),
            content_type=content_type,
            headers=with_header_examples(params.request_headers, captured.headers),
            path_parameters=[p for p in params.path_parameters if not p.ignored],
            request_parameters=[p for p in params.request_parameters if not p.ignored],
            security_requirements=operation.security_requirements,
        )

        request = params.request
        if request is None or isinstance(request, PlainRequest):
            return BaseRequestModel(**common)

        if isinstance(request, RequestBody):
            fields = _active(request.request_fields) if has_body else []
            return RequestBodyModel(
                **common,
                schema_ref=request.request_schema,
                json_schema=_schema_for(fields, request.request_schema),
                request_fields=fields,
                example=captured.body if has_body else None,
            )

        if isinstance(request, MultipartRequest):
            return MultipartRequestModel(**common, request_parts=_request_parts(request, operation))

        raise TypeError(f"Unsupported request model: {type(request).__name__}")


def verify_request_model(content_type: str | None, request) -> None:
    """Reject multipart requests without a matching multipart request model."""
    if content_type is None or _media_type(content_type) != MULTIPART_FORM_DATA:
        return
    if request is None:
        raise MissingRequestModelError(content_type)
    if not isinstance(request, MultipartRequest):
        raise RequestModelMismatchError(content_type, request.kind)


def with_header_examples(descriptors: list[HeaderDescriptor], headers: dict[str, str]) -> list[HeaderDescriptor]:
    """Return non-ignored header descriptors with examples taken from captured headers.

    Descriptors that already carry an example keep it; inputs are not modified.
    """
    result = []
    for descriptor in descriptors:
        if descriptor.ignored:
            continue
        value = _header(headers, descriptor.name)
        if descriptor.example is None and value is not None:
            descriptor = descriptor.model_copy(update={"example": value})
        result.append(descriptor)
    return result


def _request_parts(request: MultipartRequest, operation: CapturedOperation) -> list[RequestPartModel]:
    descriptions = {part.name: part.description for part in request.request_parts}
    parts = []
    for part in operation.request.parts:
        if part.name not in request.request_part_fields:
            raise UndocumentedRequestPartError(part.name)
        fields = _active(request.request_part_fields[part.name])
        schema_ref = request.request_parts_schemas.get(part.name)
        parts.append(
            RequestPartModel(
                schema_ref=schema_ref,
                json_schema=_schema_for(fields, schema_ref),
                example=part.body,
                part_name=part.name,
                description=descriptions.get(part.name),
                request_fields=fields,
            )
        )
    return parts


def _schema_for(fields: list[FieldDescriptor], schema_ref: SchemaRef | None) -> dict | None:
    if not fields:
        return None
    return generate_schema_dict(fields, title=schema_ref.name if schema_ref else None)


def _active(fields: list[FieldDescriptor]) -> list[FieldDescriptor]:
    return [f for f in fields if not f.ignored]


def _uri_path(operation: CapturedOperation) -> str:
    template = operation.request.uri_template
    if not template or not template.strip():
        raise MissingUrlTemplateError(operation.name)
    return urlsplit(template.strip()).path


def _content_type(headers: dict[str, str]) -> str:
    return _header(headers, "Content-Type") or DEFAULT_CONTENT_TYPE


def _media_type(content_type: str) -> str:
    return content_type.split(";")[0].strip().lower()


def _header(headers: dict[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name.lower():
            return value
    return None

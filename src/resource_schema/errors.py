"""Errors raised while generating schemas and resource documents.

Every error aborts the current generation call; nothing is retried.
"""


class SchemaGenerationError(Exception):
    """Base class for all generation errors."""


class MalformedPathError(SchemaGenerationError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed field path {path!r}: {reason}")


class ConflictingPathError(SchemaGenerationError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Conflicting field path {path!r}: {reason}")


class UnknownTypeError(SchemaGenerationError):
    def __init__(self, type_name: str, path: str | None = None):
        self.type_name = type_name
        self.path = path
        where = f" for field {path!r}" if path else ""
        super().__init__(f"Unknown field type {type_name!r}{where}")


class MissingUrlTemplateError(SchemaGenerationError):
    def __init__(self, operation: str | None = None):
        self.operation = operation
        where = f" for operation {operation!r}" if operation else ""
        super().__init__(
            f"Missing URL template{where} - the captured request must carry the URI template it was built from"
        )


class MissingRequestModelError(SchemaGenerationError):
    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"Missing request model for multipart request (content type {content_type!r})")


class RequestModelMismatchError(SchemaGenerationError):
    def __init__(self, content_type: str, variant: str):
        self.content_type = content_type
        self.variant = variant
        super().__init__(
            f"Request model {variant!r} does not match multipart request (content type {content_type!r})"
        )


class UndocumentedRequestPartError(SchemaGenerationError):
    def __init__(self, part_name: str):
        self.part_name = part_name
        super().__init__(
            f"Captured request part {part_name!r} has no entry in the multipart request fields; "
            f"document it (an empty field list is fine for binary parts)"
        )

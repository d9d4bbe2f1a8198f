"""Custom exceptions for restfulgen.

Every failure in restfulgen is fatal to the generation run: nothing is
retried or skipped, and no output is written when one of these is raised.
The hierarchy lets callers catch everything with ``RestfulGenError`` or
narrow down to schema, code generation, configuration or output problems.
"""


class RestfulGenError(Exception):
    """Base exception for all restfulgen errors.

    Example:
        try:
            codegen.generate()
        except RestfulGenError as e:
            print(f"restfulgen error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(RestfulGenError):
    """Base exception for schema-related errors."""

    pass


class SchemaLoadError(SchemaError):
    """Failed to load an OpenAPI document from a source.

    Attributes:
        source: The source path or URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load schema from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """The document does not have the structure of an OpenAPI 3.0 document.

    Attributes:
        source: The source path or URL of the invalid document.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Schema validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class UnsupportedDocumentVersion(SchemaError):
    """The document is neither OpenAPI 3.0.x nor an upgradable Swagger 2.0 one.

    Attributes:
        version: The version string found in the document, if any.
    """

    def __init__(self, version: str | None = None):
        self.version = version
        if version:
            message = (
                f"Unsupported document version '{version}', "
                'only OpenAPI 3.0.x (or Swagger 2.0) documents can be converted'
            )
        else:
            message = 'The document has no `openapi` version field'
        super().__init__(message)


class SchemaReferenceError(SchemaError):
    """Failed to resolve a $ref reference in the document.

    Attributes:
        reference: The $ref string that could not be resolved.
        reason: Explanation of why the reference couldn't be resolved.
    """

    def __init__(self, reference: str, reason: str | None = None):
        self.reference = reference
        self.reason = reason
        message = f"Failed to resolve reference '{reference}'"
        if reason:
            message += f': {reason}'
        super().__init__(message)


class UnsupportedReference(SchemaReferenceError):
    """A $ref points outside of the supported ``#/components/*`` kinds."""

    def __init__(self, reference: str):
        super().__init__(
            reference,
            'only $ref included into `#/components/schemas`, `#/components/responses`, '
            '`#/components/parameters` and `#/components/requestBodies` can be resolved',
        )


class CodeGenerationError(RestfulGenError):
    """Error during code generation.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class TypeGenerationError(CodeGenerationError):
    """Error synthesizing a type expression from a schema node."""

    pass


class MissingItemsSchema(TypeGenerationError):
    """An array schema has no ``items`` sub-schema.

    Attributes:
        schema_path: Where the array schema was found, if known.
    """

    def __init__(self, schema_path: str | None = None):
        self.schema_path = schema_path
        super().__init__(
            'All arrays must have an `items` key defined', context=schema_path
        )


class InvalidEnumError(TypeGenerationError):
    """A string schema lists enum values that are not strings.

    Attributes:
        values: The offending enum values.
    """

    def __init__(self, values: list, schema_path: str | None = None):
        self.values = values
        super().__init__(
            f'String enums can only hold string values, got {values!r}',
            context=schema_path,
        )


class EndpointGenerationError(CodeGenerationError):
    """Error generating the binding of one operation.

    Attributes:
        operation_id: The operationId of the operation, if it has one.
        method: The HTTP method of the operation.
        path: The route template of the operation.
    """

    def __init__(
        self,
        message: str,
        operation_id: str | None = None,
        method: str | None = None,
        path: str | None = None,
        cause: Exception | None = None,
    ):
        self.operation_id = operation_id
        self.method = method
        self.path = path
        context = operation_id
        if not context and method and path:
            context = f'{method.upper()} {path}'
        super().__init__(message, context=context, cause=cause)


class MissingOperationId(EndpointGenerationError):
    """An operation has no ``operationId``."""

    def __init__(self, method: str, path: str):
        super().__init__(
            'Every path must have an operationId - '
            f'No operationId set for {method} {path}',
            method=method,
            path=path,
        )


class DuplicateOperationId(EndpointGenerationError):
    """Two operations of the same document share an ``operationId``."""

    def __init__(self, operation_id: str, method: str, path: str):
        super().__init__(
            f'"{operation_id}" is duplicated in your schema definition!',
            operation_id=operation_id,
            method=method,
            path=path,
        )


class UndeclaredPathParameter(EndpointGenerationError):
    """A route placeholder has no matching ``in: path`` parameter.

    Attributes:
        name: The placeholder name found in the route.
    """

    def __init__(self, name: str, operation_id: str, method: str, path: str):
        self.name = name
        super().__init__(
            f"The path param '{name}' can't be found in parameters",
            operation_id=operation_id,
            method=method,
            path=path,
        )


class ConfigurationError(RestfulGenError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(RestfulGenError):
    """Error writing generated output.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)

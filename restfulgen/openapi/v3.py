"""Pydantic models for the parts of an OpenAPI 3.0 document used by restfulgen.

Only the objects needed to synthesize types and bindings are modelled.
Unknown keys are kept (``extra='allow'``) so that vendor extensions and
unused OpenAPI features never make a valid document fail to load.

Schema nodes are a tagged variant: a raw ``$ref`` parses into ``Reference``
(sibling keys are dropped, as OpenAPI 3.0 mandates), anything else into
``Schema``. ``Schema.kind`` and ``Schema.shape`` expose the discriminant the
type synthesizers dispatch on.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    PrivateAttr,
    Tag,
    field_validator,
    model_validator,
)

__all__ = [
    'HTTP_METHODS',
    'Components',
    'Info',
    'MediaType',
    'ObjectShape',
    'OpenAPI',
    'Operation',
    'Parameter',
    'PathItem',
    'Reference',
    'RequestBody',
    'Response',
    'Schema',
    'SchemaKind',
]

HTTP_METHODS = ('get', 'put', 'post', 'delete', 'options', 'head', 'patch', 'trace')

NUMERIC_TYPES = {'integer', 'long', 'float', 'double', 'number', 'int32', 'int64'}
STRING_LIKE_TYPES = {'byte', 'binary', 'date', 'datetime', 'date-time', 'password'}


class SchemaKind(Enum):
    """Scalar dispatch of a schema node, keyed on its ``type``."""

    NULL = 'null'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    STRING = 'string'
    ARRAY = 'array'
    OBJECT = 'object'


class ObjectShape(Enum):
    """Composition of an object-like schema node, in precedence order."""

    ALL_OF = 'allOf'
    ONE_OF = 'oneOf'
    PROPERTIES = 'properties'
    ADDITIONAL_PROPERTIES = 'additionalProperties'
    EMPTY = 'empty'
    UNKNOWN = 'unknown'


def _reference_or_other(data: Any) -> str:
    if isinstance(data, dict):
        return 'ref' if '$ref' in data else 'other'
    return 'ref' if isinstance(data, Reference) else 'other'


class Reference(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    ref: str = Field(..., alias='$ref')


class Schema(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    type: str | None = None
    enum: list[Any] | None = None
    items: SchemaOrRef | None = None
    properties: dict[str, SchemaOrRef] | None = None
    required: list[str] | None = None
    additionalProperties: bool | SchemaOrRef | None = None
    allOf: list[SchemaOrRef] | None = None
    oneOf: list[SchemaOrRef] | None = None
    nullable: bool | None = None

    @property
    def kind(self) -> SchemaKind:
        """Scalar kind of the node; unknown or missing types are objects."""
        type_ = (self.type or '').lower()
        if type_ in NUMERIC_TYPES:
            return SchemaKind.NUMBER
        if type_ == 'null':
            return SchemaKind.NULL
        if type_ == 'boolean':
            return SchemaKind.BOOLEAN
        if type_ == 'string' or type_ in STRING_LIKE_TYPES:
            return SchemaKind.STRING
        if type_ == 'array':
            return SchemaKind.ARRAY
        return SchemaKind.OBJECT

    @property
    def shape(self) -> ObjectShape:
        """First matching composition: allOf, oneOf, properties, additionalProperties."""
        if self.allOf:
            return ObjectShape.ALL_OF
        if self.oneOf:
            return ObjectShape.ONE_OF
        if self.properties is not None:
            return ObjectShape.PROPERTIES
        if self.additionalProperties is not None and self.additionalProperties is not False:
            return ObjectShape.ADDITIONAL_PROPERTIES
        if (self.type or '').lower() == 'object':
            return ObjectShape.EMPTY
        return ObjectShape.UNKNOWN


SchemaOrRef = Annotated[
    Annotated[Reference, Tag('ref')] | Annotated[Schema, Tag('other')],
    Discriminator(_reference_or_other),
]


class MediaType(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    schema_: SchemaOrRef | None = Field(None, alias='schema')


class Parameter(BaseModel):
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    name: str
    in_: str = Field(..., alias='in')
    description: str | None = None
    required: bool | None = None
    schema_: SchemaOrRef | None = Field(None, alias='schema')


ParameterOrRef = Annotated[
    Annotated[Reference, Tag('ref')] | Annotated[Parameter, Tag('other')],
    Discriminator(_reference_or_other),
]


class RequestBody(BaseModel):
    model_config = ConfigDict(extra='allow')

    content: dict[str, MediaType] | None = None


RequestBodyOrRef = Annotated[
    Annotated[Reference, Tag('ref')] | Annotated[RequestBody, Tag('other')],
    Discriminator(_reference_or_other),
]


class Response(BaseModel):
    model_config = ConfigDict(extra='allow')

    content: dict[str, MediaType] | None = None


ResponseOrRef = Annotated[
    Annotated[Reference, Tag('ref')] | Annotated[Response, Tag('other')],
    Discriminator(_reference_or_other),
]


def _stringify_keys(value: Any) -> Any:
    # YAML reads unquoted status codes (200:) as integers
    if isinstance(value, dict):
        return {str(key): item for key, item in value.items()}
    return value


class Operation(BaseModel):
    model_config = ConfigDict(extra='allow')

    operationId: str | None = None
    summary: str | None = None
    description: str | None = None
    parameters: list[ParameterOrRef] | None = None
    requestBody: RequestBodyOrRef | None = None
    responses: dict[str, ResponseOrRef | None] = Field(default_factory=dict)

    @field_validator('responses', mode='before')
    @classmethod
    def _normalize_status_codes(cls, value: Any) -> Any:
        return _stringify_keys(value)


class PathItem(BaseModel):
    model_config = ConfigDict(extra='allow')

    parameters: list[ParameterOrRef] | None = None
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None

    _method_order: list[str] = PrivateAttr(default_factory=list)

    @model_validator(mode='wrap')
    @classmethod
    def _remember_method_order(cls, data: Any, handler) -> PathItem:
        path_item = handler(data)
        if isinstance(data, dict):
            path_item._method_order = [key for key in data if key in HTTP_METHODS]
        return path_item

    def operations(self) -> Iterator[tuple[str, Operation]]:
        """Yield ``(method, operation)`` pairs in the order the document lists them."""
        for method in self._method_order or HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation


class Components(BaseModel):
    model_config = ConfigDict(extra='allow')

    schemas: dict[str, SchemaOrRef] | None = None
    responses: dict[str, ResponseOrRef] | None = None
    parameters: dict[str, ParameterOrRef] | None = None
    requestBodies: dict[str, RequestBodyOrRef] | None = None


class Info(BaseModel):
    model_config = ConfigDict(extra='allow')

    title: str | None = None
    version: str | None = None


class OpenAPI(BaseModel):
    model_config = ConfigDict(extra='allow')

    openapi: str
    info: Info | None = None
    servers: list[dict[str, Any]] | None = None
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components | None = None


Schema.model_rebuild()
MediaType.model_rebuild()
Parameter.model_rebuild()
Operation.model_rebuild()
PathItem.model_rebuild()
Components.model_rebuild()
OpenAPI.model_rebuild()

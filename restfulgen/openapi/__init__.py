from restfulgen.openapi.v2 import SwaggerUpgrader, upgrade_swagger
from restfulgen.openapi.v3 import (
    HTTP_METHODS,
    Components,
    MediaType,
    ObjectShape,
    OpenAPI,
    Operation,
    Parameter,
    PathItem,
    Reference,
    RequestBody,
    Response,
    Schema,
    SchemaKind,
)

__all__ = [
    'HTTP_METHODS',
    'Components',
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
    'SwaggerUpgrader',
    'upgrade_swagger',
]

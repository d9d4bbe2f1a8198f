"""restfulgen - Generate typed restful-react components from OpenAPI specifications.

restfulgen reads an OpenAPI 3.0 document (Swagger 2.0 documents are upgraded
on the fly) and writes a TSX module with one TypeScript declaration per
component schema and one typed ``Get``/``Mutate`` component per operation.

Quick Start:
    >>> from restfulgen import Codegen, DocumentConfig
    >>>
    >>> config = DocumentConfig(
    ...     source="https://api.example.com/openapi.json",
    ...     output="./src/api.tsx"
    ... )
    >>> codegen = Codegen(config)
    >>> codegen.generate()

CLI Usage:
    $ restfulgen generate --file ./api.yaml --output ./src/api.tsx
    $ restfulgen generate --config restfulgen.yaml
"""

from restfulgen._version import version as __version__
from restfulgen.codegen.codegen import Codegen, generate_source
from restfulgen.codegen.schema import SchemaLoader, SchemaResolver
from restfulgen.codegen.types import TypeGenerator
from restfulgen.config import CodegenConfig, DocumentConfig, get_config
from restfulgen.exceptions import (
    CodeGenerationError,
    ConfigurationError,
    DuplicateOperationId,
    EndpointGenerationError,
    InvalidEnumError,
    MissingItemsSchema,
    MissingOperationId,
    OutputError,
    RestfulGenError,
    SchemaError,
    SchemaLoadError,
    SchemaReferenceError,
    SchemaValidationError,
    TypeGenerationError,
    UndeclaredPathParameter,
    UnsupportedDocumentVersion,
    UnsupportedReference,
)

__all__ = [
    '__version__',
    # Main classes
    'Codegen',
    'SchemaLoader',
    'SchemaResolver',
    'TypeGenerator',
    'generate_source',
    # Configuration
    'CodegenConfig',
    'DocumentConfig',
    'get_config',
    # Exceptions
    'RestfulGenError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'SchemaReferenceError',
    'UnsupportedReference',
    'UnsupportedDocumentVersion',
    'CodeGenerationError',
    'TypeGenerationError',
    'MissingItemsSchema',
    'InvalidEnumError',
    'EndpointGenerationError',
    'MissingOperationId',
    'DuplicateOperationId',
    'UndeclaredPathParameter',
    'ConfigurationError',
    'OutputError',
]

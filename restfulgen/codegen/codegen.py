"""Code generation module for restfulgen.

This module provides the main Codegen class that orchestrates the generation
of typed restful-react bindings from OpenAPI specifications, and
``generate_source``, the pure document-to-text entry point it is built on.
"""

import logging

from restfulgen.codegen.emitter import CodeEmitter, RestfulReactEmitter, write_source
from restfulgen.codegen.endpoints import SUPPORTED_METHODS, Binding, EndpointFactory
from restfulgen.codegen.schema import SchemaLoader, SchemaResolver
from restfulgen.codegen.types import TypeGenerator
from restfulgen.config import DocumentConfig
from restfulgen.exceptions import UnsupportedDocumentVersion
from restfulgen.openapi import Components, OpenAPI

logger = logging.getLogger(__name__)

__all__ = ['Codegen', 'generate_bindings', 'generate_source']


def generate_bindings(openapi: OpenAPI, factory: EndpointFactory) -> list[Binding]:
    """Build the bindings of every supported operation, in document order.

    Operation ids seen so far are passed to each ``build`` call, so the
    first duplicate in document order aborts the run.
    """
    operation_ids: frozenset[str] = frozenset()
    bindings: list[Binding] = []

    for path, path_item in openapi.paths.items():
        for method, operation in path_item.operations():
            if method not in SUPPORTED_METHODS:
                continue
            binding = factory.build(
                path, method, operation, path_item.parameters, operation_ids
            )
            operation_ids = operation_ids | {binding.operation_id}
            bindings.append(binding)

    return bindings


def generate_source(
    openapi: OpenAPI,
    emitter: CodeEmitter | None = None,
    include_responses: bool = True,
) -> str:
    """Generate the bindings source of a whole document.

    Args:
        openapi: A validated OpenAPI 3.0 document.
        emitter: The emitter rendering the output, restful-react by default.
        include_responses: Whether to declare ``components.responses`` and
            ``components.requestBodies``.

    Returns:
        The generated source text.

    Raises:
        RestfulGenError: On the first problem found; nothing is returned then.
    """
    if not openapi.openapi.startswith('3.0'):
        raise UnsupportedDocumentVersion(openapi.openapi)

    typegen = TypeGenerator()
    factory = EndpointFactory(SchemaResolver(openapi), typegen)
    components = openapi.components or Components()

    declarations = [typegen.schema_declarations(components.schemas)]
    if include_responses:
        declarations.append(
            typegen.component_declarations(components.responses, 'Response')
        )
        declarations.append(
            typegen.component_declarations(components.requestBodies, 'RequestBody')
        )

    bindings = generate_bindings(openapi, factory)
    logger.info(
        'Generated %d declarations and %d bindings',
        sum(len(block) for block in declarations),
        len(bindings),
    )

    return (emitter or RestfulReactEmitter()).emit(declarations, bindings)


class Codegen:
    """Main code generator for one configured document.

    Attributes:
        config: The DocumentConfig containing source and output settings.
        openapi: The loaded OpenAPI document (populated after _load_schema).

    Example:
        >>> from restfulgen.config import DocumentConfig
        >>> from restfulgen.codegen.codegen import Codegen
        >>>
        >>> config = DocumentConfig(
        ...     source="./petstore.yaml",
        ...     output="./src/api.tsx"
        ... )
        >>> codegen = Codegen(config)
        >>> codegen.generate()
    """

    def __init__(
        self, config: DocumentConfig, schema_loader: SchemaLoader | None = None
    ):
        """Initialize the code generator.

        Args:
            config: Configuration specifying source document and output file.
            schema_loader: Optional custom schema loader. If not provided,
                          a default SchemaLoader will be created.
        """
        self.config = config
        self.openapi: OpenAPI | None = None
        self._schema_loader = schema_loader or SchemaLoader()

    def _load_schema(self) -> None:
        """Load and validate the OpenAPI document from the configured source.

        Raises:
            SchemaLoadError: If the document cannot be loaded from the source.
            UnsupportedDocumentVersion: If it is not OpenAPI 3.0 or Swagger 2.0.
            SchemaValidationError: If it is not a valid OpenAPI document.
        """
        self.openapi = self._schema_loader.load(self.config.source)

    def generate_source(self) -> str:
        """Load the document if needed and return the generated source."""
        if self.openapi is None:
            self._load_schema()

        emitter = RestfulReactEmitter(
            runtime_module=self.config.runtime_module,
            custom_import=self.config.custom_import,
            hooks=self.config.hooks,
        )
        return generate_source(
            self.openapi, emitter, include_responses=self.config.include_responses
        )

    def generate(self) -> str:
        """Generate the bindings and write them to the configured output.

        The output file is only written once the whole document has been
        generated successfully.

        Returns:
            The path of the written file.
        """
        source = self.generate_source()
        return write_source(source, self.config.output)

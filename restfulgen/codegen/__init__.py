"""Code generation module for restfulgen.

This module provides the core functionality for turning an OpenAPI 3.0
document into typed restful-react bindings.

Main Components:
    - Codegen: The orchestrator for one configured document
    - SchemaLoader: Loads OpenAPI documents from URLs or files
    - SchemaResolver: Resolves $ref pointers to type names and parameters
    - TypeGenerator: Synthesizes TypeScript types from schema nodes
    - EndpointFactory: Builds the binding of each operation
    - CodeEmitter: Renders declarations and bindings as text

Example:
    >>> from restfulgen.codegen import Codegen
    >>> from restfulgen.config import DocumentConfig
    >>>
    >>> config = DocumentConfig(source="./openapi.yaml", output="./src/api.tsx")
    >>> Codegen(config).generate()
"""

from restfulgen.codegen.codegen import Codegen, generate_bindings, generate_source
from restfulgen.codegen.emitter import CodeEmitter, RestfulReactEmitter, write_source
from restfulgen.codegen.endpoints import (
    Binding,
    BindingParameter,
    EndpointFactory,
    ParameterClassifier,
)
from restfulgen.codegen.schema import SchemaLoader, SchemaResolver, get_ref
from restfulgen.codegen.types import Declaration, TypeGenerator
from restfulgen.codegen.utils import get_params_in_path, pascal

__all__ = [
    'Binding',
    'BindingParameter',
    'CodeEmitter',
    'Codegen',
    'Declaration',
    'EndpointFactory',
    'ParameterClassifier',
    'RestfulReactEmitter',
    'SchemaLoader',
    'SchemaResolver',
    'TypeGenerator',
    'generate_bindings',
    'generate_source',
    'get_params_in_path',
    'get_ref',
    'pascal',
    'write_source',
]

"""Schema loading and reference resolution for OpenAPI documents.

This module provides utilities for:
- Loading OpenAPI documents from URLs or local files, in JSON or YAML
- Upgrading Swagger 2.0 documents and rejecting anything that is not OpenAPI 3.0
- Turning ``$ref`` pointers into type names and resolving parameter references
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from restfulgen.codegen.utils import is_url, pascal
from restfulgen.exceptions import (
    SchemaLoadError,
    SchemaReferenceError,
    SchemaValidationError,
    UnsupportedDocumentVersion,
    UnsupportedReference,
)
from restfulgen.openapi import OpenAPI, Parameter, Reference, upgrade_swagger

logger = logging.getLogger(__name__)

__all__ = [
    'REF_SUFFIXES',
    'SchemaLoader',
    'SchemaResolver',
    'get_ref',
]

# Component kinds that can be referenced, with the suffix of their type name
REF_SUFFIXES = {
    '#/components/schemas/': '',
    '#/components/responses/': 'Response',
    '#/components/parameters/': 'Parameter',
    '#/components/requestBodies/': 'RequestBody',
}


# =============================================================================
# Schema Loader
# =============================================================================


class SchemaLoader:
    """Loads OpenAPI documents from URLs or file paths.

    Swagger 2.0 documents are upgraded to OpenAPI 3.0 on the fly; any other
    version is rejected. The warnings produced by the upgrade are kept and
    can be read back with ``get_upgrade_warnings``.

    Example:
        >>> loader = SchemaLoader()
        >>> openapi = loader.load('https://petstore3.swagger.io/api/v3/openapi.json')
        >>> # or
        >>> openapi = loader.load('./petstore.yaml')
    """

    def __init__(self, http_client: httpx.Client | None = None):
        """Initialize the schema loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
                        If not provided, ``httpx.get`` is used.
        """
        self._http_client = http_client
        self._upgrade_warnings: list[str] = []

    def load(self, source: str) -> OpenAPI:
        """Load and validate an OpenAPI document from a URL or file path.

        Args:
            source: URL or file path to the document.

        Returns:
            The validated OpenAPI 3.0 document.

        Raises:
            SchemaLoadError: If the document cannot be read or parsed.
            UnsupportedDocumentVersion: If it is not OpenAPI 3.0 or Swagger 2.0.
            SchemaValidationError: If it does not have an OpenAPI structure.
        """
        logger.info('Loading OpenAPI document from %s', source)
        if is_url(source):
            content = self._load_from_url(source)
        else:
            content = self._load_from_file(source)

        if not isinstance(content, dict):
            raise SchemaLoadError(
                source, cause=ValueError('the document is not a mapping')
            )
        return self.parse(content, source)

    def parse(self, content: dict[str, Any], source: str = '<document>') -> OpenAPI:
        """Validate an already decoded document, upgrading Swagger 2.0 first.

        Args:
            content: The decoded JSON or YAML document.
            source: Name of the document, used in error messages.

        Returns:
            The validated OpenAPI 3.0 document.
        """
        if 'swagger' in content:
            version = str(content['swagger'])
            if version != '2.0':
                raise UnsupportedDocumentVersion(version)
            logger.info('Upgrading Swagger %s document %s to OpenAPI 3.0', version, source)
            content, warnings = upgrade_swagger(content)
            self._upgrade_warnings.extend(warnings)

        version = content.get('openapi')
        if not version:
            raise UnsupportedDocumentVersion()
        if not str(version).startswith('3.0'):
            raise UnsupportedDocumentVersion(str(version))

        try:
            return OpenAPI.model_validate(content)
        except ValidationError as e:
            errors = [
                f'{".".join(str(loc) for loc in error["loc"])}: {error["msg"]}'
                for error in e.errors()
            ]
            raise SchemaValidationError(source, errors) from e

    def get_upgrade_warnings(self) -> list[str]:
        """Get any warnings generated during a Swagger upgrade."""
        return self._upgrade_warnings.copy()

    def _load_from_url(self, url: str) -> Any:
        """Load document content from a URL."""
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=30.0)

            response.raise_for_status()
            content_type = response.headers.get('content-type', '')

            if 'yaml' in content_type or url.endswith(('.yaml', '.yml')):
                return yaml.safe_load(response.text)
            return json.loads(response.text)

        except httpx.HTTPError as e:
            raise SchemaLoadError(url, cause=e)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(url, cause=e)

    def _load_from_file(self, file_path: str) -> Any:
        """Load document content from a file."""
        path = Path(file_path)
        if not path.exists():
            raise SchemaLoadError(
                file_path, cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() in ('.yaml', '.yml'):
                return yaml.safe_load(content)
            if path.suffix.lower() == '.json':
                return json.loads(content)
            # YAML is a superset of JSON
            return yaml.safe_load(content)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(file_path, cause=e)


# =============================================================================
# Schema Resolver
# =============================================================================


def get_ref(ref: str) -> str:
    """Turn a ``$ref`` pointer into the name of the type generated for it.

    Args:
        ref: A pointer such as ``#/components/schemas/Pet``.

    Returns:
        The PascalCase component name with its kind suffix, e.g. ``Pet`` or
        ``NotFoundResponse``.

    Raises:
        UnsupportedReference: If the pointer is not in a supported component kind.
    """
    for prefix, suffix in REF_SUFFIXES.items():
        if ref.startswith(prefix):
            return pascal(ref[len(prefix) :]) + suffix
    raise UnsupportedReference(ref)


class SchemaResolver:
    """Resolves references against the components of one document."""

    def __init__(self, openapi: OpenAPI):
        self.openapi = openapi

    def resolve_parameter(self, param: Parameter | Reference) -> Parameter:
        """Return the concrete parameter behind a (possibly chained) reference.

        Raises:
            UnsupportedReference: If a reference does not point into
                ``#/components/parameters``.
            SchemaReferenceError: If the referenced parameter does not exist.
        """
        prefix = '#/components/parameters/'
        seen: set[str] = set()

        while isinstance(param, Reference):
            ref = param.ref
            if not ref.startswith(prefix):
                raise UnsupportedReference(ref)
            if ref in seen:
                raise SchemaReferenceError(ref, 'circular parameter reference')
            seen.add(ref)

            components = self.openapi.components
            parameters = (components.parameters if components else None) or {}
            name = ref[len(prefix) :]
            if name not in parameters:
                raise SchemaReferenceError(ref, 'not found in components.parameters')
            param = parameters[name]

        return param

"""Swagger 2.0 to OpenAPI 3.0 conversion.

The conversion works on the raw document dictionary and only covers what
matters for type synthesis: definitions, parameters, request bodies and
responses move to their OpenAPI 3.0 locations, and every ``$ref`` is
rewritten to point into ``#/components``. Lossy or defaulted steps are
reported as warnings.
"""

import copy
import logging
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ['SwaggerUpgrader', 'upgrade_swagger']

METHODS = ('get', 'put', 'post', 'delete', 'options', 'head', 'patch')
DEFAULT_MEDIA_TYPES = ['application/json']

# Keys of a Swagger 2.0 non-body parameter that describe its value
SCHEMA_KEYS = (
    'type',
    'format',
    'items',
    'default',
    'maximum',
    'exclusiveMaximum',
    'minimum',
    'exclusiveMinimum',
    'maxLength',
    'minLength',
    'pattern',
    'maxItems',
    'minItems',
    'uniqueItems',
    'enum',
    'multipleOf',
)


class SwaggerUpgrader:
    """Upgrades one Swagger 2.0 document dictionary to OpenAPI 3.0.

    Example:
        >>> upgrader = SwaggerUpgrader(swagger_dict)
        >>> openapi_dict, warnings = upgrader.upgrade()
    """

    def __init__(self, document: dict[str, Any]):
        self.document = document
        self.warnings: list[str] = []
        # Names of component parameters that were body parameters
        self._body_parameters: set[str] = set()

    def upgrade(self) -> tuple[dict[str, Any], list[str]]:
        """Convert the document.

        Returns:
            A tuple of (OpenAPI 3.0 dict, list of warnings).
        """
        result: dict[str, Any] = {
            'openapi': '3.0.3',
            'info': copy.deepcopy(self.document.get('info') or {}),
            'servers': self._convert_servers(),
        }

        components = self._convert_components()
        result['paths'] = self._convert_paths()
        if components:
            result['components'] = components

        for key in ('tags', 'security', 'externalDocs'):
            if key in self.document:
                result[key] = copy.deepcopy(self.document[key])

        for warning in self.warnings:
            logger.warning('Swagger upgrade: %s', warning)
        return result, list(self.warnings)

    def _convert_servers(self) -> list[dict[str, str]]:
        """Convert host, basePath and schemes to a servers array."""
        host = self.document.get('host') or ''
        base_path = self.document.get('basePath') or ''
        if not host and not base_path:
            self.warnings.append(
                "No host or basePath specified, defaulting to server URL '/'"
            )
            return [{'url': '/'}]

        if not host:
            return [{'url': base_path}]
        schemes = self.document.get('schemes') or ['http']
        return [{'url': f'{scheme}://{host}{base_path}'} for scheme in schemes]

    def _convert_components(self) -> dict[str, Any]:
        """Move definitions, parameters and responses under components."""
        components: dict[str, Any] = {}

        definitions = self.document.get('definitions')
        if definitions:
            components['schemas'] = {
                name: self._convert_schema(schema)
                for name, schema in definitions.items()
            }

        parameters = self.document.get('parameters') or {}
        for name, param in parameters.items():
            if param.get('in') == 'body':
                self._body_parameters.add(name)
                components.setdefault('requestBodies', {})[name] = (
                    self._convert_body_parameter(param, self.document.get('consumes'))
                )
            else:
                components.setdefault('parameters', {})[name] = (
                    self._convert_non_body_parameter(param)
                )

        responses = self.document.get('responses')
        if responses:
            produces = self.document.get('produces') or DEFAULT_MEDIA_TYPES
            components['responses'] = {
                name: self._convert_response(response, produces)
                for name, response in responses.items()
            }

        return components

    def _convert_paths(self) -> dict[str, Any]:
        paths = {}
        for path, path_item in (self.document.get('paths') or {}).items():
            if path.startswith('x-'):
                continue
            paths[path] = self._convert_path_item(path_item or {})
        return paths

    def _convert_path_item(self, path_item: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        # Keep the order in which the document lists the methods
        for key, value in path_item.items():
            if key in METHODS:
                result[key] = self._convert_operation(value or {})
            elif key == 'parameters':
                converted, _ = self._convert_parameters(value or [], None)
                if converted:
                    result['parameters'] = converted
            elif key == '$ref':
                result['$ref'] = self._update_ref(value)
            else:
                result[key] = copy.deepcopy(value)
        return result

    def _convert_operation(self, operation: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        consumes = operation.get('consumes') or self.document.get('consumes')
        produces = (
            operation.get('produces')
            or self.document.get('produces')
            or DEFAULT_MEDIA_TYPES
        )

        for key, value in operation.items():
            if key in ('consumes', 'produces', 'schemes'):
                continue
            if key == 'parameters':
                parameters, request_body = self._convert_parameters(
                    value or [], consumes
                )
                if parameters:
                    result['parameters'] = parameters
                if request_body:
                    result['requestBody'] = request_body
            elif key == 'responses':
                result['responses'] = {
                    str(status): self._convert_response(response, produces)
                    for status, response in (value or {}).items()
                    if not str(status).startswith('x-')
                }
            else:
                result[key] = copy.deepcopy(value)

        if 'schemes' in operation:
            self.warnings.append(
                f"Operation level schemes of '{operation.get('operationId')}' are ignored"
            )
        return result

    def _convert_parameters(
        self, parameters: list[dict[str, Any]], consumes: list[str] | None
    ) -> tuple[list[dict[str, Any]], dict[str, Any] | None]:
        """Split a parameter list into OpenAPI 3.0 parameters and a request body."""
        result = []
        body = None
        form_params = []

        for param in parameters:
            ref = param.get('$ref')
            if ref:
                name = ref.rsplit('/', 1)[-1]
                if ref.startswith('#/parameters/') and name in self._body_parameters:
                    body = {'$ref': f'#/components/requestBodies/{name}'}
                else:
                    result.append({'$ref': self._update_ref(ref)})
            elif param.get('in') == 'body':
                body = self._convert_body_parameter(param, consumes)
            elif param.get('in') == 'formData':
                form_params.append(param)
            else:
                result.append(self._convert_non_body_parameter(param))

        if body is None and form_params:
            body = self._convert_form_parameters(form_params, consumes)
        return result, body

    def _convert_body_parameter(
        self, param: dict[str, Any], consumes: list[str] | None
    ) -> dict[str, Any]:
        schema = self._convert_schema(param.get('schema') or {})
        result: dict[str, Any] = {
            'content': {
                media_type: {'schema': copy.deepcopy(schema)}
                for media_type in consumes or DEFAULT_MEDIA_TYPES
            }
        }
        if param.get('description'):
            result['description'] = param['description']
        if param.get('required'):
            result['required'] = True
        return result

    def _convert_form_parameters(
        self, params: list[dict[str, Any]], consumes: list[str] | None
    ) -> dict[str, Any]:
        has_file = any(param.get('type') == 'file' for param in params)
        if has_file or (consumes and 'multipart/form-data' in consumes):
            media_type = 'multipart/form-data'
        else:
            media_type = 'application/x-www-form-urlencoded'
        if has_file and consumes and 'multipart/form-data' not in consumes:
            self.warnings.append(
                'File upload parameter requires multipart/form-data, '
                f'but consumes specifies: {consumes}'
            )

        schema: dict[str, Any] = {
            'type': 'object',
            'properties': {
                param['name']: self._parameter_schema(param) for param in params
            },
        }
        required = [param['name'] for param in params if param.get('required')]
        if required:
            schema['required'] = required
        return {'content': {media_type: {'schema': schema}}}

    def _convert_non_body_parameter(self, param: dict[str, Any]) -> dict[str, Any]:
        result = {
            key: copy.deepcopy(value)
            for key, value in param.items()
            if key not in SCHEMA_KEYS and key not in ('collectionFormat', 'allowEmptyValue')
        }
        result['schema'] = self._parameter_schema(param)
        if param.get('collectionFormat') not in (None, 'csv'):
            self.warnings.append(
                f"collectionFormat '{param['collectionFormat']}' of parameter "
                f"'{param.get('name')}' is not converted"
            )
        return result

    def _parameter_schema(self, param: dict[str, Any]) -> dict[str, Any]:
        schema = {key: copy.deepcopy(param[key]) for key in SCHEMA_KEYS if key in param}
        if schema.get('type') == 'file':
            schema['type'] = 'string'
            schema['format'] = 'binary'
        return self._convert_schema(schema)

    def _convert_response(
        self, response: dict[str, Any] | None, produces: list[str]
    ) -> dict[str, Any] | None:
        if response is None:
            return None
        if '$ref' in response:
            return {'$ref': self._update_ref(response['$ref'])}

        result: dict[str, Any] = {'description': response.get('description', '')}
        if response.get('schema'):
            schema = self._convert_schema(response['schema'])
            result['content'] = {
                media_type: {'schema': copy.deepcopy(schema)} for media_type in produces
            }
        if response.get('headers'):
            result['headers'] = {
                name: {
                    'description': header.get('description', ''),
                    'schema': self._parameter_schema(header),
                }
                for name, header in response['headers'].items()
            }
        return result

    def _convert_schema(self, schema: Any) -> Any:
        """Copy a schema, rewriting every nested ``$ref`` and ``file`` type."""
        if isinstance(schema, list):
            return [self._convert_schema(item) for item in schema]
        if not isinstance(schema, dict):
            return schema

        result = {}
        for key, value in schema.items():
            if key == '$ref' and isinstance(value, str):
                result[key] = self._update_ref(value)
            elif key == 'type' and value == 'file':
                result['type'] = 'string'
                result['format'] = 'binary'
            elif key == 'discriminator' and isinstance(value, str):
                result[key] = {'propertyName': value}
            else:
                result[key] = self._convert_schema(value)
        return result

    def _update_ref(self, ref: str) -> str:
        """Update $ref paths from Swagger 2.0 to OpenAPI 3.0 format."""
        if ref.startswith('#/definitions/'):
            return ref.replace('#/definitions/', '#/components/schemas/', 1)
        if ref.startswith('#/parameters/'):
            return ref.replace('#/parameters/', '#/components/parameters/', 1)
        if ref.startswith('#/responses/'):
            return ref.replace('#/responses/', '#/components/responses/', 1)
        return ref


def upgrade_swagger(document: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
    """Upgrade a Swagger 2.0 document dictionary to OpenAPI 3.0."""
    return SwaggerUpgrader(document).upgrade()

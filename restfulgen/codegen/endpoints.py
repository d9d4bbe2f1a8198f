"""Per-operation binding synthesis.

This module turns one OpenAPI operation into a ``Binding``: a fully resolved
description of the generated accessor (name, generics, parameters, route)
that the emitter renders without any further look-ups.
"""

import logging
import re
from collections.abc import Collection
from dataclasses import dataclass, field

from restfulgen.codegen.schema import SchemaResolver
from restfulgen.codegen.types import Declaration, TypeGenerator, declare
from restfulgen.codegen.utils import get_params_in_path, pascal, template_route
from restfulgen.exceptions import (
    DuplicateOperationId,
    MissingOperationId,
    UndeclaredPathParameter,
)
from restfulgen.openapi import Operation, Parameter, Reference

logger = logging.getLogger(__name__)

__all__ = [
    'SUPPORTED_METHODS',
    'Binding',
    'BindingParameter',
    'ClassifiedParameters',
    'EndpointFactory',
    'ParameterClassifier',
]

MUTATE_METHODS = ('post', 'put', 'patch', 'delete')
SUPPORTED_METHODS = ('get',) + MUTATE_METHODS

# A templated route ending with exactly one placeholder segment
TRAILING_PARAM_PATTERN = re.compile(r'/\$\{(\w+)\}$')

POLLING_HEADER = 'prefer'


@dataclass(frozen=True)
class BindingParameter:
    """A parameter exposed as a named prop of the generated binding."""

    name: str
    type: str
    required: bool = False
    description: str | None = None


@dataclass
class ClassifiedParameters:
    """The effective parameters of an operation grouped by location."""

    query: list[Parameter] = field(default_factory=list)
    path: list[Parameter] = field(default_factory=list)
    header: list[Parameter] = field(default_factory=list)

    def find_path(self, name: str) -> Parameter | None:
        return next((param for param in self.path if param.name == name), None)


@dataclass
class Binding:
    """Everything needed to emit the accessor of one operation."""

    operation_id: str
    name: str
    method: str
    route: str
    path_params: list[BindingParameter]
    query_params: list[BindingParameter]
    response_type: str
    error_type: str
    request_body_type: str | None = None
    summary: str | None = None
    description: str | None = None
    trailing_param: BindingParameter | None = None
    response_declaration: Declaration | None = None
    polling: bool = False

    @property
    def is_mutation(self) -> bool:
        return self.method != 'get'

    @property
    def params(self) -> list[BindingParameter]:
        """Named props, path parameters first."""
        return self.path_params + self.query_params

    @property
    def generics(self) -> list[str]:
        """Type arguments of the accessor: response, error and, for mutations, body."""
        response = (
            self.response_declaration.name
            if self.response_declaration
            else self.response_type
        )
        generics = [response, self.error_type]
        if self.is_mutation:
            generics.append(self.request_body_type or 'void')
        return generics


class ParameterClassifier:
    """Groups the path item and operation parameters by their ``in`` value.

    Both lists are concatenated (operation parameters do not override path
    item parameters) after resolving every ``$ref``. Locations other than
    query, path and header are dropped.
    """

    def __init__(self, resolver: SchemaResolver):
        self.resolver = resolver

    def classify(
        self,
        path_item_parameters: list[Parameter | Reference] | None,
        operation_parameters: list[Parameter | Reference] | None,
    ) -> ClassifiedParameters:
        classified = ClassifiedParameters()
        buckets = {
            'query': classified.query,
            'path': classified.path,
            'header': classified.header,
        }
        for param in [*(path_item_parameters or []), *(operation_parameters or [])]:
            param = self.resolver.resolve_parameter(param)
            if param.in_ in buckets:
                buckets[param.in_].append(param)
        return classified


class EndpointFactory:
    """Builds the ``Binding`` of one operation.

    Example:
        >>> factory = EndpointFactory(SchemaResolver(openapi), TypeGenerator())
        >>> binding = factory.build('/pets/{id}', 'get', operation, None, set())
    """

    def __init__(self, resolver: SchemaResolver, typegen: TypeGenerator):
        self.typegen = typegen
        self.classifier = ParameterClassifier(resolver)

    def build(
        self,
        path: str,
        method: str,
        operation: Operation,
        path_item_parameters: list[Parameter | Reference] | None,
        seen_operation_ids: Collection[str],
    ) -> Binding:
        """Synthesize the binding of an operation.

        Args:
            path: The route template, e.g. ``/pets/{id}``.
            method: The lower-case HTTP method.
            operation: The operation object.
            path_item_parameters: Parameters declared on the path item.
            seen_operation_ids: Operation ids of the operations already built
                from the same document.

        Returns:
            The resolved binding.

        Raises:
            MissingOperationId: If the operation has no operationId.
            DuplicateOperationId: If the operationId was already seen.
            UndeclaredPathParameter: If a route placeholder is not declared.
        """
        operation_id = operation.operationId
        if not operation_id:
            raise MissingOperationId(method, path)
        if operation_id in seen_operation_ids:
            raise DuplicateOperationId(operation_id, method, path)

        logger.debug('Building binding for %s %s (%s)', method.upper(), path, operation_id)

        route = template_route(path)
        trailing_name = None
        if method == 'delete':
            match = TRAILING_PARAM_PATTERN.search(route)
            if match:
                route = route[: match.start()]
                trailing_name = match.group(1)

        classified = self.classifier.classify(path_item_parameters, operation.parameters)

        def path_param(name: str) -> BindingParameter:
            param = classified.find_path(name)
            if param is None:
                raise UndeclaredPathParameter(name, operation_id, method, path)
            return self._binding_parameter(param)

        path_names = dict.fromkeys(
            name for name in get_params_in_path(path) if name != trailing_name
        )
        path_params = [path_param(name) for name in path_names]
        query_params = [self._binding_parameter(param) for param in classified.query]

        trailing_param = None
        if trailing_name:
            # The trailing value is passed to mutate() so it needs no declaration
            declared = classified.find_path(trailing_name)
            if declared is None:
                trailing_param = BindingParameter(trailing_name, 'any', True)
            else:
                trailing_param = self._binding_parameter(declared)

        ok_responses = []
        error_responses = []
        for status, response in operation.responses.items():
            if status.startswith(('2', '3')):
                ok_responses.append((status, response))
            else:
                error_responses.append((status, response))

        response_type = self.typegen.get_res_req_types(ok_responses) or 'void'
        error_type = self.typegen.get_res_req_types(error_responses) or 'unknown'

        request_body_type = None
        if method != 'get':
            if trailing_param and operation.requestBody is None:
                request_body_type = trailing_param.type
            else:
                request_body_type = self.typegen.get_res_req_types(
                    [('body', operation.requestBody)]
                )

        name = pascal(operation_id)
        response_declaration = None
        if '{' in response_type:
            response_declaration = declare(f'{name}Response', response_type)

        return Binding(
            operation_id=operation_id,
            name=name,
            method=method,
            route=route,
            path_params=path_params,
            query_params=query_params,
            response_type=response_type,
            error_type=error_type,
            request_body_type=request_body_type,
            summary=operation.summary,
            description=operation.description,
            trailing_param=trailing_param,
            response_declaration=response_declaration,
            polling=any(
                param.name.lower() == POLLING_HEADER for param in classified.header
            ),
        )

    def _binding_parameter(self, param: Parameter) -> BindingParameter:
        return BindingParameter(
            name=param.name,
            type=self._param_type(param),
            required=bool(param.required),
            description=param.description,
        )

    def _param_type(self, param: Parameter) -> str:
        if param.schema_ is None:
            return 'any'
        return self.typegen.resolve_value(param.schema_, f'parameters.{param.name}')

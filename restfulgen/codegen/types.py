"""Type synthesis from OpenAPI schema nodes to TypeScript type expressions.

``TypeGenerator`` walks schema nodes and returns TypeScript type expressions
as strings. References are never inlined: they resolve to the name of the
referenced component, so recursion only descends into literally nested
schemas and terminates on cyclic documents.
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from restfulgen.codegen.schema import get_ref
from restfulgen.codegen.utils import is_identifier, pascal
from restfulgen.exceptions import InvalidEnumError, MissingItemsSchema
from restfulgen.openapi import (
    MediaType,
    ObjectShape,
    Reference,
    RequestBody,
    Response,
    Schema,
    SchemaKind,
)

logger = logging.getLogger(__name__)

__all__ = [
    'Declaration',
    'TypeGenerator',
    'declare',
    'is_compound',
    'is_record_literal',
]

JSON_MEDIA_TYPE = 'application/json'
BINARY_MEDIA_TYPE = 'application/octet-stream'

OPENING = '{[(<'
CLOSING = '}])>'


def _top_level_operators(expression: str) -> set[str]:
    """Collect the ``|`` and ``&`` operators that are not nested in brackets."""
    operators = set()
    depth = 0
    in_string = False
    escaped = False
    for char in expression:
        if escaped:
            escaped = False
        elif in_string and char == '\\':
            escaped = True
        elif char == '"':
            in_string = not in_string
        elif in_string:
            continue
        elif char in OPENING:
            depth += 1
        elif char in CLOSING:
            depth -= 1
        elif depth == 0 and char in '|&':
            operators.add(char)
    return operators


def is_compound(expression: str) -> bool:
    """Whether the expression is a top-level union or intersection."""
    return bool(_top_level_operators(expression))


def is_record_literal(expression: str) -> bool:
    """Whether the expression is a single ``{...}`` object type literal."""
    return (
        expression.startswith('{')
        and expression.endswith('}')
        and not is_compound(expression)
    )


@dataclass(frozen=True)
class Declaration:
    """A named type declaration, rendered as an interface or a type alias."""

    name: str
    expression: str
    interface: bool = False


def declare(name: str, expression: str, allow_interface: bool = True) -> Declaration:
    """Build a declaration, using the interface form only for record literals."""
    return Declaration(
        name=name,
        expression=expression,
        interface=allow_interface and is_record_literal(expression),
    )


class TypeGenerator:
    """Synthesizes TypeScript type expressions from schema nodes.

    All methods are pure functions of their arguments. The optional ``path``
    argument only locates the node in error messages.

    Example:
        >>> typegen = TypeGenerator()
        >>> typegen.resolve_value(Schema(type='array', items=Schema(type='string')))
        'string[]'
    """

    def resolve_value(self, schema: Schema | Reference, path: str | None = None) -> str:
        """Resolve any schema node: references by name, everything else by kind."""
        if isinstance(schema, Reference):
            return get_ref(schema.ref)
        return self.get_scalar(schema, path)

    def get_scalar(self, schema: Schema, path: str | None = None) -> str:
        """Map a schema node to a type expression according to its ``type``.

        ``nullable`` nodes get ``| null`` appended to whatever they resolve to.
        """
        expression = self._get_kind_type(schema, path)
        if schema.nullable and expression != 'null':
            return f'{expression} | null'
        return expression

    def _get_kind_type(self, schema: Schema, path: str | None) -> str:
        kind = schema.kind
        if kind is SchemaKind.NULL:
            return 'null'
        if kind is SchemaKind.NUMBER:
            return 'number'
        if kind is SchemaKind.BOOLEAN:
            return 'boolean'
        if kind is SchemaKind.ARRAY:
            return self.get_array(schema, path)
        if kind is SchemaKind.STRING:
            if schema.type.lower() == 'string' and schema.enum:
                return self._get_enum(schema.enum, path)
            return 'string'
        return self.get_object(schema, path)

    def get_array(self, schema: Schema, path: str | None = None) -> str:
        """Build ``T[]`` from the ``items`` of an array schema.

        Raises:
            MissingItemsSchema: If the schema has no ``items``.
        """
        if schema.items is None:
            raise MissingItemsSchema(path)

        item_type = self.resolve_value(schema.items, _child(path, 'items'))
        if is_compound(item_type):
            return f'({item_type})[]'
        return f'{item_type}[]'

    def get_object(self, schema: Schema | Reference, path: str | None = None) -> str:
        """Build an object-like type expression.

        The first matching rule wins: reference, ``allOf`` intersection,
        ``oneOf`` union, ``properties`` record, ``additionalProperties``
        index signature, then ``{}`` for a bare object and ``any`` otherwise.
        """
        if isinstance(schema, Reference):
            return get_ref(schema.ref)

        shape = schema.shape
        if shape is ObjectShape.ALL_OF:
            members = []
            for index, member in enumerate(schema.allOf):
                member_type = self.resolve_value(member, _child(path, f'allOf[{index}]'))
                if '|' in _top_level_operators(member_type):
                    member_type = f'({member_type})'
                members.append(member_type)
            return ' & '.join(members)

        if shape is ObjectShape.ONE_OF:
            return ' | '.join(
                self.resolve_value(member, _child(path, f'oneOf[{index}]'))
                for index, member in enumerate(schema.oneOf)
            )

        if shape is ObjectShape.PROPERTIES:
            required = set(schema.required or [])
            fields = []
            for name, prop in schema.properties.items():
                key = name if is_identifier(name) else json.dumps(name)
                optional = '' if name in required else '?'
                prop_type = self.resolve_value(prop, _child(path, f'properties.{name}'))
                fields.append(f'{key}{optional}: {prop_type}')
            return '{' + '; '.join(fields) + '}'

        if shape is ObjectShape.ADDITIONAL_PROPERTIES:
            if schema.additionalProperties is True:
                value_type = 'any'
            else:
                value_type = self.resolve_value(
                    schema.additionalProperties, _child(path, 'additionalProperties')
                )
            return f'{{[key: string]: {value_type}}}'

        if shape is ObjectShape.EMPTY:
            return '{}'
        return 'any'

    def get_res_req_types(
        self,
        entries: Iterable[tuple[str, Response | RequestBody | Reference | None]],
    ) -> str:
        """Union of the types of responses or request bodies.

        Each entry contributes the type of its JSON (or, failing that,
        octet-stream) schema, the name of the component it references, or
        ``void`` when it has neither. Duplicates are dropped keeping the
        first occurrence.

        Args:
            entries: ``(label, object)`` pairs, the label being a status code
                or ``body``.

        Returns:
            The types joined with `` | ``, or an empty string for no entries.
        """
        types: list[str] = []
        for label, entry in entries:
            entry_type = self._get_entry_type(label, entry)
            if entry_type not in types:
                types.append(entry_type)
        return ' | '.join(types)

    def schema_declarations(
        self, schemas: dict[str, Schema | Reference] | None
    ) -> list[Declaration]:
        """One declaration per component schema, in document order.

        The interface form is used for schemas without a ``type`` (or of type
        ``object``), without ``allOf``/``oneOf``, that are not references and
        that resolve to a record literal. Everything else is a type alias.
        """
        declarations = []
        for name, schema in (schemas or {}).items():
            expression = self.resolve_value(schema, f'components.schemas.{name}')
            allow_interface = (
                isinstance(schema, Schema)
                and (not schema.type or schema.type.lower() == 'object')
                and not schema.allOf
                and not schema.oneOf
            )
            declaration = declare(pascal(name), expression, allow_interface)
            logger.debug('Declared schema %s', declaration.name)
            declarations.append(declaration)
        return declarations

    def component_declarations(
        self,
        components: dict[str, Response | RequestBody | Reference] | None,
        suffix: str,
    ) -> list[Declaration]:
        """One ``<Name><suffix>`` declaration per component response or request body."""
        declarations = []
        for name, component in (components or {}).items():
            expression = self.get_res_req_types([(name, component)])
            declaration = declare(f'{pascal(name)}{suffix}', expression)
            logger.debug('Declared %s', declaration.name)
            declarations.append(declaration)
        return declarations

    def _get_entry_type(
        self, label: str, entry: Response | RequestBody | Reference | None
    ) -> str:
        if entry is None:
            return 'void'
        if isinstance(entry, Reference):
            return get_ref(entry.ref)

        media_type = _select_media_type(entry.content or {})
        if media_type is None or media_type.schema_ is None:
            return 'void'
        return self.resolve_value(media_type.schema_, label)

    def _get_enum(self, values: list, path: str | None) -> str:
        if not all(isinstance(value, str) for value in values):
            raise InvalidEnumError(values, path)
        return ' | '.join(json.dumps(value) for value in values)


def _select_media_type(content: dict[str, MediaType]) -> MediaType | None:
    for content_type, media_type in content.items():
        if content_type.split(';')[0].strip().lower() == JSON_MEDIA_TYPE:
            return media_type
    return content.get(BINARY_MEDIA_TYPE)


def _child(path: str | None, segment: str) -> str:
    return f'{path}.{segment}' if path else segment

"""Code emitter interfaces and implementations for code generation output.

Emitters only turn already resolved declarations and bindings into text;
they never look at the OpenAPI document. This keeps the target syntax and the
names of the runtime accessors replaceable without touching type synthesis.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from upath import UPath

from restfulgen.codegen.endpoints import Binding
from restfulgen.codegen.types import Declaration
from restfulgen.codegen.utils import binding_name, is_identifier
from restfulgen.exceptions import OutputError

logger = logging.getLogger(__name__)

__all__ = ['CodeEmitter', 'RestfulReactEmitter', 'write_source']

DEFAULT_RUNTIME_MODULE = 'restful-react'


class CodeEmitter(ABC):
    """Abstract base class for code emitters.

    A CodeEmitter renders the header, the component declarations and the
    per-operation bindings of one document. ``emit`` assembles them in the
    fixed document order.
    """

    @abstractmethod
    def emit_header(self) -> str:
        """Return the import and boilerplate block that starts every file."""
        pass

    @abstractmethod
    def emit_declaration(self, declaration: Declaration) -> str:
        """Render one named type declaration."""
        pass

    @abstractmethod
    def emit_binding(self, binding: Binding) -> str:
        """Render the declarations of one operation."""
        pass

    def emit_declarations(self, declarations: list[Declaration]) -> str:
        """Render a block of declarations separated by blank lines.

        An empty list renders nothing at all.
        """
        if not declarations:
            return ''
        return '\n' + '\n\n'.join(self.emit_declaration(d) for d in declarations) + '\n'

    def emit(
        self,
        declarations: list[list[Declaration]],
        bindings: list[Binding],
    ) -> str:
        """Render a complete file.

        Args:
            declarations: Blocks of declarations (schemas, responses, ...), in
                output order.
            bindings: The bindings of every operation, in document order.

        Returns:
            The generated source.
        """
        parts = [self.emit_header()]
        parts.extend(self.emit_declarations(block) for block in declarations)
        parts.extend(self.emit_binding(binding) for binding in bindings)
        return ''.join(parts)


class RestfulReactEmitter(CodeEmitter):
    """Emits TSX bindings for the restful-react ``Get``/``Mutate``/``Poll`` components.

    Every operation also gets a ``useGet``/``useMutate`` hook unless ``hooks``
    is turned off.

    Example:
        >>> emitter = RestfulReactEmitter()
        >>> source = emitter.emit([schema_declarations], bindings)
    """

    def __init__(
        self,
        runtime_module: str = DEFAULT_RUNTIME_MODULE,
        custom_import: str | None = None,
        hooks: bool = True,
    ):
        """Initialize the emitter.

        Args:
            runtime_module: Module the accessor components are imported from.
            custom_import: Optional extra import statement(s) added after the
                generated imports.
            hooks: Whether to emit a hook next to every component.
        """
        self.runtime_module = runtime_module
        self.custom_import = custom_import
        self.hooks = hooks

    def emit_header(self) -> str:
        imports = ['Get', 'GetProps']
        if self.hooks:
            imports += ['useGet', 'UseGetProps']
        imports += ['Mutate', 'MutateProps']
        if self.hooks:
            imports += ['useMutate', 'UseMutateProps']
        imports += ['Poll', 'PollProps']

        lines = [
            '/* Generated by restful-react */',
            '',
            'import qs from "qs";',
            'import React from "react";',
            f'import {{ {", ".join(imports)} }} from "{self.runtime_module}";',
        ]
        if self.custom_import:
            lines.append(self.custom_import.strip())
        lines += [
            '',
            'export type Omit<T, K extends keyof T> = Pick<T, Exclude<keyof T, K>>;',
            '',
        ]
        return '\n'.join(lines)

    def emit_declaration(self, declaration: Declaration) -> str:
        if declaration.interface:
            return f'export interface {declaration.name} {declaration.expression}'
        return f'export type {declaration.name} = {declaration.expression};'

    def emit_binding(self, binding: Binding) -> str:
        parts = []
        if binding.response_declaration:
            parts.append(self.emit_declarations([binding.response_declaration]))

        component = 'Mutate' if binding.is_mutation else 'Get'
        parts.append(self._emit_component(binding, component))
        if self.hooks:
            parts.append(self._emit_hook(binding))
        if binding.polling:
            parts.append(self._emit_component(binding, 'Poll', polling=True))
        return ''.join(parts)

    def _emit_component(
        self, binding: Binding, component: str, polling: bool = False
    ) -> str:
        # Polling always reads, so it never takes a verb or a body
        mutation = binding.is_mutation and not polling
        generics = ', '.join(binding.generics if mutation else binding.generics[:2])
        omitted = '"path" | "verb"' if mutation else '"path"'
        name = f'Poll{binding.name}' if polling else binding.name

        lines = [
            '',
            f'export type {name}Props = '
            f'{self._props_type(binding, f"{component}Props<{generics}>", omitted)};',
            '',
            *self._doc_comment(binding, polling),
            f'export const {name} = ({self._destructured(binding)}: {name}Props) => (',
            f'  <{component}<{generics}>',
        ]
        if mutation:
            lines.append(f'    verb="{binding.method.upper()}"')
        lines += [
            f'    path={{`{self._path_expression(binding)}`}}',
            '    {...props}',
            '  />',
            ');',
            '',
        ]
        return '\n'.join(lines)

    def _emit_hook(self, binding: Binding) -> str:
        generics = ', '.join(binding.generics)
        path = f'`{self._path_expression(binding)}`'
        if binding.is_mutation:
            props_type = self._props_type(
                binding, f'UseMutateProps<{generics}>', '"path" | "verb"'
            )
            call = f'useMutate<{generics}>("{binding.method.upper()}", {path}, props)'
        else:
            props_type = self._props_type(binding, f'UseGetProps<{generics}>', '"path"')
            call = f'useGet<{generics}>({path}, props)'

        name = f'use{binding.name}'
        lines = [
            '',
            f'export type Use{binding.name}Props = {props_type};',
            '',
            *self._doc_comment(binding),
            f'export const {name} = ({self._destructured(binding)}: Use{binding.name}Props) '
            f'=> {call};',
            '',
        ]
        return '\n'.join(lines)

    def _props_type(self, binding: Binding, base: str, omitted: str) -> str:
        props_type = f'Omit<{base}, {omitted}>'
        if not binding.params:
            return props_type

        fields = []
        for param in binding.params:
            key = param.name if is_identifier(param.name) else json.dumps(param.name)
            field = f'{key}{"" if param.required else "?"}: {param.type}'
            if param.description:
                description = _escape_comment(' '.join(param.description.split()))
                field = f'/** {description} */ {field}'
            fields.append(field)
        return f'{props_type} & {{{"; ".join(fields)}}}'

    def _destructured(self, binding: Binding) -> str:
        names = [_binding_entry(param.name) for param in binding.params]
        return '{' + ', '.join(names + ['...props']) + '}'

    def _doc_comment(self, binding: Binding, polling: bool = False) -> list[str]:
        """The JSDoc block of an accessor: summary, blank line, description."""
        lines = []
        if binding.summary and binding.summary.strip():
            lines = binding.summary.strip().splitlines()
            if polling:
                lines[-1] += ' (long polling)'
        if binding.description and binding.description.strip():
            if lines:
                lines.append('')
            lines += binding.description.strip().splitlines()
        if not lines:
            return []
        return [
            '/**',
            *(f' * {_escape_comment(line)}'.rstrip() for line in lines),
            ' */',
        ]

    def _path_expression(self, binding: Binding) -> str:
        route = binding.route
        for param in binding.path_params:
            local = binding_name(param.name)
            if local != param.name:
                route = route.replace(f'${{{param.name}}}', f'${{{local}}}')

        if not binding.query_params:
            return route
        names = ', '.join(_binding_entry(param.name) for param in binding.query_params)
        return f'{route}?${{qs.stringify({{{names}}})}}'


def _binding_entry(name: str) -> str:
    """An object entry binding the prop ``name`` to its local variable."""
    local = binding_name(name)
    if local == name:
        return name
    key = name if is_identifier(name) else json.dumps(name)
    return f'{key}: {local}'


def _escape_comment(text: str) -> str:
    return text.replace('*/', '*\\/')


def write_source(content: str, output: str | Path | UPath) -> str:
    """Write generated source to a local or remote path.

    Args:
        content: The generated source.
        output: Destination file, any path understood by universal-pathlib.

    Returns:
        The path that was written.

    Raises:
        OutputError: If the file cannot be written.
    """
    path = UPath(output)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    except OSError as e:
        raise OutputError(str(output), cause=e)

    logger.info('Wrote %d characters to %s', len(content), path)
    return str(path)

import re
import unicodedata
from urllib.parse import urlparse

__all__ = (
    'binding_name',
    'camel',
    'get_params_in_path',
    'is_identifier',
    'is_url',
    'pascal',
    'template_route',
)

PATH_PARAM_PATTERN = re.compile(r'\{(\w+)\}')
IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')

# Words that cannot name a local binding in strict mode TypeScript
RESERVED_WORDS = frozenset(
    {
        'break', 'case', 'catch', 'class', 'const', 'continue', 'debugger',
        'default', 'delete', 'do', 'else', 'enum', 'export', 'extends', 'false',
        'finally', 'for', 'function', 'if', 'implements', 'import', 'in',
        'instanceof', 'interface', 'let', 'new', 'null', 'package', 'private',
        'protected', 'public', 'return', 'static', 'super', 'switch', 'this',
        'throw', 'true', 'try', 'typeof', 'var', 'void', 'while', 'with', 'yield',
        'arguments', 'eval', 'props',
    }
)


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def is_url(text):
    try:
        result = urlparse(text)
        return result.scheme in ('http', 'https') and bool(result.netloc)
    except ValueError:
        return False


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def is_identifier(name: str) -> bool:
    """Whether ``name`` can be used unquoted as a TypeScript property key."""
    return bool(IDENTIFIER_PATTERN.match(name))


def pascal(name: str) -> str:
    """Convert a string into a PascalCase TypeScript identifier.

    Words are split on any non alphanumeric character and on camelCase
    boundaries. Only the first letter of each word is upper-cased, so
    acronyms survive (``APIError`` stays ``APIError``).

    Examples:
        >>> pascal('pet-store')
        'PetStore'
        >>> pascal('listPets')
        'ListPets'
    """
    if not name:
        return 'Unnamed'

    words = remove_accents(name)
    words = re.sub(r'([a-z0-9])([A-Z])', r'\1 \2', words)
    words = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1 \2', words)
    parts = re.split(r'[^A-Za-z0-9]+', words)
    sanitized = ''.join(capitalize(part) for part in parts if part)

    if sanitized and sanitized[0].isdigit():
        sanitized = '_' + sanitized
    return sanitized or 'Unnamed'


def camel(name: str) -> str:
    """Like ``pascal`` but with a lower-case first letter."""
    result = pascal(name)
    return result[0].lower() + result[1:]


def binding_name(name: str) -> str:
    """Return a local variable name that can hold the value of ``name``.

    Valid identifiers are kept as they are; anything else is camel-cased.
    Reserved words (and ``props``, which the generated code already binds)
    get a trailing underscore.

    Examples:
        >>> binding_name('x-tag')
        'xTag'
        >>> binding_name('default')
        'default_'
    """
    local = name if is_identifier(name) else camel(name)
    if local in RESERVED_WORDS:
        local += '_'
    return local


def get_params_in_path(path: str) -> list[str]:
    """Return the ``{placeholder}`` names of a route, left to right.

    Repeated placeholders are returned as many times as they appear.
    """
    return PATH_PARAM_PATTERN.findall(path)


def template_route(path: str) -> str:
    """Rewrite ``{name}`` placeholders into ``${name}`` interpolations."""
    return path.replace('{', '${')

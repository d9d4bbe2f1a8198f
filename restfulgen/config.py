import json
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

from restfulgen.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['restfulgen.yaml', 'restfulgen.yml']


class DocumentConfig(BaseModel):
    """Represents a single document to be converted."""

    source: str = Field(..., description='Path or URL to the OpenAPI document.')

    output: str = Field(..., description='File the generated bindings are written to.')

    runtime_module: str = Field(
        'restful-react',
        description='Module the Get, Mutate and Poll components are imported from.',
    )

    custom_import: str | None = Field(
        None, description='Optional import statement added after the generated imports.'
    )

    include_responses: bool = Field(
        True,
        description='Whether to declare components.responses and components.requestBodies.',
    )

    hooks: bool = Field(
        True, description='Whether to emit a useGet or useMutate hook for every operation.'
    )


class CodegenConfig(BaseSettings):
    documents: list[DocumentConfig] = Field(
        ..., min_length=1, description='List of OpenAPI documents to convert.'
    )


def load_yaml(path: str | Path) -> dict:
    return yaml.safe_load(Path(path).read_text(encoding='utf-8'))


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text(encoding='utf-8'))


def _validate(data: dict, config_path: str) -> CodegenConfig:
    try:
        return CodegenConfig.model_validate(data or {})
    except ValidationError as e:
        errors = '; '.join(
            f'{".".join(str(loc) for loc in error["loc"])}: {error["msg"]}'
            for error in e.errors()
        )
        raise ConfigurationError(f'Invalid configuration ({errors})', config_path)


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file, or find one in the working directory.

    Lookup order: the explicit ``path`` (YAML or JSON), then
    ``restfulgen.yaml``/``restfulgen.yml``, then the ``[tool.restfulgen]``
    table of ``pyproject.toml``.

    Raises:
        ConfigurationError: If no configuration is found or it is invalid.
    """
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', path)
        loader = load_json if Path(path).suffix.lower() == '.json' else load_yaml
        try:
            data = loader(path)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f'Cannot parse configuration: {e}', path)
        return _validate(data, path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        path = Path(cwd) / filename
        if path.exists():
            return _validate(load_yaml(path), str(path))

    path = Path(cwd) / 'pyproject.toml'

    if path.exists():
        import tomllib

        pyproject = tomllib.loads(path.read_text(encoding='utf-8'))
        tools = pyproject.get('tool', {})

        if 'restfulgen' in tools:
            return _validate(tools['restfulgen'], str(path))

    raise ConfigurationError(
        'No configuration found, create restfulgen.yaml or a [tool.restfulgen] '
        'table in pyproject.toml'
    )

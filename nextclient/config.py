import json
import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from nextclient.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['nextclient.yaml', 'nextclient.yml']

_ENV_VAR_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_]*)\}')


class TargetConfig(BaseModel):
    """A declaration directory and the directory its TypeScript goes to."""

    source: str = Field(..., description='Directory containing declaration files.')

    output: str = Field(
        ..., description='Output directory for the generated TypeScript modules.'
    )

    source_suffixes: list[str] = Field(
        default_factory=lambda: ['.yaml', '.yml', '.json'],
        description='File suffixes recognised as declaration files.',
    )

    output_suffix: str = Field(
        '.gen.ts', description='Suffix replacing the declaration suffix on output.'
    )

    common_file: str = Field(
        'common.gen.ts', description='File declaring the transport interface.'
    )

    decode_file: str = Field(
        'decode.gen.ts', description='File holding the generic decode helpers.'
    )

    type_map: dict[str, str] = Field(
        default_factory=lambda: {'URL': 'string', 'Date': 'string'},
        description='Extra host type names mapped to TypeScript primitives.',
    )

    id_suffix_as_string: bool = Field(
        True, description="Map unresolved type names ending in 'ID' to string."
    )

    clean: bool = Field(
        True, description='Remove stale generated files from the output directory.'
    )


class CodegenConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='NEXTCLIENT_')

    targets: list[TargetConfig] = Field(
        ..., description='List of declaration directories to process.'
    )


def _expand_env_vars(value: str) -> str:
    """Replace ``${VAR}`` references with environment values.

    Unknown variables are left untouched.
    """

    def replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), match.group(0))

    return _ENV_VAR_PATTERN.sub(replace, value)


def _expand_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return _expand_env_vars(data)
    if isinstance(data, dict):
        return {k: _expand_env_vars_recursive(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars_recursive(item) for item in data]
    return data


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.safe_load(Path(path).read_text()) or {}


def load_json(path: str | Path) -> dict:
    return json.loads(Path(path).read_text())


def _validate(data: dict, source: str) -> CodegenConfig:
    try:
        return CodegenConfig.model_validate(_expand_env_vars_recursive(data))
    except ValidationError as e:
        raise ConfigurationError(
            f'Invalid configuration: {e.error_count()} error(s)', config_path=source
        ) from e


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file, the working directory or pyproject.toml."""
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        if Path(path).suffix.lower() == '.json':
            return _validate(load_json(path), path)
        return _validate(load_yaml(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return _validate(load_yaml(candidate), str(candidate))

    candidate = Path(cwd) / 'pyproject.toml'

    if candidate.exists():
        import tomllib

        pyproject = tomllib.loads(candidate.read_text())
        tools = pyproject.get('tool', {})

        if 'nextclient' in tools:
            return _validate(tools['nextclient'], str(candidate))

    raise ConfigurationError('config not found')

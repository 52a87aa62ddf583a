"""nextclient - Generate typed TypeScript RPC clients from service declarations.

nextclient reads YAML or JSON declaration files describing data types and
service protocols, and writes one TypeScript module per file: a client
interface, class and factory for every service, plus type declarations and
JSON decode functions for every data type. Imports between the generated
modules are computed automatically.

Quick Start:
    >>> from nextclient import Codegen, TargetConfig
    >>>
    >>> config = TargetConfig(source='./api', output='./web/src/Gen')
    >>> Codegen(config).generate()

CLI Usage:
    $ nextclient generate --source ./api --output ./web/src/Gen
    $ nextclient generate -c nextclient.yaml
    $ nextclient check ./api/Echo.yaml
"""

from importlib.metadata import PackageNotFoundError, version

from nextclient.codegen.codegen import Codegen
from nextclient.codegen.registry import TypeNameRegistry
from nextclient.config import CodegenConfig, TargetConfig, get_config
from nextclient.exceptions import (
    CodeGenerationError,
    ConfigurationError,
    DuplicateSymbolError,
    NextClientError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaValidationError,
    TypeResolutionError,
    UnsupportedFeatureError,
)
from nextclient.schema.loader import SchemaLoader
from nextclient.typescript.converter import TypeConverter

__all__ = [
    # Main classes
    'Codegen',
    'SchemaLoader',
    'TypeConverter',
    'TypeNameRegistry',
    # Configuration
    'CodegenConfig',
    'TargetConfig',
    'get_config',
    # Exceptions
    'NextClientError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'TypeResolutionError',
    'CodeGenerationError',
    'DuplicateSymbolError',
    'ConfigurationError',
    'OutputError',
    'UnsupportedFeatureError',
]

try:
    __version__ = version('nextclient')
except PackageNotFoundError:
    __version__ = 'unknown'

"""Assembly of TypeScript client modules from declaration files.

This package holds the two-pass generator and its parts:

- ``TypeNameRegistry``: which output file defines which symbol
- ``decompose``: atomic names inside a rendered generic type name
- ``ImportCollector``: per-file import lines from used symbols
- ``ServiceClientEmitter`` and ``DeclarationEmitter``: code plus used symbols
- ``Codegen``: the orchestrating generator
"""

from nextclient.codegen.codegen import Codegen
from nextclient.codegen.declarations import DeclarationEmitter
from nextclient.codegen.file_writer import TypeScriptFileWriter
from nextclient.codegen.import_collector import ImportCollector
from nextclient.codegen.names import decompose, scan_identifiers
from nextclient.codegen.registry import TypeNameRegistry, TypeSymbols
from nextclient.codegen.services import ServiceClientEmitter
from nextclient.codegen.types import Fragment, GeneratedFile

__all__ = [
    'Codegen',
    'DeclarationEmitter',
    'Fragment',
    'GeneratedFile',
    'ImportCollector',
    'ServiceClientEmitter',
    'TypeNameRegistry',
    'TypeScriptFileWriter',
    'TypeSymbols',
    'decompose',
    'scan_identifiers',
]

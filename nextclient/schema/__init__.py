from nextclient.schema.loader import SchemaLoader
from nextclient.schema.models import (
    CaseDecl,
    CaseValue,
    DeclarationFile,
    FieldDecl,
    FunctionDecl,
    InputFile,
    RequestDecl,
    TypeDecl,
)
from nextclient.schema.scanner import (
    FunctionDefinition,
    RequestParameter,
    ServiceDefinition,
    ServiceProtocolScanner,
)
from nextclient.schema.typeref import TypeRef, parse_type_ref

__all__ = [
    'CaseDecl',
    'CaseValue',
    'DeclarationFile',
    'FieldDecl',
    'FunctionDecl',
    'FunctionDefinition',
    'InputFile',
    'RequestDecl',
    'RequestParameter',
    'SchemaLoader',
    'ServiceDefinition',
    'ServiceProtocolScanner',
    'TypeDecl',
    'TypeRef',
    'parse_type_ref',
]

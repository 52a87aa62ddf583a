from nextclient.typescript.converter import HELPER_FUNCTIONS, TSBlock, TypeConverter
from nextclient.typescript.expressions import TSCall, TSClosure, TSExpr, TSIdentifier
from nextclient.typescript.resolver import ResolvedType, Scope, TypeResolver
from nextclient.typescript.typemap import TypeMap

__all__ = [
    'HELPER_FUNCTIONS',
    'ResolvedType',
    'Scope',
    'TSBlock',
    'TSCall',
    'TSClosure',
    'TSExpr',
    'TSIdentifier',
    'TypeConverter',
    'TypeMap',
    'TypeResolver',
]

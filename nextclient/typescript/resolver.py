"""Name resolution of type references against all loaded declarations."""

import logging
from dataclasses import dataclass
from typing import Literal

from nextclient.exceptions import (
    SchemaValidationError,
    TypeResolutionError,
    UnsupportedFeatureError,
)
from nextclient.schema.models import InputFile, TypeDecl
from nextclient.schema.typeref import TypeRef
from nextclient.typescript.typemap import TypeMap

logger = logging.getLogger(__name__)

ResolvedKind = Literal['primitive', 'param', 'optional', 'array', 'dictionary', 'declared']


@dataclass(frozen=True)
class Scope:
    """Where a type reference appears.

    Attributes:
        generic_params: Generic parameter names visible at the reference.
        path: Qualified name of the enclosing declaration, for sibling lookup.
    """

    generic_params: tuple[str, ...] = ()
    path: str | None = None

    @classmethod
    def of(cls, decl: TypeDecl) -> 'Scope':
        return cls(tuple(decl.generic_params), decl.qualified_name)


@dataclass(frozen=True)
class ResolvedType:
    kind: ResolvedKind
    ref: TypeRef
    ts_name: str | None = None
    decl: TypeDecl | None = None


class TypeResolver:
    """Resolves ``TypeRef`` names to primitives, builtins or declarations.

    Resolution order is generic parameters, builtins and the type map,
    declared types (innermost enclosing container first), and finally the
    type map fallback rule.
    """

    def __init__(self, files: list[InputFile] | None = None, type_map: TypeMap | None = None):
        self.type_map = type_map or TypeMap()
        self._decls: dict[str, TypeDecl] = {}
        for file in files or []:
            self.add_file(file)

    def add_file(self, file: InputFile) -> None:
        for top in file.types:
            for decl in top.walk():
                if decl.qualified_name in self._decls:
                    logger.debug(f'Declaration {decl.qualified_name} seen again in {file.name}')
                    continue
                self._decls[decl.qualified_name] = decl

    def lookup_decl(self, name: str, scope: Scope | None = None) -> TypeDecl | None:
        path = scope.path if scope else None
        while path:
            candidate = self._decls.get(f'{path}.{name}')
            if candidate is not None:
                return candidate
            path = path.rsplit('.', 1)[0] if '.' in path else None
        return self._decls.get(name)

    def resolve(self, ref: TypeRef, scope: Scope | None = None) -> ResolvedType:
        """Resolve a reference.

        Raises:
            TypeResolutionError: If the name resolves to nothing.
            SchemaValidationError: If the generic argument count is wrong.
            UnsupportedFeatureError: For dictionaries with non-string keys.
        """
        scope = scope or Scope()
        name = ref.name

        if name in scope.generic_params:
            self._expect_args(ref, 0)
            return ResolvedType('param', ref)

        mapped = self.type_map.map(name)
        if mapped is not None:
            self._expect_args(ref, 0)
            return ResolvedType('primitive', ref, ts_name=mapped)

        if name == 'Optional':
            self._expect_args(ref, 1)
            return ResolvedType('optional', ref)
        if name == 'Array':
            self._expect_args(ref, 1)
            return ResolvedType('array', ref)
        if name == 'Dictionary':
            self._expect_args(ref, 2)
            key = self.resolve(ref.args[0], scope)
            if key.ts_name != 'string':
                raise UnsupportedFeatureError(
                    f"dictionary key type '{ref.args[0]}' in '{ref}'",
                    suggestion='Only String keys can be represented as JSON objects',
                )
            return ResolvedType('dictionary', ref)

        decl = self.lookup_decl(name, scope)
        if decl is not None:
            self._expect_args(ref, len(decl.generic_params))
            return ResolvedType('declared', ref, decl=decl)

        fallback = self.type_map.fallback(name)
        if fallback is not None:
            self._expect_args(ref, 0)
            return ResolvedType('primitive', ref, ts_name=fallback)

        raise TypeResolutionError(str(ref), context=scope.path)

    def _expect_args(self, ref: TypeRef, count: int) -> None:
        if len(ref.args) != count:
            raise SchemaValidationError(
                str(ref),
                errors=[f'expected {count} generic argument(s), got {len(ref.args)}'],
            )

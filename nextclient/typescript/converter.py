"""Conversion of single host types into TypeScript source.

``TypeConverter`` knows how one declared type looks in TypeScript: its plain
type, its JSON wire type, the decode function turning the latter into the
former, and the decode expression for any type reference. It knows nothing
about output files; the assembler in ``nextclient.codegen`` decides where the
rendered code ends up.
"""

import logging
import textwrap
from dataclasses import dataclass
from typing import Literal

from nextclient.schema.models import TypeDecl
from nextclient.schema.typeref import TypeRef
from nextclient.typescript.expressions import (
    IDENTIFIER,
    TSCall,
    TSClosure,
    TSExpr,
    TSIdentifier,
    strip_non_references,
)
from nextclient.typescript.resolver import Scope, TypeResolver

logger = logging.getLogger(__name__)

TypeKind = Literal['type', 'json']

HELPER_FUNCTIONS = (
    'identity',
    'OptionalField_decode',
    'Optional_decode',
    'Array_decode',
    'Dictionary_decode',
)

INDENT = '    '


@dataclass(frozen=True)
class TSBlock:
    """A top-level item of a rendered TypeScript file."""

    kind: Literal['import', 'decl']
    text: str


def _object_type(props: list[str]) -> str:
    if not props:
        return '{}'
    return '{\n' + ''.join(f'{INDENT}{p};\n' for p in props) + '}'


def _inline_object(props: list[str]) -> str:
    if not props:
        return '{}'
    return '{ ' + '; '.join(props) + ' }'


class TypeConverter:
    """Renders TypeScript for declared host types.

    Args:
        resolver: Resolver over every loaded declaration.
        helper_module: Module the decode helpers are imported from when a
            declaration file is rendered standalone.
    """

    def __init__(self, resolver: TypeResolver, helper_module: str = './decode.gen'):
        self.resolver = resolver
        self.helper_module = helper_module
        self._needs_decode: dict[str, bool] = {}
        self._visiting: set[str] = set()
        self._provisional = False

    # Names

    def type_name(self, decl: TypeDecl) -> str:
        return decl.qualified_name

    def json_name(self, decl: TypeDecl) -> str:
        if self.decl_needs_decode(decl):
            return f'{decl.qualified_name}_JSON'
        return decl.qualified_name

    def decode_name(self, decl: TypeDecl) -> str | None:
        if self.decl_needs_decode(decl):
            return f'{decl.qualified_name}_decode'
        return None

    # Type references

    def render_type(self, ref: TypeRef, scope: Scope | None = None, kind: TypeKind = 'type') -> str:
        """Render a type reference as plain TypeScript or as its JSON form."""
        resolved = self.resolver.resolve(ref, scope)

        if resolved.kind == 'primitive':
            return resolved.ts_name
        if resolved.kind == 'param':
            return ref.name if kind == 'type' else f'{ref.name}_JSON'
        if resolved.kind == 'optional':
            return f'{self.render_type(ref.args[0], scope, kind)} | null'
        if resolved.kind == 'array':
            return f'Array<{self.render_type(ref.args[0], scope, kind)}>'
        if resolved.kind == 'dictionary':
            value = self.render_type(ref.args[1], scope, kind)
            if kind == 'type':
                return f'Map<string, {value}>'
            return f'Record<string, {value}>'

        decl = resolved.decl
        name = self.type_name(decl) if kind == 'type' else self.json_name(decl)
        if not ref.args:
            return name
        return f'{name}<{", ".join(self.render_type(a, scope, kind) for a in ref.args)}>'

    def needs_decode(self, ref: TypeRef, scope: Scope | None = None) -> bool:
        """Whether the JSON form of a reference differs from its plain form."""
        resolved = self.resolver.resolve(ref, scope)
        if resolved.kind == 'primitive':
            return False
        if resolved.kind in ('param', 'dictionary'):
            return True
        if resolved.kind in ('optional', 'array'):
            return self.needs_decode(ref.args[0], scope)
        return self.decl_needs_decode(resolved.decl)

    def decl_needs_decode(self, decl: TypeDecl) -> bool:
        key = decl.qualified_name
        if key in self._needs_decode:
            return self._needs_decode[key]
        # a recursive reference to a type still being visited counts as plain
        if key in self._visiting:
            self._provisional = True
            return False

        outer_provisional = self._provisional
        self._provisional = False
        self._visiting.add(key)
        try:
            if decl.is_struct:
                scope = Scope.of(decl)
                result = bool(decl.generic_params) or any(
                    self.needs_decode(f.type_ref, scope) for f in decl.fields
                )
            elif decl.is_enum:
                result = decl.has_associated_values
            else:
                result = False
        finally:
            self._visiting.discard(key)

        # a plain answer that leaned on an enclosing type still being visited
        # holds only once that type is known
        if result or not self._provisional or not self._visiting:
            self._needs_decode[key] = result
        self._provisional = outer_provisional or (self._provisional and bool(self._visiting))
        return result

    def decode_function_name(self, ref: TypeRef, scope: Scope | None = None) -> str | None:
        """Name of the function decoding a reference, or None if it passes through."""
        if not self.needs_decode(ref, scope):
            return None
        resolved = self.resolver.resolve(ref, scope)
        if resolved.kind == 'optional':
            return 'Optional_decode'
        if resolved.kind == 'array':
            return 'Array_decode'
        if resolved.kind == 'dictionary':
            return 'Dictionary_decode'
        if resolved.kind == 'param':
            return f'{ref.name}_decode'
        return self.decode_name(resolved.decl)

    def decode_expression(self, ref: TypeRef, expr: TSExpr, scope: Scope | None = None) -> TSExpr:
        """Expression converting ``expr`` (JSON form) into the plain form of ``ref``."""
        if not self.needs_decode(ref, scope):
            return expr

        resolved = self.resolver.resolve(ref, scope)
        if resolved.kind == 'param':
            return TSCall(f'{ref.name}_decode', (expr,))
        if resolved.kind in ('optional', 'array'):
            return TSCall(
                self.decode_function_name(ref, scope),
                (expr, self.decoder_value(ref.args[0], scope)),
            )
        if resolved.kind == 'dictionary':
            return TSCall('Dictionary_decode', (expr, self.decoder_value(ref.args[1], scope)))

        args = tuple(self.decoder_value(a, scope) for a in ref.args)
        return TSCall(self.decode_name(resolved.decl), (expr, *args))

    def decoder_value(self, ref: TypeRef, scope: Scope | None = None) -> TSExpr:
        """A function value decoding ``ref``, suitable as a decoder callback."""
        if not self.needs_decode(ref, scope):
            return TSIdentifier('identity')

        resolved = self.resolver.resolve(ref, scope)
        if resolved.kind == 'param':
            return TSIdentifier(f'{ref.name}_decode')
        if resolved.kind == 'declared' and not ref.args:
            return TSIdentifier(self.decode_name(resolved.decl))

        return TSClosure(
            param='json',
            param_type=self.render_type(ref, scope, 'json'),
            return_type=self.render_type(ref, scope, 'type'),
            body=self.decode_expression(ref, TSIdentifier('json'), scope),
        )

    # Declarations

    def is_convertible(self, decl: TypeDecl) -> bool:
        """Whether a declaration produces any TypeScript output.

        Structs need at least one field and enums at least one case. Any
        declaration holding nested types qualifies as a namespace.
        """
        return (
            (decl.is_struct and bool(decl.fields))
            or (decl.is_enum and bool(decl.cases))
            or decl.has_nested_types
        )

    def generate_declaration_file(
        self, decl: TypeDecl, standard_types: set[str] | None = None
    ) -> list[TSBlock]:
        """Render a declaration as a standalone TypeScript file.

        Names in ``standard_types`` are assumed to be in scope already and are
        never imported. Every other referenced symbol is imported, helpers from
        ``helper_module`` and declared types from a module named after them.

        Returns:
            Import blocks followed by declaration blocks.
        """
        standard_types = standard_types or set()
        decls = self._declaration_blocks(decl)
        own_root = decl.qualified_name.split('.')[0]

        imports: dict[str, set[str]] = {}
        for block in decls:
            for name in self.scan_dependency(block):
                root = name.split('.')[0]
                if name in standard_types or root == own_root:
                    continue
                if name in HELPER_FUNCTIONS:
                    imports.setdefault(self.helper_module, set()).add(name)
                else:
                    imports.setdefault(f'./{root}.gen', set()).add(root)

        blocks = [
            TSBlock('import', f'import {{ {", ".join(sorted(names))} }} from "{module}";')
            for module, names in sorted(imports.items())
        ]
        blocks.extend(TSBlock('decl', text) for text in decls)
        return blocks

    def is_dependency(self, name: str) -> bool:
        """Whether ``name`` is a helper or a symbol derived from a declared type."""
        if name in HELPER_FUNCTIONS:
            return True
        base = name
        for suffix in ('_JSON', '_decode'):
            if base.endswith(suffix):
                base = base[: -len(suffix)]
                break
        return self.resolver.lookup_decl(base) is not None

    def scan_dependency(self, code: str) -> set[str]:
        """Symbols referenced by rendered code that this converter can produce."""
        return {
            token
            for token in IDENTIFIER.findall(strip_non_references(code))
            if self.is_dependency(token)
        }

    def _declaration_blocks(self, decl: TypeDecl) -> list[str]:
        blocks: list[str] = []
        if decl.is_struct:
            blocks.extend(self._struct_blocks(decl))
        elif decl.is_enum and decl.cases:
            blocks.extend(self._enum_blocks(decl))
        elif decl.has_nested_types:
            blocks.append(f'export type {decl.name} = never;')

        nested = [
            block
            for child in decl.types
            if self.is_convertible(child)
            for block in self._declaration_blocks(child)
        ]
        if nested:
            body = textwrap.indent('\n\n'.join(nested), INDENT)
            blocks.append(f'export namespace {decl.name} {{\n{body}\n}}')
        return blocks

    def _struct_blocks(self, decl: TypeDecl) -> list[str]:
        scope = Scope.of(decl)
        plain = [self._property(f.name, f.type_ref, scope, 'type') for f in decl.fields]
        blocks = [f'export type {decl.name}{self._params(decl)} = {_object_type(plain)};']
        if not self.decl_needs_decode(decl):
            return blocks

        wire = [self._property(f.name, f.type_ref, scope, 'json') for f in decl.fields]
        blocks.append(
            f'export type {decl.name}_JSON{self._params(decl, "json")} = {_object_type(wire)};'
        )

        values = [
            self._property_decode(f.name, f.type_ref, scope, f'json.{f.name}')
            for f in decl.fields
        ]
        if values:
            body = '{\n' + ''.join(f'{INDENT * 2}{v},\n' for v in values) + f'{INDENT}}}'
        else:
            body = '{}'
        blocks.append(f'{self._decode_signature(decl)} {{\n{INDENT}return {body};\n}}')
        return blocks

    def _enum_blocks(self, decl: TypeDecl) -> list[str]:
        if not decl.has_associated_values:
            cases = ' | '.join(f'"{case.name}"' for case in decl.cases)
            return [f'export type {decl.name}{self._params(decl)} = {cases};']

        scope = Scope.of(decl)

        def payload(case, kind: TypeKind) -> str:
            return _inline_object(
                [
                    self._property(v.name or f'_{i}', v.type_ref, scope, kind)
                    for i, v in enumerate(case.values)
                ]
            )

        plain = ''.join(
            f'\n{INDENT}| {{ kind: "{c.name}"; {c.name}: {payload(c, "type")} }}'
            for c in decl.cases
        )
        wire = ''.join(f'\n{INDENT}| {{ {c.name}: {payload(c, "json")} }}' for c in decl.cases)

        branches = []
        for i, case in enumerate(decl.cases):
            values = _inline_object(
                [
                    self._property_decode(
                        v.name or f'_{j}', v.type_ref, scope, f'json.{case.name}.{v.name or f"_{j}"}'
                    )
                    for j, v in enumerate(case.values)
                ]
            )
            keyword = 'if' if i == 0 else '} else if'
            branches.append(
                f'{INDENT}{keyword} ("{case.name}" in json) {{\n'
                f'{INDENT * 2}return {{ kind: "{case.name}", {case.name}: {values} }};\n'
            )
        branches.append(
            f'{INDENT}}} else {{\n{INDENT * 2}throw new globalThis.Error("unknown kind");\n{INDENT}}}\n'
        )

        return [
            f'export type {decl.name}{self._params(decl)} ={plain};',
            f'export type {decl.name}_JSON{self._params(decl, "json")} ={wire};',
            f'{self._decode_signature(decl)} {{\n{"".join(branches)}}}',
        ]

    def _property(self, name: str, ref: TypeRef, scope: Scope, kind: TypeKind) -> str:
        if self.resolver.resolve(ref, scope).kind == 'optional':
            return f'{name}?: {self.render_type(ref.args[0], scope, kind)}'
        return f'{name}: {self.render_type(ref, scope, kind)}'

    def _property_decode(self, name: str, ref: TypeRef, scope: Scope, source: str) -> str:
        if self.resolver.resolve(ref, scope).kind == 'optional':
            inner = ref.args[0]
            if not self.needs_decode(inner, scope):
                return f'{name}: {source}'
            call = TSCall(
                'OptionalField_decode', (TSIdentifier(source), self.decoder_value(inner, scope))
            )
            return f'{name}: {call}'
        return f'{name}: {self.decode_expression(ref, TSIdentifier(source), scope)}'

    def _params(self, decl: TypeDecl, kind: TypeKind = 'type') -> str:
        if not decl.generic_params:
            return ''
        if kind == 'type':
            return f'<{", ".join(decl.generic_params)}>'
        return f'<{", ".join(f"{p}_JSON" for p in decl.generic_params)}>'

    def _decode_signature(self, decl: TypeDecl) -> str:
        params = decl.generic_params
        type_params = ''
        if params:
            type_params = f'<{", ".join(f"{p}, {p}_JSON" for p in params)}>'
        decoders = ''.join(f', {p}_decode: (json: {p}_JSON) => {p}' for p in params)
        return (
            f'export function {decl.name}_decode{type_params}'
            f'(json: {decl.name}_JSON{self._params(decl, "json")}{decoders}): '
            f'{decl.name}{self._params(decl)}'
        )

    # Support library

    def generate_helper_library(self) -> str:
        """Source of the shared decode helper module."""
        return HELPER_LIBRARY


HELPER_LIBRARY = '''\
export function identity<T>(json: T): T {
    return json;
}

export function OptionalField_decode<T, T_JSON>(json: T_JSON | undefined, T_decode: (json: T_JSON) => T): T | undefined {
    if (json === undefined) return undefined;
    return T_decode(json);
}

export function Optional_decode<T, T_JSON>(json: T_JSON | null, T_decode: (json: T_JSON) => T): T | null {
    if (json === null) return null;
    return T_decode(json);
}

export function Array_decode<T, T_JSON>(json: T_JSON[], T_decode: (json: T_JSON) => T): T[] {
    return json.map((element) => T_decode(element));
}

export function Dictionary_decode<T, T_JSON>(json: { [key: string]: T_JSON }, T_decode: (json: T_JSON) => T): Map<string, T> {
    const result = new Map<string, T>();
    for (const key of Object.keys(json)) {
        result.set(key, T_decode(json[key]));
    }
    return result;
}
'''

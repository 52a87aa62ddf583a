"""A small expression tree for rendered TypeScript decode expressions.

Emitters need to know which symbols a decode expression references without
re-parsing its text, so decode expressions are built as ``TSExpr`` trees and
only rendered with ``str()`` at the very end.
"""

import re
from dataclasses import dataclass

__all__ = (
    'IDENTIFIER',
    'TSCall',
    'TSClosure',
    'TSExpr',
    'TSIdentifier',
    'strip_non_references',
)

# A possibly dotted TypeScript identifier, e.g. ``Account.Signin_decode``.
IDENTIFIER = re.compile(r'[A-Za-z_$][A-Za-z0-9_$]*(?:\.[A-Za-z_$][A-Za-z0-9_$]*)*')

_STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"')
# The name being declared, e.g. ``Request`` in ``export type Request = ...``.
_DECLARED_NAME = re.compile(r'\b(?:type|function|namespace|interface|class)\s+[A-Za-z_$][\w$]*')
# Property keys and parameter names: ``name?: string``, ``kind: "c"``.
_PROPERTY_KEY = re.compile(r'(?<![\w$.])[A-Za-z_$][\w$]*\??:')


def strip_non_references(code: str) -> str:
    """Blank out the parts of rendered code that never name another symbol.

    String literals, declared names and property keys are removed, so an
    identifier scan over the result only sees references.
    """
    for pattern in (_STRING_LITERAL, _DECLARED_NAME, _PROPERTY_KEY):
        code = pattern.sub(' ', code)
    return code


class TSExpr:
    def referenced_names(self) -> set[str]:
        raise NotImplementedError


@dataclass(frozen=True)
class TSIdentifier(TSExpr):
    name: str

    def referenced_names(self) -> set[str]:
        return {self.name}

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TSCall(TSExpr):
    callee: str
    args: tuple[TSExpr, ...] = ()

    def referenced_names(self) -> set[str]:
        names = {self.callee}
        for arg in self.args:
            names |= arg.referenced_names()
        return names

    def __str__(self) -> str:
        return f'{self.callee}({", ".join(str(a) for a in self.args)})'


@dataclass(frozen=True)
class TSClosure(TSExpr):
    """A single-parameter arrow function, used to pass nested decoders.

    ``param_type`` and ``return_type`` are rendered type strings; their names
    are reported as-is and left to the caller to decompose.
    """

    param: str
    param_type: str
    return_type: str
    body: TSExpr

    def referenced_names(self) -> set[str]:
        names = self.body.referenced_names() - {self.param}
        return names | {self.param_type, self.return_type}

    def __str__(self) -> str:
        return f'({self.param}: {self.param_type}): {self.return_type} => {self.body}'

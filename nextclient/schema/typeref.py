"""Parsing of host type reference strings.

Declaration files spell type references the way the host language does:
``String``, ``Account.Signin``, ``Result<A, B>`` and the sugared forms
``[T]``, ``T?`` and ``[K: V]``. This module turns them into ``TypeRef`` trees.
"""

import re
from dataclasses import dataclass

from nextclient.exceptions import SchemaValidationError

__all__ = ('TypeRef', 'parse_type_ref')

_TOKEN = re.compile(r'\s*(?:([A-Za-z_][A-Za-z0-9_]*)|(\S))')


@dataclass(frozen=True)
class TypeRef:
    """A parsed type reference.

    Attributes:
        name: The referenced type name, dotted for nested types.
        args: Generic arguments, in declaration order.
    """

    name: str
    args: tuple['TypeRef', ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f'{self.name}<{", ".join(str(a) for a in self.args)}>'


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.tokens: list[str] = []
        pos = 0
        while pos < len(text):
            match = _TOKEN.match(text, pos)
            if not match or match.end() == pos:
                break
            self.tokens.append(match.group(1) or match.group(2))
            pos = match.end()
        self.index = 0

    def error(self, message: str) -> SchemaValidationError:
        return SchemaValidationError(self.text, errors=[message])

    def peek(self) -> str | None:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def take(self, expected: str | None = None) -> str:
        token = self.peek()
        if token is None:
            raise self.error('unexpected end of type reference')
        if expected is not None and token != expected:
            raise self.error(f"expected '{expected}' but found '{token}'")
        self.index += 1
        return token

    def parse(self) -> TypeRef:
        ref = self.parse_ref()
        if self.peek() is not None:
            raise self.error(f"unexpected '{self.peek()}'")
        return ref

    def parse_ref(self) -> TypeRef:
        ref = self.parse_primary()
        while self.peek() == '?':
            self.take()
            ref = TypeRef('Optional', (ref,))
        return ref

    def parse_primary(self) -> TypeRef:
        token = self.peek()
        if token == '[':
            self.take()
            element = self.parse_ref()
            if self.peek() == ':':
                self.take()
                value = self.parse_ref()
                self.take(']')
                return TypeRef('Dictionary', (element, value))
            self.take(']')
            return TypeRef('Array', (element,))

        name = self.parse_identifier()
        while self.peek() == '.':
            self.take()
            name += '.' + self.parse_identifier()

        args: list[TypeRef] = []
        if self.peek() == '<':
            self.take()
            args.append(self.parse_ref())
            while self.peek() == ',':
                self.take()
                args.append(self.parse_ref())
            self.take('>')
        return TypeRef(name, tuple(args))

    def parse_identifier(self) -> str:
        token = self.take()
        if not (token[0].isalpha() or token[0] == '_'):
            raise self.error(f"expected a type name but found '{token}'")
        return token


def parse_type_ref(text: str) -> TypeRef:
    """Parse a host type reference string.

    Args:
        text: The reference as written in a declaration file.

    Returns:
        The parsed ``TypeRef``.

    Raises:
        SchemaValidationError: If the reference is malformed.
    """
    if not text or not text.strip():
        raise SchemaValidationError(repr(text), errors=['empty type reference'])
    return _Parser(text).parse()

"""Extraction of symbol names from rendered TypeScript text."""

import re

from nextclient.typescript.expressions import IDENTIFIER, strip_non_references

__all__ = ('decompose', 'scan_identifiers')

_SEPARATORS = re.compile(r'[\s<>,]+')


def decompose(rendered: str) -> set[str]:
    """Split a rendered type name into the atomic names it references.

    ``Array<Optional<Foo>>`` yields ``{'Array', 'Optional', 'Foo'}``. Brackets
    do not need to balance: this is a scan over text, not a parser.
    """
    return {token for token in _SEPARATORS.split(rendered) if token}


def scan_identifiers(code: str) -> set[str]:
    """Collect referenced identifiers, dotted ones kept whole, from rendered code.

    String literals, declared names and property keys are skipped, so enum
    case names and field names are not reported.
    """
    names: set[str] = set()
    for token in decompose(strip_non_references(code)):
        names.update(IDENTIFIER.findall(token))
    return names

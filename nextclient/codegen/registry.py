"""Registry of which output file defines which TypeScript symbol.

The registry is filled once, before any output is generated, so that a file
can import symbols defined by files generated after it.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from nextclient.exceptions import DuplicateSymbolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeSymbols:
    """The symbols one declaration contributes to its output file.

    Attributes:
        plain_name: The plain TypeScript type name.
        json_name: The JSON wire type name. Equal to ``plain_name`` when the
            wire form needs no decoding.
        decode_name: Name of the generated decode function, if any.
        extra_names: Other exported names, e.g. a service client factory.
    """

    plain_name: str
    json_name: str | None = None
    decode_name: str | None = None
    extra_names: tuple[str, ...] = ()

    def names(self) -> list[str]:
        names = [self.plain_name]
        for name in (self.json_name, self.decode_name, *self.extra_names):
            if name and name not in names:
                names.append(name)
        return names


class TypeNameRegistry:
    """Maps symbol names to the output file defining them.

    Example:
        >>> registry = TypeNameRegistry([('IRawClient', 'common.gen.ts')])
        >>> registry.insert(['User', 'User_JSON', 'User_decode'], 'User.gen.ts')
        >>> registry.lookup('User_decode')
        'User.gen.ts'
        >>> registry.names_defined('common.gen.ts')
        ['IRawClient']
    """

    def __init__(self, seed: Iterable[tuple[str, str]] | None = None):
        """Initialize the registry.

        Args:
            seed: ``(symbol, file)`` pairs known before any declaration is
                registered, typically the support file symbols.
        """
        self._files: dict[str, str] = {}
        for name, file in seed or ():
            self.insert([name], file)

    def insert(self, names: Iterable[str], defining_file: str) -> None:
        """Record that ``defining_file`` defines each of ``names``.

        Raises:
            DuplicateSymbolError: If a name is already defined by another file.
        """
        for name in names:
            existing = self._files.get(name)
            if existing is None:
                self._files[name] = defining_file
            elif existing != defining_file:
                raise DuplicateSymbolError(name, existing, defining_file)

    def insert_symbols(self, symbols: TypeSymbols, defining_file: str) -> None:
        logger.debug(f'Registering {symbols.names()} for {defining_file}')
        self.insert(symbols.names(), defining_file)

    def lookup(self, name: str) -> str | None:
        return self._files.get(name)

    def names_defined(self, file: str) -> list[str]:
        """All names defined by ``file``, in registration order."""
        return [name for name, defining in self._files.items() if defining == file]

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._files.items())

    def __contains__(self, name: str) -> bool:
        return name in self._files

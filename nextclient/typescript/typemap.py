"""Mapping of host primitive type names to TypeScript primitives."""

BUILTIN_TYPES: dict[str, str] = {
    'String': 'string',
    'Character': 'string',
    'Substring': 'string',
    'Int': 'number',
    'Int8': 'number',
    'Int16': 'number',
    'Int32': 'number',
    'Int64': 'number',
    'UInt': 'number',
    'UInt8': 'number',
    'UInt16': 'number',
    'UInt32': 'number',
    'UInt64': 'number',
    'Float': 'number',
    'Double': 'number',
    'Bool': 'boolean',
    'Void': 'void',
}


class TypeMap:
    """Resolves host type names that render as TypeScript primitives.

    Args:
        table: Extra name to TypeScript type mappings, checked after builtins.
        id_suffix_as_string: Whether names ending in ``ID`` fall back to ``string``.
    """

    def __init__(
        self, table: dict[str, str] | None = None, id_suffix_as_string: bool = True
    ):
        self.table = {**BUILTIN_TYPES, **(table or {})}
        self.id_suffix_as_string = id_suffix_as_string

    def map(self, name: str) -> str | None:
        return self.table.get(name)

    def fallback(self, name: str) -> str | None:
        """Mapping for names nothing else resolved."""
        if self.id_suffix_as_string and name.split('.')[-1].endswith('ID'):
            return 'string'
        return None

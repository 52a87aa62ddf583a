"""Import collection and rendering for generated TypeScript files.

This module turns the set of symbols a generated file uses into the
``import { ... } from "./..."`` lines it needs, consulting the registry for
where each symbol lives.
"""

from nextclient.codegen.registry import TypeNameRegistry


def root_symbol(name: str) -> str:
    """The import-eligible root of a possibly namespaced name."""
    return name.split('.', 1)[0]


def module_specifier(file: str) -> str:
    """Relative module specifier for an output file in the same directory."""
    if file.endswith('.ts'):
        file = file[: -len('.ts')]
    return f'./{file}'


class ImportCollector:
    """Collects used symbol names and renders the imports they need.

    Names nobody registered (builtins, local variables) and names defined by
    the file being generated are silently dropped. Namespaced names collapse
    to their root, since only the root can be imported.

    Example:
        >>> registry = TypeNameRegistry([('IRawClient', 'common.gen.ts')])
        >>> collector = ImportCollector(registry)
        >>> collector.add_names({'IRawClient', 'string'})
        >>> collector.import_statements('Echo.gen.ts')
        ['import { IRawClient } from "./common.gen";']
    """

    def __init__(self, registry: TypeNameRegistry):
        self.registry = registry
        self._names: set[str] = set()

    def add_names(self, names: set[str]) -> None:
        self._names.update(names)

    def add_name(self, name: str) -> None:
        self._names.add(name)

    def group_by_file(self, current_file: str) -> dict[str, set[str]]:
        """Map each defining file to the root symbols to import from it."""
        grouped: dict[str, set[str]] = {}
        for name in self._names:
            defining_file = self.registry.lookup(name)
            if defining_file is None or defining_file == current_file:
                continue
            grouped.setdefault(defining_file, set()).add(root_symbol(name))
        return grouped

    def import_statements(self, current_file: str) -> list[str]:
        """Render the import lines for ``current_file``.

        Files are ordered by name and symbols sorted within each line, so the
        output only depends on the collected names.
        """
        return [
            f'import {{ {", ".join(sorted(names))} }} from "{module_specifier(file)}";'
            for file, names in sorted(self.group_by_file(current_file).items())
            if names
        ]

    def has_imports(self, current_file: str) -> bool:
        return bool(self.group_by_file(current_file))

    def clear(self) -> None:
        self._names.clear()

    def get_names(self) -> set[str]:
        return set(self._names)

from dataclasses import dataclass, field


@dataclass
class Fragment:
    """A piece of generated code and the symbols it references.

    Attributes:
        code: Rendered TypeScript, one or more top-level items.
        used_names: Every symbol name the code refers to, unfiltered.
    """

    code: list[str] = field(default_factory=list)
    used_names: set[str] = field(default_factory=set)


@dataclass
class GeneratedFile:
    """An output module being assembled.

    Attributes:
        name: Output file name, e.g. ``Echo.gen.ts``.
        fragments: Code items in emission order.
        used_names: Union of the used names of all fragments.
    """

    name: str
    fragments: list[str] = field(default_factory=list)
    used_names: set[str] = field(default_factory=set)

    def add(self, fragment: Fragment) -> None:
        self.fragments.extend(fragment.code)
        self.used_names |= fragment.used_names

    def render(self, imports: list[str]) -> str:
        blocks = list(self.fragments)
        if imports:
            blocks.insert(0, '\n'.join(imports))
        return '\n\n'.join(blocks) + '\n'

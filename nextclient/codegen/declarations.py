import logging

from nextclient.codegen.names import scan_identifiers
from nextclient.codegen.types import Fragment
from nextclient.schema.models import TypeDecl
from nextclient.typescript.converter import TypeConverter

logger = logging.getLogger(__name__)


class DeclarationEmitter:
    """Emits type declarations and decode functions for data types.

    Rendering is delegated to the converter. Its own imports are dropped,
    since imports are assembled per output file, and the remaining code is
    scanned for the declared types and helpers it references.
    """

    def __init__(self, converter: TypeConverter):
        self.converter = converter

    def emit(self, decl: TypeDecl, known_local_names: set[str]) -> Fragment | None:
        """Render ``decl``, or return None if it produces no TypeScript.

        Args:
            decl: A top-level declaration.
            known_local_names: Symbols the current output file defines.
        """
        if not self.converter.is_convertible(decl):
            logger.debug(f'Skipping declaration {decl.qualified_name}: nothing to emit')
            return None

        blocks = self.converter.generate_declaration_file(
            decl, standard_types=known_local_names
        )
        code = [block.text.strip() for block in blocks if block.kind != 'import']

        used: set[str] = set()
        for text in code:
            used |= {name for name in scan_identifiers(text) if self.converter.is_dependency(name)}
        return Fragment(code=code, used_names=used)

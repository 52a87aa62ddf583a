"""Buffered writing of generated TypeScript files.

Generated files are collected in memory and only written once the whole run
has succeeded, so a failing run leaves the output directory untouched.
"""

import logging
from pathlib import Path

from upath import UPath

from nextclient.exceptions import OutputError

logger = logging.getLogger(__name__)


class TypeScriptFileWriter:
    """Buffers generated files and writes them to an output directory.

    Example:
        >>> writer = TypeScriptFileWriter('./src/Gen')
        >>> writer.add('common.gen.ts', source)
        >>> writer.flush()
        ['src/Gen/common.gen.ts']
    """

    def __init__(
        self,
        output_dir: str | Path | UPath,
        output_suffix: str = '.gen.ts',
        clean: bool = True,
    ):
        """Initialize the writer.

        Args:
            output_dir: Directory where files will be written.
            output_suffix: Suffix identifying generated files, used for cleanup.
            clean: Whether to delete generated files this run did not produce.
        """
        self.output_dir = UPath(output_dir)
        self.output_suffix = output_suffix
        self.clean = clean
        self._pending: dict[str, str] = {}

    def add(self, name: str, content: str) -> None:
        self._pending[name] = content

    def flush(self) -> list[str]:
        """Write all buffered files, then remove stale generated ones.

        Files whose content is unchanged on disk are not rewritten.

        Returns:
            Paths of every file produced by this run.

        Raises:
            OutputError: If the directory or a file cannot be written.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(str(self.output_dir), cause=e)

        written: list[str] = []
        for name, content in sorted(self._pending.items()):
            path = self.output_dir / name
            try:
                if path.exists() and path.read_text(encoding='utf-8') == content:
                    logger.debug(f'Unchanged: {path}')
                else:
                    path.write_text(content, encoding='utf-8')
                    logger.debug(f'Wrote {path}')
            except OSError as e:
                raise OutputError(str(path), cause=e)
            written.append(str(path))

        if self.clean:
            self._remove_stale()

        self._pending.clear()
        return written

    def _remove_stale(self) -> None:
        for path in self.output_dir.glob(f'*{self.output_suffix}'):
            if path.name in self._pending:
                continue
            logger.warning(f'Removing stale generated file {path}')
            try:
                path.unlink()
            except OSError as e:
                raise OutputError(str(path), cause=e)

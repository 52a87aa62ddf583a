"""Loading of declaration files.

This module reads YAML or JSON declaration files from disk and validates them
into ``InputFile`` objects.
"""

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from nextclient.exceptions import SchemaLoadError, SchemaValidationError
from nextclient.schema.models import DeclarationFile, InputFile

logger = logging.getLogger(__name__)


class SchemaLoader:
    """Loads declaration files from a source directory.

    Example:
        >>> loader = SchemaLoader()
        >>> files = loader.discover('./api', suffixes=['.yaml'])
        >>> [f.name for f in files]
        ['Account.yaml', 'Echo.yaml']
    """

    def __init__(self, base_path: str | Path | None = None):
        """Initialize the schema loader.

        Args:
            base_path: Base path for resolving relative file names.
                      Defaults to the current working directory.
        """
        self._base_path = Path(base_path) if base_path else Path.cwd()

    def discover(self, source: str | Path, suffixes: list[str]) -> list[InputFile]:
        """Load every declaration file below a directory.

        Files are returned sorted by their path relative to ``source`` so that
        repeated runs see the same order.

        Args:
            source: Directory to scan recursively.
            suffixes: File suffixes that mark declaration files.

        Returns:
            The loaded files.

        Raises:
            SchemaLoadError: If the directory does not exist or a file fails to load.
            SchemaValidationError: If a file is not a valid declaration file.
        """
        root = Path(source)
        if not root.is_absolute():
            root = self._base_path / root
        if not root.is_dir():
            raise SchemaLoadError(
                str(source), cause=NotADirectoryError(f'Not a directory: {root}')
            )

        paths = sorted(
            (p for p in root.rglob('*') if p.is_file() and _has_suffix(p.name, suffixes)),
            key=lambda p: p.relative_to(root).as_posix(),
        )
        logger.debug(f'Found {len(paths)} declaration file(s) in {root}')
        return [self.load(p, name=p.relative_to(root).as_posix()) for p in paths]

    def load(self, path: str | Path, name: str | None = None) -> InputFile:
        """Load and validate a single declaration file.

        Args:
            path: The file to read.
            name: Name to record for the file. Defaults to the file name.

        Returns:
            The validated ``InputFile``.
        """
        path = Path(path)
        if not path.is_absolute():
            path = self._base_path / path

        content = self._load_from_file(path)
        return self.parse(content, name or path.name, path=path)

    def parse(self, content: dict | None, name: str, path: Path | None = None) -> InputFile:
        """Validate already decoded file content."""
        try:
            document = DeclarationFile.model_validate(content or {})
        except ValidationError as e:
            errors = [
                f'{".".join(str(p) for p in err["loc"])}: {err["msg"]}' for err in e.errors()
            ]
            raise SchemaValidationError(name, errors=errors) from e
        return InputFile(name=name, types=document.types, path=path)

    def _load_from_file(self, path: Path) -> dict | None:
        if not path.exists():
            raise SchemaLoadError(str(path), cause=FileNotFoundError(f'File not found: {path}'))

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() == '.json':
                return json.loads(content)
            return yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(str(path), cause=e)
        except OSError as e:
            raise SchemaLoadError(str(path), cause=e)


def _has_suffix(filename: str, suffixes: list[str]) -> bool:
    return any(filename.endswith(suffix) for suffix in suffixes)

"""Code generation module for nextclient.

This module provides the main Codegen class that turns a directory of
declaration files into TypeScript client modules.
"""

import logging
from pathlib import PurePosixPath

from nextclient.codegen.declarations import DeclarationEmitter
from nextclient.codegen.file_writer import TypeScriptFileWriter
from nextclient.codegen.import_collector import ImportCollector
from nextclient.codegen.registry import TypeNameRegistry, TypeSymbols
from nextclient.codegen.services import ServiceClientEmitter
from nextclient.codegen.support import registry_seed, support_files
from nextclient.codegen.types import GeneratedFile
from nextclient.config import TargetConfig
from nextclient.exceptions import ConfigurationError
from nextclient.schema.loader import SchemaLoader
from nextclient.schema.models import InputFile, TypeDecl
from nextclient.schema.scanner import ServiceProtocolScanner
from nextclient.typescript.converter import TypeConverter
from nextclient.typescript.resolver import TypeResolver
from nextclient.typescript.typemap import TypeMap

logger = logging.getLogger(__name__)


class Codegen:
    """Main code generator for TypeScript RPC clients.

    Generation runs in two passes over all declaration files. The first pass
    registers which output file defines every symbol; the second renders each
    file and derives its imports from the registry. Two support files, the
    transport interface and the decode helpers, are always produced.

    Attributes:
        config: The TargetConfig with source and output settings.
        seed: Registry entries known before any declaration is read.

    Example:
        >>> from nextclient.config import TargetConfig
        >>> from nextclient.codegen.codegen import Codegen
        >>>
        >>> codegen = Codegen(TargetConfig(source='./api', output='./src/Gen'))
        >>> codegen.generate()
        # Writes common.gen.ts, decode.gen.ts and one .gen.ts per declaration file
    """

    def __init__(
        self,
        config: TargetConfig,
        schema_loader: SchemaLoader | None = None,
        seed: list[tuple[str, str]] | None = None,
        scanner: ServiceProtocolScanner | None = None,
    ):
        """Initialize the code generator.

        Args:
            config: Configuration specifying source and output locations.
            schema_loader: Optional custom loader for declaration files.
            seed: Registry seed. Defaults to the support file symbols.
            scanner: Optional custom service scanner.
        """
        self.config = config
        self.schema_loader = schema_loader or SchemaLoader()
        self.scanner = scanner or ServiceProtocolScanner()
        if seed is None:
            seed = registry_seed(config.common_file, config.decode_file)
        self.seed = list(seed)

    def output_filename(self, input_name: str) -> str:
        """Output file name for a declaration file, without directories."""
        name = PurePosixPath(input_name).name
        for suffix in sorted(self.config.source_suffixes, key=len, reverse=True):
            if name.endswith(suffix):
                return name[: -len(suffix)] + self.config.output_suffix
        return name + self.config.output_suffix

    def generate(self) -> list[str]:
        """Load the declarations, generate and write all files.

        Returns:
            Paths of the written files.
        """
        files = self.schema_loader.discover(self.config.source, self.config.source_suffixes)
        outputs = self.run(files)

        writer = TypeScriptFileWriter(
            self.config.output, output_suffix=self.config.output_suffix, clean=self.config.clean
        )
        for name, content in outputs.items():
            writer.add(name, content)
        return writer.flush()

    def run(self, files: list[InputFile]) -> dict[str, str]:
        """Generate every output file in memory.

        Args:
            files: All declaration files of the run.

        Returns:
            Mapping of output file name to content, support files first.
        """
        self._check_output_names(files)

        converter = self._create_converter(files)
        outputs = support_files(converter, self.config.common_file, self.config.decode_file)

        registry = self.build_registry(files, converter)

        for file in files:
            content = self.process_file(file, registry, converter)
            if content is None:
                logger.debug(f'No output for {file.name}')
                continue
            outputs[self.output_filename(file.name)] = content
            logger.info(f'Generated {self.output_filename(file.name)} from {file.name}')
        return outputs

    def build_registry(
        self, files: list[InputFile], converter: TypeConverter
    ) -> TypeNameRegistry:
        """First pass: register every declared symbol against its output file.

        Top-level declarations and, one level deep, the declarations nested
        in them are registered.
        """
        registry = TypeNameRegistry(self.seed)
        for file in files:
            output_file = self.output_filename(file.name)
            for decl in file.types:
                registry.insert_symbols(self._symbols(decl, converter), output_file)
                for nested in decl.types:
                    registry.insert_symbols(self._symbols(nested, converter), output_file)
        return registry

    def process_file(
        self, file: InputFile, registry: TypeNameRegistry, converter: TypeConverter
    ) -> str | None:
        """Second pass for one file: render its code and imports.

        Returns:
            The file content, or None if the file declares nothing to emit.
        """
        output_file = self.output_filename(file.name)
        generated = GeneratedFile(name=output_file)

        service_emitter = ServiceClientEmitter(converter)
        for decl in file.types:
            service = self.scanner.scan(decl)
            if service is not None:
                generated.add(service_emitter.emit(service))

        declaration_emitter = DeclarationEmitter(converter)
        local_names = set(registry.names_defined(output_file))
        for decl in file.types:
            fragment = declaration_emitter.emit(decl, local_names)
            if fragment is not None:
                generated.add(fragment)

        if not generated.fragments:
            return None

        collector = ImportCollector(registry)
        collector.add_names(generated.used_names)
        return generated.render(collector.import_statements(output_file))

    def _symbols(self, decl: TypeDecl, converter: TypeConverter) -> TypeSymbols:
        if '.' not in decl.qualified_name:
            service = self.scanner.scan(decl)
            if service is not None:
                return TypeSymbols(
                    plain_name=f'I{service.name}Client',
                    extra_names=(f'build{service.name}Client',),
                )
        return TypeSymbols(
            plain_name=converter.type_name(decl),
            json_name=converter.json_name(decl),
            decode_name=converter.decode_name(decl),
        )

    def _create_converter(self, files: list[InputFile]) -> TypeConverter:
        type_map = TypeMap(self.config.type_map, self.config.id_suffix_as_string)
        helper_module = './' + self.config.decode_file.removesuffix('.ts')
        return TypeConverter(TypeResolver(files, type_map), helper_module=helper_module)

    def _check_output_names(self, files: list[InputFile]) -> None:
        reserved = {self.config.common_file: '<support>', self.config.decode_file: '<support>'}
        for file in files:
            output_file = self.output_filename(file.name)
            if output_file in reserved:
                raise ConfigurationError(
                    f"'{file.name}' and '{reserved[output_file]}' both generate '{output_file}'"
                )
            reserved[output_file] = file.name

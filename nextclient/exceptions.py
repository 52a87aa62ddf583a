"""Custom exceptions for nextclient.

This module defines the hierarchy of exceptions raised while loading
declaration files, converting types and assembling TypeScript output.
"""


class NextClientError(Exception):
    """Base exception for all nextclient errors.

    All exceptions raised by nextclient inherit from this class, making it easy
    to catch every generation failure with a single except clause.

    Example:
        try:
            codegen.generate()
        except NextClientError as e:
            print(f"nextclient error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(NextClientError):
    """Base exception for declaration file errors."""

    pass


class SchemaLoadError(SchemaError):
    """Failed to load a declaration file.

    Attributes:
        source: The file path that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load declarations from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """A declaration file does not match the expected structure.

    Attributes:
        source: The file (or type reference) that is invalid.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Declaration validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class TypeResolutionError(SchemaError):
    """A type reference has no mapping and no declaration.

    Attributes:
        reference: The type name that could not be resolved.
        context: The declaration in which the reference appeared.
    """

    def __init__(self, reference: str, context: str | None = None):
        self.reference = reference
        self.context = context
        message = f"Cannot resolve type '{reference}'"
        if context:
            message += f" (referenced from '{context}')"
        super().__init__(message)


class CodeGenerationError(NextClientError):
    """Error during code generation.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class DuplicateSymbolError(CodeGenerationError):
    """The same symbol was registered for two different output files.

    Attributes:
        symbol: The symbol name registered twice.
        existing_file: The output file that already defines the symbol.
        new_file: The output file that attempted to define it again.
    """

    def __init__(self, symbol: str, existing_file: str, new_file: str):
        self.symbol = symbol
        self.existing_file = existing_file
        self.new_file = new_file
        super().__init__(
            f"Symbol '{symbol}' is defined in both '{existing_file}' and '{new_file}'"
        )


class ConfigurationError(NextClientError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(NextClientError):
    """Error writing generated output.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class UnsupportedFeatureError(NextClientError):
    """A declaration uses a feature the TypeScript output cannot express.

    Attributes:
        feature: Description of the unsupported feature.
        suggestion: Optional suggestion for a workaround.
    """

    def __init__(self, feature: str, suggestion: str | None = None):
        self.feature = feature
        self.suggestion = suggestion
        message = f'Unsupported feature: {feature}'
        if suggestion:
            message += f'. {suggestion}'
        super().__init__(message)

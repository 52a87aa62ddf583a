"""Pydantic models for declaration files.

A declaration file lists the data types and service protocols of one host
module. These models are the type model the generator consumes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

from nextclient.exceptions import SchemaValidationError
from nextclient.schema.typeref import TypeRef, parse_type_ref


def _check_type_ref(value: str) -> str:
    try:
        parse_type_ref(value)
    except SchemaValidationError as e:
        raise ValueError(e.message) from e
    return value


TypeRefStr = Annotated[str, AfterValidator(_check_type_ref)]


class FieldDecl(BaseModel):
    """A stored property of a struct."""

    name: str
    type: TypeRefStr

    @property
    def type_ref(self) -> TypeRef:
        return parse_type_ref(self.type)


class CaseValue(BaseModel):
    """An associated value of an enum case. Unnamed values are positional."""

    name: str | None = None
    type: TypeRefStr

    @property
    def type_ref(self) -> TypeRef:
        return parse_type_ref(self.type)


class CaseDecl(BaseModel):
    name: str
    values: list[CaseValue] = Field(default_factory=list)


class RequestDecl(BaseModel):
    name: str = 'request'
    type: TypeRefStr

    @property
    def type_ref(self) -> TypeRef:
        return parse_type_ref(self.type)


class FunctionDecl(BaseModel):
    """A method of a service protocol."""

    name: str
    request: RequestDecl | None = None
    response: TypeRefStr | None = None

    @property
    def response_ref(self) -> TypeRef | None:
        if self.response is None:
            return None
        return parse_type_ref(self.response)


class TypeDecl(BaseModel):
    """A declared host type.

    Structs carry ``fields``, enums carry ``cases`` and protocols carry
    ``functions``. Any kind may hold nested declarations in ``types``, which
    makes it a container.
    """

    name: str
    kind: Literal['struct', 'enum', 'protocol']
    generic_params: list[str] = Field(default_factory=list)
    fields: list[FieldDecl] = Field(default_factory=list)
    cases: list[CaseDecl] = Field(default_factory=list)
    functions: list[FunctionDecl] = Field(default_factory=list)
    types: list['TypeDecl'] = Field(default_factory=list)

    _qualified_name: str | None = PrivateAttr(default=None)

    @field_validator('cases', mode='before')
    @classmethod
    def _short_cases(cls, value):
        if isinstance(value, list):
            return [{'name': v} if isinstance(v, str) else v for v in value]
        return value

    @property
    def qualified_name(self) -> str:
        return self._qualified_name or self.name

    @property
    def is_struct(self) -> bool:
        return self.kind == 'struct'

    @property
    def is_enum(self) -> bool:
        return self.kind == 'enum'

    @property
    def is_protocol(self) -> bool:
        return self.kind == 'protocol'

    @property
    def has_nested_types(self) -> bool:
        return bool(self.types)

    @property
    def has_associated_values(self) -> bool:
        return any(case.values for case in self.cases)

    def walk(self):
        """Yield this declaration and all nested declarations, depth first."""
        yield self
        for nested in self.types:
            yield from nested.walk()


TypeDecl.model_rebuild()


class DeclarationFile(BaseModel):
    types: list[TypeDecl] = Field(default_factory=list)

    @model_validator(mode='after')
    def _assign_qualified_names(self):
        def assign(decl: TypeDecl, prefix: str | None) -> None:
            decl._qualified_name = f'{prefix}.{decl.name}' if prefix else decl.name
            for nested in decl.types:
                assign(nested, decl._qualified_name)

        for decl in self.types:
            assign(decl, None)
        return self


@dataclass
class InputFile:
    """One loaded declaration file.

    Attributes:
        name: File name relative to the source directory.
        types: Top-level declarations in file order.
        path: Where the file was read from, when it came from disk.
    """

    name: str
    types: list[TypeDecl] = field(default_factory=list)
    path: Path | None = None

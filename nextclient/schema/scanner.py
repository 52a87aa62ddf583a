"""Recognition of service protocols among declared types."""

from dataclasses import dataclass, field

from nextclient.schema.models import TypeDecl
from nextclient.schema.typeref import TypeRef

SERVICE_SUFFIX = 'ServiceProtocol'


@dataclass(frozen=True)
class RequestParameter:
    arg_name: str
    type: TypeRef


@dataclass(frozen=True)
class FunctionDefinition:
    """A single remote call of a service.

    Attributes:
        name: Method name, also the last segment of the service path.
        request: The single request parameter, if the call takes one.
        response: The response type, if the call returns one.
    """

    name: str
    request: RequestParameter | None = None
    response: TypeRef | None = None


@dataclass(frozen=True)
class ServiceDefinition:
    name: str
    functions: list[FunctionDefinition] = field(default_factory=list)


class ServiceProtocolScanner:
    """Turns ``<Name>ServiceProtocol`` protocols into service definitions."""

    suffix = SERVICE_SUFFIX

    def scan(self, decl: TypeDecl) -> ServiceDefinition | None:
        """Return the service a declaration describes, or None.

        Only protocols whose name ends with the service suffix (and has a
        non-empty prefix) are services. The prefix is the service name.
        """
        if not decl.is_protocol:
            return None
        if not decl.name.endswith(self.suffix) or decl.name == self.suffix:
            return None

        functions = [
            FunctionDefinition(
                name=f.name,
                request=(
                    RequestParameter(arg_name=f.request.name, type=f.request.type_ref)
                    if f.request
                    else None
                ),
                response=f.response_ref,
            )
            for f in decl.functions
        ]
        return ServiceDefinition(name=decl.name[: -len(self.suffix)], functions=functions)

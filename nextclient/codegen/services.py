"""Generation of TypeScript RPC clients for service definitions.

For a service ``Echo`` this emits the ``IEchoClient`` interface, the
``EchoClient`` class calling the transport, and the ``buildEchoClient``
factory, together with every symbol name that code refers to.
"""

import logging

from nextclient.codegen.names import decompose
from nextclient.codegen.support import TRANSPORT_INTERFACE
from nextclient.codegen.types import Fragment
from nextclient.schema.scanner import FunctionDefinition, ServiceDefinition
from nextclient.typescript.converter import INDENT, TypeConverter
from nextclient.typescript.expressions import TSCall, TSIdentifier

logger = logging.getLogger(__name__)

DECODED_IDENTIFIER = 'json'


class ServiceClientEmitter:
    """Emits the client code of one service at a time.

    Args:
        converter: Converter used to render request and response types.
        transport_interface: Name of the transport capability interface.
    """

    def __init__(self, converter: TypeConverter, transport_interface: str = TRANSPORT_INTERFACE):
        self.converter = converter
        self.transport_interface = transport_interface

    def emit(self, service: ServiceDefinition) -> Fragment:
        """Render the interface, class and factory of ``service``."""
        used: set[str] = set()
        name = service.name
        interface = f'I{name}Client'
        transport = self.transport_interface

        signatures = [self._signature(f) for f in service.functions]
        interface_body = ''.join(f'{INDENT}{sig};\n' for sig in signatures)

        methods = '\n'.join(
            self._method(service, f, sig, used)
            for f, sig in zip(service.functions, signatures)
        )
        class_body = (
            f'{INDENT}transport: {transport};\n\n'
            f'{INDENT}constructor(transport: {transport}) {{\n'
            f'{INDENT * 2}this.transport = transport;\n'
            f'{INDENT}}}\n'
        )
        if methods:
            class_body += '\n' + methods

        used.add(transport)
        for f in service.functions:
            if f.request is not None:
                used |= decompose(self.converter.render_type(f.request.type))
                used |= decompose(self.converter.render_type(f.request.type, kind='json'))
            if f.response is not None:
                used |= decompose(self.converter.render_type(f.response))

        logger.debug(f'Emitted client for service {name} ({len(service.functions)} functions)')
        return Fragment(
            code=[
                f'export interface {interface} {{\n{interface_body}}}',
                f'class {name}Client implements {interface} {{\n{class_body}}}',
                f'export const build{name}Client = (transport: {transport}): {interface} '
                f'=> new {name}Client(transport);',
            ],
            used_names=used,
        )

    def _signature(self, f: FunctionDefinition) -> str:
        params = ''
        if f.request is not None:
            request_type = self.converter.render_type(f.request.type, kind='json')
            params = f'{f.request.arg_name}: {request_type}'
        return f'{f.name}({params}): Promise<{self._response_type(f)}>'

    def _response_type(self, f: FunctionDefinition) -> str:
        if f.response is None:
            return 'void'
        return self.converter.render_type(f.response)

    def _method(
        self,
        service: ServiceDefinition,
        f: FunctionDefinition,
        signature: str,
        used: set[str],
    ) -> str:
        argument = f.request.arg_name if f.request is not None else '{}'
        fetch = f'this.transport.fetch({argument}, "{service.name}/{f.name}")'

        decode_function = None
        if f.response is not None:
            decode_function = self.converter.decode_function_name(f.response)

        if decode_function is not None:
            json_type = self.converter.render_type(f.response, kind='json')
            decode = self.converter.decode_expression(
                f.response, TSIdentifier(DECODED_IDENTIFIER)
            )
            body = (
                f'{INDENT * 2}const {DECODED_IDENTIFIER} = await {fetch} as {json_type};\n'
                f'{INDENT * 2}return {decode};\n'
            )

            used.add(decode_function)
            used |= decompose(json_type)
            if isinstance(decode, TSCall):
                for arg in decode.args:
                    if str(arg) == DECODED_IDENTIFIER:
                        continue
                    for name in arg.referenced_names():
                        used |= decompose(name)
        else:
            body = f'{INDENT * 2}return await {fetch} as {self._response_type(f)};\n'

        return f'{INDENT}async {signature} {{\n{body}{INDENT}}}\n'

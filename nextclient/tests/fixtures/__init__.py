"""Test fixtures for nextclient tests.

This module provides sample declaration documents and helpers to turn them
into loaded files and converters.
"""

from nextclient.schema.loader import SchemaLoader
from nextclient.schema.models import InputFile
from nextclient.typescript.converter import TypeConverter
from nextclient.typescript.resolver import TypeResolver
from nextclient.typescript.typemap import TypeMap

# Generic helpers shared by other files
SHARED_DECLARATIONS = {
    'types': [
        {
            'name': 'Result',
            'kind': 'enum',
            'generic_params': ['T', 'E'],
            'cases': [
                {'name': 'success', 'values': [{'type': 'T'}]},
                {'name': 'failure', 'values': [{'type': 'E'}]},
            ],
        },
        {
            'name': 'SubmitError',
            'kind': 'struct',
            'generic_params': ['E'],
            'fields': [{'name': 'errors', 'type': '[E]'}],
        },
    ]
}

# Request and response types living apart from the service using them
MESSAGES_DECLARATIONS = {
    'types': [
        {
            'name': 'HelloRequest',
            'kind': 'struct',
            'fields': [
                {'name': 'name', 'type': 'String'},
                {'name': 'tags', 'type': '[String: String]'},
            ],
        },
        {
            'name': 'HelloResponse',
            'kind': 'struct',
            'fields': [
                {'name': 'message', 'type': 'String'},
                {'name': 'counts', 'type': '[String: Int]'},
            ],
        },
        {
            'name': 'Color',
            'kind': 'enum',
            'cases': ['red', 'green'],
        },
    ]
}

ECHO_DECLARATIONS = {
    'types': [
        {
            'name': 'EchoServiceProtocol',
            'kind': 'protocol',
            'functions': [
                {
                    'name': 'hello',
                    'request': {'name': 'request', 'type': 'HelloRequest'},
                    'response': 'HelloResponse',
                },
                {'name': 'ping'},
                {'name': 'color', 'response': 'Color'},
            ],
        },
    ]
}

ACCOUNT_DECLARATIONS = {
    'types': [
        {
            'name': 'AccountServiceProtocol',
            'kind': 'protocol',
            'functions': [
                {
                    'name': 'signin',
                    'request': {'name': 'request', 'type': 'AccountSignin.Request'},
                    'response': 'Result<AccountSignin.Response, SubmitError<AccountSignin.Error>>',
                },
            ],
        },
        {
            'name': 'AccountSignin',
            'kind': 'enum',
            'types': [
                {
                    'name': 'Request',
                    'kind': 'struct',
                    'fields': [
                        {'name': 'email', 'type': 'String'},
                        {'name': 'password', 'type': 'String'},
                    ],
                },
                {
                    'name': 'Response',
                    'kind': 'struct',
                    'fields': [{'name': 'userName', 'type': 'String'}],
                },
                {
                    'name': 'Error',
                    'kind': 'enum',
                    'cases': ['email', 'password', 'emailOrPassword'],
                },
            ],
        },
    ]
}

# Declarations producing no output
EMPTY_DECLARATIONS = {
    'types': [
        {'name': 'Never', 'kind': 'enum', 'cases': []},
        {'name': 'Marker', 'kind': 'protocol'},
    ]
}

# Two structs referencing each other; only A holds a dictionary
MUTUAL_DECLARATIONS = {
    'types': [
        {
            'name': 'A',
            'kind': 'struct',
            'fields': [
                {'name': 'b', 'type': 'B?'},
                {'name': 'm', 'type': '[String: Int]'},
            ],
        },
        {'name': 'B', 'kind': 'struct', 'fields': [{'name': 'a', 'type': 'A'}]},
    ]
}


def make_file(name: str, data: dict) -> InputFile:
    """Validate a declaration document as if it were read from ``name``."""
    return SchemaLoader().parse(data, name)


def make_converter(*files: InputFile, type_map: TypeMap | None = None) -> TypeConverter:
    return TypeConverter(TypeResolver(list(files), type_map or TypeMap()))


def sample_files() -> list[InputFile]:
    """The full sample project, in discovery order."""
    return [
        make_file('Account.yaml', ACCOUNT_DECLARATIONS),
        make_file('Echo.yaml', ECHO_DECLARATIONS),
        make_file('Messages.yaml', MESSAGES_DECLARATIONS),
        make_file('Shared.yaml', SHARED_DECLARATIONS),
    ]

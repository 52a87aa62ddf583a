"""Tests for declaration parsing, loading and service scanning."""

import json

import pytest
import yaml

from nextclient.exceptions import SchemaLoadError, SchemaValidationError
from nextclient.schema.loader import SchemaLoader
from nextclient.schema.scanner import ServiceProtocolScanner
from nextclient.schema.typeref import TypeRef, parse_type_ref

from nextclient.tests.fixtures import ACCOUNT_DECLARATIONS, ECHO_DECLARATIONS, make_file


class TestParseTypeRef:
    """Tests for parse_type_ref."""

    def test_simple_name(self):
        assert parse_type_ref('String') == TypeRef('String')

    def test_qualified_name(self):
        ref = parse_type_ref('Account.Signin.Request')
        assert ref.name == 'Account.Signin.Request'

    def test_generic_arguments(self):
        ref = parse_type_ref('Result<Foo, SubmitError<Bar>>')
        assert ref == TypeRef('Result', (TypeRef('Foo'), TypeRef('SubmitError', (TypeRef('Bar'),))))

    def test_array_sugar(self):
        assert parse_type_ref('[Int]') == TypeRef('Array', (TypeRef('Int'),))

    def test_optional_sugar(self):
        assert parse_type_ref('String?') == TypeRef('Optional', (TypeRef('String'),))

    def test_dictionary_sugar(self):
        assert parse_type_ref('[String: [Foo?]]') == TypeRef(
            'Dictionary',
            (
                TypeRef('String'),
                TypeRef('Array', (TypeRef('Optional', (TypeRef('Foo'),)),)),
            ),
        )

    def test_whitespace_tolerated(self):
        assert parse_type_ref('  Result< A ,B >  ') == parse_type_ref('Result<A, B>')

    def test_str_roundtrip(self):
        assert str(parse_type_ref('Result<A, [B]>')) == 'Result<A, Array<B>>'

    @pytest.mark.parametrize('text', ['', 'Foo<', 'Foo<Bar', '[Foo', 'Foo>', '<Foo>', 'Foo Bar'])
    def test_malformed(self, text):
        """Test that malformed references raise a validation error."""
        with pytest.raises(SchemaValidationError):
            parse_type_ref(text)


class TestSchemaLoader:
    """Tests for SchemaLoader."""

    def test_parse_assigns_qualified_names(self):
        """Test that nested declarations know their full name."""
        file = make_file('Account.yaml', ACCOUNT_DECLARATIONS)
        signin = file.types[1]
        assert signin.qualified_name == 'AccountSignin'
        assert [t.qualified_name for t in signin.types] == [
            'AccountSignin.Request',
            'AccountSignin.Response',
            'AccountSignin.Error',
        ]

    def test_short_enum_cases(self):
        """Test that bare strings are accepted as enum cases."""
        file = make_file('Account.yaml', ACCOUNT_DECLARATIONS)
        error = file.types[1].types[2]
        assert [c.name for c in error.cases] == ['email', 'password', 'emailOrPassword']
        assert not error.has_associated_values

    def test_invalid_type_reference(self):
        """Test that a bad type string is reported with its location."""
        data = {'types': [{'name': 'A', 'kind': 'struct', 'fields': [{'name': 'x', 'type': 'Foo<'}]}]}
        with pytest.raises(SchemaValidationError) as exc_info:
            SchemaLoader().parse(data, 'A.yaml')
        assert exc_info.value.source == 'A.yaml'
        assert any('types.0.fields.0.type' in e for e in exc_info.value.errors)

    def test_invalid_kind(self):
        data = {'types': [{'name': 'A', 'kind': 'class'}]}
        with pytest.raises(SchemaValidationError):
            SchemaLoader().parse(data, 'A.yaml')

    def test_empty_document(self):
        """Test that an empty file loads as no declarations."""
        assert SchemaLoader().parse(None, 'Empty.yaml').types == []

    def test_load_yaml_file(self, tmp_path):
        path = tmp_path / 'Echo.yaml'
        path.write_text(yaml.safe_dump(ECHO_DECLARATIONS))

        file = SchemaLoader().load(path)

        assert file.name == 'Echo.yaml'
        assert file.path == path
        assert file.types[0].name == 'EchoServiceProtocol'

    def test_load_json_file(self, tmp_path):
        path = tmp_path / 'Echo.json'
        path.write_text(json.dumps(ECHO_DECLARATIONS))
        assert SchemaLoader().load(path).types[0].functions[0].name == 'hello'

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError):
            SchemaLoader().load(tmp_path / 'missing.yaml')

    def test_load_broken_yaml(self, tmp_path):
        path = tmp_path / 'Broken.yaml'
        path.write_text('types: [\n')
        with pytest.raises(SchemaLoadError):
            SchemaLoader().load(path)

    def test_discover_sorted(self, tmp_path):
        """Test that discovery is recursive, filtered and sorted."""
        (tmp_path / 'sub').mkdir()
        (tmp_path / 'b.yaml').write_text('types: []\n')
        (tmp_path / 'a.yml').write_text('types: []\n')
        (tmp_path / 'sub' / 'c.yaml').write_text('types: []\n')
        (tmp_path / 'notes.txt').write_text('ignored')

        files = SchemaLoader().discover(tmp_path, ['.yaml', '.yml'])

        assert [f.name for f in files] == ['a.yml', 'b.yaml', 'sub/c.yaml']

    def test_discover_missing_directory(self, tmp_path):
        with pytest.raises(SchemaLoadError):
            SchemaLoader().discover(tmp_path / 'nope', ['.yaml'])


class TestServiceProtocolScanner:
    """Tests for ServiceProtocolScanner."""

    def test_scan_service(self):
        file = make_file('Echo.yaml', ECHO_DECLARATIONS)
        service = ServiceProtocolScanner().scan(file.types[0])

        assert service is not None
        assert service.name == 'Echo'
        assert [f.name for f in service.functions] == ['hello', 'ping', 'color']

        hello = service.functions[0]
        assert hello.request.arg_name == 'request'
        assert hello.request.type == TypeRef('HelloRequest')
        assert hello.response == TypeRef('HelloResponse')

        ping = service.functions[1]
        assert ping.request is None
        assert ping.response is None

    def test_non_service_protocol_ignored(self):
        file = make_file('X.yaml', {'types': [{'name': 'Loggable', 'kind': 'protocol'}]})
        assert ServiceProtocolScanner().scan(file.types[0]) is None

    def test_bare_suffix_ignored(self):
        file = make_file('X.yaml', {'types': [{'name': 'ServiceProtocol', 'kind': 'protocol'}]})
        assert ServiceProtocolScanner().scan(file.types[0]) is None

    def test_struct_ignored(self):
        file = make_file('Account.yaml', ACCOUNT_DECLARATIONS)
        assert ServiceProtocolScanner().scan(file.types[1]) is None

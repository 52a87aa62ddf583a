"""Tests for import rendering."""

from nextclient.codegen.import_collector import (
    ImportCollector,
    module_specifier,
    root_symbol,
)
from nextclient.codegen.registry import TypeNameRegistry


def make_registry() -> TypeNameRegistry:
    registry = TypeNameRegistry(
        [
            ('IRawClient', 'common.gen.ts'),
            ('identity', 'decode.gen.ts'),
            ('Array_decode', 'decode.gen.ts'),
        ]
    )
    registry.insert(['User', 'User_JSON', 'User_decode'], 'User.gen.ts')
    registry.insert(['Account.Signin', 'Account.Signin_JSON'], 'Account.gen.ts')
    registry.insert(['Account'], 'Account.gen.ts')
    registry.insert(['Post'], 'Post.gen.ts')
    return registry


class TestHelpers:
    """Tests for the small naming helpers."""

    def test_root_symbol(self):
        assert root_symbol('Account.Signin.Request') == 'Account'
        assert root_symbol('User') == 'User'

    def test_module_specifier(self):
        assert module_specifier('Echo.gen.ts') == './Echo.gen'
        assert module_specifier('common.gen') == './common.gen'


class TestImportCollector:
    """Tests for ImportCollector."""

    def test_groups_and_sorts(self):
        """Test one sorted line per defining file, files sorted by name."""
        collector = ImportCollector(make_registry())
        collector.add_names({'User_decode', 'User', 'IRawClient', 'Post', 'identity'})

        assert collector.import_statements('Echo.gen.ts') == [
            'import { Post } from "./Post.gen";',
            'import { User, User_decode } from "./User.gen";',
            'import { IRawClient } from "./common.gen";',
            'import { identity } from "./decode.gen";',
        ]

    def test_unknown_names_dropped(self):
        """Test that builtins and locals produce no import."""
        collector = ImportCollector(make_registry())
        collector.add_names({'string', 'json', 'Promise', 'User'})
        assert collector.import_statements('Echo.gen.ts') == [
            'import { User } from "./User.gen";'
        ]

    def test_self_import_suppressed(self):
        """Test that a file never imports its own symbols."""
        collector = ImportCollector(make_registry())
        collector.add_names({'User', 'User_JSON', 'Post'})
        assert collector.import_statements('User.gen.ts') == [
            'import { Post } from "./Post.gen";'
        ]

    def test_namespace_collapse(self):
        """Test that qualified names import their root only."""
        collector = ImportCollector(make_registry())
        collector.add_names({'Account.Signin', 'Account.Signin_JSON', 'Account'})
        statements = collector.import_statements('Echo.gen.ts')

        assert statements == ['import { Account } from "./Account.gen";']
        assert 'Account.Signin' not in statements[0]

    def test_empty_when_everything_filtered(self):
        """Test that no empty import line is rendered."""
        collector = ImportCollector(make_registry())
        collector.add_names({'User', 'string'})
        assert collector.import_statements('User.gen.ts') == []
        assert not collector.has_imports('User.gen.ts')

    def test_no_names(self):
        collector = ImportCollector(make_registry())
        assert collector.import_statements('Echo.gen.ts') == []

    def test_deterministic(self):
        """Test that insertion order does not change the output."""
        names = ['Post', 'identity', 'User_decode', 'Array_decode', 'IRawClient', 'User']
        first = ImportCollector(make_registry())
        first.add_names(set(names))
        second = ImportCollector(make_registry())
        for name in reversed(names):
            second.add_name(name)
        assert first.import_statements('X.gen.ts') == second.import_statements('X.gen.ts')

    def test_clear(self):
        collector = ImportCollector(make_registry())
        collector.add_names({'User'})
        collector.clear()
        assert collector.get_names() == set()
        assert collector.import_statements('Echo.gen.ts') == []

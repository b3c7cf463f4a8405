# tests/test_namespace_checker.py
"""
Tests for class reference resolution and the visitor / plugin checks.
"""

import pytest

from annotation_refcheck.checkers import ANNOTATION_NOT_IMPORTED, ISSUE_TEMPLATES
from annotation_refcheck.namespace_checker import (
    _resolve_type_fqsen,
    check_plugin,
    check_visitor,
    iter_missing_classes,
    resolve_class_fqsen,
)
from annotation_refcheck.symbols import Context
from annotation_refcheck.types import NativeType, Type
from tests.conftest import RecordingPlugin, RecordingVisitor, fqsen

TEMPLATE = ISSUE_TEMPLATES[ANNOTATION_NOT_IMPORTED]


class TestResolveClassFqsen:

    @pytest.mark.parametrize("text,expected", [
        ("Foo", "App\\Controller\\Foo"),
        ("\\Foo", "Foo"),
        ("User", "App\\Entity\\User"),
        ("ORM\\Entity", "Doctrine\\ORM\\Mapping\\Entity"),
        ("?User", "App\\Entity\\User"),
        ("User[]", "App\\Entity\\User"),
        ("User[][]", "App\\Entity\\User"),
        ("list<User>", "App\\Entity\\User"),
        ("array<string, User>", "App\\Entity\\User"),
    ])
    def test_resolves(self, context, text, expected):
        assert resolve_class_fqsen(context, text) == fqsen(expected)

    @pytest.mark.parametrize("text", [
        "", "int", "string[]", "mixed", "class-string", "self", "parent",
        "static", "User|Group", "(User|Group)[]", "array{a: int}", "Foo-Bar",
    ])
    def test_skips(self, context, text):
        assert resolve_class_fqsen(context, text) is None

    def test_template_is_skipped(self):
        ctx = Context(template_types=frozenset({"T"}))
        assert resolve_class_fqsen(ctx, "T") is None
        assert resolve_class_fqsen(ctx, "T[]") is None

    def test_non_class_type_violates_invariant(self):
        class Opaque(Type):
            pass

        with pytest.raises(AssertionError):
            _resolve_type_fqsen(Opaque())

    def test_native_type_resolves_to_none(self):
        assert _resolve_type_fqsen(NativeType("int")) is None


class TestCheckVisitor:

    def test_missing_class_is_reported(self, code_base, context):
        visitor = RecordingVisitor()
        check_visitor(visitor, code_base, context, "Missing",
                      ANNOTATION_NOT_IMPORTED, TEMPLATE)
        assert visitor.issues == [
            (ANNOTATION_NOT_IMPORTED, TEMPLATE, ["App\\Controller\\Missing"]),
        ]

    def test_declared_class_is_silent(self, code_base, context):
        visitor = RecordingVisitor()
        check_visitor(visitor, code_base, context, "ORM\\Table",
                      ANNOTATION_NOT_IMPORTED, TEMPLATE)
        assert visitor.issues == []

    def test_global_namespace_argument(self, code_base):
        visitor = RecordingVisitor()
        check_visitor(visitor, code_base, Context(), "FooBar",
                      ANNOTATION_NOT_IMPORTED, TEMPLATE)
        assert visitor.issues[0][2] == ["FooBar"]

    @pytest.mark.parametrize("text", ["", "int", "Missing|Other", "self"])
    def test_unresolvable_is_silent(self, code_base, context, text):
        visitor = RecordingVisitor()
        check_visitor(visitor, code_base, context, text,
                      ANNOTATION_NOT_IMPORTED, TEMPLATE)
        assert visitor.issues == []


class TestIterMissingClasses:

    def test_yields_each_missing_class(self, code_base, context):
        missing = list(iter_missing_classes(
            code_base, context, "User|Missing|int|Other[]"
        ))
        assert missing == [fqsen("App\\Controller\\Missing"),
                           fqsen("App\\Controller\\Other")]

    def test_is_lazy(self, code_base, context):
        gen = iter_missing_classes(code_base, context, "Missing|Other")
        assert next(gen) == fqsen("App\\Controller\\Missing")

    def test_empty_string(self, code_base, context):
        assert list(iter_missing_classes(code_base, context, "")) == []


class TestCheckPlugin:

    def test_one_issue_per_missing_class(self, code_base, context):
        plugin = RecordingPlugin()
        check_plugin(plugin, code_base, context, "Missing|User|Other",
                     ANNOTATION_NOT_IMPORTED, TEMPLATE)
        assert [args for _, _, args in plugin.issues] == [
            ["App\\Controller\\Missing"],
            ["App\\Controller\\Other"],
        ]

    def test_all_declared(self, code_base, context):
        plugin = RecordingPlugin()
        check_plugin(plugin, code_base, context, "?User",
                     ANNOTATION_NOT_IMPORTED, TEMPLATE)
        assert plugin.issues == []

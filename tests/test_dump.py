# tests/test_dump.py
"""
Tests for the JSON dump loader.
"""

import copy

import pytest

from annotation_refcheck.checkers import DeclarationKind
from annotation_refcheck.dump import load_dump, parse_dump
from annotation_refcheck.errors import DumpFormatError
from tests.conftest import SAMPLE_DUMP, fqsen


class TestParseDump:

    def test_classes(self):
        dump = parse_dump(SAMPLE_DUMP)
        assert len(dump.code_base) == 5
        user = dump.code_base.get_class(fqsen("App\\Entity\\User"))
        assert user.constants == frozenset({"ROLE_ADMIN"})
        assert user.parent == fqsen("App\\Entity\\Base")
        assert dump.code_base.get_class(fqsen("Qux")).kind == "interface"

    def test_declarations_in_file_order(self):
        dump = parse_dump(SAMPLE_DUMP)
        assert [d.name for d in dump.declarations] == [
            "UserController", "list", "repository", "Post",
        ]
        assert [d.kind for d in dump.declarations[:3]] == [
            DeclarationKind.CLASS, DeclarationKind.METHOD, DeclarationKind.PROPERTY,
        ]

    def test_declaration_context(self):
        decl = parse_dump(SAMPLE_DUMP).declarations[0]
        assert decl.location.file == "src/Controller/UserController.php"
        assert decl.location.line == 12
        assert decl.context.namespace == "App\\Controller"
        assert decl.context.lookup_use("user") == "App\\Entity\\User"

    def test_declaration_overrides_file_context(self):
        raw = {"files": [{
            "path": "a.php", "namespace": "A", "uses": {"X": "A\\X"},
            "declarations": [{
                "kind": "method", "name": "f", "namespace": "B",
                "uses": {}, "templates": ["T"],
            }],
        }]}
        decl = parse_dump(raw).declarations[0]
        assert decl.kind is DeclarationKind.METHOD
        assert decl.context.namespace == "B"
        assert decl.context.lookup_use("X") is None
        assert decl.context.is_template("T")

    def test_empty(self):
        dump = parse_dump({})
        assert len(dump.code_base) == 0
        assert dump.declarations == []

    @pytest.mark.parametrize("raw", [
        [],
        {"classes": {}},
        {"classes": [{"name": "1Bad"}]},
        {"classes": [{"name": "A", "constants": "X"}]},
        {"classes": [{"name": "A", "extends": 3}]},
        {"files": [{"declarations": [{"kind": "closure"}]}]},
        {"files": [{"declarations": [{"kind": "function"}]}]},
        {"files": [{"declarations": [{"kind": "class", "line": "1"}]}]},
        {"files": [{"declarations": [{"kind": "class", "doc_comment": 1}]}]},
        {"files": [{"uses": {"A": 1}, "declarations": []}]},
    ])
    def test_malformed(self, raw):
        with pytest.raises(DumpFormatError):
            parse_dump(raw)


class TestLoadDump:

    def test_load(self, dump_file):
        dump = load_dump(dump_file)
        assert dump.source == str(dump_file)
        assert len(dump.declarations) == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(DumpFormatError, match="cannot read dump"):
            load_dump(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DumpFormatError) as excinfo:
            load_dump(path)
        assert str(excinfo.value).startswith(str(path))

    def test_sample_is_not_mutated(self):
        before = copy.deepcopy(SAMPLE_DUMP)
        parse_dump(SAMPLE_DUMP)
        assert SAMPLE_DUMP == before

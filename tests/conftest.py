# tests/conftest.py
"""
Shared fixtures and sample doc comments for the annotation-refcheck tests.
"""

import json

import pytest

from annotation_refcheck.checkers import (
    CheckerRunner,
    Declaration,
    DeclarationKind,
    SourceLocation,
)
from annotation_refcheck.symbols import (
    ClassInfo,
    CodeBase,
    Context,
    FullyQualifiedClassName,
)


# ═══════════════════════════════════════════════════════════════════
#  Sample doc comments
# ═══════════════════════════════════════════════════════════════════

PLAIN_COMMENT = """/**
 * Returns the user name.
 *
 * @param int $id
 * @return string
 */"""

ENTITY_COMMENT = """/**
 * @ORM\\Entity(repositoryClass="UserRepository")
 * @ORM\\Table(name="users")
 */"""

ROUTE_COMMENT = '/** @Route("/users", name="user_list") */'

CLASS_RESOLUTION_COMMENT = """/**
 * @var string one of User::class, Baz::class
 */"""

CONST_COMMENT = """/**
 * Defaults to User::ROLE_ADMIN, see Qux::SOME_CONST.
 */"""

TWIG_COMMENT = """/**
 * Renders AppBundle::index.html.twig
 */"""

QUOTED_COMMENT = '/** @Template("@Foo/index.html") */'

SUPPRESSED_COMMENT = """/**
 * @FooBar
 * @suppress AnnotationNotImported
 */"""


# ═══════════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════════

def fqsen(text):
    """Shorthand for a FullyQualifiedClassName."""
    return FullyQualifiedClassName.from_fully_qualified_string(text)


def class_info(name, constants=(), parent=None, interfaces=(), traits=(),
               kind="class"):
    return ClassInfo(
        fqsen=fqsen(name),
        kind=kind,
        constants=frozenset(constants),
        parent=fqsen(parent) if parent else None,
        interfaces=tuple(fqsen(i) for i in interfaces),
        traits=tuple(fqsen(t) for t in traits),
    )


def declaration(doc_comment, context=None, kind=DeclarationKind.CLASS,
                name="Subject", file="src/Subject.php", line=1):
    return Declaration(
        kind=kind,
        name=name,
        doc_comment=doc_comment,
        location=SourceLocation(file=file, line=line),
        context=context or Context(file=file),
    )


def run_on(code_base, doc_comment, context=None, **options):
    """Run the default checkers on one declaration; return its diagnostics."""
    runner = CheckerRunner(options=options)
    return runner.run(code_base, [declaration(doc_comment, context)]).diagnostics


class RecordingVisitor:
    """Visitor-level issue sink that remembers every emit() call."""

    def __init__(self):
        self.issues = []

    def emit(self, issue_type, issue_message_fmt, args):
        self.issues.append((issue_type, issue_message_fmt, list(args)))


class RecordingPlugin:
    """Plugin-level issue sink that remembers every emit_issue() call."""

    def __init__(self):
        self.issues = []

    def emit_issue(self, code_base, context, issue_type, issue_message_fmt, args):
        self.issues.append((issue_type, issue_message_fmt, list(args)))


SAMPLE_DUMP = {
    "classes": [
        {"name": "App\\Entity\\Base", "constants": ["VERSION"]},
        {"name": "App\\Entity\\User", "constants": ["ROLE_ADMIN"],
         "extends": "App\\Entity\\Base"},
        {"name": "Doctrine\\ORM\\Mapping\\Entity"},
        {"name": "Doctrine\\ORM\\Mapping\\Table"},
        {"name": "Qux", "kind": "interface"},
    ],
    "files": [
        {
            "path": "src/Controller/UserController.php",
            "namespace": "App\\Controller",
            "uses": {"User": "App\\Entity\\User", "ORM": "Doctrine\\ORM\\Mapping"},
            "declarations": [
                {"kind": "class", "name": "UserController", "line": 12,
                 "doc_comment": ROUTE_COMMENT},
                {"kind": "method", "name": "list", "line": 20,
                 "doc_comment": CONST_COMMENT},
                {"kind": "property", "name": "repository", "line": 30,
                 "doc_comment": "/** @var User */"},
            ],
        },
        {
            "path": "src/Entity/Post.php",
            "namespace": "App\\Entity",
            "uses": {"ORM": "Doctrine\\ORM\\Mapping"},
            "declarations": [
                {"kind": "class", "name": "Post", "line": 9,
                 "doc_comment": ENTITY_COMMENT},
            ],
        },
    ],
}


# ═══════════════════════════════════════════════════════════════════
#  Fixtures
# ═══════════════════════════════════════════════════════════════════

@pytest.fixture
def code_base():
    """A small code base with an entity hierarchy and Doctrine mappings."""
    return CodeBase([
        class_info("App\\Entity\\Base", constants=["VERSION"]),
        class_info("App\\Entity\\User", constants=["ROLE_ADMIN"],
                   parent="App\\Entity\\Base", traits=["App\\Entity\\Timestamps"]),
        class_info("App\\Entity\\Timestamps", constants=["FORMAT"], kind="trait"),
        class_info("Doctrine\\ORM\\Mapping\\Entity"),
        class_info("Doctrine\\ORM\\Mapping\\Table"),
        class_info("Qux"),
    ])


@pytest.fixture
def context():
    """Context of a controller with the usual imports."""
    return Context(
        namespace="App\\Controller",
        uses={"User": "App\\Entity\\User", "ORM": "Doctrine\\ORM\\Mapping"},
        file="src/Controller/UserController.php",
    )


@pytest.fixture
def dump_file(tmp_path):
    path = tmp_path / "project.refcheck.json"
    path.write_text(json.dumps(SAMPLE_DUMP), encoding="utf-8")
    return path

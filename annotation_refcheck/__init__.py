"""
annotation_refcheck — Undeclared class references in doc comments
=================================================================

A checker for static-analysis hosts.  It scans the doc comments of
class, method and property declarations for

* annotations           ``@Entity``, ``@ORM\\Column(...)``
* class name resolution ``User::class``
* constant references   ``User::ROLE_ADMIN``

and reports every reference whose class (or constant) is not declared
in the analyzed code base.

Core modules
------------
extractor
    Pattern matchers producing ``Candidate`` references.
type_grammar
    Doc-comment type grammar (parsimonious PEG).
namespace_checker
    Resolution of candidates to fully-qualified class names.
checkers
    Checker framework, suppressions, runner and diagnostics.
dump / config
    JSON dump and configuration loaders.

Quick start
-----------
>>> from annotation_refcheck import CodeBase, Context, Declaration, DeclarationKind
>>> from annotation_refcheck import CheckerRunner
>>> decl = Declaration(DeclarationKind.CLASS, "Foo", "/** @FooBar */")
>>> results = CheckerRunner().run(CodeBase(), [decl])
>>> [d.args for d in results.diagnostics]
[('FooBar',)]
"""

from __future__ import annotations

import logging
from typing import List

__version__ = "0.1.0"
__license__ = "MIT"

_log = logging.getLogger(__name__)
_log.addHandler(logging.NullHandler())

from annotation_refcheck.checkers import (  # noqa: E402
    AnnotationChecker,
    CheckerRunner,
    CheckerRunResults,
    Declaration,
    DeclarationKind,
    Diagnostic,
    DiagnosticSeverity,
    DoctrineAnnotationChecker,
    SourceLocation,
)
from annotation_refcheck.extractor import Candidate, CandidateKind, extract_candidates  # noqa: E402
from annotation_refcheck.namespace_checker import (  # noqa: E402
    check_plugin,
    check_visitor,
    iter_missing_classes,
    resolve_class_fqsen,
)
from annotation_refcheck.symbols import (  # noqa: E402
    ClassInfo,
    CodeBase,
    Context,
    FullyQualifiedClassName,
)

__all__: List[str] = [
    "__version__",
    "AnnotationChecker",
    "DoctrineAnnotationChecker",
    "CheckerRunner",
    "CheckerRunResults",
    "Declaration",
    "DeclarationKind",
    "Diagnostic",
    "DiagnosticSeverity",
    "SourceLocation",
    "Candidate",
    "CandidateKind",
    "extract_candidates",
    "check_plugin",
    "check_visitor",
    "iter_missing_classes",
    "resolve_class_fqsen",
    "ClassInfo",
    "CodeBase",
    "Context",
    "FullyQualifiedClassName",
]

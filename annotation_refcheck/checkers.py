"""
annotation_refcheck/checkers.py
═══════════════════════════════

Checker framework that turns doc-comment class references into
host-compatible diagnostics.

Flow
────

    declarations ─► AnnotationChecker.visit()
                      extractor.extract_candidates()
                      namespace_checker.resolve / check
                      emit() ─► Finding
                  ─► diagnose() ─► Diagnostic
                  ─► SuppressionManager (global, @suppress, file)
                  ─► CheckerRunResults (gcc / JSON / summary)

A checker first records ``Finding``s while visiting declarations, then
renders them into ``Diagnostic``s; suppression is applied last, so a
finding and its diagnostic always refer to the same declaration index.
"""

from __future__ import annotations

import json
import logging
import re
import time
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from fnmatch import fnmatch
from typing import (
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    Type,
)

from annotation_refcheck.extractor import (
    Candidate,
    CandidateKind,
    extract_candidates,
)
from annotation_refcheck.namespace_checker import (
    check_visitor,
    resolve_class_fqsen,
)
from annotation_refcheck.symbols import (
    CodeBase,
    Context,
    FullyQualifiedClassName,
    SymbolTable,
)

logger = logging.getLogger(__name__)

ADDON_NAME = "annotation-refcheck"

# ── Issue kinds and message templates ────────────────────────────────

ANNOTATION_NOT_IMPORTED = "AnnotationNotImported"
CLASS_NAME_RESOLUTION_NOT_IMPORTED = "ClassNameResolutionNotImported"
CONST_REFERENCE_CLASS_NOT_IMPORTED = "ConstReferenceClassNotImported"
CONST_REFERENCE_CONST_NOT_FOUND = "ConstReferenceConstNotFound"

ISSUE_TEMPLATES: Dict[str, str] = {
    ANNOTATION_NOT_IMPORTED:
        "The classlike {CLASS} annotation is undeclared",
    CLASS_NAME_RESOLUTION_NOT_IMPORTED:
        "The classlike {CLASS} used for class name resolution (::class) is undeclared",
    CONST_REFERENCE_CLASS_NOT_IMPORTED:
        "The classlike {CLASS} used in {COMMENT} is undeclared",
    CONST_REFERENCE_CONST_NOT_FOUND:
        "The const {CONST} from {COMMENT} is undeclared in classlike {CLASS}",
}

# Framework-specific false positives, keyed by preset name.
EXCEPTION_PRESETS: Dict[str, Tuple[str, ...]] = {
    # Doctrine annotation meta-annotations and ignored upper-case tags
    "doctrine": (
        "Annotation",
        "Attribute",
        "Attributes",
        "Enum",
        "IgnoreAnnotation",
        "NamedArgumentConstructor",
        "Required",
        "Target",
        "SuppressWarnings",
        "TODO",
        "FIXME",
        "Fixme",
    ),
}


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — DIAGNOSTIC MODEL
# ═════════════════════════════════════════════════════════════════════════

class DiagnosticSeverity(Enum):
    """Severity names as written to gcc and JSON output."""
    ERROR = "error"
    WARNING = "warning"
    STYLE = "style"
    INFORMATION = "information"


@dataclass(frozen=True)
class SourceLocation:
    """File, line and column of a declaration; 0 means unknown."""
    file: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        if self.column:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}:{self.line}"


_PLACEHOLDER_RE = re.compile(r"\{[A-Z_]+\}")


def render_message(template: str, args: Sequence[str]) -> str:
    """
    Substitute ``{NAME}`` placeholders positionally.

    >>> render_message("The const {CONST} from {COMMENT}", ["A", "X::A"])
    'The const A from X::A'

    Placeholders without a matching argument are left in place.
    """
    remaining = iter(args)

    def _next(match: re.Match) -> str:
        return str(next(remaining, match.group(0)))

    return _PLACEHOLDER_RE.sub(_next, template)


@dataclass(frozen=True)
class Diagnostic:
    """
    One reported issue.

    Attributes
    ----------
    error_id          : issue kind, e.g. "AnnotationNotImported"
    message           : ``template`` with ``args`` filled in
    severity          : DiagnosticSeverity
    location          : where the doc-commented declaration sits
    template          : message with ``{NAME}`` placeholders
    args              : placeholder values, in order
    checker_name      : checker that raised it
    addon             : tool name written to JSON output
    declaration_index : position of the declaration in the checked
                        sequence; ``None`` for run-level diagnostics
    """
    error_id: str
    message: str
    severity: DiagnosticSeverity
    location: SourceLocation
    template: str = ""
    args: Tuple[str, ...] = ()
    checker_name: str = ""
    addon: str = ADDON_NAME
    declaration_index: Optional[int] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "file": self.location.file,
            "linenr": self.location.line,
            "column": self.location.column,
            "severity": self.severity.value,
            "message": self.message,
            "addon": self.addon,
            "errorId": self.error_id,
            "args": list(self.args),
        }

    def to_json_str(self) -> str:
        return json.dumps(self.to_json())

    def to_gcc_format(self) -> str:
        """``file:line[:col]: severity: message [ErrorId]``"""
        sev = self.severity.value
        return f"{self.location}: {sev}: {self.message} [{self.error_id}]"


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — DECLARATIONS AND VISITOR
# ═════════════════════════════════════════════════════════════════════════

class DeclarationKind(Enum):
    CLASS = "class"
    METHOD = "method"
    PROPERTY = "property"


@dataclass(frozen=True)
class Declaration:
    """A class, method or property declaration handed over by the host."""
    kind: DeclarationKind
    name: str
    doc_comment: Optional[str] = None
    location: SourceLocation = field(default_factory=SourceLocation)
    context: Context = field(default_factory=Context)


class DeclarationVisitor(ABC):
    """
    One callback per declaration kind, invoked by the host traversal.

    ``visit()`` dispatches on ``Declaration.kind``.
    """

    def visit(self, decl: Declaration) -> Any:
        if decl.kind is DeclarationKind.CLASS:
            return self.visit_class(decl)
        if decl.kind is DeclarationKind.METHOD:
            return self.visit_method(decl)
        return self.visit_prop_elem(decl)

    @abstractmethod
    def visit_class(self, decl: Declaration) -> Any:
        ...

    @abstractmethod
    def visit_method(self, decl: Declaration) -> Any:
        ...

    @abstractmethod
    def visit_prop_elem(self, decl: Declaration) -> Any:
        ...


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — SUPPRESSION MANAGER
# ═════════════════════════════════════════════════════════════════════════

_INLINE_SUPPRESS_RE = re.compile(
    r"@(?:phan-)?suppress\s+(?P<ids>\w+(?:\s*,\s*\w+)*)"
)


class SuppressionManager:
    """
    Decides which diagnostics are dropped before reporting.

    Three kinds of rule are consulted, in this order:

      global      issue kinds silenced everywhere (``--suppress``)
      inline      ``@suppress Kind`` / ``@phan-suppress A, B`` in a doc
                  comment, silencing that declaration only
      file-level  issue kinds silenced for a path, suffix or glob

    Inline rules belong to one checked sequence of declarations and are
    replaced each time ``load_inline_suppressions`` is called.

    >>> sm = SuppressionManager()
    >>> sm.add_global_suppression("ConstReferenceConstNotFound")
    >>> sm.add_file_suppression("AnnotationNotImported", "legacy/*.php")
    """

    def __init__(self) -> None:
        # declaration index → issue kinds its doc comment suppresses
        self._inline: Dict[int, Set[str]] = defaultdict(set)
        self._file_level: Dict[str, Set[str]] = defaultdict(set)
        self._global: Set[str] = set()

    def load_inline_suppressions(self, declarations: Iterable[Declaration]) -> None:
        """Read ``@suppress`` tags, keyed by position in *declarations*."""
        self._inline.clear()
        for index, decl in enumerate(declarations):
            if not decl.doc_comment:
                continue
            for match in _INLINE_SUPPRESS_RE.finditer(decl.doc_comment):
                ids = [i.strip() for i in match.group("ids").split(",")]
                self._inline[index].update(i for i in ids if i)

    def add_file_suppression(self, error_id: str, file_pattern: str) -> None:
        self._file_level[file_pattern].add(error_id)

    def add_global_suppression(self, error_id: str) -> None:
        self._global.add(error_id)

    def is_suppressed(self, diag: Diagnostic) -> bool:
        eid = diag.error_id

        if eid in self._global or "*" in self._global:
            return True

        if diag.declaration_index is not None:
            inline = self._inline.get(diag.declaration_index, ())
            if eid in inline or "*" in inline:
                return True

        loc = diag.location
        for pattern, ids in self._file_level.items():
            if eid not in ids and "*" not in ids:
                continue
            if pattern == loc.file or loc.file.endswith(pattern) or fnmatch(loc.file, pattern):
                return True
        return False

    def filter_diagnostics(
        self, diagnostics: Iterable[Diagnostic]
    ) -> List[Diagnostic]:
        return [d for d in diagnostics if not self.is_suppressed(d)]


# ═════════════════════════════════════════════════════════════════════════
#  PART 4 — CHECKER BASE CLASS
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class CheckerContext:
    """
    Inputs of one run, handed to each checker in turn.

    ``declarations`` is the checked sequence; a declaration's position in
    it is the ``declaration_index`` its diagnostics carry.  ``stats`` is
    shared with ``CheckerRunResults``.
    """
    code_base: SymbolTable = field(default_factory=CodeBase)
    declarations: Sequence[Declaration] = ()
    suppressions: SuppressionManager = field(default_factory=SuppressionManager)
    options: Dict[str, Any] = field(default_factory=dict)
    stats: Dict[str, Any] = field(default_factory=dict)

    def get_option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)


class Checker(ABC):
    """
    Base of every checker run by ``CheckerRunner``.

    The runner calls ``configure``, ``collect_evidence``, ``diagnose``
    and ``report`` once each, on a fresh instance per run.  Subclasses
    set ``name``, ``description`` and ``error_ids`` and fill
    ``_diagnostics`` through ``_emit``.
    """

    name: ClassVar[str] = "base-checker"
    description: ClassVar[str] = ""
    error_ids: ClassVar[FrozenSet[str]] = frozenset()
    default_severity: ClassVar[DiagnosticSeverity] = DiagnosticSeverity.WARNING

    def __init__(self) -> None:
        self._diagnostics: List[Diagnostic] = []

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def configure(self, ctx: CheckerContext) -> None:
        pass

    @abstractmethod
    def collect_evidence(self, ctx: CheckerContext) -> None:
        ...

    @abstractmethod
    def diagnose(self, ctx: CheckerContext) -> None:
        ...

    def report(self, ctx: CheckerContext) -> List[Diagnostic]:
        """Diagnostics left after suppression."""
        return ctx.suppressions.filter_diagnostics(self._diagnostics)

    def _emit(
        self,
        error_id: str,
        template: str,
        args: Sequence[str],
        location: SourceLocation,
        severity: Optional[DiagnosticSeverity] = None,
        declaration_index: Optional[int] = None,
    ) -> None:
        self._diagnostics.append(Diagnostic(
            error_id=error_id,
            message=render_message(template, args),
            severity=severity or self.default_severity,
            location=location,
            template=template,
            args=tuple(args),
            checker_name=self.name,
            declaration_index=declaration_index,
        ))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.name}'>"


# ═════════════════════════════════════════════════════════════════════════
#  PART 5 — ANNOTATION CHECKERS
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Finding:
    """An issue emitted while visiting one declaration."""
    issue_type: str
    template: str
    args: Tuple[str, ...]
    location: SourceLocation
    declaration_index: Optional[int] = None


class AnnotationChecker(Checker, DeclarationVisitor):
    """
    Reports doc-comment class references that are not declared.

    For every class, method and property doc comment:
      - ``@Foo`` annotations        → AnnotationNotImported
      - ``Foo::class``              → ClassNameResolutionNotImported
      - ``Foo::BAR``                → ConstReferenceClassNotImported /
                                      ConstReferenceConstNotFound

    Candidates listed in ``exceptions`` (plus the configured ones) are
    never checked.
    """

    name = "annotation"
    description = "Undeclared classes and constants referenced in doc comments"
    error_ids = frozenset(ISSUE_TEMPLATES)
    default_severity = DiagnosticSeverity.ERROR

    exceptions: ClassVar[Tuple[str, ...]] = ()

    def __init__(self) -> None:
        super().__init__()
        self.code_base: SymbolTable = CodeBase()
        self.context: Context = Context()
        self._exceptions: Tuple[str, ...] = tuple(self.exceptions)
        self._severity: Dict[str, DiagnosticSeverity] = {}
        self._location: SourceLocation = SourceLocation()
        self._declaration_index: Optional[int] = None
        self._findings: List[Finding] = []

    @property
    def active_exceptions(self) -> Tuple[str, ...]:
        return self._exceptions

    @property
    def findings(self) -> List[Finding]:
        return list(self._findings)

    def configure(self, ctx: CheckerContext) -> None:
        self.code_base = ctx.code_base
        extra: Iterable[str] = ctx.get_option("exceptions", ())
        self._exceptions = tuple(dict.fromkeys([*self.exceptions, *extra]))
        severity: Mapping[str, DiagnosticSeverity] = ctx.get_option("severity", {})
        self._severity = dict(severity)

    def collect_evidence(self, ctx: CheckerContext) -> None:
        for index, decl in enumerate(ctx.declarations):
            self._declaration_index = index
            self.visit(decl)
        self._declaration_index = None
        ctx.stats[f"{self.name}_findings"] = len(self._findings)

    def diagnose(self, ctx: CheckerContext) -> None:
        for finding in self._findings:
            self._emit(
                finding.issue_type,
                finding.template,
                finding.args,
                finding.location,
                severity=self._severity.get(finding.issue_type),
                declaration_index=finding.declaration_index,
            )

    # ── Visitor ──────────────────────────────────────────────────────

    def visit_class(self, decl: Declaration) -> None:
        self.check_doc_comment(decl)

    def visit_method(self, decl: Declaration) -> None:
        self.check_doc_comment(decl)

    def visit_prop_elem(self, decl: Declaration) -> None:
        self.check_doc_comment(decl)

    def emit(
        self, issue_type: str, issue_message_fmt: str, args: Sequence[str]
    ) -> None:
        """Record an issue against the declaration being visited."""
        self._findings.append(Finding(
            issue_type=issue_type,
            template=issue_message_fmt,
            args=tuple(args),
            location=self._location,
            declaration_index=self._declaration_index,
        ))

    # ── Doc comment checks ───────────────────────────────────────────

    def check_doc_comment(self, decl: Declaration) -> None:
        """Extract and check every class reference of one doc comment."""
        if not decl.doc_comment:
            return

        self.context = decl.context
        self._location = decl.location
        for candidate in extract_candidates(decl.doc_comment, self._exceptions):
            self.check_candidate(candidate)

    def check_candidate(self, candidate: Candidate) -> None:
        if candidate.kind is CandidateKind.ANNOTATION:
            check_visitor(
                self, self.code_base, self.context, candidate.text,
                ANNOTATION_NOT_IMPORTED,
                ISSUE_TEMPLATES[ANNOTATION_NOT_IMPORTED],
            )
        elif candidate.kind is CandidateKind.CLASS_NAME_RESOLUTION:
            check_visitor(
                self, self.code_base, self.context, candidate.text,
                CLASS_NAME_RESOLUTION_NOT_IMPORTED,
                ISSUE_TEMPLATES[CLASS_NAME_RESOLUTION_NOT_IMPORTED],
            )
        else:
            self.check_const_reference(candidate)

    def check_const_reference(self, candidate: Candidate) -> None:
        """Check both the class and the constant of ``Foo::BAR``."""
        assert candidate.member is not None

        # It might be fully qualified already (leading \ optional), so
        # try that before the namespace and import rules
        fqsen: Optional[FullyQualifiedClassName]
        fqsen = FullyQualifiedClassName.from_fully_qualified_string(candidate.text)
        if fqsen is None or not self.code_base.has_class(fqsen):
            fqsen = resolve_class_fqsen(self.context, candidate.text)
            if fqsen is None:
                logger.debug("Unresolvable constant reference %r", candidate.full_match)
                return

        if not self.code_base.has_class(fqsen):
            self.emit(
                CONST_REFERENCE_CLASS_NOT_IMPORTED,
                ISSUE_TEMPLATES[CONST_REFERENCE_CLASS_NOT_IMPORTED],
                [str(fqsen), candidate.full_match],
            )
            return

        info = self.code_base.get_class(fqsen)
        if not info.has_constant_with_name(self.code_base, candidate.member):
            self.emit(
                CONST_REFERENCE_CONST_NOT_FOUND,
                ISSUE_TEMPLATES[CONST_REFERENCE_CONST_NOT_FOUND],
                [candidate.member, candidate.full_match, str(fqsen)],
            )


class DoctrineAnnotationChecker(AnnotationChecker):
    """``AnnotationChecker`` that ignores Doctrine meta-annotations."""

    name = "doctrine-annotation"
    description = "Annotation check with Doctrine meta-annotations ignored"
    exceptions = EXCEPTION_PRESETS["doctrine"]


# ═════════════════════════════════════════════════════════════════════════
#  PART 6 — CHECKER REGISTRY
# ═════════════════════════════════════════════════════════════════════════

class CheckerRegistry:
    """
    Checker classes by name, each one enabled or disabled.

    Registration order is kept; ``get_enabled()`` returns classes in
    that order, ``names`` sorted.
    """

    def __init__(self) -> None:
        self._checkers: Dict[str, Type[Checker]] = {}
        self._disabled: Set[str] = set()

    def register(self, checker_cls: Type[Checker]) -> None:
        self._checkers[checker_cls.name] = checker_cls

    def unregister(self, name: str) -> None:
        self._checkers.pop(name, None)
        self._disabled.discard(name)

    def disable(self, name: str) -> None:
        self._disabled.add(name)

    def enable(self, name: str) -> None:
        self._disabled.discard(name)

    def get_all(self) -> List[Type[Checker]]:
        return list(self._checkers.values())

    def get_enabled(self) -> List[Type[Checker]]:
        return [cls for cls in self._checkers.values() if cls.name not in self._disabled]

    def get_by_name(self, name: str) -> Optional[Type[Checker]]:
        return self._checkers.get(name)

    def filter_by_error_id(self, error_id: str) -> List[Type[Checker]]:
        """Checker classes whose ``error_ids`` include *error_id*."""
        return [cls for cls in self._checkers.values() if error_id in cls.error_ids]

    @property
    def names(self) -> List[str]:
        return sorted(self._checkers)


# Both checkers report the same issues; only one runs by default
DEFAULT_REGISTRY = CheckerRegistry()
DEFAULT_REGISTRY.register(AnnotationChecker)
DEFAULT_REGISTRY.register(DoctrineAnnotationChecker)
DEFAULT_REGISTRY.disable(DoctrineAnnotationChecker.name)


# ═════════════════════════════════════════════════════════════════════════
#  PART 7 — CHECKER RUNNER
# ═════════════════════════════════════════════════════════════════════════

INTERNAL_ERROR_ID = "checkerInternalError"


@dataclass
class CheckerRunResults:
    """
    Everything one ``CheckerRunner.run`` produced.

    ``diagnostics`` holds the reported (unsuppressed) diagnostics of all
    checkers in run order; ``diagnostics_by_checker`` splits them per
    checker.  ``stats`` carries ``<checker>_elapsed_ms`` and
    ``<checker>_findings`` entries.
    """
    diagnostics: List[Diagnostic] = field(default_factory=list)
    diagnostics_by_checker: Dict[str, List[Diagnostic]] = field(
        default_factory=lambda: defaultdict(list)
    )
    stats: Dict[str, Any] = field(default_factory=dict)
    checker_names: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.by_severity(DiagnosticSeverity.ERROR))

    @property
    def warning_count(self) -> int:
        return len(self.by_severity(DiagnosticSeverity.WARNING))

    @property
    def total_count(self) -> int:
        return len(self.diagnostics)

    def by_severity(self, severity: DiagnosticSeverity) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is severity]

    def by_file(self, file: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.location.file == file]

    def by_error_id(self, error_id: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.error_id == error_id]

    def to_json_lines(self) -> str:
        return "\n".join(d.to_json_str() for d in self.diagnostics)

    def to_gcc_format(self) -> str:
        return "\n".join(d.to_gcc_format() for d in self.diagnostics)

    def summary(self) -> str:
        """One total line, then one line per checker with its timing."""
        lines = [
            f"Checker run complete: {self.total_count} diagnostics "
            f"({self.error_count} errors, {self.warning_count} warnings)",
        ]
        for name in self.checker_names:
            count = len(self.diagnostics_by_checker.get(name, []))
            elapsed = self.stats.get(f"{name}_elapsed_ms", 0)
            lines.append(f"  {name}: {count} findings ({elapsed:.1f}ms)")
        return "\n".join(lines)


class CheckerRunner:
    """
    Checks a sequence of declarations against a symbol table.

    ``registry`` supplies the checker classes (``DEFAULT_REGISTRY`` when
    omitted); ``suppressions`` holds the global and file-level rules;
    ``options`` is handed to every checker (``"exceptions"``,
    ``"severity"``).  Inline ``@suppress`` tags are re-read from the
    declarations on every ``run``.

    >>> results = CheckerRunner(options={"exceptions": ["Route"]}).run(
    ...     CodeBase(), [Declaration(DeclarationKind.CLASS, "A", "/** @Route */")])
    >>> results.total_count
    0
    """

    def __init__(
        self,
        registry: Optional[CheckerRegistry] = None,
        suppressions: Optional[SuppressionManager] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.registry = registry or DEFAULT_REGISTRY
        self.suppressions = suppressions or SuppressionManager()
        self.options = options or {}

    def run(
        self,
        code_base: SymbolTable,
        declarations: Sequence[Declaration],
        checkers: Optional[Sequence[str]] = None,
    ) -> CheckerRunResults:
        """Run the named checkers (all enabled ones if ``None``)."""
        results = CheckerRunResults()
        self.suppressions.load_inline_suppressions(declarations)
        ctx = CheckerContext(
            code_base=code_base,
            declarations=declarations,
            suppressions=self.suppressions,
            options=self.options,
            stats=results.stats,
        )

        for cls in self._select(checkers):
            t0 = time.monotonic()
            diags = self._run_checker(cls, ctx)
            elapsed_ms = (time.monotonic() - t0) * 1000.0
            logger.info("%s: %d diagnostics in %.1fms", cls.name, len(diags), elapsed_ms)

            results.checker_names.append(cls.name)
            results.diagnostics.extend(diags)
            results.diagnostics_by_checker[cls.name] = diags
            results.stats[f"{cls.name}_elapsed_ms"] = elapsed_ms

        return results

    def _select(self, names: Optional[Sequence[str]]) -> List[Type[Checker]]:
        if names is None:
            return self.registry.get_enabled()
        selected: List[Type[Checker]] = []
        for name in names:
            cls = self.registry.get_by_name(name)
            if cls is None:
                logger.warning("Unknown checker %r ignored", name)
            else:
                selected.append(cls)
        return selected

    @staticmethod
    def _run_checker(cls: Type[Checker], ctx: CheckerContext) -> List[Diagnostic]:
        checker = cls()
        try:
            checker.configure(ctx)
            checker.collect_evidence(ctx)
            checker.diagnose(ctx)
            return checker.report(ctx)
        except Exception as exc:
            # A failing checker is reported, the remaining ones still run
            logger.error("Checker %r failed: %s", cls.name, exc, exc_info=True)
            return [Diagnostic(
                error_id=INTERNAL_ERROR_ID,
                message=f"Checker '{cls.name}' failed: {exc}",
                severity=DiagnosticSeverity.INFORMATION,
                location=SourceLocation(),
                checker_name=cls.name,
            )]


__all__ = [
    # Issue kinds
    "ANNOTATION_NOT_IMPORTED",
    "CLASS_NAME_RESOLUTION_NOT_IMPORTED",
    "CONST_REFERENCE_CLASS_NOT_IMPORTED",
    "CONST_REFERENCE_CONST_NOT_FOUND",
    "ISSUE_TEMPLATES",
    "EXCEPTION_PRESETS",
    # Diagnostic model
    "Diagnostic",
    "DiagnosticSeverity",
    "SourceLocation",
    "render_message",
    # Declarations
    "Declaration",
    "DeclarationKind",
    "DeclarationVisitor",
    # Suppression
    "SuppressionManager",
    # Checker framework
    "Checker",
    "CheckerContext",
    "CheckerRegistry",
    "Finding",
    "AnnotationChecker",
    "DoctrineAnnotationChecker",
    "DEFAULT_REGISTRY",
    # Runner
    "CheckerRunner",
    "CheckerRunResults",
    "INTERNAL_ERROR_ID",
]

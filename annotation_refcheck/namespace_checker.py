# annotation_refcheck/namespace_checker.py
"""
Resolution of doc-comment class references and existence checks.

``resolve_class_fqsen`` turns a token such as ``ORM\\Entity`` into a
``FullyQualifiedClassName`` under a lexical ``Context``, or returns
``None`` when the token is not a checkable class reference (union,
native type, self/static, template, unparseable).  ``None`` is a skip,
never an error.

``check_visitor`` and ``check_plugin`` report identifiers that resolve
cleanly but are absent from the symbol table, through the visitor's
``emit`` or the plugin's ``emit_issue`` respectively.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Protocol, Sequence

from annotation_refcheck.symbols import (
    Context,
    FullyQualifiedClassName,
    SymbolTable,
)
from annotation_refcheck.type_grammar import union_type_from_string_in_context
from annotation_refcheck.types import (
    ClassType,
    GenericArrayType,
    TemplateType,
    Type,
)

logger = logging.getLogger(__name__)


class IssueEmitter(Protocol):
    """Visitor-level sink (one declaration at a time)."""

    def emit(
        self, issue_type: str, issue_message_fmt: str, args: Sequence[str]
    ) -> None: ...


class PluginIssueEmitter(Protocol):
    """Plugin-level sink; receives the code base and context explicitly."""

    def emit_issue(
        self,
        code_base: SymbolTable,
        context: Context,
        issue_type: str,
        issue_message_fmt: str,
        args: Sequence[str],
    ) -> None: ...


def check_visitor(
    visitor: IssueEmitter,
    code_base: SymbolTable,
    context: Context,
    class_string: str,
    issue_type: str,
    issue_message_fmt: str,
) -> None:
    """Emit ``issue_type`` if ``class_string`` names an undeclared class."""
    fqsen = resolve_class_fqsen(context, class_string)
    if fqsen is None:
        return
    if not code_base.has_class(fqsen):
        visitor.emit(issue_type, issue_message_fmt, [str(fqsen)])


def check_plugin(
    plugin: PluginIssueEmitter,
    code_base: SymbolTable,
    context: Context,
    union_type_string: str,
    issue_type: str,
    issue_message_fmt: str,
) -> None:
    """Emit ``issue_type`` once per undeclared class in a type string."""
    for fqsen in iter_missing_classes(code_base, context, union_type_string):
        plugin.emit_issue(
            code_base, context, issue_type, issue_message_fmt, [str(fqsen)]
        )


def resolve_class_fqsen(
    context: Context, class_string: str
) -> Optional[FullyQualifiedClassName]:
    """Resolve a single, unambiguous class reference or return ``None``."""
    if not class_string:
        return None

    union_type = union_type_from_string_in_context(class_string, context)
    if union_type.type_count() != 1:
        # Should only have a single match, fail otherwise
        logger.debug(
            "%r resolves to %d types, skipped",
            class_string, union_type.type_count(),
        )
        return None

    return _resolve_type_fqsen(union_type.get_type_set()[0])


def iter_missing_classes(
    code_base: SymbolTable, context: Context, union_type_string: str
) -> Iterator[FullyQualifiedClassName]:
    """Yield every class named by the type string that is not declared."""
    if not union_type_string:
        return

    union_type = union_type_from_string_in_context(union_type_string, context)
    for t in union_type.get_type_set():
        fqsen = _resolve_type_fqsen(t)
        if fqsen is not None and not code_base.has_class(fqsen):
            yield fqsen


def _resolve_type_fqsen(t: Type) -> Optional[FullyQualifiedClassName]:
    # TODO: Handle array shapes once the type grammar parses them
    while isinstance(t, GenericArrayType):
        t = t.generic_array_element_type()
    if t.is_native_type() or t.is_self_type() or t.is_static_type():
        return None
    if isinstance(t, TemplateType):
        # Not expected on declaration doc comments
        return None

    assert isinstance(t, ClassType), f"unexpected type kind: {t!r}"
    fqsen = t.as_fqsen()
    assert fqsen is not None, f"class type without identifier: {t!r}"
    return fqsen


__all__ = [
    "IssueEmitter",
    "PluginIssueEmitter",
    "check_visitor",
    "check_plugin",
    "resolve_class_fqsen",
    "iter_missing_classes",
]

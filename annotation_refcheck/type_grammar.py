# annotation_refcheck/type_grammar.py
"""
Doc-comment type-string grammar.

Turns strings such as ``\\App\\User``, ``?User[]``, ``array<int, User>``
or ``(User|Group)[]`` into a ``UnionType`` under a lexical ``Context``.

Supported forms
───────────────
  T            class, native, self/static or template name
  \\A\\B         fully-qualified name
  namespace\\B  name relative to the current namespace
  ?T           nullable
  T[]          generic array (repeatable, distributes over groups)
  A|B          union
  (A|B)        group
  N<A, B>      generic; array-like N wraps its last argument in an
               array, any other N keeps only N

Anything else (array shapes, callables with signatures, ...) fails to
parse, and the caller gets an empty ``UnionType``.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, List

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import Node, NodeVisitor

from annotation_refcheck.symbols import Context, NAMESPACE_SEPARATOR
from annotation_refcheck.types import (
    GENERIC_ARRAY_NAMES,
    NATIVE_TYPE_NAMES,
    SELF_TYPE_NAMES,
    STATIC_TYPE_NAMES,
    ClassType,
    GenericArrayType,
    NativeType,
    SelfType,
    StaticType,
    TemplateType,
    Type,
    UnionType,
)

logger = logging.getLogger(__name__)

# Doc-comment aliases for native types.
_NATIVE_ALIASES = {
    "boolean": "bool",
    "integer": "int",
    "double": "float",
}


# ═══════════════════════════════════════════════════════════════════
#  PART 1 — GRAMMAR (Parsimonious PEG)
# ═══════════════════════════════════════════════════════════════════

TYPE_GRAMMAR = Grammar(r'''
    type_expr       = _ union _

    union           = postfix alternatives
    alternatives    = alternative*
    alternative     = _ "|" _ postfix

    postfix         = nullable atom array_suffix
    nullable        = "?"?
    array_suffix    = ~r"(?:\s*\[\s*\])*"

    atom            = group / generic / name
    group           = "(" _ union _ ")"
    generic         = name _ "<" _ arguments _ ">"
    arguments       = union more_arguments
    more_arguments  = next_argument*
    next_argument   = _ "," _ union

    # First segment may carry hyphens (class-string, non-empty-array);
    # later segments are plain identifiers.
    name            = ~r"\\?[a-zA-Z_\x7f-\U0010ffff][a-zA-Z0-9_\x7f-\U0010ffff-]*(?:\\[a-zA-Z_\x7f-\U0010ffff][a-zA-Z0-9_\x7f-\U0010ffff]*)*"

    _               = ~r"\s*"
''')


# ═══════════════════════════════════════════════════════════════════
#  PART 2 — PARSE TREE → TYPES
# ═══════════════════════════════════════════════════════════════════

class _UnresolvableName(Exception):
    """A name matched the grammar but is not a valid type."""


class TypeBuilder(NodeVisitor):
    """Builds a flat list of ``Type`` objects from a parse tree."""

    unwrapped_exceptions = (_UnresolvableName,)

    def __init__(self, context: Context) -> None:
        self.context = context

    def generic_visit(self, node: Node, visited_children: List[Any]) -> Any:
        return visited_children or node

    def visit_type_expr(self, node: Node, visited_children: List[Any]) -> List[Type]:
        _, union, _ = visited_children
        return union

    def visit_union(self, node: Node, visited_children: List[Any]) -> List[Type]:
        first, rest = visited_children
        return first + rest

    def visit_alternatives(self, node: Node, visited_children: List[Any]) -> List[Type]:
        return [t for alternative in visited_children for t in alternative]

    def visit_alternative(self, node: Node, visited_children: List[Any]) -> List[Type]:
        _, _, _, postfix = visited_children
        return postfix

    def visit_postfix(self, node: Node, visited_children: List[Any]) -> List[Type]:
        nullable, types, depth = visited_children
        result = []
        for t in types:
            for _ in range(depth):
                t = GenericArrayType(t)
            if nullable:
                t = dataclasses.replace(t, is_nullable=True)
            result.append(t)
        return result

    def visit_nullable(self, node: Node, visited_children: List[Any]) -> bool:
        return bool(node.text)

    def visit_array_suffix(self, node: Node, visited_children: List[Any]) -> int:
        return node.text.count("[")

    def visit_atom(self, node: Node, visited_children: List[Any]) -> List[Type]:
        (child,) = visited_children
        if isinstance(child, str):
            return [self.named_type(child)]
        return child

    def visit_group(self, node: Node, visited_children: List[Any]) -> List[Type]:
        _, _, union, _, _ = visited_children
        return union

    def visit_generic(self, node: Node, visited_children: List[Any]) -> List[Type]:
        name, _, _, _, arguments, _, _ = visited_children
        if name.lower() in GENERIC_ARRAY_NAMES:
            return [GenericArrayType(t) for t in arguments[-1]]
        return [self.named_type(name)]

    def visit_arguments(self, node: Node, visited_children: List[Any]) -> List[List[Type]]:
        first, rest = visited_children
        return [first] + rest

    def visit_more_arguments(self, node: Node, visited_children: List[Any]) -> List[List[Type]]:
        return list(visited_children)

    def visit_next_argument(self, node: Node, visited_children: List[Any]) -> List[Type]:
        _, _, _, union = visited_children
        return union

    def visit_name(self, node: Node, visited_children: List[Any]) -> str:
        return node.text

    def visit__(self, node: Node, visited_children: List[Any]) -> None:
        return None

    def named_type(self, raw: str) -> Type:
        """Classify a bare name: native, self/static, template or class."""
        if not raw.startswith(NAMESPACE_SEPARATOR):
            lowered = raw.lower()
            if lowered in NATIVE_TYPE_NAMES:
                return NativeType(_NATIVE_ALIASES.get(lowered, lowered))
            if lowered in SELF_TYPE_NAMES:
                return SelfType(lowered)
            if lowered in STATIC_TYPE_NAMES:
                return StaticType(lowered)
            if self.context.is_template(raw):
                return TemplateType(raw)

        fqsen = self.context.qualify(raw)
        if fqsen is None:
            raise _UnresolvableName(raw)
        return ClassType(fqsen)


# ═══════════════════════════════════════════════════════════════════
#  PART 3 — PUBLIC ENTRY POINT
# ═══════════════════════════════════════════════════════════════════

def union_type_from_string_in_context(text: str, context: Context) -> UnionType:
    """
    Parse a doc-comment type string.

    Never raises for malformed input: unparseable strings and names that
    cannot denote a type give an empty ``UnionType``.
    """
    text = text.strip()
    if not text:
        return UnionType()
    try:
        tree = TYPE_GRAMMAR.parse(text)
        types = TypeBuilder(context).visit(tree)
    except ParseError:
        logger.debug("Unparseable type string: %r", text)
        return UnionType()
    except _UnresolvableName as exc:
        logger.debug("Name %r in %r is not a type", str(exc), text)
        return UnionType()
    return UnionType.of(*types)


__all__ = [
    "TYPE_GRAMMAR",
    "TypeBuilder",
    "union_type_from_string_in_context",
]

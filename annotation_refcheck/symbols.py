# annotation_refcheck/symbols.py
"""
Symbol-table model consumed by the checker.

The host analysis engine owns the real symbol table; this module gives
it a small, explicit shape:

  FullyQualifiedClassName   canonical class-like identifier
  Context                   lexical context (namespace, ``use`` aliases,
                            template names in scope)
  ClassInfo                 one declared class / interface / trait
  CodeBase                  in-memory, read-only symbol table
  SymbolTable               protocol the checker queries

Class lookups are case-insensitive, constant lookups are not.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import (
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Set,
    Tuple,
    runtime_checkable,
)

logger = logging.getLogger(__name__)

# Identifier characters of the host grammar.  The host works on UTF-8
# bytes and accepts every byte >= 0x7f; on text that is every code point
# from U+007F upward.
IDENT_START = "a-zA-Z_\\x7f-\\U0010ffff"
IDENT_CHAR = "a-zA-Z0-9_\\x7f-\\U0010ffff"
NAMESPACE_SEPARATOR = "\\"

_SEGMENT = f"[{IDENT_START}][{IDENT_CHAR}]*"
_CLASS_NAME_RE = re.compile(rf"{_SEGMENT}(?:\\{_SEGMENT})*")


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — IDENTIFIERS
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FullyQualifiedClassName:
    """
    Canonical, absolute name of a class-like symbol.

    ``str()`` gives the namespace-qualified name without a leading
    separator, e.g. ``App\\Entity\\User`` or ``Qux``.
    """
    namespace: str
    name: str

    @classmethod
    def from_fully_qualified_string(
        cls, text: str
    ) -> Optional[FullyQualifiedClassName]:
        """
        Interpret *text* as an already fully-qualified name.

        The leading namespace separator is optional.  Returns ``None``
        when *text* is not a syntactically valid class name.
        """
        stripped = text[1:] if text.startswith(NAMESPACE_SEPARATOR) else text
        if not _CLASS_NAME_RE.fullmatch(stripped):
            return None
        namespace, _, name = stripped.rpartition(NAMESPACE_SEPARATOR)
        return cls(namespace=namespace, name=name)

    @property
    def key(self) -> str:
        """Case-insensitive lookup key."""
        return str(self).lower()

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.namespace}{NAMESPACE_SEPARATOR}{self.name}"
        return self.name


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — LEXICAL CONTEXT
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class Context:
    """
    Lexical context of a declaration.

    Attributes
    ----------
    namespace      : active namespace ("" = global namespace)
    uses           : ``use`` aliases, alias → fully-qualified class name
    template_types : template names in scope (``@template T``)
    file           : file the declaration lives in
    """
    namespace: str = ""
    uses: Mapping[str, str] = field(default_factory=dict)
    template_types: FrozenSet[str] = frozenset()
    file: str = ""

    def __post_init__(self) -> None:
        self.namespace = self.namespace.strip(NAMESPACE_SEPARATOR)
        self._uses_by_key: Dict[str, str] = {
            alias.lower(): target.lstrip(NAMESPACE_SEPARATOR)
            for alias, target in self.uses.items()
        }

    def lookup_use(self, alias: str) -> Optional[str]:
        """Return the imported name for *alias* (case-insensitive)."""
        return self._uses_by_key.get(alias.lower())

    def is_template(self, name: str) -> bool:
        return name in self.template_types

    def qualify(self, name: str) -> Optional[FullyQualifiedClassName]:
        """
        Resolve a class name written in this context.

        Rules, in order:
          1. ``\\A\\B``      — already fully qualified
          2. ``namespace\\B`` — relative to the current namespace
          3. ``Alias\\B``    — first segment is a ``use`` alias
          4. ``B``          — prefixed with the current namespace
        """
        if not name:
            return None
        if name.startswith(NAMESPACE_SEPARATOR):
            return FullyQualifiedClassName.from_fully_qualified_string(name)

        head, sep, tail = name.partition(NAMESPACE_SEPARATOR)
        if sep and head.lower() == "namespace":
            return FullyQualifiedClassName.from_fully_qualified_string(
                self._in_namespace(tail)
            )

        target = self.lookup_use(head)
        if target is not None:
            full = f"{target}{NAMESPACE_SEPARATOR}{tail}" if sep else target
            return FullyQualifiedClassName.from_fully_qualified_string(full)

        return FullyQualifiedClassName.from_fully_qualified_string(
            self._in_namespace(name)
        )

    def _in_namespace(self, name: str) -> str:
        if self.namespace:
            return f"{self.namespace}{NAMESPACE_SEPARATOR}{name}"
        return name


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — SYMBOL TABLE
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ClassInfo:
    """
    A declared class-like symbol.

    ``parent``, ``interfaces`` and ``traits`` are used to find inherited
    constants.
    """
    fqsen: FullyQualifiedClassName
    kind: str = "class"
    constants: FrozenSet[str] = frozenset()
    parent: Optional[FullyQualifiedClassName] = None
    interfaces: Tuple[FullyQualifiedClassName, ...] = ()
    traits: Tuple[FullyQualifiedClassName, ...] = ()

    def has_constant_with_name(self, code_base: SymbolTable, name: str) -> bool:
        """True if this class or one of its ancestors declares ``name``."""
        seen: Set[str] = set()
        for info in _ancestry(code_base, self, seen):
            if name in info.constants:
                return True
        return False


def _ancestry(
    code_base: SymbolTable, start: ClassInfo, seen: Set[str]
) -> Iterator[ClassInfo]:
    stack: List[ClassInfo] = [start]
    while stack:
        info = stack.pop()
        if info.fqsen.key in seen:
            continue
        seen.add(info.fqsen.key)
        yield info
        related: List[FullyQualifiedClassName] = []
        if info.parent is not None:
            related.append(info.parent)
        related.extend(info.interfaces)
        related.extend(info.traits)
        for fqsen in related:
            if code_base.has_class(fqsen):
                stack.append(code_base.get_class(fqsen))


@runtime_checkable
class SymbolTable(Protocol):
    """What the checker needs from the host's symbol table."""

    def has_class(self, fqsen: FullyQualifiedClassName) -> bool: ...

    def get_class(self, fqsen: FullyQualifiedClassName) -> ClassInfo: ...


class CodeBase:
    """
    In-memory symbol table.

    Populated once (from a dump file or by a test), then only read.

    Usage
    -----
    >>> cb = CodeBase()
    >>> cb.add_class(ClassInfo(FullyQualifiedClassName("App", "User")))
    >>> cb.has_class(FullyQualifiedClassName("app", "user"))
    True
    """

    def __init__(self, classes: Iterable[ClassInfo] = ()) -> None:
        self._classes: Dict[str, ClassInfo] = {}
        for info in classes:
            self.add_class(info)

    def add_class(self, info: ClassInfo) -> None:
        if info.fqsen.key in self._classes:
            logger.debug("Duplicate class declaration: %s", info.fqsen)
        self._classes[info.fqsen.key] = info

    def has_class(self, fqsen: FullyQualifiedClassName) -> bool:
        return fqsen.key in self._classes

    def get_class(self, fqsen: FullyQualifiedClassName) -> ClassInfo:
        """Return the class; raises ``KeyError`` if it is not declared."""
        return self._classes[fqsen.key]

    def __len__(self) -> int:
        return len(self._classes)

    def __iter__(self) -> Iterator[ClassInfo]:
        return iter(self._classes.values())

    def __repr__(self) -> str:
        return f"<CodeBase classes={len(self._classes)}>"


__all__ = [
    "IDENT_START",
    "IDENT_CHAR",
    "NAMESPACE_SEPARATOR",
    "FullyQualifiedClassName",
    "Context",
    "ClassInfo",
    "SymbolTable",
    "CodeBase",
]

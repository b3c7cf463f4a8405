# annotation_refcheck/types.py
"""
Type model for doc-comment type strings.

A parsed type string is a ``UnionType`` holding one or more ``Type``
objects.  Only ``ClassType`` denotes a checkable class reference; every
other kind is filtered out by the resolver.

  Type
  ├── NativeType        int, string, mixed, class-string, ...
  ├── SelfType          self, parent
  ├── StaticType        static
  ├── TemplateType      name of a template in scope
  ├── GenericArrayType  T[], array<T>, list<T>
  └── ClassType         resolved class-like name
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from annotation_refcheck.symbols import FullyQualifiedClassName

# Lower-cased names the host grammar treats as built-in types.
NATIVE_TYPE_NAMES: FrozenSet[str] = frozenset({
    "array",
    "array-key",
    "associative-array",
    "bool",
    "boolean",
    "callable",
    "callable-array",
    "callable-object",
    "callable-string",
    "class-string",
    "closed-resource",
    "double",
    "false",
    "float",
    "int",
    "integer",
    "iterable",
    "list",
    "lowercase-string",
    "mixed",
    "negative-int",
    "never",
    "non-empty-array",
    "non-empty-associative-array",
    "non-empty-list",
    "non-empty-lowercase-string",
    "non-empty-mixed",
    "non-empty-string",
    "non-null-mixed",
    "non-zero-int",
    "null",
    "numeric",
    "object",
    "positive-int",
    "resource",
    "scalar",
    "string",
    "true",
    "void",
})

SELF_TYPE_NAMES: FrozenSet[str] = frozenset({"self", "parent"})
STATIC_TYPE_NAMES: FrozenSet[str] = frozenset({"static"})

# Generic forms that wrap their (last) type argument in an array.
GENERIC_ARRAY_NAMES: FrozenSet[str] = frozenset({
    "array",
    "list",
    "non-empty-array",
    "non-empty-list",
    "associative-array",
    "non-empty-associative-array",
})


class Type:
    """Base class for all parsed types."""

    is_nullable: bool = False

    def is_native_type(self) -> bool:
        return False

    def is_self_type(self) -> bool:
        return False

    def is_static_type(self) -> bool:
        return False

    def as_fqsen(self) -> Optional[FullyQualifiedClassName]:
        return None


@dataclass(frozen=True)
class NativeType(Type):
    name: str
    is_nullable: bool = False

    def is_native_type(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SelfType(Type):
    name: str = "self"
    is_nullable: bool = False

    def is_self_type(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class StaticType(Type):
    name: str = "static"
    is_nullable: bool = False

    def is_static_type(self) -> bool:
        return True

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TemplateType(Type):
    name: str
    is_nullable: bool = False

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class GenericArrayType(Type):
    element_type: Type
    is_nullable: bool = False

    def generic_array_element_type(self) -> Type:
        return self.element_type

    def is_native_type(self) -> bool:
        # The array itself is native; callers unwrap before asking.
        return True

    def __str__(self) -> str:
        return f"{self.element_type}[]"


@dataclass(frozen=True)
class ClassType(Type):
    fqsen: FullyQualifiedClassName
    is_nullable: bool = False

    def as_fqsen(self) -> Optional[FullyQualifiedClassName]:
        return self.fqsen

    def __str__(self) -> str:
        return f"\\{self.fqsen}"


@dataclass(frozen=True)
class UnionType:
    """An ordered, duplicate-free set of types."""
    types: Tuple[Type, ...] = ()

    @classmethod
    def of(cls, *types: Type) -> UnionType:
        unique: Tuple[Type, ...] = ()
        for t in types:
            if t not in unique:
                unique += (t,)
        return cls(unique)

    def type_count(self) -> int:
        return len(self.types)

    def get_type_set(self) -> Tuple[Type, ...]:
        return self.types

    def is_empty(self) -> bool:
        return not self.types

    def __str__(self) -> str:
        return "|".join(str(t) for t in self.types)


__all__ = [
    "NATIVE_TYPE_NAMES",
    "SELF_TYPE_NAMES",
    "STATIC_TYPE_NAMES",
    "GENERIC_ARRAY_NAMES",
    "Type",
    "NativeType",
    "SelfType",
    "StaticType",
    "TemplateType",
    "GenericArrayType",
    "ClassType",
    "UnionType",
]

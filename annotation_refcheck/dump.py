# annotation_refcheck/dump.py
"""
Loader for JSON dump files.

A dump is the host's view of an analyzed code base: every declared
class-like symbol (with its constants and ancestors) and every
declaration carrying a doc comment, grouped by file with the file's
namespace and ``use`` aliases.

    {
      "classes": [
        {"name": "App\\Entity\\User", "kind": "class",
         "constants": ["ROLE_ADMIN"], "extends": "App\\Entity\\Base",
         "implements": [], "traits": []}
      ],
      "files": [
        {"path": "src/Controller/UserController.php",
         "namespace": "App\\Controller",
         "uses": {"User": "App\\Entity\\User"},
         "declarations": [
           {"kind": "class", "name": "UserController", "line": 12,
            "doc_comment": "/** @Route(\"/users\") */", "templates": []}
         ]}
      ]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from annotation_refcheck.checkers import (
    Declaration,
    DeclarationKind,
    SourceLocation,
)
from annotation_refcheck.errors import DumpFormatError
from annotation_refcheck.symbols import (
    ClassInfo,
    CodeBase,
    Context,
    FullyQualifiedClassName,
)

logger = logging.getLogger(__name__)

_KIND_ALIASES: Dict[str, DeclarationKind] = {
    "class": DeclarationKind.CLASS,
    "interface": DeclarationKind.CLASS,
    "trait": DeclarationKind.CLASS,
    "enum": DeclarationKind.CLASS,
    "method": DeclarationKind.METHOD,
    "property": DeclarationKind.PROPERTY,
}


@dataclass
class Dump:
    """A loaded dump: the symbol table plus declarations in file order."""
    code_base: CodeBase = field(default_factory=CodeBase)
    declarations: List[Declaration] = field(default_factory=list)
    source: str = ""


def load_dump(path: Union[str, Path]) -> Dump:
    """Read and parse a dump file."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise DumpFormatError(f"cannot read dump: {exc}", source=str(p)) from exc
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DumpFormatError(f"invalid JSON: {exc}", source=str(p)) from exc
    dump = parse_dump(raw, source=str(p))
    logger.info(
        "Loaded %s: %d classes, %d declarations",
        p, len(dump.code_base), len(dump.declarations),
    )
    return dump


def parse_dump(raw: Any, source: str = "") -> Dump:
    """Build a ``Dump`` from already-decoded JSON data."""
    if not isinstance(raw, Mapping):
        raise DumpFormatError("top level must be an object", source=source)

    dump = Dump(source=source)
    for index, entry in enumerate(_list(raw, "classes", source)):
        dump.code_base.add_class(_parse_class(entry, f"classes[{index}]", source))

    for index, file_entry in enumerate(_list(raw, "files", source)):
        dump.declarations.extend(
            _parse_file(file_entry, f"files[{index}]", source)
        )
    return dump


# ─────────────────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────────────────

def _list(obj: Mapping[str, Any], key: str, source: str) -> List[Any]:
    value = obj.get(key, [])
    if not isinstance(value, list):
        raise DumpFormatError(f"{key!r} must be a list", source=source)
    return value


def _str(obj: Mapping[str, Any], key: str, where: str, source: str,
         default: Optional[str] = None) -> str:
    value = obj.get(key, default)
    if not isinstance(value, str):
        raise DumpFormatError(f"{where}.{key} must be a string", source=source)
    return value


def _fqsen(text: str, where: str, source: str) -> FullyQualifiedClassName:
    fqsen = FullyQualifiedClassName.from_fully_qualified_string(text)
    if fqsen is None:
        raise DumpFormatError(f"{where}: invalid class name {text!r}", source=source)
    return fqsen


def _parse_class(entry: Any, where: str, source: str) -> ClassInfo:
    if not isinstance(entry, Mapping):
        raise DumpFormatError(f"{where} must be an object", source=source)

    fqsen = _fqsen(_str(entry, "name", where, source), where, source)
    constants = entry.get("constants", [])
    if not isinstance(constants, list) or not all(isinstance(c, str) for c in constants):
        raise DumpFormatError(f"{where}.constants must be a list of strings", source=source)

    parent = entry.get("extends")
    if parent is not None and not isinstance(parent, str):
        raise DumpFormatError(f"{where}.extends must be a string", source=source)

    def _names(key: str) -> Tuple[FullyQualifiedClassName, ...]:
        values = entry.get(key, [])
        if not isinstance(values, list):
            raise DumpFormatError(f"{where}.{key} must be a list", source=source)
        return tuple(_fqsen(str(v), f"{where}.{key}", source) for v in values)

    return ClassInfo(
        fqsen=fqsen,
        kind=_str(entry, "kind", where, source, default="class"),
        constants=frozenset(constants),
        parent=_fqsen(parent, f"{where}.extends", source) if parent else None,
        interfaces=_names("implements"),
        traits=_names("traits"),
    )


def _uses(entry: Mapping[str, Any], where: str, source: str,
          default: Mapping[str, str]) -> Mapping[str, str]:
    uses = entry.get("uses", default)
    if not isinstance(uses, Mapping) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in uses.items()
    ):
        raise DumpFormatError(f"{where}.uses must map strings to strings", source=source)
    return dict(uses)


def _parse_file(entry: Any, where: str, source: str) -> List[Declaration]:
    if not isinstance(entry, Mapping):
        raise DumpFormatError(f"{where} must be an object", source=source)

    path = _str(entry, "path", where, source, default="")
    namespace = _str(entry, "namespace", where, source, default="")
    uses = _uses(entry, where, source, default={})

    declarations = []
    for index, decl in enumerate(_list(entry, "declarations", source)):
        declarations.append(_parse_declaration(
            decl, f"{where}.declarations[{index}]", source,
            path=path, namespace=namespace, uses=uses,
        ))
    return declarations


def _parse_declaration(entry: Any, where: str, source: str, *,
                       path: str, namespace: str,
                       uses: Mapping[str, str]) -> Declaration:
    if not isinstance(entry, Mapping):
        raise DumpFormatError(f"{where} must be an object", source=source)

    kind_name = _str(entry, "kind", where, source).lower()
    kind = _KIND_ALIASES.get(kind_name)
    if kind is None:
        raise DumpFormatError(f"{where}: unknown declaration kind {kind_name!r}", source=source)

    doc_comment = entry.get("doc_comment")
    if doc_comment is not None and not isinstance(doc_comment, str):
        raise DumpFormatError(f"{where}.doc_comment must be a string", source=source)

    line = entry.get("line", 0)
    column = entry.get("column", 0)
    if not isinstance(line, int) or not isinstance(column, int):
        raise DumpFormatError(f"{where}: line/column must be integers", source=source)

    templates = entry.get("templates", [])
    if not isinstance(templates, list):
        raise DumpFormatError(f"{where}.templates must be a list", source=source)

    decl_namespace = _str(entry, "namespace", where, source, default=namespace)
    context = Context(
        namespace=decl_namespace,
        uses=_uses(entry, where, source, default=uses),
        template_types=frozenset(str(t) for t in templates),
        file=path,
    )
    return Declaration(
        kind=kind,
        name=_str(entry, "name", where, source, default=""),
        doc_comment=doc_comment,
        location=SourceLocation(file=path, line=line, column=column),
        context=context,
    )


__all__ = [
    "Dump",
    "load_dump",
    "parse_dump",
]

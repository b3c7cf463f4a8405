# annotation_refcheck/extractor.py
"""
Reference extraction from doc comments.

Three independent matchers run over the raw comment text:

  annotation              ``@Foo`` / ``@Foo(...)``
  class name resolution   ``Foo::class``
  constant reference      ``Foo::BAR`` (but not ``Foo::class`` and not
                          ``Some.page.html.twig`` template paths)

Each yields ``Candidate`` records.  Overlapping hits from different
matchers are kept as they are; a reference may be reported more than
once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Collection, Iterator, List, Optional, Pattern, Tuple

from annotation_refcheck.symbols import IDENT_CHAR, IDENT_START

# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — PATTERNS
# ═════════════════════════════════════════════════════════════════════════

# Host simple-type grammar: optional nullable marker, then either a
# hyphenated pseudo-type keyword or a (possibly qualified) identifier.
SIMPLE_TYPE_PATTERN = (
    r"\??(?:"
    r"callable-(?:string|object|array)"
    r"|associative-array"
    r"|class-string"
    r"|lowercase-string"
    r"|non-(?:zero-int|null-mixed|empty-(?:associative-array|array|list|string|lowercase-string|mixed))"
    rf"|\\?[{IDENT_START}][{IDENT_CHAR}]*(?:\\[{IDENT_START}][{IDENT_CHAR}]*)*"
    r")"
)

MEMBER_PATTERN = r"[a-zA-Z_\x80-\U0010ffff][a-zA-Z0-9_\x80-\U0010ffff]*"

TWIG_SUFFIX = ".html.twig"

# A name starts only where no identifier character, separator or nullable
# marker precedes it.
_NAME_BOUNDARY = rf"(?<![{IDENT_CHAR}\\?])"

ANNOTATION_RE: Pattern[str] = re.compile(
    rf'(?<!")@(?P<name>{SIMPLE_TYPE_PATTERN})\(?'
)
CLASS_NAME_RESOLUTION_RE: Pattern[str] = re.compile(
    rf"{_NAME_BOUNDARY}(?P<name>{SIMPLE_TYPE_PATTERN})::class"
)
CONST_REFERENCE_RE: Pattern[str] = re.compile(
    rf"{_NAME_BOUNDARY}(?P<name>{SIMPLE_TYPE_PATTERN})::(?P<member>{MEMBER_PATTERN})"
    rf"(?P<suffix>{re.escape(TWIG_SUFFIX)})?"
)


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — CANDIDATES
# ═════════════════════════════════════════════════════════════════════════

class CandidateKind(Enum):
    ANNOTATION = "Annotation"
    CLASS_NAME_RESOLUTION = "ClassNameResolution"
    CONST_REFERENCE = "ConstReference"


@dataclass(frozen=True)
class Candidate:
    """
    A possible class reference found in a doc comment.

    Attributes
    ----------
    text       : the class-like token (``Foo``, ``\\App\\Foo``)
    kind       : which matcher produced it
    full_match : verbatim matched text, quoted in diagnostics
    span       : (start, end) of the full match in the comment
    member     : constant name (constant references only)
    suffix     : trailing ``.html.twig``, if captured
    """
    text: str
    kind: CandidateKind
    full_match: str
    span: Tuple[int, int]
    member: Optional[str] = None
    suffix: Optional[str] = None


def starts_with_upper(text: str) -> bool:
    """True if the first character changes when lower-cased."""
    first = text[:1]
    return first.lower() != first


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — MATCHERS
# ═════════════════════════════════════════════════════════════════════════

def iter_annotations(
    doc_comment: Optional[str], exceptions: Collection[str] = ()
) -> Iterator[Candidate]:
    """Annotations starting with an upper-case character."""
    if not doc_comment:
        return
    for match in ANNOTATION_RE.finditer(doc_comment):
        name = match.group("name")
        if name in exceptions:
            continue
        # Lower-case annotations (@param, @return, ...) are not classes
        if not starts_with_upper(name):
            continue
        yield Candidate(
            text=name,
            kind=CandidateKind.ANNOTATION,
            full_match=match.group(0),
            span=match.span(),
        )


def iter_class_name_resolutions(
    doc_comment: Optional[str], exceptions: Collection[str] = ()
) -> Iterator[Candidate]:
    """``Foo::class`` expressions."""
    if not doc_comment:
        return
    for match in CLASS_NAME_RESOLUTION_RE.finditer(doc_comment):
        name = match.group("name")
        if name in exceptions:
            continue
        yield Candidate(
            text=name,
            kind=CandidateKind.CLASS_NAME_RESOLUTION,
            full_match=match.group(0),
            span=match.span(),
        )


def iter_const_references(
    doc_comment: Optional[str], exceptions: Collection[str] = ()
) -> Iterator[Candidate]:
    """``Foo::BAR`` constant references."""
    if not doc_comment:
        return
    for match in CONST_REFERENCE_RE.finditer(doc_comment):
        member = match.group("member")
        if member == "class":
            continue
        suffix = match.group("suffix")
        # Template paths such as Some.page.html.twig
        if suffix == TWIG_SUFFIX:
            continue
        name = match.group("name")
        if name in exceptions:
            continue
        yield Candidate(
            text=name,
            kind=CandidateKind.CONST_REFERENCE,
            full_match=match.group(0),
            span=match.span(),
            member=member,
            suffix=suffix,
        )


def extract_candidates(
    doc_comment: Optional[str], exceptions: Collection[str] = ()
) -> List[Candidate]:
    """All candidates, in matcher order: annotations, ``::class``, constants."""
    if not doc_comment:
        return []
    return [
        *iter_annotations(doc_comment, exceptions),
        *iter_class_name_resolutions(doc_comment, exceptions),
        *iter_const_references(doc_comment, exceptions),
    ]


__all__ = [
    "SIMPLE_TYPE_PATTERN",
    "TWIG_SUFFIX",
    "ANNOTATION_RE",
    "CLASS_NAME_RESOLUTION_RE",
    "CONST_REFERENCE_RE",
    "CandidateKind",
    "Candidate",
    "starts_with_upper",
    "iter_annotations",
    "iter_class_name_resolutions",
    "iter_const_references",
    "extract_candidates",
]

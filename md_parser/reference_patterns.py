"""
md_parser/reference_patterns.py — gramatyka odwołań w prozie.

Każdy ReferencePattern zawiera:
  - regex: skompilowany wzorzec z nazwanymi grupami 'path' i/lub 'title'
  - name:  krótka nazwa (do logów i konfiguracji)

Korpus nie ma formalnej składni odwołań, więc gramatyka jest heurystyką:
lista jest konfigurowalna (ValidatorConfig.reference_patterns), wzorce są
stosowane w kolejności, a dopasowania nakładające się na wcześniejsze
są pomijane.

  find_references(doc_path, lineno, line, patterns) -> list[Reference]
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from doc_model.documents import DocPath, Reference, SourceLocation

from .section_patterns import to_numeric_path

# Fragmenty `inline code` nie są prozą — zastępujemy je spacjami tej samej długości.
_INLINE_CODE_RE = re.compile(r"(`+)(?:(?!\1).)+?\1")


@dataclass(frozen=True, slots=True)
class ReferencePattern:
    name: str
    regex: re.Pattern[str]


def _p(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE | re.UNICODE)


_CUE = r"(?:see(?:\s+also)?|cf\.|refer\s+to|§)"
_QUOTED_TITLE = r"[\"“](?P<title>[^\"”\n]+)[\"”]"
# Składowa numeru ma co najwyżej 9 cyfr; dłuższy ciąg cyfr to nie numer sekcji.
_COMPONENT = r"\d{1,9}"
_END_OF_PATH = r"(?![\w]|\.\d)"

DEFAULT_REFERENCE_PATTERNS: tuple[ReferencePattern, ...] = (
    # "see 12.4.2", "(see 11.2)", "§ 3.1", 'see 11.2 "REST APIs"'
    ReferencePattern(
        name="numeric",
        regex=_p(
            rf"(?<![\w.]){_CUE}\s*(?P<path>{_COMPONENT}(?:\.{_COMPONENT})+){_END_OF_PATH}"
            rf"(?:\s+{_QUOTED_TITLE})?"
        ),
    ),
    # Pojedyncza liczba tylko po '§' albo w nawiasie: "§ 4", "(see 12)";
    # "you will see 2 warnings" nie jest odwołaniem.
    ReferencePattern(
        name="section-sign",
        regex=_p(rf"§\s*(?P<path>{_COMPONENT}){_END_OF_PATH}"),
    ),
    ReferencePattern(
        name="parenthesised",
        regex=_p(rf"\(\s*{_CUE}\s*(?P<path>{_COMPONENT})(?:\s+{_QUOTED_TITLE})?\s*\)"),
    ),
    # 'see "Using Async/Await"'
    ReferencePattern(
        name="title",
        regex=_p(rf"(?<![\w.])see(?:\s+also)?\s+{_QUOTED_TITLE}"),
    ),
)


def blank_inline_code(line: str) -> str:
    """Zastępuje `inline code` spacjami (zachowuje kolumny)."""
    return _INLINE_CODE_RE.sub(lambda m: " " * len(m.group(0)), line)


def find_references(
    doc_path: DocPath,
    lineno: int,
    line: str,
    patterns: Sequence[ReferencePattern] = DEFAULT_REFERENCE_PATTERNS,
) -> list[Reference]:
    """Zwraca odwołania z jednej linii prozy w kolejności kolumn."""
    text = blank_inline_code(line)
    taken: list[tuple[int, int]] = []
    found: list[tuple[int, Reference]] = []

    for pat in patterns:
        for m in pat.regex.finditer(text):
            start, end = m.span()
            if any(start < t_end and t_start < end for t_start, t_end in taken):
                continue
            groups = m.groupdict()
            path = to_numeric_path(groups["path"]) if groups.get("path") else None
            title = groups.get("title")
            if path is None and not title:
                continue
            taken.append((start, end))
            found.append((start, Reference(
                location=SourceLocation(doc_path, lineno),
                target_path=path,
                target_title=title.strip() if title else None,
                raw=m.group(0),
            )))

    found.sort(key=lambda item: item[0])
    return [ref for _, ref in found]

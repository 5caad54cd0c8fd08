"""
md_parser/parser.py — budowa modelu dokumentu z tekstu Markdown.

Architektura:
  SourceFile → _decode() → tekst (albo diagnostyka UnreadableFile)
  → linie → płotki kodu (``` / ~~~) | nagłówki ATX (section_patterns)
  → Document (headings, code_blocks, fenced_lines, syntetyczny root)

Kluczowe funkcje publiczne:
  build_document(source, strict=False) -> Document | ValidationIssue
  parse_text(path, text, strict=False) -> Document
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from doc_model.documents import CodeBlock, DocPath, Document, Heading
from doc_model.issues import ValidationIssue, unreadable_file
from md_parser.loader import SourceFile
from md_parser.section_patterns import parse_heading

logger = logging.getLogger(__name__)

# Płotek otwierający: do 3 spacji, min. 3 znaki ` lub ~, reszta = info string.
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")

# Płotek zamykający: bez info stringu.
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")

ROOT_TITLE = "(początek dokumentu)"


# ---------------------------------------------------------------------------
# Typy wewnętrzne
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class _OpenFence:
    char: str
    length: int
    language: str | None
    start_line: int
    section: Heading


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def build_document(source: SourceFile, strict: bool = False) -> Document | ValidationIssue:
    """
    Buduje Document z pojedynczego pliku.

    Zwraca ValidationIssue (UnreadableFile), gdy treści nie da się
    zdekodować jako tekst; taki plik jest wyłączony z dalszej walidacji.
    """
    text, reason = _decode(source)
    if text is None:
        logger.debug("unreadable %s: %s", "/".join(source.path), reason)
        return unreadable_file(source.path, reason)
    return parse_text(source.path, text, strict=strict)


def parse_text(path: DocPath, text: str, strict: bool = False) -> Document:
    """Parsuje tekst dokumentu; nie rzuca wyjątków dla żadnego wejścia tekstowego."""
    root = Heading(
        numeric_path=None,
        title=ROOT_TITLE,
        depth=0,
        doc_path=path,
        line=0,
    )
    headings: list[Heading] = []
    blocks: list[CodeBlock] = []
    fenced: set[int] = set()

    current = root
    fence: _OpenFence | None = None
    offset = 0
    lineno = 0

    for lineno, raw in enumerate(text.splitlines(keepends=True), start=1):
        line = raw.rstrip("\r\n")

        if fence is not None:
            fenced.add(lineno)
            if _closes(fence, line):
                blocks.append(CodeBlock(
                    language=fence.language,
                    start_line=fence.start_line,
                    end_line=lineno,
                    section=fence.section,
                ))
                fence = None
        else:
            opened = _open_fence(line, lineno, current)
            if opened is not None:
                fence = opened
                fenced.add(lineno)
            else:
                parsed = parse_heading(line, strict=strict)
                if parsed is not None:
                    current = Heading(
                        numeric_path=parsed.numeric_path,
                        title=parsed.title,
                        depth=parsed.depth,
                        doc_path=path,
                        line=lineno,
                        offset=offset,
                        arity_ok=parsed.arity_ok,
                    )
                    headings.append(current)

        offset += len(raw)

    # Niezamknięty płotek obejmuje resztę pliku
    if fence is not None:
        blocks.append(CodeBlock(
            language=fence.language,
            start_line=fence.start_line,
            end_line=lineno,
            section=fence.section,
            closed=False,
        ))

    return Document(
        path=path,
        text=text,
        headings=tuple(headings),
        code_blocks=tuple(blocks),
        root=root,
        fenced_lines=frozenset(fenced),
    )


# ---------------------------------------------------------------------------
# Wewnętrzna implementacja
# ---------------------------------------------------------------------------

def _decode(source: SourceFile) -> tuple[str | None, str]:
    """Zwraca (tekst, "") albo (None, powód)."""
    data = source.data
    if data is None:
        return None, source.error or "brak danych"
    if isinstance(data, str):
        return data.removeprefix("\ufeff"), ""
    if b"\x00" in data:
        return None, "zawartość binarna (bajty NUL)"
    try:
        return data.decode("utf-8-sig"), ""
    except UnicodeDecodeError as e:
        return None, f"niepoprawne UTF-8 ({e.reason}, bajt {e.start})"


def _open_fence(line: str, lineno: int, section: Heading) -> _OpenFence | None:
    m = _FENCE_OPEN_RE.match(line)
    if not m:
        return None
    marker, info = m.group(1), m.group(2).strip()
    # Info string płotka z backticków nie może zawierać backticków (inline code)
    if marker[0] == "`" and "`" in info:
        return None
    language = info.split()[0] if info else None
    return _OpenFence(
        char=marker[0],
        length=len(marker),
        language=language,
        start_line=lineno,
        section=section,
    )


def _closes(fence: _OpenFence, line: str) -> bool:
    m = _FENCE_CLOSE_RE.match(line)
    if not m:
        return False
    marker = m.group(1)
    return marker[0] == fence.char and len(marker) >= fence.length

"""
md_parser/loader.py — warstwa wczytywania treści korpusu.

Rdzeń walidatora nie wykonuje I/O; ten moduł dostarcza mu pary
(ścieżka, zawartość) w postaci SourceFile.

  collect_sources(paths, pattern="*.md") -> list[SourceFile]

Katalogi są przeszukiwane rekurencyjnie (posortowane), pliki podane jawnie
trafiają na listę w podanej kolejności. Błąd odczytu nie przerywa działania:
SourceFile dostaje data=None i opis błędu, a builder zamienia go na
diagnostykę UnreadableFile.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from doc_model.documents import DocPath

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS: tuple[str, ...] = ("*.md",)

# Katalogi, których nie przeszukujemy (artefakty budowania DocC, VCS).
_SKIP_DIRS = {".git", ".build", ".docc-build", "node_modules", ".swiftpm"}


@dataclass(frozen=True, slots=True)
class SourceFile:
    """Surowa zawartość jednego pliku: bytes z dysku albo str (np. w testach)."""

    path: DocPath
    data: bytes | str | None
    error: str | None = None


def _read(fs_path: Path, doc_path: DocPath) -> SourceFile:
    try:
        return SourceFile(path=doc_path, data=fs_path.read_bytes())
    except OSError as e:
        logger.debug("read failed for %s: %s", fs_path, e)
        return SourceFile(path=doc_path, data=None, error=e.strerror or str(e))


def _skipped(rel: Path) -> bool:
    return any(part in _SKIP_DIRS for part in rel.parts[:-1])


def collect_sources(
    paths: Iterable[str | Path],
    patterns: Iterable[str] = DEFAULT_PATTERNS,
) -> list[SourceFile]:
    """
    Zbiera pliki korpusu.

    Args:
        paths:    katalogi i/lub pliki
        patterns: wzorce glob dla plików w katalogach (domyślnie *.md)

    Ścieżka dokumentu (DocPath) jest względna wobec podanego katalogu;
    dla pliku podanego jawnie jest to sama nazwa pliku.
    """
    patterns = tuple(patterns)
    sources: list[SourceFile] = []
    seen: set[DocPath] = set()

    for raw in paths:
        root = Path(raw)
        if root.is_dir():
            found: set[Path] = set()
            for pattern in patterns:
                found.update(p for p in root.rglob(pattern) if p.is_file())
            for fs_path in sorted(found):
                rel = fs_path.relative_to(root)
                if _skipped(rel):
                    continue
                doc_path = rel.parts
                if doc_path in seen:
                    continue
                seen.add(doc_path)
                sources.append(_read(fs_path, doc_path))
        else:
            doc_path = (root.name,)
            if doc_path in seen:
                continue
            seen.add(doc_path)
            sources.append(_read(root, doc_path))

    logger.info("collected %d source file(s)", len(sources))
    return sources

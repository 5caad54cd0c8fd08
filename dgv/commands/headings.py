"""Komenda: dgv headings — tabela nagłówków korpusu."""

from __future__ import annotations

import argparse
import json

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dgv._corpus import add_corpus_arguments, run_analysis
from doc_model.documents import Document, format_numeric_path

console = Console()


def _show_table(doc: Document, numbered_only: bool) -> None:
    headings = list(doc.numbered_headings()) if numbered_only else list(doc.headings)
    table = Table(
        title=escape(doc.path_str),
        title_justify="left",
        title_style="bold",
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("LINIA", justify="right", no_wrap=True, style="dim")
    table.add_column("#",     justify="right", no_wrap=True)
    table.add_column("NUMER", no_wrap=True, style="bold cyan")
    table.add_column("TYTUŁ", no_wrap=False, max_width=60)
    table.add_column("KOD",   justify="right", no_wrap=True)

    blocks_per_heading: dict[int, int] = {}
    for block in doc.code_blocks:
        blocks_per_heading[block.section.line] = blocks_per_heading.get(block.section.line, 0) + 1

    for h in headings:
        indent = "  " * max(h.depth - 1, 0)
        number = format_numeric_path(h.numeric_path) if h.numeric_path else "-"
        if not h.arity_ok:
            number = f"[yellow]{number}[/yellow]"
        table.add_row(
            str(h.line),
            str(h.depth),
            number,
            indent + escape(h.title),
            str(blocks_per_heading.get(h.line, 0)),
        )

    console.print(table)


def _doc_record(doc: Document, numbered_only: bool) -> dict:
    anchors = doc.heading_anchors()
    return {
        "path": doc.path_str,
        "headings": [
            {
                "line": h.line,
                "depth": h.depth,
                "number": format_numeric_path(h.numeric_path) if h.numeric_path else None,
                "title": h.title,
                "anchor": anchors[h.line],
            }
            for h in doc.headings
            if h.numeric_path is not None or not numbered_only
        ],
    }


def run(args: argparse.Namespace) -> None:
    analysis = run_analysis(args)

    if args.json_output:
        out = [_doc_record(doc, args.numbered_only) for doc in analysis.documents]
        print(json.dumps(out, ensure_ascii=False, indent=2))
        return

    for doc in analysis.documents:
        _show_table(doc, args.numbered_only)
    console.print(f"  [dim]{len(analysis.index.headings)} nagłówków w {len(analysis.documents)} dokumentach[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "headings",
        help="Wyświetla nagłówki dokumentów (numer, głębokość, liczba bloków kodu).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyświetla nagłówki wszystkich dokumentów korpusu.

Numery niezgodne z głębokością nagłówka są wyróżnione na żółto.

Przykłady:
  dgv headings Docs.docc
  dgv headings Docs.docc --numbered-only
  dgv headings Docs.docc --json-output
        """,
    )
    add_corpus_arguments(p)
    p.add_argument(
        "--numbered-only",
        action="store_true",
        help="Pokaż tylko nagłówki z numerem sekcji.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz nagłówki jako JSON na stdout.",
    )
    p.set_defaults(func=run)

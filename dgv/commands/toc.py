"""Komenda: dgv toc — spis treści z numerowanych nagłówków korpusu."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console

from dgv._corpus import add_corpus_arguments, run_analysis
from md_parser.toc import build_toc, render_toc_markdown

console = Console(stderr=True)


def run(args: argparse.Namespace) -> None:
    if args.max_depth is not None and args.max_depth < 1:
        console.print("[red]--max-depth musi być ≥ 1.[/red]")
        raise SystemExit(1)

    analysis = run_analysis(args)
    entries = build_toc(analysis.documents, max_depth=args.max_depth)
    markdown = render_toc_markdown(entries, title=args.title)

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(markdown, encoding="utf-8")
        console.print(f"[green]TOC:[/green] {out_path}  ({len(entries)} pozycji)")
    else:
        sys.stdout.write(markdown)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "toc",
        help="Generuje spis treści (Markdown) z numerowanych nagłówków.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Generuje spis treści z numerowanych nagłówków ("11.2 REST APIs").
Wcięcie wynika z długości numeru; każda pozycja linkuje do kotwicy nagłówka.

Przykłady:
  dgv toc Docs.docc
  dgv toc Docs.docc --max-depth 2 --title "Spis treści"
  dgv toc Docs.docc --out TOC.md
        """,
    )
    add_corpus_arguments(p)
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help="Maksymalna długość numeru sekcji w spisie.",
    )
    p.add_argument(
        "--title",
        default=None,
        help="Nagłówek spisu treści.",
    )
    p.add_argument(
        "--out", "-o",
        default=None,
        metavar="PLIK",
        help="Zapisz spis do pliku zamiast na stdout.",
    )
    p.set_defaults(func=run)

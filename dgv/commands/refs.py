"""Komenda: dgv refs — odwołania między sekcjami i ich rozwiązanie."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dgv._corpus import add_corpus_arguments, run_analysis

console = Console()


def run(args: argparse.Namespace) -> None:
    analysis = run_analysis(args)

    refs = sorted(analysis.references, key=lambda r: (r.location.path, r.location.line))
    if args.unresolved_only:
        refs = [r for r in refs if r.resolved_target is None]

    if not refs:
        console.print("[yellow]Brak odwołań.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white", expand=False)
    table.add_column("ŹRÓDŁO",   no_wrap=True, style="dim")
    table.add_column("ODWOŁANIE", no_wrap=False, style="bold cyan")
    table.add_column("CEL",      no_wrap=False)

    for ref in refs:
        target = ref.resolved_target
        table.add_row(
            str(ref.location),
            escape(ref.raw),
            (
                f"{target.location}  {escape(target.label)}"
                if target is not None
                else "[red]— nierozwiązane[/red]"
            ),
        )

    console.print(table)
    unresolved = sum(1 for r in analysis.references if r.resolved_target is None)
    console.print(f"  [dim]{len(analysis.references)} odwołań, {unresolved} nierozwiązanych[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "refs",
        help="Listuje odwołania 'see 11.2' w prozie i nagłówki, do których prowadzą.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje odwołania znalezione w prozie korpusu wraz z celem rozwiązania.

Przykłady:
  dgv refs Docs.docc
  dgv refs Docs.docc --unresolved-only
        """,
    )
    add_corpus_arguments(p)
    p.add_argument(
        "--unresolved-only",
        action="store_true",
        help="Pokaż tylko nierozwiązane odwołania.",
    )
    p.set_defaults(func=run)

"""Komenda: dgv validate — walidacja spójności korpusu dokumentacji."""

from __future__ import annotations

import argparse
import sys
from itertools import groupby

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dgv._corpus import add_corpus_arguments, run_analysis
from doc_model.documents import format_doc_path
from validator import (
    ValidationReport,
    build_report,
    category_summary,
    describe_category,
    render_json,
    render_text,
)

console = Console()

_SEVERITY_STYLE = {"error": "red", "warning": "yellow"}


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_tables(report: ValidationReport) -> None:
    for path, group in groupby(report.issues, key=lambda i: i.location.path):
        table = Table(
            title=escape(format_doc_path(path)),
            title_justify="left",
            title_style="bold",
            box=box.SIMPLE_HEAD,
            show_header=True,
            header_style="bold white",
            expand=False,
        )
        table.add_column("LINIA",     justify="right", no_wrap=True, style="dim")
        table.add_column("WAŻNOŚĆ",   no_wrap=True)
        table.add_column("KATEGORIA", no_wrap=True, style="cyan")
        table.add_column("KOMUNIKAT", no_wrap=False)

        for issue in group:
            style = _SEVERITY_STYLE[issue.severity.value]
            table.add_row(
                str(issue.location.line),
                f"[{style}]{issue.severity.value}[/{style}]",
                issue.category.value,
                escape(issue.message),
            )
        console.print(table)

    summary = category_summary(report)
    if summary:
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kategoria", style="cyan", no_wrap=True)
        table.add_column("E", justify="right", style="red")
        table.add_column("W", justify="right", style="yellow")
        table.add_column("Opis", style="dim")
        for category, errors, warnings in summary:
            table.add_row(category.value, str(errors), str(warnings), describe_category(category))
        console.print(table)

    status = "[green]OK[/green]" if report.is_valid else "[red]BŁĄD[/red]"
    console.print(
        f"{status}  {report.documents} dokument(ów), {report.references} odwołań, "
        f"[red]{len(report.errors)}[/red] błąd(ów), "
        f"[yellow]{len(report.warnings)}[/yellow] ostrzeżenie(-ń)."
    )


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    analysis = run_analysis(args)
    report = build_report(
        analysis.issues,
        documents=len(analysis.documents),
        references=len(analysis.references),
    )

    if args.json_output:
        print(render_json(report))
    elif args.plain:
        sys.stdout.write(render_text(report))
    else:
        _show_tables(report)

    sys.exit(report.exit_status)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Waliduje spójność korpusu (numeracja, odwołania, bloki kodu, linki).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Waliduje korpus dokumentacji Markdown / DocC:

  1  Numeracja       (rodzeństwo rosnąco, numer zgodny z głębokością)
  2  Duplikaty       (ten sam numer sekcji w korpusie)
  3  Odwołania       ("see 11.2", 'see "Tytuł"' — nierozwiązane / niejednoznaczne)
  4  Bloki kodu      (tag języka, niezamknięte płotki)
  5  Sieroty         (sekcja bez rodzica w korpusie)
  6  Linki           ([..](plik.md#kotwica), <doc:Strona>)

Status wyjścia: 0 — brak błędów, 1 — są błędy, 2 — przerwano (nieczytelne pliki).

Przykłady:
  dgv validate Docs.docc
  dgv validate Docs.docc --strict --json-output
  dgv validate Docs.docc --max-unreadable 0 --plain
        """,
    )
    add_corpus_arguments(p)
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport jako JSON na stdout.",
    )
    p.add_argument(
        "--plain",
        action="store_true",
        help="Wypisz raport tekstowy (bez formatowania rich).",
    )
    p.set_defaults(func=run)

"""Testy spisu treści (md_parser.toc)."""

from __future__ import annotations

import textwrap

from md_parser.parser import parse_text
from md_parser.toc import build_toc, render_toc_markdown


def _docs():
    return [
        parse_text(("b.md",), textwrap.dedent("""\
            # 12 Concurrency
            ## 12.1 Actors
            """)),
        parse_text(("a.md",), textwrap.dedent("""\
            # 11 Networking
            ## Overview
            ## 11.2 REST APIs
            ### 11.2.1 Decoding JSON
            """)),
    ]


def test_toc_orders_by_document_and_skips_unnumbered():
    entries = build_toc(_docs())
    assert [e.heading.label for e in entries] == [
        "11 Networking",
        "11.2 REST APIs",
        "11.2.1 Decoding JSON",
        "12 Concurrency",
        "12.1 Actors",
    ]
    assert entries[1].href == "a.md#112-rest-apis"


def test_toc_max_depth():
    entries = build_toc(_docs(), max_depth=1)
    assert [e.level for e in entries] == [1, 1]


def test_render_toc_markdown():
    out = render_toc_markdown(build_toc(_docs(), max_depth=2), title="Spis treści")
    assert out == textwrap.dedent("""\
        # Spis treści

        - [11 Networking](a.md#11-networking)
          - [11.2 REST APIs](a.md#112-rest-apis)
        - [12 Concurrency](b.md#12-concurrency)
          - [12.1 Actors](b.md#121-actors)
        """)


def test_toc_links_repeated_titles_to_suffixed_anchors():
    doc = parse_text(("a.md",), "# 1 Setup\n## 1.1 Setup\n## Notes\n# 1 Setup\n")
    assert [e.href for e in build_toc([doc])] == [
        "a.md#1-setup",
        "a.md#11-setup",
        "a.md#1-setup-1",
    ]

"""
doc_model — struktury danych walidatora grafu dokumentacji.

Użycie:
  from doc_model import Document, Heading, CodeBlock, Reference, ...

Moduły:
  documents — Document, Heading, CodeBlock, Reference, SourceLocation,
              DocPath, NumericPath, Corpus
  anchors   — heading_anchor, normalize_anchor, unique_anchors (kotwice linków)
  issues    — Severity, IssueCategory, ValidationIssue + fabryki error/warning
"""

from .anchors import heading_anchor, normalize_anchor, unique_anchors
from .issues import (
    Severity,
    IssueCategory,
    ValidationIssue,
    error,
    warning,
    unreadable_file,
)
from .documents import (
    DocPath,
    NumericPath,
    Corpus,
    SourceLocation,
    Heading,
    CodeBlock,
    Reference,
    Document,
    format_doc_path,
    format_numeric_path,
)

__all__ = [
    # anchors
    "heading_anchor",
    "normalize_anchor",
    "unique_anchors",
    # documents
    "DocPath",
    "NumericPath",
    "Corpus",
    "SourceLocation",
    "Heading",
    "CodeBlock",
    "Reference",
    "Document",
    "format_doc_path",
    "format_numeric_path",
    # issues
    "Severity",
    "IssueCategory",
    "ValidationIssue",
    "error",
    "warning",
    "unreadable_file",
]

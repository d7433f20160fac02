"""
Parser module for Markdown documents.

Extracts links, headings and anchors from handbook documents.
"""

from handbook_tools.parser.links import (
    LinkKind,
    MarkdownLink,
    classify_target,
    extract_links,
    split_target,
)
from handbook_tools.parser.headings import (
    Heading,
    anchors_for,
    document_title,
    extract_headings,
    slugify,
)

__all__ = [
    "LinkKind",
    "MarkdownLink",
    "classify_target",
    "extract_links",
    "split_target",
    "Heading",
    "anchors_for",
    "document_title",
    "extract_headings",
    "slugify",
]

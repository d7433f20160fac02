"""
Graph module for the handbook link graph.

Provides tools to build and query the graph of Markdown documents and
the links between them.
"""

from handbook_tools.graph.schema import DocumentEntity, LinkEdge
from handbook_tools.graph.builder import HandbookGraphBuilder
from handbook_tools.graph.queries import HandbookQuery

__all__ = [
    "DocumentEntity",
    "LinkEdge",
    "HandbookGraphBuilder",
    "HandbookQuery",
]

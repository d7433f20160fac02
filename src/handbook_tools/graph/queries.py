"""
Query interface for the handbook link graph.

Example:
    >>> query = HandbookQuery(graph)
    >>> [edge.source for edge in query.inbound("guides/git.md")]
    ['README.md', 'guides/AGENTS.md']
"""

from collections import Counter
from typing import Any

from handbook_tools.graph.schema import DocumentEntity, LinkEdge
from handbook_tools.parser.links import LinkKind


class HandbookQuery:
    """Query interface for the handbook link graph.

    Indexes are built once on construction: documents by path and by
    directory, and internal edges by source and by resolved target.
    """

    def __init__(self, graph: dict[str, Any]):
        """Initialize query interface.

        Args:
            graph: Graph dict with documents, links and stats
        """
        self.documents: list[DocumentEntity] = graph.get("documents", [])
        self.links: list[LinkEdge] = graph.get("links", [])
        self.stats: dict[str, Any] = graph.get("stats", {})

        self._doc_by_path: dict[str, DocumentEntity] = {}
        self._docs_by_dir: dict[str, list[DocumentEntity]] = {}
        self._links_by_source: dict[str, list[LinkEdge]] = {}
        self._links_by_target: dict[str, list[LinkEdge]] = {}

        self._build_indexes()

    def _build_indexes(self) -> None:
        """Build indexes for efficient querying."""
        for doc in self.documents:
            self._doc_by_path[doc.path] = doc
            self._docs_by_dir.setdefault(doc.directory, []).append(doc)

        for edge in self.links:
            self._links_by_source.setdefault(edge.source, []).append(edge)
            if edge.kind == LinkKind.INTERNAL and edge.in_handbook and edge.resolved:
                self._links_by_target.setdefault(edge.resolved, []).append(edge)

    def get_document(self, path: str) -> DocumentEntity | None:
        return self._doc_by_path.get(path)

    def documents_in(self, directory: str) -> list[DocumentEntity]:
        """Documents directly inside a directory ("." for the root)."""
        return list(self._docs_by_dir.get(directory, []))

    def directories(self) -> list[str]:
        return sorted(self._docs_by_dir)

    def outbound(self, path: str, kind: LinkKind | None = None) -> list[LinkEdge]:
        """Links written in a document, optionally filtered by kind."""
        edges = self._links_by_source.get(path, [])
        if kind is None:
            return list(edges)
        return [e for e in edges if e.kind == kind]

    def inbound(self, path: str, include_self: bool = False) -> list[LinkEdge]:
        """Internal links from other documents that point at ``path``."""
        edges = self._links_by_target.get(path, [])
        if include_self:
            return list(edges)
        return [e for e in edges if e.source != path]

    def linked_targets(self, path: str) -> set[str]:
        """Resolved in-handbook targets of a document's internal links."""
        return {
            e.resolved
            for e in self.outbound(path, LinkKind.INTERNAL)
            if e.in_handbook and e.resolved
        }

    def orphans(self, exempt: list[str] | None = None) -> list[DocumentEntity]:
        """Documents no other document links to.

        Navigation indexes, the root README.md and documents named in
        ``exempt`` (file names or root-relative paths) are never orphans.
        """
        exempt_names = set(exempt or [])
        result = []
        for doc in self.documents:
            if doc.is_index or doc.path == "README.md":
                continue
            if doc.name in exempt_names or doc.path in exempt_names:
                continue
            if not self.inbound(doc.path):
                result.append(doc)
        return result

    def most_linked(self, limit: int = 10) -> list[tuple[str, int]]:
        """Documents with the most inbound links from other documents."""
        counts = Counter(
            e.resolved
            for edges in self._links_by_target.values()
            for e in edges
            if e.resolved in self._doc_by_path and e.source != e.resolved
        )
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:limit]

    def get_stats(self, orphan_exempt: list[str] | None = None) -> dict[str, Any]:
        """Get statistics about the graph; orphans honour ``orphan_exempt``."""
        return {
            "documents": len(self.documents),
            "index_documents": sum(1 for d in self.documents if d.is_index),
            "directories": len(self._docs_by_dir),
            "links_total": len(self.links),
            "link_counts": {
                kind.value: sum(1 for e in self.links if e.kind == kind)
                for kind in LinkKind
            },
            "files_scanned": self.stats.get("files_scanned", len(self.documents)),
            "files_skipped": self.stats.get("files_skipped", 0),
            "orphans": len(self.orphans(exempt=orphan_exempt)),
            "most_linked": self.most_linked(5),
        }

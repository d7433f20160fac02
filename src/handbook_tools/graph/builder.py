"""
Handbook Graph Builder.

Builds the link graph of a handbook by scanning Markdown files,
extracting their links and headings, and resolving every internal link
against the file system.

Example:
    >>> builder = HandbookGraphBuilder(Path("engineering-handbook"))
    >>> graph = builder.build()
    >>> graph["stats"]["documents"]
    42
"""

import os
from pathlib import Path
from typing import Any

from handbook_tools.config import HandbookConfig
from handbook_tools.errors import DocumentReadError, HandbookRootNotFoundError
from handbook_tools.graph.schema import DocumentEntity, LinkEdge
from handbook_tools.logging import get_logger
from handbook_tools.parser.headings import anchors_for, document_title, extract_headings
from handbook_tools.parser.links import LinkKind, MarkdownLink, decode_path, extract_links, split_target

logger = get_logger(__name__)


class HandbookGraphBuilder:
    """Build the handbook link graph from Markdown files.

    Architecture:
        ```
        handbook root
              │
              ▼
        discover() ──► sorted *.md paths (skip patterns applied)
              │
              ▼
        For each document:
              ├──► DocumentEntity (title, anchors, headings)
              └──► extract_links() ──► LinkEdge per link
                                         │
                                         ▼
                                   _resolve() against the file system
              │
              ▼
        graph = {documents, links, stats}
        ```

    Guardrails:
        - Undecodable or unreadable files are logged and skipped, never fatal
        - Resolution never touches the network; external links are only classified
    """

    def __init__(
        self,
        root: Path,
        config: HandbookConfig | None = None,
    ):
        """Initialize the builder.

        Args:
            root: Handbook root directory
            config: Handbook configuration (defaults when omitted)

        Raises:
            HandbookRootNotFoundError: If root is not an existing directory
        """
        self.root = Path(os.path.normpath(Path(root).absolute()))
        if not self.root.is_dir():
            raise HandbookRootNotFoundError(
                f"handbook root is not a directory: {root}"
            ).with_context(root=str(root))

        self.config = config or HandbookConfig()

        self.documents: dict[str, DocumentEntity] = {}
        self.links: list[LinkEdge] = []
        self.skipped: list[DocumentReadError] = []

    def discover(self) -> list[Path]:
        """Find all Markdown documents under the root.

        Returns:
            Absolute paths, sorted by their POSIX path relative to the root
        """
        found = []
        for md_file in self.root.rglob("*.md"):
            relative = md_file.relative_to(self.root)
            if self.config.should_skip(relative):
                continue
            if not md_file.is_file():
                continue
            found.append(md_file)
        return sorted(found, key=lambda p: p.relative_to(self.root).as_posix())

    def build(self) -> dict[str, Any]:
        """Scan all documents and build the link graph.

        Returns:
            Dict with keys:
                - documents: List of DocumentEntity
                - links: List of LinkEdge
                - stats: Build statistics
        """
        self.documents = {}
        self.links = []
        self.skipped = []

        stats = {
            "files_scanned": 0,
            "files_skipped": 0,
            "documents": 0,
            "index_documents": 0,
            "links_total": 0,
            "internal_links": 0,
            "external_links": 0,
            "anchor_links": 0,
            "image_links": 0,
        }

        for md_file in self.discover():
            stats["files_scanned"] += 1

            try:
                text = md_file.read_text(encoding="utf-8")
            except (UnicodeDecodeError, OSError) as e:
                rel_path = md_file.relative_to(self.root).as_posix()
                error = DocumentReadError(
                    f"cannot read {rel_path}", cause=e
                ).with_context(root=str(self.root), path=rel_path)
                self.skipped.append(error)
                stats["files_skipped"] += 1
                logger.warning("document_skipped", **error.to_dict())
                continue

            self._process_document(md_file, text)

        for doc in self.documents.values():
            stats["documents"] += 1
            if doc.is_index:
                stats["index_documents"] += 1

        for edge in self.links:
            stats["links_total"] += 1
            if edge.is_image:
                stats["image_links"] += 1
            if edge.kind == LinkKind.INTERNAL:
                stats["internal_links"] += 1
            elif edge.kind == LinkKind.EXTERNAL:
                stats["external_links"] += 1
            else:
                stats["anchor_links"] += 1

        logger.debug("graph_built", root=str(self.root), **stats)

        return {
            "root": str(self.root),
            "documents": list(self.documents.values()),
            "links": self.links,
            "stats": stats,
        }

    def _process_document(self, md_file: Path, text: str) -> None:
        """Create the document entity and its link edges."""
        relative = md_file.relative_to(self.root)
        rel_path = relative.as_posix()
        directory = relative.parent.as_posix()

        doc = DocumentEntity(
            path=rel_path,
            title=document_title(text, fallback=md_file.stem),
            directory=directory,
            is_index=self.config.is_index_file(md_file),
            anchors=anchors_for(text),
            heading_count=len(extract_headings(text)),
            size=len(text.encode("utf-8")),
        )
        self.documents[rel_path] = doc

        for link in extract_links(text, ignore_code_blocks=self.config.ignore_code_blocks):
            self.links.append(self._create_edge(md_file, rel_path, link))

    def _create_edge(self, md_file: Path, rel_path: str, link: MarkdownLink) -> LinkEdge:
        """Create a LinkEdge and resolve it when it is internal."""
        path_part, fragment = split_target(link.target)
        edge = LinkEdge(
            source=rel_path,
            target=link.target,
            kind=link.kind,
            line=link.line,
            column=link.column,
            text=link.text,
            is_image=link.is_image,
            fragment=fragment or None,
        )

        if edge.kind == LinkKind.ANCHOR:
            edge.resolved = rel_path
            edge.in_handbook = True
            edge.is_file = True
        elif edge.kind == LinkKind.INTERNAL:
            self._resolve(edge, md_file, path_part)

        return edge

    def _resolve(self, edge: LinkEdge, md_file: Path, path_part: str) -> None:
        """Resolve an internal link path against the file system.

        Paths starting with ``/`` are taken relative to the handbook root,
        everything else relative to the directory of the linking document.
        """
        decoded = decode_path(path_part)
        if decoded.startswith("/"):
            target = self.root / decoded.lstrip("/")
        else:
            target = md_file.parent / decoded

        target = Path(os.path.normpath(target))
        edge.is_file = target.is_file()
        edge.is_dir = target.is_dir()

        try:
            edge.resolved = target.relative_to(self.root).as_posix()
            edge.in_handbook = True
        except ValueError:
            edge.resolved = str(target)
            edge.in_handbook = False

    def to_dict(self) -> dict[str, Any]:
        """Export graph as dictionary."""
        return {
            "root": str(self.root),
            "documents": [d.to_dict() for d in self.documents.values()],
            "links": [e.to_dict() for e in self.links],
        }

"""
Schema definitions for the handbook link graph.

Documents are the nodes and links are the edges. Both carry enough
provenance (path, line, column) for reports to point readers at the exact
place to fix.
"""

from dataclasses import dataclass, field
from typing import Any

from handbook_tools.parser.links import LinkKind


@dataclass
class DocumentEntity:
    """A Markdown document in the handbook.

    Attributes:
        path: POSIX path relative to the handbook root (also the node id)
        title: First H1 heading, or the file stem
        directory: POSIX directory relative to the root ("." for the root)
        is_index: Whether this is a navigation index (AGENTS.md, ...)
        anchors: Anchors other documents may link to
        heading_count: Number of ATX headings
        size: Size in bytes
    """

    path: str
    title: str = ""
    directory: str = "."
    is_index: bool = False
    anchors: set[str] = field(default_factory=set)
    heading_count: int = 0
    size: int = 0

    @property
    def doc_id(self) -> str:
        return self.path

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    def to_dict(self) -> dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            "path": self.path,
            "title": self.title,
            "directory": self.directory,
            "is_index": self.is_index,
            "anchors": sorted(self.anchors),
            "heading_count": self.heading_count,
            "size": self.size,
        }


@dataclass
class LinkEdge:
    """A link from one document to a target.

    For INTERNAL links ``resolved`` is the normalised target path: relative
    to the root (POSIX) when it lies inside the handbook, absolute otherwise.
    ANCHOR links resolve to their own document. EXTERNAL links keep
    ``resolved`` as None.

    Attributes:
        source: Path of the document containing the link
        target: Link target as written (normalised)
        kind: INTERNAL, EXTERNAL or ANCHOR
        line: 1-based line number in the source
        column: 1-based column in the source
        text: Link text
        is_image: Whether the link is an image
        resolved: Resolved target path (see above)
        fragment: ``#fragment`` part without the hash, if any
        in_handbook: Whether ``resolved`` lies inside the handbook root
        is_file: Whether ``resolved`` is an existing regular file
        is_dir: Whether ``resolved`` is an existing directory
    """

    source: str
    target: str
    kind: LinkKind
    line: int
    column: int = 1
    text: str = ""
    is_image: bool = False
    resolved: str | None = None
    fragment: str | None = None
    in_handbook: bool = False
    is_file: bool = False
    is_dir: bool = False

    @property
    def is_markdown_target(self) -> bool:
        return bool(self.resolved) and self.resolved.lower().endswith(".md")

    def to_dict(self) -> dict[str, Any]:
        """Convert edge to dictionary."""
        return {
            "source": self.source,
            "target": self.target,
            "kind": self.kind.value,
            "line": self.line,
            "column": self.column,
            "text": self.text,
            "is_image": self.is_image,
            "resolved": self.resolved,
            "fragment": self.fragment,
            "in_handbook": self.in_handbook,
            "is_file": self.is_file,
            "is_dir": self.is_dir,
        }

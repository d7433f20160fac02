"""
Internal link verification.

Every internal link must point at an existing regular file once it is
resolved against the directory of the linking document and stripped of
its ``#fragment``. External links (anything with a URI scheme) and
same-document anchors are not counted, unless anchor checking is on, in
which case fragments are also matched against the target's headings.

Example:
    >>> graph = HandbookGraphBuilder(root).build()
    >>> report = LinkVerifier(graph, root).verify()
    >>> report.total_checked, len(report.broken)
    (120, 0)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import unquote

from handbook_tools.config import HandbookConfig
from handbook_tools.graph.queries import HandbookQuery
from handbook_tools.graph.schema import LinkEdge
from handbook_tools.logging import get_logger
from handbook_tools.parser.headings import anchors_for
from handbook_tools.parser.links import LinkKind

logger = get_logger(__name__)

REASON_NOT_FOUND = "NOT FOUND"
REASON_DIRECTORY = "IS A DIRECTORY"
REASON_MISSING_ANCHOR = "MISSING ANCHOR"


@dataclass(frozen=True)
class BrokenLink:
    """A link that does not resolve.

    Attributes:
        source: Document containing the link
        line: Line of the link in ``source``
        link: Link target as written
        target: Resolved target path
        reason: NOT FOUND, IS A DIRECTORY or MISSING ANCHOR
    """

    source: str
    line: int
    link: str
    target: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "line": self.line,
            "link": self.link,
            "target": self.target,
            "reason": self.reason,
        }


@dataclass
class LinkReport:
    """Result of verifying all links of a handbook."""

    root: str = ""
    files_scanned: int = 0
    total_checked: int = 0
    external_skipped: int = 0
    anchors_skipped: int = 0
    anchors_checked: bool = False
    broken: list[BrokenLink] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.broken

    @property
    def broken_count(self) -> int:
        return len(self.broken)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def broken_by_source(self) -> dict[str, list[BrokenLink]]:
        grouped: dict[str, list[BrokenLink]] = {}
        for item in self.broken:
            grouped.setdefault(item.source, []).append(item)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "ok": self.ok,
            "files_scanned": self.files_scanned,
            "total_checked": self.total_checked,
            "broken_count": self.broken_count,
            "external_skipped": self.external_skipped,
            "anchors_skipped": self.anchors_skipped,
            "anchors_checked": self.anchors_checked,
            "broken": [b.to_dict() for b in self.broken],
        }


class LinkVerifier:
    """Verify the internal links of a built handbook graph."""

    def __init__(
        self,
        graph: dict[str, Any],
        root: Path,
        config: HandbookConfig | None = None,
        check_anchors: bool | None = None,
    ):
        self.graph = graph
        self.root = Path(graph.get("root") or root)
        self.config = config or HandbookConfig()
        self.check_anchors = self.config.check_anchors if check_anchors is None else check_anchors
        self.query = HandbookQuery(graph)
        self._anchor_cache: dict[str, set[str] | None] = {}

    def verify(self) -> LinkReport:
        """Check every link in the graph.

        Returns:
            LinkReport; broken links are in document and line order
        """
        report = LinkReport(
            root=str(self.root),
            files_scanned=self.graph.get("stats", {}).get(
                "files_scanned", len(self.query.documents)
            ),
            anchors_checked=self.check_anchors,
        )

        for edge in self.query.links:
            if edge.kind == LinkKind.EXTERNAL:
                report.external_skipped += 1
                continue

            if edge.kind == LinkKind.ANCHOR:
                if not self.check_anchors:
                    report.anchors_skipped += 1
                    continue
                report.total_checked += 1
                self._check_fragment(edge, report)
                continue

            report.total_checked += 1
            if not self._check_path(edge, report):
                continue
            if self.check_anchors and edge.fragment and edge.is_file and edge.is_markdown_target:
                self._check_fragment(edge, report)

        logger.info(
            "links_verified",
            total_checked=report.total_checked,
            broken=report.broken_count,
            external_skipped=report.external_skipped,
        )
        return report

    def _check_path(self, edge: LinkEdge, report: LinkReport) -> bool:
        """Check the path part of an internal link; True when it resolves."""
        if edge.is_file:
            return True
        if edge.is_dir and self.config.allow_directory_links:
            return True

        reason = REASON_DIRECTORY if edge.is_dir else REASON_NOT_FOUND
        report.broken.append(
            BrokenLink(
                source=edge.source,
                line=edge.line,
                link=edge.target,
                target=edge.resolved or edge.target,
                reason=reason,
            )
        )
        return False

    def _check_fragment(self, edge: LinkEdge, report: LinkReport) -> None:
        """Check that a ``#fragment`` names an anchor of the target document."""
        fragment = unquote(edge.fragment or "")
        if not fragment:
            return

        anchors = self._anchors(edge)
        if anchors is None:
            return

        if fragment.lower() not in anchors:
            report.broken.append(
                BrokenLink(
                    source=edge.source,
                    line=edge.line,
                    link=edge.target,
                    target=f"{edge.resolved}#{fragment}",
                    reason=REASON_MISSING_ANCHOR,
                )
            )

    def _anchors(self, edge: LinkEdge) -> set[str] | None:
        """Lower-cased anchors of the edge's target, or None if unreadable."""
        key = edge.resolved or ""
        if key in self._anchor_cache:
            return self._anchor_cache[key]

        doc = self.query.get_document(key) if edge.in_handbook else None
        if doc is not None:
            anchors: set[str] | None = {a.lower() for a in doc.anchors}
        else:
            path = self.root / key if edge.in_handbook else Path(key)
            try:
                anchors = {a.lower() for a in anchors_for(path.read_text(encoding="utf-8"))}
            except (UnicodeDecodeError, OSError) as e:
                logger.warning("anchor_target_unreadable", path=key, error=str(e))
                anchors = None

        self._anchor_cache[key] = anchors
        return anchors

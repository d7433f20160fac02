"""
Handbook Orchestrator.

Coordinates a handbook inspection: building the link graph once and
running the link, navigation and orphan checks against it.

Example:
    >>> orchestrator = HandbookOrchestrator(Path("engineering-handbook"))
    >>> report = orchestrator.run_all()
    >>> report.ok
    True
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from handbook_tools.checks.base import CheckResult
from handbook_tools.checks.links import LinkReport, LinkVerifier
from handbook_tools.checks.navigation import NavigationIndexChecker
from handbook_tools.checks.orphans import find_orphans
from handbook_tools.config import HandbookConfig
from handbook_tools.graph.builder import HandbookGraphBuilder
from handbook_tools.graph.queries import HandbookQuery
from handbook_tools.logging import LogContext, get_logger

logger = get_logger(__name__)


@dataclass
class HandbookReport:
    """Aggregated result of all checks."""

    links: LinkReport
    checks: list[CheckResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.links.ok and all(check.ok for check in self.checks)

    @property
    def warning_count(self) -> int:
        return sum(len(check.warnings) for check in self.checks)

    @property
    def error_count(self) -> int:
        return self.links.broken_count + sum(len(check.errors) for check in self.checks)

    def exit_code(self, strict: bool = False) -> int:
        if not self.ok:
            return 1
        if strict and self.warning_count:
            return 1
        return 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "errors": self.error_count,
            "warnings": self.warning_count,
            "links": self.links.to_dict(),
            "checks": [check.to_dict() for check in self.checks],
        }


class HandbookOrchestrator:
    """Run handbook checks against a single graph build.

    Architecture:
        ```
        HandbookOrchestrator
              │
              ├──► HandbookGraphBuilder.build()  (once, lazily)
              │
              ├──► LinkVerifier.verify()          ──► LinkReport
              ├──► NavigationIndexChecker.check() ──► CheckResult
              ├──► find_orphans()                 ──► CheckResult
              │
              └──► HandbookReport
        ```
    """

    def __init__(
        self,
        root: Path,
        config: HandbookConfig | None = None,
        config_file: Path | None = None,
    ):
        """Initialize orchestrator.

        Args:
            root: Handbook root directory
            config: Explicit configuration (skips config file loading)
            config_file: Config file to load instead of ``<root>/.handbook.yml``
        """
        self.root = Path(root)
        self.config = config or HandbookConfig.load(self.root, config_file)
        self.builder = HandbookGraphBuilder(self.root, self.config)
        self._graph: dict[str, Any] | None = None

    @property
    def graph(self) -> dict[str, Any]:
        """The link graph, built on first access."""
        if self._graph is None:
            with LogContext(root=str(self.builder.root)):
                self._graph = self.builder.build()
        return self._graph

    def verify_links(self, check_anchors: bool | None = None) -> LinkReport:
        return LinkVerifier(
            self.graph, self.root, self.config, check_anchors=check_anchors
        ).verify()

    def check_navigation(self) -> CheckResult:
        return NavigationIndexChecker(self.graph, self.config).check()

    def find_orphans(self) -> CheckResult:
        return find_orphans(self.graph, self.config)

    def run_all(self, check_anchors: bool | None = None) -> HandbookReport:
        """Run every check.

        Returns:
            HandbookReport with the link report and the other check results
        """
        report = HandbookReport(
            links=self.verify_links(check_anchors=check_anchors),
            checks=[self.check_navigation(), self.find_orphans()],
        )
        logger.info(
            "handbook_checked",
            ok=report.ok,
            errors=report.error_count,
            warnings=report.warning_count,
        )
        return report

    def get_stats(self) -> dict[str, Any]:
        return HandbookQuery(self.graph).get_stats(orphan_exempt=self.config.orphan_exempt)

    def export_graph(self) -> dict[str, Any]:
        """JSON-serialisable graph with build statistics."""
        graph = self.graph
        data = self.builder.to_dict()
        data["stats"] = graph["stats"]
        return data

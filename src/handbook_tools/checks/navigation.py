"""
Navigation index checks.

Each handbook directory may carry one navigation index per AI coding
assistant (AGENTS.md, CLAUDE.md, GEMINI.md). Once a directory has one of
them it is an *indexed directory* and:

- every required index file must exist (error),
- every index should link to every topic document of the directory (warning),
- all indexes of the directory should link to the same targets (warning).
"""

from typing import Any

from handbook_tools.checks.base import CheckResult, Severity
from handbook_tools.config import HandbookConfig
from handbook_tools.graph.queries import HandbookQuery
from handbook_tools.logging import get_logger

logger = get_logger(__name__)

CHECK_NAME = "navigation"


def _in_dir(directory: str, name: str) -> str:
    return name if directory == "." else f"{directory}/{name}"


class NavigationIndexChecker:
    """Check the AGENTS/CLAUDE/GEMINI indexes of every directory."""

    def __init__(self, graph: dict[str, Any], config: HandbookConfig | None = None):
        self.config = config or HandbookConfig()
        self.query = HandbookQuery(graph)

    def indexed_directories(self) -> list[str]:
        return [
            directory
            for directory in self.query.directories()
            if any(doc.is_index for doc in self.query.documents_in(directory))
        ]

    def check(self) -> CheckResult:
        result = CheckResult(CHECK_NAME)

        for directory in self.indexed_directories():
            self._check_directory(directory, result)

        logger.info(
            "navigation_checked",
            errors=len(result.errors),
            warnings=len(result.warnings),
        )
        return result

    def _check_directory(self, directory: str, result: CheckResult) -> None:
        docs = self.query.documents_in(directory)
        indexes = sorted((d for d in docs if d.is_index), key=lambda d: d.name)
        present = {d.name for d in indexes}

        for name in self.config.required_index_files:
            if name not in present:
                result.add(
                    Severity.ERROR,
                    _in_dir(directory, name),
                    f"missing navigation index {name} in {directory}",
                )

        topics = [
            d for d in docs
            if not d.is_index and d.name not in self.config.nav_exempt
        ]

        targets_by_index = {d.name: self.query.linked_targets(d.path) for d in indexes}

        for index in indexes:
            targets = targets_by_index[index.name]
            for topic in topics:
                if topic.path not in targets:
                    result.add(
                        Severity.WARNING,
                        index.path,
                        f"{index.name} does not link to {topic.name}",
                    )

        if len(indexes) < 2:
            return

        reference = indexes[0]
        reference_targets = targets_by_index[reference.name]
        for index in indexes[1:]:
            targets = targets_by_index[index.name]
            if targets == reference_targets:
                continue
            only_here = sorted(targets - reference_targets)
            only_there = sorted(reference_targets - targets)
            parts = []
            if only_here:
                parts.append(f"only in {index.name}: {', '.join(only_here)}")
            if only_there:
                parts.append(f"only in {reference.name}: {', '.join(only_there)}")
            result.add(
                Severity.WARNING,
                index.path,
                f"index drift against {reference.name} ({'; '.join(parts)})",
            )

"""Orphan document check: documents nothing links to."""

from typing import Any

from handbook_tools.checks.base import CheckResult, Severity
from handbook_tools.config import HandbookConfig
from handbook_tools.graph.queries import HandbookQuery

CHECK_NAME = "orphans"


def find_orphans(graph: dict[str, Any], config: HandbookConfig | None = None) -> CheckResult:
    """Report every unreachable document as a warning."""
    config = config or HandbookConfig()
    query = HandbookQuery(graph)

    result = CheckResult(CHECK_NAME)
    for doc in query.orphans(exempt=config.orphan_exempt):
        result.add(Severity.WARNING, doc.path, "no document links here")
    return result

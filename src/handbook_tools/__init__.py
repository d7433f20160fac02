"""
Handbook Tools

Tooling that keeps a Markdown engineering handbook navigable: internal
link verification, AGENTS.md / CLAUDE.md / GEMINI.md navigation index
checks, and a queryable link graph.

Example:
    >>> from handbook_tools import HandbookOrchestrator
    >>> from pathlib import Path
    >>> orchestrator = HandbookOrchestrator(Path("."))
    >>> orchestrator.verify_links().ok
    True
"""

__version__ = "0.1.0"

from handbook_tools.config import HandbookConfig
from handbook_tools.errors import HandbookError
from handbook_tools.graph import HandbookGraphBuilder, HandbookQuery
from handbook_tools.checks import LinkReport, LinkVerifier, NavigationIndexChecker
from handbook_tools.orchestrator import HandbookOrchestrator, HandbookReport

__all__ = [
    "HandbookConfig",
    "HandbookError",
    "HandbookGraphBuilder",
    "HandbookQuery",
    "LinkReport",
    "LinkVerifier",
    "NavigationIndexChecker",
    "HandbookOrchestrator",
    "HandbookReport",
    "__version__",
]

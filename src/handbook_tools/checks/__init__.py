"""
Checks module for handbook integrity.

Link verification, navigation index checks and orphan detection, all
running against a graph built once by HandbookGraphBuilder.
"""

from handbook_tools.checks.base import CheckIssue, CheckResult, Severity
from handbook_tools.checks.links import BrokenLink, LinkReport, LinkVerifier
from handbook_tools.checks.navigation import NavigationIndexChecker
from handbook_tools.checks.orphans import find_orphans

__all__ = [
    "CheckIssue",
    "CheckResult",
    "Severity",
    "BrokenLink",
    "LinkReport",
    "LinkVerifier",
    "NavigationIndexChecker",
    "find_orphans",
]

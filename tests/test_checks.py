"""Tests for link verification, navigation and orphan checks."""

import pytest

from handbook_tools.checks.base import CheckResult, Severity
from handbook_tools.checks.links import (
    REASON_DIRECTORY,
    REASON_MISSING_ANCHOR,
    REASON_NOT_FOUND,
    LinkVerifier,
)
from handbook_tools.checks.navigation import NavigationIndexChecker
from handbook_tools.checks.orphans import find_orphans
from handbook_tools.config import HandbookConfig
from handbook_tools.graph.builder import HandbookGraphBuilder


# =============================================================================
# CheckResult Tests
# =============================================================================

class TestCheckResult:
    """Tests for CheckResult."""

    def test_warnings_do_not_fail(self):
        result = CheckResult("demo")
        result.add(Severity.WARNING, "a.md", "heads up")

        assert result.ok
        assert len(result.warnings) == 1

    def test_errors_fail(self):
        result = CheckResult("demo")
        result.add(Severity.ERROR, "a.md", "broken")

        assert not result.ok
        assert result.to_dict()["errors"] == 1


# =============================================================================
# LinkVerifier Tests
# =============================================================================

class TestLinkVerifier:
    """Tests for LinkVerifier."""

    def test_counts_match_script_semantics(self, graph, handbook_root):
        """External and anchor-only links are not counted as checked."""
        report = LinkVerifier(graph, handbook_root).verify()

        assert report.files_scanned == 9
        assert report.total_checked == 13
        assert report.external_skipped == 2
        assert report.anchors_skipped == 1
        assert not report.ok
        assert report.exit_code == 1

    def test_broken_links(self, graph, handbook_root):
        report = LinkVerifier(graph, handbook_root).verify()

        broken = [(b.source, b.line, b.link, b.target, b.reason) for b in report.broken]
        assert broken == [
            ("guides/git.md", 6, "missing.md", "guides/missing.md", REASON_NOT_FOUND),
            ("guides/git.md", 7, "../guides", "guides", REASON_DIRECTORY),
        ]

    def test_fragments_ignored_without_anchor_check(self, graph, handbook_root):
        report = LinkVerifier(graph, handbook_root).verify()

        assert all(b.reason != REASON_MISSING_ANCHOR for b in report.broken)

    def test_anchor_check(self, graph, handbook_root):
        report = LinkVerifier(graph, handbook_root, check_anchors=True).verify()

        assert report.total_checked == 14
        assert report.anchors_skipped == 0
        missing = [b for b in report.broken if b.reason == REASON_MISSING_ANCHOR]
        assert len(missing) == 1
        assert missing[0].link == "solid.md#nope"
        assert missing[0].target == "guides/solid.md#nope"
        assert missing[0].line == 5

    def test_anchor_check_from_config(self, graph, handbook_root):
        config = HandbookConfig(check_anchors=True)

        report = LinkVerifier(graph, handbook_root, config).verify()

        assert report.broken_count == 3

    def test_same_document_anchor(self, make_handbook):
        root = make_handbook({
            "a.md": "# Top\n\n## Details\n\n[down](#details) [bad](#nowhere) [case](#Details)\n",
        })
        graph = HandbookGraphBuilder(root).build()

        report = LinkVerifier(graph, root, check_anchors=True).verify()

        assert report.total_checked == 3
        assert [b.link for b in report.broken] == ["#nowhere"]

    def test_directory_links_allowed(self, graph, handbook_root):
        config = HandbookConfig(allow_directory_links=True)

        report = LinkVerifier(graph, handbook_root, config).verify()

        assert [b.link for b in report.broken] == ["missing.md"]

    def test_non_markdown_targets(self, make_handbook):
        root = make_handbook({
            "a.md": "![diagram](img/flow.png) [script](tools/run.sh#L10) [gone](img/old.png)\n",
            "img/flow.png": "png",
            "tools/run.sh": "#!/bin/sh\n",
        })
        graph = HandbookGraphBuilder(root).build()

        report = LinkVerifier(graph, root, check_anchors=True).verify()

        assert report.total_checked == 3
        assert [b.link for b in report.broken] == ["img/old.png"]

    def test_clean_handbook(self, clean_root):
        graph = HandbookGraphBuilder(clean_root).build()

        report = LinkVerifier(graph, clean_root, check_anchors=True).verify()

        assert report.ok
        assert report.exit_code == 0
        assert report.total_checked == 4

    def test_to_dict(self, graph, handbook_root):
        data = LinkVerifier(graph, handbook_root).verify().to_dict()

        assert data["broken_count"] == 2
        assert data["broken"][0]["reason"] == REASON_NOT_FOUND


# =============================================================================
# Navigation Tests
# =============================================================================

class TestNavigationIndexChecker:
    """Tests for NavigationIndexChecker."""

    @pytest.fixture
    def result(self, graph):
        return NavigationIndexChecker(graph).check()

    def test_indexed_directories(self, graph):
        assert NavigationIndexChecker(graph).indexed_directories() == ["guides", "patterns"]

    def test_missing_index_files_are_errors(self, result):
        assert not result.ok
        assert sorted(i.path for i in result.errors) == [
            "patterns/CLAUDE.md",
            "patterns/GEMINI.md",
        ]

    def test_uncovered_topic_is_warning(self, result):
        messages = [i.message for i in result.warnings]

        assert "GEMINI.md does not link to solid.md" in messages

    def test_index_drift_is_warning(self, result):
        drift = [i for i in result.warnings if "index drift" in i.message]

        assert len(drift) == 1
        assert drift[0].path == "guides/GEMINI.md"
        assert "only in AGENTS.md: guides/solid.md" in drift[0].message

    def test_required_index_files_configurable(self, graph):
        config = HandbookConfig(required_index_files=["AGENTS.md"])

        result = NavigationIndexChecker(graph, config).check()

        assert result.ok
        assert len(result.warnings) == 2

    def test_nav_exempt(self, make_handbook):
        root = make_handbook({
            "AGENTS.md": "[a](a.md)\n",
            "CLAUDE.md": "[a](a.md)\n",
            "GEMINI.md": "[a](a.md)\n",
            "a.md": "# A\n",
            "README.md": "# Readme\n",
            "CHANGELOG.md": "# Changes\n",
        })
        graph = HandbookGraphBuilder(root).build()

        config = HandbookConfig(nav_exempt=["README.md", "CHANGELOG.md"])
        result = NavigationIndexChecker(graph, config).check()

        assert result.issues == []


# =============================================================================
# Orphan Tests
# =============================================================================

class TestOrphans:
    """Tests for the orphan check."""

    def test_orphans_are_warnings(self, graph):
        result = find_orphans(graph)

        assert result.ok
        assert [(i.path, i.severity) for i in result.issues] == [("orphan.md", Severity.WARNING)]

    def test_orphan_exempt(self, graph):
        result = find_orphans(graph, HandbookConfig(orphan_exempt=["orphan.md"]))

        assert result.issues == []

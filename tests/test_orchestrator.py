"""Tests for HandbookOrchestrator."""

import pytest

from handbook_tools.errors import InvalidConfigError
from handbook_tools.orchestrator import HandbookOrchestrator


class TestHandbookOrchestrator:
    """Tests for HandbookOrchestrator."""

    def test_run_all(self, handbook_root):
        report = HandbookOrchestrator(handbook_root).run_all()

        assert not report.ok
        assert report.error_count == 4
        assert report.warning_count == 3
        assert [c.name for c in report.checks] == ["navigation", "orphans"]
        assert report.exit_code() == 1

    def test_clean_run(self, clean_root):
        report = HandbookOrchestrator(clean_root).run_all(check_anchors=True)

        assert report.ok
        assert report.exit_code(strict=True) == 0

    def test_strict_fails_on_warnings(self, make_handbook):
        root = make_handbook({"README.md": "# R\n", "lost.md": "# Lost\n"})

        report = HandbookOrchestrator(root).run_all()

        assert report.ok
        assert report.exit_code() == 0
        assert report.exit_code(strict=True) == 1

    def test_graph_built_once(self, handbook_root):
        orchestrator = HandbookOrchestrator(handbook_root)

        first = orchestrator.graph
        orchestrator.run_all()

        assert orchestrator.graph is first

    def test_config_file_at_root(self, handbook_root):
        (handbook_root / ".handbook.yml").write_text("check_anchors: true\n")

        report = HandbookOrchestrator(handbook_root).verify_links()

        assert report.anchors_checked
        assert report.broken_count == 3

    def test_invalid_config_file(self, handbook_root):
        (handbook_root / ".handbook.yml").write_text("colour: blue\n")

        with pytest.raises(InvalidConfigError):
            HandbookOrchestrator(handbook_root)

    def test_stats_honour_orphan_exemptions(self, handbook_root):
        (handbook_root / ".handbook.yml").write_text("orphan_exempt: [orphan.md]\n")
        orchestrator = HandbookOrchestrator(handbook_root)

        assert orchestrator.find_orphans().issues == []
        assert orchestrator.get_stats()["orphans"] == 0

    def test_export_graph(self, handbook_root):
        data = HandbookOrchestrator(handbook_root).export_graph()

        assert data["stats"]["documents"] == 9
        assert {"root", "documents", "links", "stats"} <= set(data)

"""Link report renderer: plain text for CI logs, Markdown for pull requests."""

from pathlib import Path

from handbook_tools.checks.links import LinkReport
from handbook_tools.renderers.base import BaseRenderer

FORMATS = ("text", "markdown")


class LinkReportRenderer(BaseRenderer):
    """Render a LinkReport as plain text or Markdown."""

    templates = {
        "text": "link_report.txt.j2",
        "markdown": "link_report.md.j2",
    }

    def __init__(
        self,
        report: LinkReport,
        output_format: str = "text",
        template_dir: Path | None = None,
    ):
        super().__init__(template_dir)
        if output_format not in self.templates:
            raise ValueError(f"unknown report format: {output_format}")
        self.report = report
        self.output_format = output_format
        self.template_name = self.templates[output_format]

    def render(self) -> str:
        return self._render_template(
            self.template_name,
            report=self.report,
            broken=self.report.broken,
            grouped=self.report.broken_by_source(),
        )

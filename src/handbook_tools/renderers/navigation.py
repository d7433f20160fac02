"""
Navigation index renderer.

Renders an AGENTS.md / CLAUDE.md / GEMINI.md for a handbook directory:
the directory's topic documents (by title) followed by links into the
sub-directories, preferring each sub-directory's index of the same name.
"""

from pathlib import Path, PurePosixPath
from typing import Any

from handbook_tools.config import HandbookConfig
from handbook_tools.graph.queries import HandbookQuery
from handbook_tools.renderers.base import BaseRenderer

ASSISTANTS = {
    "AGENTS.md": "AI coding agents",
    "CLAUDE.md": "Claude",
    "GEMINI.md": "Gemini",
}


def _join(directory: str, name: str) -> str:
    return name if directory == "." else f"{directory}/{name}"


def _humanize(name: str) -> str:
    return name.replace("-", " ").replace("_", " ").title()


class NavigationIndexRenderer(BaseRenderer):
    """Render a navigation index for one directory of the handbook."""

    template_name = "navigation_index.md.j2"

    def __init__(
        self,
        graph: dict[str, Any],
        directory: str = ".",
        index_name: str = "AGENTS.md",
        config: HandbookConfig | None = None,
        template_dir: Path | None = None,
    ):
        super().__init__(template_dir)
        self.query = HandbookQuery(graph)
        self.directory = directory
        self.index_name = index_name
        self.config = config or HandbookConfig()

    def render(self) -> str:
        return self._render_template(self.template_name, **self._context())

    def _context(self) -> dict[str, Any]:
        docs = sorted(self.query.documents_in(self.directory), key=lambda d: d.name)
        topics = [
            {"title": doc.title, "href": doc.name}
            for doc in docs
            if not doc.is_index and doc.name not in self.config.nav_exempt
        ]

        return {
            "title": self._title(self.directory),
            "assistant": ASSISTANTS.get(self.index_name, PurePosixPath(self.index_name).stem),
            "topics": topics,
            "sections": self._sections(),
        }

    def _title(self, directory: str) -> str:
        readme = self.query.get_document(_join(directory, "README.md"))
        if readme is not None and readme.title != "README":
            return readme.title
        if directory == ".":
            return "Handbook"
        return _humanize(PurePosixPath(directory).name)

    def _sections(self) -> list[dict[str, str]]:
        """Entry points of the immediate sub-directories."""
        base = () if self.directory == "." else PurePosixPath(self.directory).parts

        children: set[str] = set()
        for directory in self.query.directories():
            if directory == ".":
                continue
            parts = PurePosixPath(directory).parts
            if len(parts) > len(base) and parts[: len(base)] == base:
                children.add(parts[len(base)])

        sections = []
        for child in sorted(children):
            child_dir = _join(self.directory, child)
            href = self._entry_point(child_dir)
            if href is None:
                continue
            sections.append({"title": self._title(child_dir), "href": f"{child}/{href}"})
        return sections

    def _entry_point(self, directory: str) -> str | None:
        """Index of the same name, else README.md, else the first document."""
        names = sorted(doc.name for doc in self.query.documents_in(directory))
        for candidate in (self.index_name, "README.md"):
            if candidate in names:
                return candidate
        return names[0] if names else None

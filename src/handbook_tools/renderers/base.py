"""
Base renderer for handbook reports and indexes.

Provides template loading shared by all renderers.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from handbook_tools.errors import RenderError

DEFAULT_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class BaseRenderer(ABC):
    """Base class for renderers.

    Architecture:
        ```
        Report / Graph ──► Renderer._context()
                                 │
                                 ▼
                           Jinja2 Template
                                 │
                                 ▼
                        Rendered text / Markdown
        ```

    Templates live in ``handbook_tools/templates``; a custom directory can
    override them file by file.
    """

    # Template file name
    template_name: str = ""

    def __init__(self, template_dir: Path | None = None):
        """Initialize the renderer.

        Args:
            template_dir: Directory containing templates
        """
        search_path = [str(DEFAULT_TEMPLATE_DIR)]
        if template_dir is not None:
            search_path.insert(0, str(template_dir))
        self.template_dir = Path(search_path[0])

        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["md_escape"] = _md_table_escape

    @abstractmethod
    def render(self) -> str:
        """Render the document.

        Returns:
            Rendered content as string
        """
        pass

    def _render_template(self, template_name: str, **context: Any) -> str:
        """Render a template, turning Jinja2 failures into RenderError."""
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise RenderError(
                f"failed to render {template_name}: {e}", cause=e
            ).with_context(template=template_name) from e


def _md_table_escape(value: Any) -> str:
    """Escape pipes so a value fits in a Markdown table cell."""
    return str(value).replace("|", "\\|")

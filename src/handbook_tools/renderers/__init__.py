"""
Renderers module for handbook reports and navigation indexes.

Renderers use Jinja2 templates shipped in ``handbook_tools/templates``.
"""

from handbook_tools.renderers.base import BaseRenderer
from handbook_tools.renderers.navigation import NavigationIndexRenderer
from handbook_tools.renderers.report import LinkReportRenderer

__all__ = [
    "BaseRenderer",
    "LinkReportRenderer",
    "NavigationIndexRenderer",
]

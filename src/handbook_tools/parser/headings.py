"""
Heading and anchor extraction.

Anchors follow the GitHub rendering rules so that ``doc.md#some-section``
links can be checked the way readers will follow them.

Example:
    >>> anchors_for("# Intro\\n## Setup\\n## Setup\\n")
    {'intro', 'setup', 'setup-1'}
"""

import re
from dataclasses import dataclass

from handbook_tools.parser.fences import iter_lines

_ATX_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
_INLINE_LINK_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_HTML_ANCHOR_RE = re.compile(r"""<[^>]*\b(?:name|id)\s*=\s*["']([^"']+)["']""")
_SLUG_STRIP_RE = re.compile(r"[^\w\- ]", re.UNICODE)


@dataclass(frozen=True)
class Heading:
    """An ATX heading."""

    level: int
    text: str
    line: int

    @property
    def slug(self) -> str:
        return slugify(self.text)


def extract_headings(text: str) -> list[Heading]:
    """Return ATX headings outside fenced code blocks, in document order."""
    headings = []
    for line_number, line in iter_lines(text):
        match = _ATX_RE.match(line)
        if match:
            hashes, content = match.groups()
            headings.append(Heading(len(hashes), (content or "").strip(), line_number))
    return headings


def slugify(text: str) -> str:
    """Convert heading text to a GitHub-style anchor."""
    text = _INLINE_LINK_RE.sub(r"\1", text)
    text = _SLUG_STRIP_RE.sub("", text.strip().lower())
    return text.replace(" ", "-")


def anchors_for(text: str) -> set[str]:
    """All anchors a document exposes: heading slugs plus explicit HTML anchors.

    Repeated heading slugs get ``-1``, ``-2`` ... suffixes.
    """
    anchors: set[str] = set()
    seen: dict[str, int] = {}

    for heading in extract_headings(text):
        slug = heading.slug
        if slug in seen:
            seen[slug] += 1
            anchors.add(f"{slug}-{seen[slug]}")
        else:
            seen[slug] = 0
            anchors.add(slug)

    for _, line in iter_lines(text):
        anchors.update(_HTML_ANCHOR_RE.findall(line))

    return anchors


def document_title(text: str, fallback: str) -> str:
    """Return the first level-1 heading, or ``fallback``."""
    for heading in extract_headings(text):
        if heading.level == 1 and heading.text:
            return heading.text
    return fallback

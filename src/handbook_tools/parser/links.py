"""
Markdown link extraction.

Finds inline links (``[text](target)``) and images (``![alt](src)``) line
by line and classifies their targets. The pattern deliberately mirrors a
plain ``grep`` for ``[...](...)``: the text part is non-greedy and the
target runs to the first closing parenthesis.

Example:
    >>> links = extract_links("See [setup](../setup.md#install).")
    >>> links[0].target, links[0].kind
    ('../setup.md#install', <LinkKind.INTERNAL: 'INTERNAL'>)
"""

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import unquote

from handbook_tools.parser.fences import iter_lines

LINK_RE = re.compile(r"\[(.*?)\]\(([^)]+)\)")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_TITLE_RE = re.compile(r"""^(\S+)\s+(?:"[^"]*"|'[^']*'|\([^)]*\))?\s*$""")


class LinkKind(str, Enum):
    """How a link target is treated by the verifier."""

    INTERNAL = "INTERNAL"  # Relative or root-relative path inside the handbook
    EXTERNAL = "EXTERNAL"  # Has a URI scheme (http:, https:, mailto:, ...)
    ANCHOR = "ANCHOR"      # Same-document fragment (#section)


@dataclass(frozen=True)
class MarkdownLink:
    """A link found in a Markdown document.

    Attributes:
        text: Link text (or image alt text)
        target: Normalised link target
        line: 1-based line number
        column: 1-based column of the opening bracket
        is_image: Whether the link is an image (``![alt](src)``)
    """

    text: str
    target: str
    line: int
    column: int = 1
    is_image: bool = False

    @property
    def kind(self) -> LinkKind:
        return classify_target(self.target)

    @property
    def path(self) -> str:
        """Target without its fragment."""
        return split_target(self.target)[0]

    @property
    def fragment(self) -> str | None:
        return split_target(self.target)[1]

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "target": self.target,
            "line": self.line,
            "column": self.column,
            "is_image": self.is_image,
            "kind": self.kind.value,
        }


def normalize_target(raw: str) -> str:
    """Strip whitespace, ``<...>`` wrappers and a trailing link title."""
    target = raw.strip()
    if target.startswith("<") and ">" in target:
        return target[1:target.index(">")].strip()

    match = _TITLE_RE.match(target)
    if match:
        return match.group(1)
    return target


def classify_target(target: str) -> LinkKind:
    """Classify a normalised link target."""
    if target.startswith("#"):
        return LinkKind.ANCHOR
    if _SCHEME_RE.match(target):
        return LinkKind.EXTERNAL
    return LinkKind.INTERNAL


def split_target(target: str) -> tuple[str, str | None]:
    """Split a target on its first ``#`` into ``(path, fragment)``."""
    if "#" not in target:
        return target, None
    path, fragment = target.split("#", 1)
    return path, fragment


def decode_path(path: str) -> str:
    """Decode percent-escapes in a link path (``My%20Doc.md``)."""
    return unquote(path)


def extract_links(text: str, ignore_code_blocks: bool = True) -> list[MarkdownLink]:
    """Extract all inline links and images from Markdown text.

    Args:
        text: Markdown source
        ignore_code_blocks: Skip lines inside fenced code blocks

    Returns:
        Links in document order
    """
    links = []
    for line_number, line in iter_lines(text, skip_code_blocks=ignore_code_blocks):
        for match in LINK_RE.finditer(line):
            start = match.start()
            link_text = match.group(1)
            is_image = start > 0 and line[start - 1] == "!"
            # Badge: [![alt](src)](href) matches on the inner image
            if link_text.startswith("!["):
                link_text = link_text[2:]
                start += 2
                is_image = True
            links.append(
                MarkdownLink(
                    text=link_text,
                    target=normalize_target(match.group(2)),
                    line=line_number,
                    column=start + 1,
                    is_image=is_image,
                )
            )
    return links

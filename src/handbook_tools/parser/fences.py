"""Fenced code block tracking shared by the Markdown parsers."""

import re
from typing import Iterator

_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


def iter_lines(text: str, skip_code_blocks: bool = True) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs, 1-based.

    With ``skip_code_blocks`` the fence lines themselves and everything
    between an opening fence and its closing fence are left out. A closing
    fence uses the same character, is at least as long as the opening one
    and has nothing after it. An unclosed fence runs to the end of the text.
    """
    fence: str | None = None

    for number, line in enumerate(text.splitlines(), start=1):
        if not skip_code_blocks:
            yield number, line
            continue

        match = _FENCE_RE.match(line)
        if fence is None:
            if match:
                marker, info = match.groups()
                # backtick fences may not carry backticks in the info string
                if marker[0] == "`" and "`" in info:
                    yield number, line
                    continue
                fence = marker
                continue
            yield number, line
        elif match:
            marker, rest = match.groups()
            if marker[0] == fence[0] and len(marker) >= len(fence) and not rest.strip():
                fence = None

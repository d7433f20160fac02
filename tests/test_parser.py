"""Tests for the Markdown parser module."""

import pytest

from handbook_tools.parser.fences import iter_lines
from handbook_tools.parser.headings import (
    anchors_for,
    document_title,
    extract_headings,
    slugify,
)
from handbook_tools.parser.links import (
    LinkKind,
    classify_target,
    decode_path,
    extract_links,
    normalize_target,
    split_target,
)


# =============================================================================
# Link Extraction Tests
# =============================================================================

class TestExtractLinks:
    """Tests for extract_links."""

    def test_inline_links_with_positions(self):
        """Test that links carry text, target, line and column."""
        text = "# Title\n\nSee [setup](setup.md) and [git](../git.md#flow).\n"

        links = extract_links(text)

        assert [link.target for link in links] == ["setup.md", "../git.md#flow"]
        assert links[0].text == "setup"
        assert links[0].line == 3
        assert links[0].column == 5
        assert links[1].path == "../git.md"
        assert links[1].fragment == "flow"

    def test_images_are_flagged(self):
        """Test that image links are extracted and marked."""
        links = extract_links("Logo: ![logo](img/logo.png) and [doc](doc.md)")

        assert links[0].is_image
        assert links[0].target == "img/logo.png"
        assert not links[1].is_image

    def test_badge_image_inside_link(self):
        """Test that a linked badge yields the inner image."""
        links = extract_links("[![CI](badge.svg)](https://ci.example.com)")

        assert len(links) == 1
        assert links[0].is_image
        assert links[0].text == "CI"
        assert links[0].target == "badge.svg"
        assert links[0].column == 3

    def test_non_greedy_text_matches_grep(self):
        """Test that link text is matched non-greedily from the first bracket."""
        links = extract_links("[a] b [c](d.md)")

        assert len(links) == 1
        assert links[0].target == "d.md"
        assert links[0].text == "a] b [c"

    def test_target_stops_at_first_parenthesis(self):
        links = extract_links("[x](a.md) (aside) [y](b.md)")

        assert [link.target for link in links] == ["a.md", "b.md"]

    def test_links_in_fenced_code_are_ignored(self):
        """Test that fenced code blocks are skipped by default."""
        text = (
            "[before](a.md)\n"
            "```markdown\n"
            "[inside](b.md)\n"
            "```\n"
            "~~~\n"
            "[tilde](c.md)\n"
            "~~~\n"
            "[after](d.md)\n"
        )

        targets = [link.target for link in extract_links(text)]

        assert targets == ["a.md", "d.md"]

    def test_code_blocks_can_be_included(self):
        text = "```\n[inside](b.md)\n```\n"

        links = extract_links(text, ignore_code_blocks=False)

        assert [link.target for link in links] == ["b.md"]
        assert links[0].line == 2

    def test_unclosed_fence_runs_to_end(self):
        text = "[ok](a.md)\n```\n[hidden](b.md)\n"

        assert [link.target for link in extract_links(text)] == ["a.md"]

    def test_shorter_fence_does_not_close(self):
        text = "````\n```\n[hidden](b.md)\n````\n[shown](c.md)\n"

        assert [link.target for link in extract_links(text)] == ["c.md"]

    def test_to_dict_includes_kind(self):
        link = extract_links("[web](https://example.com)")[0]

        data = link.to_dict()

        assert data["kind"] == "EXTERNAL"
        assert data["target"] == "https://example.com"


class TestTargets:
    """Tests for target normalisation and classification."""

    @pytest.mark.parametrize("raw, expected", [
        ("  doc.md  ", "doc.md"),
        ('doc.md "Title"', "doc.md"),
        ("doc.md 'Title'", "doc.md"),
        ("<my doc.md>", "my doc.md"),
        ("my doc.md", "my doc.md"),
    ])
    def test_normalize_target(self, raw, expected):
        assert normalize_target(raw) == expected

    @pytest.mark.parametrize("target, kind", [
        ("https://example.com", LinkKind.EXTERNAL),
        ("http://example.com/a.md", LinkKind.EXTERNAL),
        ("mailto:docs@example.com", LinkKind.EXTERNAL),
        ("#section", LinkKind.ANCHOR),
        ("../guide.md", LinkKind.INTERNAL),
        ("/root-relative.md", LinkKind.INTERNAL),
        ("guide.md#section", LinkKind.INTERNAL),
    ])
    def test_classify_target(self, target, kind):
        assert classify_target(target) == kind

    def test_split_target_on_first_hash(self):
        assert split_target("a.md#b#c") == ("a.md", "b#c")
        assert split_target("a.md") == ("a.md", None)

    def test_decode_path(self):
        assert decode_path("My%20Doc.md") == "My Doc.md"


class TestIterLines:
    """Tests for fenced code tracking."""

    def test_fence_lines_are_skipped(self):
        text = "a\n```\nb\n```\nc\n"

        assert list(iter_lines(text)) == [(1, "a"), (5, "c")]

    def test_inline_backticks_are_not_a_fence(self):
        text = "```code``` here\n[x](a.md)\n"

        assert [n for n, _ in iter_lines(text)] == [1, 2]


# =============================================================================
# Heading Tests
# =============================================================================

class TestHeadings:
    """Tests for heading and anchor extraction."""

    @pytest.mark.parametrize("text, slug", [
        ("Open Closed", "open-closed"),
        ("Setup & Config", "setup--config"),
        ("The `code` thing", "the-code-thing"),
        ("[Linked](x.md) heading", "linked-heading"),
        ("C# Basics", "c-basics"),
        ("snake_case stays", "snake_case-stays"),
    ])
    def test_slugify(self, text, slug):
        assert slugify(text) == slug

    def test_extract_headings(self):
        text = "# Title\n\nbody\n## Sub ##\n#not-a-heading\n```\n# in code\n```\n"

        headings = extract_headings(text)

        assert [(h.level, h.text, h.line) for h in headings] == [
            (1, "Title", 1),
            (2, "Sub", 4),
        ]

    def test_duplicate_slugs_get_suffixes(self):
        assert anchors_for("# Intro\n## Setup\n## Setup\n") == {"intro", "setup", "setup-1"}

    def test_html_anchors_are_included(self):
        text = '<a name="custom-anchor"></a>\n<div id="box"></div>\n# Title\n'

        assert anchors_for(text) == {"custom-anchor", "box", "title"}

    def test_document_title(self):
        assert document_title("## Sub\n# Main Title\n", fallback="x") == "Main Title"
        assert document_title("no headings here", fallback="notes") == "notes"

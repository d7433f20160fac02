"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from handbook_tools.config import HandbookConfig
from handbook_tools.graph.builder import HandbookGraphBuilder


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


SAMPLE_HANDBOOK = {
    "README.md": (
        "# Handbook\n"
        "\n"
        "Start with the [guides](guides/AGENTS.md) or the [Git workflow](guides/git.md).\n"
        "See [Microsoft docs](https://learn.microsoft.com/dotnet) and [mail us](mailto:docs@example.com).\n"
        "Back to [top](#handbook).\n"
    ),
    "orphan.md": "# Lonely Page\n\nNobody links here.\n",
    "guides/AGENTS.md": "# Guides\n\n- [Git](git.md)\n- [SOLID](solid.md)\n",
    "guides/CLAUDE.md": "# Guides\n\n- [Git](git.md)\n- [SOLID](solid.md)\n",
    "guides/GEMINI.md": "# Guides\n\n- [Git](git.md)\n",
    "guides/git.md": (
        "# Git Workflow\n"
        "\n"
        "## Branching\n"
        "\n"
        "Follow [open/closed](solid.md#open-closed) and [nothing](solid.md#nope).\n"
        "This one is [missing](missing.md).\n"
        "This one is a [directory](../guides).\n"
    ),
    "guides/solid.md": (
        "# SOLID Principles\n"
        "\n"
        "## Open Closed\n"
        "\n"
        "```markdown\n"
        "[fake](nowhere.md)\n"
        "```\n"
        "\n"
        "Back to the [handbook](../README.md).\n"
    ),
    "patterns/AGENTS.md": "# Patterns\n\n- [Observer](observer.md)\n",
    "patterns/observer.md": "# Observer Pattern\n",
    "node_modules/pkg/README.md": "[broken](does-not-exist.md)\n",
}


@pytest.fixture
def handbook_root(tmp_path):
    """A small handbook with known link problems.

    - 9 documents (node_modules is skipped)
    - 13 internal links, 2 broken (missing.md, ../guides)
    - 1 extra broken anchor (solid.md#nope) when anchors are checked
    - patterns/ lacks CLAUDE.md and GEMINI.md
    - guides/GEMINI.md does not link to solid.md
    - orphan.md has no inbound links
    """
    return write_files(tmp_path / "handbook", SAMPLE_HANDBOOK)


@pytest.fixture
def clean_root(tmp_path):
    """A handbook without any problems."""
    return write_files(tmp_path / "clean", {
        "README.md": "# Clean\n\n- [Intro](intro.md)\n- [Setup](docs/setup.md#install)\n",
        "intro.md": "# Intro\n\nSee the [readme](README.md).\n",
        "docs/setup.md": "# Setup\n\n## Install\n\nBack [home](../README.md).\n",
    })


@pytest.fixture
def make_handbook(tmp_path):
    """Factory creating a handbook from a files mapping."""

    def _make(files: dict[str, str], name: str = "custom") -> Path:
        return write_files(tmp_path / name, files)

    return _make


@pytest.fixture
def config():
    return HandbookConfig()


@pytest.fixture
def graph(handbook_root, config):
    """Graph built from the sample handbook."""
    return HandbookGraphBuilder(handbook_root, config).build()

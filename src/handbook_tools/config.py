"""
Configuration for handbook checks.

Manages settings for document discovery, link verification and
navigation index checks. A handbook may carry a ``.handbook.yml`` file at
its root; every key is optional.

Example ``.handbook.yml``::

    check_anchors: true
    index_files: [AGENTS.md, CLAUDE.md, GEMINI.md]
    orphan_exempt: [CHANGELOG.md]
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from handbook_tools.errors import ConfigError, InvalidConfigError

CONFIG_FILE_NAME = ".handbook.yml"


@dataclass
class HandbookConfig:
    """Configuration for handbook tooling.

    Attributes:
        skip_patterns: Path fragments skipped when scanning for documents
        index_files: Navigation index file names (one per AI assistant)
        required_index_files: Index files every indexed directory must have
        nav_exempt: Documents that navigation indexes need not link to
        orphan_exempt: Documents allowed to have no inbound links
        check_anchors: Verify ``#fragment`` parts against target headings
        ignore_code_blocks: Ignore links inside fenced code blocks
        allow_directory_links: Accept links whose target is a directory
    """

    skip_patterns: list[str] = field(default_factory=lambda: [
        ".git", "node_modules", ".venv", "venv", "__pycache__", "site-packages",
    ])

    index_files: list[str] = field(default_factory=lambda: [
        "AGENTS.md",
        "CLAUDE.md",
        "GEMINI.md",
    ])
    required_index_files: list[str] | None = None

    nav_exempt: list[str] = field(default_factory=lambda: ["README.md"])
    orphan_exempt: list[str] = field(default_factory=list)

    check_anchors: bool = False
    ignore_code_blocks: bool = True
    allow_directory_links: bool = False

    def __post_init__(self):
        """Default the required index files to every known index file."""
        if self.required_index_files is None:
            self.required_index_files = list(self.index_files)

        for name in ("skip_patterns", "index_files", "required_index_files",
                     "nav_exempt", "orphan_exempt"):
            value = getattr(self, name)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise InvalidConfigError(
                    f"'{name}' must be a list of strings", key=name
                )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "HandbookConfig":
        """Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            HandbookConfig instance

        Raises:
            ConfigError: If the file does not exist
            InvalidConfigError: If the file is not valid YAML or has unknown keys
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.is_file():
            raise ConfigError(f"config file not found: {yaml_path}").with_context(
                path=str(yaml_path)
            )

        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigError(
                f"invalid YAML in {yaml_path}", cause=e
            ).with_context(path=str(yaml_path)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise InvalidConfigError(
                f"{yaml_path} must contain a mapping"
            ).with_context(path=str(yaml_path))

        try:
            return cls.from_dict(data)
        except InvalidConfigError as e:
            raise e.with_context(path=str(yaml_path))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HandbookConfig":
        """Create config from dictionary, rejecting unknown keys.

        Args:
            data: Configuration dictionary
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfigError(
                f"unknown config key(s): {', '.join(unknown)}", key=unknown[0]
            )
        return cls(**data)

    @classmethod
    def load(cls, root: Path, config_file: Path | None = None) -> "HandbookConfig":
        """Load the config for a handbook root.

        An explicit ``config_file`` must exist; otherwise ``.handbook.yml``
        at the root is used when present, else defaults.
        """
        if config_file is not None:
            return cls.from_yaml(Path(config_file))

        default_path = Path(root) / CONFIG_FILE_NAME
        if default_path.is_file():
            return cls.from_yaml(default_path)
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "skip_patterns": self.skip_patterns,
            "index_files": self.index_files,
            "required_index_files": self.required_index_files,
            "nav_exempt": self.nav_exempt,
            "orphan_exempt": self.orphan_exempt,
            "check_anchors": self.check_anchors,
            "ignore_code_blocks": self.ignore_code_blocks,
            "allow_directory_links": self.allow_directory_links,
        }

    def should_skip(self, relative_path: Path) -> bool:
        """Check if a path (relative to the handbook root) should be skipped.

        Patterns are matched against whole path components.
        """
        parts = Path(relative_path).parts
        return any(pattern in parts for pattern in self.skip_patterns)

    def is_index_file(self, path: Path) -> bool:
        """Check if a file is a navigation index."""
        return Path(path).name in self.index_files

"""Shared result types for handbook checks."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class CheckIssue:
    """A single finding of a check.

    Attributes:
        severity: ERROR fails the check, WARNING is informational
        path: Document or directory the issue is about
        message: Human-readable description
    """

    severity: Severity
    path: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "path": self.path,
            "message": self.message,
        }


@dataclass
class CheckResult:
    """Outcome of one named check."""

    name: str
    issues: list[CheckIssue] = field(default_factory=list)

    def add(self, severity: Severity, path: str, message: str) -> None:
        self.issues.append(CheckIssue(severity, path, message))

    @property
    def errors(self) -> list[CheckIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[CheckIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "ok": self.ok,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "issues": [i.to_dict() for i in self.issues],
        }

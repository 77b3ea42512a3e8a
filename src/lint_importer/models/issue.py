"""Issue models committed to an analysis session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .source_file import InputFile


class IssueSeverity(str, Enum):
    """Severity levels attached to rules and the issues raised against them."""

    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    IssueSeverity.INFO: 0,
    IssueSeverity.LOW: 1,
    IssueSeverity.MEDIUM: 2,
    IssueSeverity.HIGH: 3,
    IssueSeverity.CRITICAL: 4,
}


@dataclass(frozen=True, slots=True)
class RuleKey:
    """Rule identifier namespaced by the repository that defines it."""

    repository: str
    rule: str

    @classmethod
    def of(cls, repository: str, rule: str) -> "RuleKey":
        return cls(repository=repository, rule=rule)

    @classmethod
    def parse(cls, value: str) -> "RuleKey":
        """Parse ``<repository>:<rule>``; the rule part may itself contain colons."""

        repository, separator, rule = value.partition(":")
        if not separator or not repository or not rule:
            raise ValueError(f"Invalid rule key: {value!r}")
        return cls(repository=repository, rule=rule)

    def __str__(self) -> str:
        return f"{self.repository}:{self.rule}"


@dataclass(frozen=True, slots=True)
class IssueLocation:
    """Primary location of an issue; ``line`` is ``None`` for file-level issues."""

    input_file: "InputFile"
    message: str
    line: Optional[int] = None

    @property
    def is_file_level(self) -> bool:
        return self.line is None


@dataclass(slots=True)
class Issue:
    """An issue raised against a registered rule."""

    rule_key: RuleKey
    location: IssueLocation
    severity: IssueSeverity = IssueSeverity.INFO

    @property
    def message(self) -> str:
        return self.location.message

    @property
    def file_path(self) -> str:
        return self.location.input_file.relative_path

    @property
    def line(self) -> Optional[int]:
        return self.location.line

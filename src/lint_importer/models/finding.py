"""Finding models produced by report parsers and consumed by the publisher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .issue import RuleKey
    from .source_file import InputFile


@dataclass(frozen=True, slots=True)
class Finding:
    """One issue reported by the external tool, before file resolution."""

    rule_key: str
    description: str
    file_path: str
    line: int = 0

    @property
    def has_line(self) -> bool:
        return self.line > 0

    def __str__(self) -> str:
        return f"{self.rule_key}|{self.description}|{self.file_path}({self.line})"


@dataclass(slots=True)
class ResolvedIssue:
    """A finding bound to the source file and rule it will be reported against."""

    finding: Finding
    source_file: "InputFile"
    rule_key: "RuleKey"

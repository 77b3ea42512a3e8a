"""Source file models used to resolve report paths."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class InvalidLocationError(ValueError):
    """Raised when a line anchor falls outside of its source file."""


class FileType(str, Enum):
    """Classification of a file in the analysis file set."""

    MAIN = "main"
    TEST = "test"


@dataclass(frozen=True, slots=True)
class LineAnchor:
    """A whole-line anchor inside a source file."""

    relative_path: str
    line: int


@dataclass(frozen=True, slots=True)
class InputFile:
    """A file known to the current analysis."""

    relative_path: str
    language: str
    type: FileType = FileType.MAIN
    generated: bool = False
    absolute_path: Optional[Path] = None
    line_count: Optional[int] = None

    @property
    def is_main(self) -> bool:
        return self.type is FileType.MAIN and not self.generated

    def select_line(self, line: int) -> LineAnchor:
        """Return an anchor on ``line``, validating it against the known line count."""

        if line < 1:
            raise InvalidLocationError(f"{line} is not a valid line for file {self.relative_path}")
        if self.line_count is not None and line > self.line_count:
            raise InvalidLocationError(
                f"{line} is not a valid line for file {self.relative_path}, "
                f"it has only {self.line_count} lines"
            )
        return LineAnchor(relative_path=self.relative_path, line=line)

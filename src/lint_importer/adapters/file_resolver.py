"""Map report file paths onto main source files of the analysis."""

from __future__ import annotations

import logging

from ..models import InputFile
from .file_system import FileSystem

logger = logging.getLogger(__name__)


class FileResolver:
    """Resolve a relative path to exactly one main, non-generated source file.

    Matching is exact string equality on the relative path. Ambiguous matches
    are treated like missing ones: a wrong file is worse than a missed issue.
    """

    def __init__(self, file_system: FileSystem) -> None:
        self.file_system = file_system

    def resolve(self, relative_path: str) -> InputFile | None:
        matches = self.file_system.files(
            lambda input_file: input_file.is_main and input_file.relative_path == relative_path
        )
        logger.debug("%d main file(s) found for %s", len(matches), relative_path)

        if len(matches) == 1:
            return matches[0]

        logger.error(
            "Not able to find a unique main file for %s (%d candidates)",
            relative_path,
            len(matches),
        )
        return None


__all__ = ["FileResolver"]

"""In-memory file set of the current analysis."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Mapping, Sequence

from ..models import FileType, InputFile

FilePredicate = Callable[[InputFile], bool]

_SKIPPED_DIRECTORIES = {".git", ".hg", ".svn", "__pycache__", "node_modules"}


class FileSystem:
    """Ordered collection of :class:`InputFile` objects with predicate lookups."""

    def __init__(self, files: Iterable[InputFile] = (), base_dir: str | os.PathLike[str] = ".") -> None:
        self.base_dir = Path(base_dir)
        self._files: List[InputFile] = list(files)

    def __iter__(self) -> Iterator[InputFile]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def add(self, input_file: InputFile) -> None:
        self._files.append(input_file)

    def files(self, predicate: FilePredicate | None = None) -> List[InputFile]:
        if predicate is None:
            return list(self._files)
        return [input_file for input_file in self._files if predicate(input_file)]

    def languages(self) -> set[str]:
        return {input_file.language for input_file in self._files}

    def has_language(self, language: str) -> bool:
        return any(input_file.language == language for input_file in self._files)

    # ------------------------------------------------------------------
    @classmethod
    def scan(
        cls,
        base_dir: str | os.PathLike[str],
        languages: Mapping[str, Sequence[str]],
        *,
        test_patterns: Sequence[str] = (),
        generated_patterns: Sequence[str] = (),
    ) -> "FileSystem":
        """Index every file under ``base_dir`` whose suffix belongs to one of ``languages``.

        ``languages`` maps a language key to its file suffixes. Relative paths
        are stored with forward slashes and classified with ``fnmatch`` globs.
        """

        root = Path(base_dir).resolve()
        suffix_index = _suffix_index(languages)

        files: List[InputFile] = []
        for directory, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(name for name in dirnames if name not in _SKIPPED_DIRECTORIES)
            for filename in sorted(filenames):
                language = _language_for(filename, suffix_index)
                if language is None:
                    continue

                absolute = Path(directory) / filename
                relative = absolute.relative_to(root).as_posix()
                file_type = FileType.TEST if _matches(relative, test_patterns) else FileType.MAIN
                files.append(
                    InputFile(
                        relative_path=relative,
                        language=language,
                        type=file_type,
                        generated=_matches(relative, generated_patterns),
                        absolute_path=absolute,
                        line_count=_count_lines(absolute),
                    )
                )

        return cls(files, base_dir=root)


def _suffix_index(languages: Mapping[str, Sequence[str]]) -> dict[str, str]:
    index: dict[str, str] = {}
    for language, suffixes in languages.items():
        for suffix in suffixes:
            normalized = suffix.strip().lower()
            if not normalized:
                continue
            if not normalized.startswith("."):
                normalized = f".{normalized}"
            index[normalized] = language
    return index


def _language_for(filename: str, suffix_index: Mapping[str, str]) -> str | None:
    lowered = filename.lower()
    # longest suffix wins
    for suffix in sorted(suffix_index, key=len, reverse=True):
        if lowered.endswith(suffix):
            return suffix_index[suffix]
    return None


def _matches(relative_path: str, patterns: Sequence[str]) -> bool:
    return any(fnmatch.fnmatchcase(relative_path, pattern) for pattern in patterns)


def _count_lines(path: Path) -> int:
    # an empty file has one line, a trailing newline opens one more
    content = path.read_text(encoding="utf-8", errors="replace")
    return content.count("\n") + 1


__all__ = ["FilePredicate", "FileSystem"]

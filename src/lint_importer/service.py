"""Orchestration layer that imports an external lint report into an analysis session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

from .adapters import (
    DEFAULT_REPORT_SOURCE,
    AnalysisSession,
    FileResolver,
    FileSystem,
    IssuePublisher,
    MalformedReportError,
    ReportLocator,
    ReportParser,
    UnknownRuleError,
    parser_for,
)
from .models import Finding, Issue
from .settings import REPORT_FORMAT_KEY, Settings

logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_NO_REPORT = "skipped-no-report"
STATUS_NO_LANGUAGE = "skipped-no-language"


@dataclass(frozen=True, slots=True)
class SensorDescriptor:
    """Name of the importer and the languages it applies to."""

    name: str
    languages: tuple[str, ...]


@dataclass(slots=True)
class ImportResult:
    """Result returned by :class:`IssuesLoaderService` runs."""

    published: list[Issue] = field(default_factory=list)
    skipped: list[Finding] = field(default_factory=list)
    metadata: Mapping[str, Any] = field(default_factory=dict)


ParserFactory = Callable[[Path, str | None], ReportParser]


class IssuesLoaderService:
    """Load the findings of an external report and save them as issues."""

    def __init__(
        self,
        settings: Settings,
        file_system: FileSystem,
        session: AnalysisSession,
        *,
        locator: ReportLocator | None = None,
        parser_factory: ParserFactory | None = None,
        resolver: FileResolver | None = None,
        publisher: IssuePublisher | None = None,
        languages: Sequence[str] = ("bar",),
        report_source: str = DEFAULT_REPORT_SOURCE,
        name: str = "BarLint Issues Loader Sensor",
    ) -> None:
        self.settings = settings
        self.file_system = file_system
        self._locator = locator or ReportLocator()
        self._parser_factory = parser_factory or parser_for
        self._resolver = resolver or FileResolver(file_system)
        self._publisher = publisher or IssuePublisher(session, report_source=report_source)
        self._descriptor = SensorDescriptor(name=name, languages=tuple(languages))

    def describe(self) -> SensorDescriptor:
        return self._descriptor

    # ------------------------------------------------------------------
    def execute(self) -> ImportResult:
        """Run the import; parse and rule-catalog failures propagate to the caller."""

        report_path = self._locator.get_report_path(self.settings)
        if report_path is None:
            logger.debug("No report configured, skipping %s", self._descriptor.name)
            return ImportResult(metadata={"status": STATUS_NO_REPORT})

        if not any(self.file_system.has_language(lang) for lang in self._descriptor.languages):
            logger.info(
                "No file of language(s) %s in the analysis, skipping %s",
                ", ".join(self._descriptor.languages),
                self._descriptor.name,
            )
            return ImportResult(metadata={"status": STATUS_NO_LANGUAGE, "report_path": report_path})

        path = self._absolute_report_path(report_path)
        parser = self._parser_factory(path, self.settings.get_string(REPORT_FORMAT_KEY))
        findings = parser.parse(path)

        result = ImportResult()
        for finding in findings:
            issue = self._resolve_and_save(finding)
            if issue is None:
                result.skipped.append(finding)
            else:
                result.published.append(issue)

        logger.info(
            "Imported %d of %d findings from %s (%d skipped)",
            len(result.published),
            len(findings),
            path,
            len(result.skipped),
        )
        result.metadata = {
            "status": STATUS_COMPLETED,
            "report_path": str(path),
            "finding_count": len(findings),
            "published_count": len(result.published),
            "skipped_count": len(result.skipped),
        }
        return result

    # ------------------------------------------------------------------
    def _resolve_and_save(self, finding: Finding) -> Issue | None:
        logger.debug("%s", finding)
        source_file = self._resolver.resolve(finding.file_path)
        if source_file is None:
            return None

        resolved = self._publisher.resolve(finding, source_file)
        return self._publisher.publish(resolved)

    def _absolute_report_path(self, report_path: str) -> Path:
        path = Path(report_path)
        if path.is_absolute():
            return path
        return self.file_system.base_dir / path


__all__ = [
    "ImportResult",
    "IssuesLoaderService",
    "MalformedReportError",
    "SensorDescriptor",
    "UnknownRuleError",
]

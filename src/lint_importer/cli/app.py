"""Command-line interface implementation for the lint report importer."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Sequence

from ..adapters import (
    FileSystem,
    InMemoryAnalysisSession,
    MalformedReportError,
    UnknownRuleError,
)
from ..models import Finding, InvalidLocationError, Issue, IssueSeverity
from ..rules import RuleDefinitionError, RulesDefinition
from ..service import ImportResult, IssuesLoaderService
from ..settings import (
    BAR_SUFFIXES_KEY,
    GENERATED_PATTERNS_KEY,
    REPORT_PATH_KEY,
    RULE_MANIFESTS_KEY,
    TEST_PATTERNS_KEY,
    Settings,
    SettingsError,
    load_settings,
    parse_overrides,
)

LOG_LEVEL_ALIASES = {
    "CRITIC": "CRITICAL",
    "CRITICAL": "CRITICAL",
    "ERROR": "ERROR",
    "WARN": "WARNING",
    "WARNING": "WARNING",
    "INFO": "INFO",
    "DEBUG": "DEBUG",
}

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
TABLE_HEADERS = ("Severity", "Rule", "Location", "Message")


@dataclass(slots=True)
class ImportReport:
    """Imported issues plus contextual metadata."""

    issues: Sequence[Issue]
    skipped: Sequence[Finding]
    metadata: Mapping[str, Any]

    @property
    def highest_severity(self) -> IssueSeverity | None:
        if not self.issues:
            return None
        return max(self.issues, key=lambda issue: issue.severity.rank).severity

    def counts_by_severity(self) -> dict[str, int]:
        counts: MutableMapping[IssueSeverity, int] = {severity: 0 for severity in IssueSeverity}
        for issue in self.issues:
            counts[issue.severity] += 1
        return {severity.value: count for severity, count in counts.items()}

    def reaches(self, threshold: IssueSeverity) -> bool:
        """True when any imported issue is at or above ``threshold``."""

        highest = self.highest_severity
        return highest is not None and highest.rank >= threshold.rank

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "summary": {
                "total_issues": len(self.issues),
                "skipped_findings": len(self.skipped),
                "highest_severity": self.highest_severity.value if self.highest_severity else None,
                "counts": self.counts_by_severity(),
            },
            "issues": [_serialize_issue(issue) for issue in self.issues],
            "skipped": [_serialize_finding(finding) for finding in self.skipped],
        }


def _serialize_issue(issue: Issue) -> dict[str, Any]:
    return {
        "rule_key": str(issue.rule_key),
        "severity": issue.severity.value,
        "file": issue.file_path,
        "line": issue.line,
        "message": issue.message,
    }


def _serialize_finding(finding: Finding) -> dict[str, Any]:
    return {
        "rule": finding.rule_key,
        "description": finding.description,
        "file": finding.file_path,
        "line": finding.line,
    }


def render_table(report: ImportReport) -> str:
    """Render imported issues as aligned columns, one issue per line."""

    if not report.issues:
        return "No issues imported."

    rows = [TABLE_HEADERS]
    rows.extend(
        (issue.severity.value, str(issue.rule_key), _location(issue), issue.message)
        for issue in report.issues
    )
    widths = [max(map(len, column)) for column in zip(*rows)]
    lines = [
        "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows
    ]
    lines.insert(1, "  ".join("-" * width for width in widths))
    return "\n".join(lines)


def _location(issue: Issue) -> str:
    if issue.line is None:
        return issue.file_path
    return f"{issue.file_path}:{issue.line}"


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="lint-import", description="Import external lint reports as analysis issues"
    )
    subparsers = parser.add_subparsers(dest="command")

    import_parser = subparsers.add_parser(
        "import", help="Import the configured lint report against a source tree."
    )
    import_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path.cwd(),
        help="Project directory; report paths and source files are relative to it.",
    )
    import_parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="YAML settings file (nested keys are flattened to dotted keys).",
    )
    import_parser.add_argument(
        "-D",
        "--define",
        dest="defines",
        action="append",
        default=None,
        metavar="KEY=VALUE",
        help="Override a setting, e.g. -D barlint.reportPath=build/barlint.xml.",
    )
    import_parser.add_argument(
        "--report",
        type=str,
        default=None,
        help=f"Shortcut for -D {REPORT_PATH_KEY}=REPORT.",
    )
    import_parser.add_argument(
        "--rule-manifest",
        dest="rule_manifests",
        action="append",
        default=None,
        type=str,
        help="Additional YAML rule manifest merged into the packaged BarLint rules.",
    )
    import_parser.add_argument(
        "--fail-on",
        choices=[severity.value for severity in IssueSeverity],
        default=IssueSeverity.HIGH.value,
        help="Fail the run when issues at or above the provided severity are imported.",
    )
    import_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format for the imported issues.",
    )
    import_parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level written to stderr (DEBUG, INFO, WARNING, ERROR).",
    )

    return parser


def configure_logging(level_name: str | None) -> None:
    """Configure root logging on stderr; unknown level names fall back to WARNING."""

    level = LOG_LEVEL_ALIASES.get((level_name or "").strip().upper(), "WARNING")
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, stream=sys.stderr)


def create_service(
    settings: Settings,
    working_dir: Path,
    *,
    rule_manifests: Sequence[str] | None = None,
) -> IssuesLoaderService:
    """Create an importer service over ``working_dir`` with the packaged rule catalog."""

    catalog = RulesDefinition().define(list(rule_manifests or []))
    file_system = FileSystem.scan(
        working_dir,
        {"bar": settings.get_list(BAR_SUFFIXES_KEY)},
        test_patterns=settings.get_list(TEST_PATTERNS_KEY),
        generated_patterns=settings.get_list(GENERATED_PATTERNS_KEY),
    )
    session = InMemoryAnalysisSession(catalog)
    return IssuesLoaderService(settings, file_system, session)


def _build_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = dict(parse_overrides(args.defines))
    if args.report:
        overrides[REPORT_PATH_KEY] = args.report
    return load_settings(args.settings, overrides=overrides)


def _handle_import(args: argparse.Namespace) -> int:
    configure_logging(args.log_level)
    working_dir = args.path.resolve()

    try:
        settings = _build_settings(args)
        manifests = [*settings.get_list(RULE_MANIFESTS_KEY), *(args.rule_manifests or [])]
        service = create_service(settings, working_dir, rule_manifests=manifests)
        result: ImportResult = service.execute()
    except (
        SettingsError,
        RuleDefinitionError,
        MalformedReportError,
        UnknownRuleError,
        InvalidLocationError,
    ) as exc:
        print(f"Error: {exc}")
        return 2

    report = ImportReport(issues=result.published, skipped=result.skipped, metadata=result.metadata)
    if args.format == "json":
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(render_table(report))
    return 1 if report.reaches(IssueSeverity(args.fail_on)) else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "import":
        return _handle_import(args)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()

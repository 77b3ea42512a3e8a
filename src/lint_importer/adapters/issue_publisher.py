"""Publish resolved findings as issues on the analysis session."""

from __future__ import annotations

from ..models import Finding, InputFile, Issue, IssueLocation, ResolvedIssue, RuleKey
from ..rules import repository_key
from .session import AnalysisSession

DEFAULT_REPORT_SOURCE = "barlint"


class IssuePublisher:
    """Turn resolved findings into issues and commit them to a session.

    Each call to :meth:`publish` saves one new issue; the session does not
    deduplicate, so callers must publish every finding exactly once.
    """

    def __init__(self, session: AnalysisSession, report_source: str = DEFAULT_REPORT_SOURCE) -> None:
        self.session = session
        self.report_source = report_source

    def rule_key_for(self, source_file: InputFile, external_rule_key: str) -> RuleKey:
        return RuleKey.of(repository_key(source_file.language, self.report_source), external_rule_key)

    def resolve(self, finding: Finding, source_file: InputFile) -> ResolvedIssue:
        return ResolvedIssue(
            finding=finding,
            source_file=source_file,
            rule_key=self.rule_key_for(source_file, finding.rule_key),
        )

    def publish(self, resolved: ResolvedIssue) -> Issue:
        finding = resolved.finding
        source_file = resolved.source_file

        line = None
        if finding.has_line:
            line = source_file.select_line(finding.line).line

        issue = Issue(
            rule_key=resolved.rule_key,
            location=IssueLocation(input_file=source_file, message=finding.description, line=line),
        )
        self.session.save(issue)
        return issue


__all__ = ["DEFAULT_REPORT_SOURCE", "IssuePublisher"]

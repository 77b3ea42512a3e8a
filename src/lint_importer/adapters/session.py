"""Analysis session receiving published issues."""

from __future__ import annotations

from typing import List, Protocol

from ..models import Issue
from ..rules import RuleCatalog


class UnknownRuleError(RuntimeError):
    """Raised when an issue references a rule that is not in the catalog."""


class AnalysisSession(Protocol):
    """Append-only sink for issues raised during an analysis run."""

    def save(self, issue: Issue) -> None:
        """Commit ``issue`` to the session."""


class InMemoryAnalysisSession:
    """Session that validates rule keys against a catalog and keeps issues in order."""

    def __init__(self, catalog: RuleCatalog) -> None:
        self.catalog = catalog
        self.issues: List[Issue] = []

    def save(self, issue: Issue) -> None:
        rule = self.catalog.find(issue.rule_key)
        if rule is None:
            raise UnknownRuleError(
                f"The rule '{issue.rule_key}' does not exist in the rule catalog"
            )

        issue.severity = rule.severity
        self.issues.append(issue)


__all__ = ["AnalysisSession", "InMemoryAnalysisSession", "UnknownRuleError"]

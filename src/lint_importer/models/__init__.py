"""Data models for report findings, source files and published issues."""

from .finding import Finding, ResolvedIssue
from .issue import Issue, IssueLocation, IssueSeverity, RuleKey
from .source_file import FileType, InputFile, InvalidLocationError, LineAnchor

__all__ = [
    "FileType",
    "Finding",
    "InputFile",
    "InvalidLocationError",
    "Issue",
    "IssueLocation",
    "IssueSeverity",
    "LineAnchor",
    "ResolvedIssue",
    "RuleKey",
]

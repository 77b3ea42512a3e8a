"""Adapter layer package for report ingestion and issue publication."""

from .file_resolver import FileResolver
from .file_system import FileSystem
from .issue_publisher import DEFAULT_REPORT_SOURCE, IssuePublisher
from .report_locator import ReportLocator
from .report_parser import (
    JsonReportParser,
    MalformedReportError,
    ReportParser,
    XmlReportParser,
    parser_for,
)
from .session import AnalysisSession, InMemoryAnalysisSession, UnknownRuleError

__all__ = [
    "AnalysisSession",
    "DEFAULT_REPORT_SOURCE",
    "FileResolver",
    "FileSystem",
    "InMemoryAnalysisSession",
    "IssuePublisher",
    "JsonReportParser",
    "MalformedReportError",
    "ReportLocator",
    "ReportParser",
    "UnknownRuleError",
    "XmlReportParser",
    "parser_for",
]

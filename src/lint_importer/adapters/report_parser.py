"""Report parsers turning external lint reports into ordered findings.

Every parser checks that the report exists and is syntactically valid before
any finding is returned, so a broken report never yields a partial import.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, fromstring

from ..models import Finding
from ..normalization import FindingNormalizer, MalformedReportError

logger = logging.getLogger(__name__)

ERROR_ELEMENT = "error"
JSON_RECORD_KEYS = ("errors", "issues")


class ReportParser(ABC):
    """Contract shared by all report formats."""

    def __init__(self, normalizer: FindingNormalizer | None = None) -> None:
        self.normalizer = normalizer or FindingNormalizer()

    def parse(self, path: str | Path) -> List[Finding]:
        """Return the findings of the report at ``path`` in report order."""

        report_path = Path(path)
        logger.info("Parsing file %s", report_path.absolute())
        content = self._read(report_path)
        records = self._records(content, report_path)
        findings = self.normalizer.normalize(records)
        logger.debug("Read %d findings from %s", len(findings), report_path)
        return findings

    # ------------------------------------------------------------------
    @abstractmethod
    def _records(self, content: bytes, path: Path) -> Iterable[Mapping[str, Any]]:
        """Decode ``content`` into raw finding records."""

    def _read(self, path: Path) -> bytes:
        if not path.is_file():
            raise MalformedReportError(f"Report file not found: {path}")

        try:
            return path.read_bytes()
        except OSError as exc:
            raise MalformedReportError(f"Unable to read report file {path}") from exc


class XmlReportParser(ReportParser):
    """Parse reports shaped as ``<errors><error type=".." description=".." file=".." line=".."/></errors>``."""

    def _records(self, content: bytes, path: Path) -> Iterable[Mapping[str, Any]]:
        try:
            root = fromstring(content, forbid_dtd=True)
        except (DefusedXmlException, ParseError) as exc:
            raise MalformedReportError(f"Unable to parse the provided report {path}") from exc

        records = []
        for element in root:
            if element.tag != ERROR_ELEMENT:
                raise MalformedReportError(
                    f"Unexpected <{element.tag}> element in report {path}, "
                    f"only <{ERROR_ELEMENT}> entries are supported"
                )
            records.append(dict(element.attrib))
        return records


class JsonReportParser(ReportParser):
    """Parse reports holding a list of records, bare or under an ``errors`` key."""

    def _records(self, content: bytes, path: Path) -> Iterable[Mapping[str, Any]]:
        try:
            data = json.loads(content.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MalformedReportError(f"Unable to parse the provided report {path}") from exc

        if isinstance(data, list):
            return data

        if isinstance(data, Mapping):
            for key in JSON_RECORD_KEYS:
                records = data.get(key)
                if isinstance(records, list):
                    return records

        raise MalformedReportError(
            f"Report {path} must be a list of findings or an object with an 'errors' list"
        )


_PARSERS: dict[str, type[ReportParser]] = {
    "xml": XmlReportParser,
    "json": JsonReportParser,
}


def parser_for(path: str | Path, report_format: str | None = "auto") -> ReportParser:
    """Return the parser for ``report_format``; ``auto`` decides by file suffix."""

    normalized = (report_format or "auto").strip().lower()
    if normalized == "auto":
        normalized = "json" if Path(path).suffix.lower() == ".json" else "xml"

    parser_cls = _PARSERS.get(normalized)
    if parser_cls is None:
        supported = ", ".join(["auto", *sorted(_PARSERS)])
        raise MalformedReportError(
            f"Unsupported report format '{report_format}'. Supported formats: {supported}"
        )
    return parser_cls()


__all__ = [
    "JsonReportParser",
    "MalformedReportError",
    "ReportParser",
    "XmlReportParser",
    "parser_for",
]

"""Conversion helpers that turn raw report records into :class:`Finding` instances."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from ..models import Finding

RULE_KEYS = ("type", "rule", "ruleKey", "rule_id", "ruleId")
DESCRIPTION_KEYS = ("description", "message", "msg")
FILE_KEYS = ("file", "path", "filePath", "file_path")
LINE_KEYS = ("line", "lineNumber", "line_number")


class MalformedReportError(RuntimeError):
    """Raised when a report cannot be read as structured findings."""


class FindingNormalizer:
    """Normalize report records into :class:`Finding` instances, keeping report order."""

    def normalize(self, records: Iterable[Mapping[str, Any]]) -> List[Finding]:
        return [self._normalize_record(index, record) for index, record in enumerate(records)]

    # ------------------------------------------------------------------
    def _normalize_record(self, index: int, record: Mapping[str, Any]) -> Finding:
        if not isinstance(record, Mapping):
            raise MalformedReportError(f"Report entry #{index} is not a record")

        rule_key = self._first_text(record, RULE_KEYS)
        if not rule_key:
            raise MalformedReportError(f"Report entry #{index} has no rule identifier")

        # kept verbatim, resolution is exact-match only
        raw_path = self._first_value(record, FILE_KEYS)
        file_path = "" if raw_path is None else str(raw_path)
        if not file_path.strip():
            raise MalformedReportError(f"Report entry #{index} has no file path")

        description = self._first_text(record, DESCRIPTION_KEYS) or rule_key
        line = self._line(index, self._first_value(record, LINE_KEYS))

        return Finding(rule_key=rule_key, description=description, file_path=file_path, line=line)

    def _line(self, index: int, value: Any) -> int:
        if value is None or value == "":
            return 0
        if isinstance(value, bool):
            raise MalformedReportError(f"Report entry #{index} has an invalid line: {value!r}")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError as exc:
            raise MalformedReportError(
                f"Report entry #{index} has an invalid line: {value!r}"
            ) from exc

    def _first_value(self, record: Mapping[str, Any], keys: Iterable[str]) -> Any:
        for key in keys:
            value = record.get(key)
            if value is not None:
                return value
        return None

    def _first_text(self, record: Mapping[str, Any], keys: Iterable[str]) -> str:
        value = self._first_value(record, keys)
        if value is None:
            return ""
        return str(value).strip()

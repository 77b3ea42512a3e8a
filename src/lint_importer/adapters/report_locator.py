"""Locate the external report configured for an analysis run."""

from __future__ import annotations

from typing import Any, Mapping

from ..settings import REPORT_PATH_KEY


class ReportLocator:
    """Read the report path from settings; a blank value disables the import."""

    def __init__(self, key: str = REPORT_PATH_KEY) -> None:
        self.key = key

    def get_report_path(self, settings: Mapping[str, Any]) -> str | None:
        value = settings.get(self.key)
        if value is None:
            return None
        path = str(value).strip()
        return path or None


__all__ = ["ReportLocator"]

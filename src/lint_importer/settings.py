"""Settings loading and lookup.

Usage:
    settings = load_settings("lint-import.yaml", overrides={"barlint.reportPath": "out.xml"})
    path = settings.get_string("barlint.reportPath")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Mapping, MutableMapping, Sequence

import yaml

REPORT_PATH_KEY = "barlint.reportPath"
REPORT_FORMAT_KEY = "barlint.reportFormat"
RULE_MANIFESTS_KEY = "barlint.ruleManifests"
BAR_SUFFIXES_KEY = "bar.file.suffixes"
TEST_PATTERNS_KEY = "sources.tests"
GENERATED_PATTERNS_KEY = "sources.generated"

DEFAULTS: Mapping[str, Any] = {
    REPORT_FORMAT_KEY: "auto",
    BAR_SUFFIXES_KEY: ".bar",
    TEST_PATTERNS_KEY: ["tests/**", "test/**"],
    GENERATED_PATTERNS_KEY: [],
}


class SettingsError(RuntimeError):
    """Raised when settings are missing or invalid."""


class Settings(Mapping[str, Any]):
    """Flat, dotted-key view over importer configuration."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(DEFAULTS)
        if values:
            self._values.update(values)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    # ------------------------------------------------------------------
    def get_string(self, key: str) -> str | None:
        """Return the stripped value for ``key`` or ``None`` when unset or blank."""

        value = self._values.get(key)
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def get_list(self, key: str) -> list[str]:
        value = self._values.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            items = value.split(",")
        elif isinstance(value, Sequence):
            items = [str(item) for item in value]
        else:
            items = [str(value)]
        return [item.strip() for item in items if item.strip()]


def load_settings(
    path: str | Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Load settings from an optional YAML file and apply ``overrides`` on top.

    Raises:
        SettingsError: if the file is missing, is not valid YAML, or is not a
                       mapping at the top level.
    """

    values: dict[str, Any] = {}
    if path is not None:
        values.update(_load_file(Path(path)))
    if overrides:
        values.update(overrides)
    return Settings(values)


def parse_overrides(values: Sequence[str] | None) -> dict[str, str]:
    """Parse ``KEY=VALUE`` pairs supplied on the command line."""

    if not values:
        return {}

    overrides: dict[str, str] = {}
    for value in values:
        if "=" not in value:
            raise SettingsError(f"Settings overrides must be in KEY=VALUE form: {value}")
        key, raw = value.split("=", 1)
        key = key.strip()
        if not key:
            raise SettingsError(f"Settings override is missing a key: {value}")
        overrides[key] = raw
    return overrides


def _load_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise SettingsError(f"Settings file not found: {path}")

    try:
        with path.open(encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Failed to parse settings file {path}: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise SettingsError(f"Settings file must be a mapping at the top level: {path}")

    flattened: MutableMapping[str, Any] = {}
    _flatten(raw, "", flattened)
    return dict(flattened)


def _flatten(data: Mapping[str, Any], prefix: str, target: MutableMapping[str, Any]) -> None:
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            _flatten(value, f"{dotted}.", target)
        else:
            target[dotted] = value


__all__ = [
    "BAR_SUFFIXES_KEY",
    "GENERATED_PATTERNS_KEY",
    "REPORT_FORMAT_KEY",
    "REPORT_PATH_KEY",
    "RULE_MANIFESTS_KEY",
    "TEST_PATTERNS_KEY",
    "Settings",
    "SettingsError",
    "load_settings",
    "parse_overrides",
]

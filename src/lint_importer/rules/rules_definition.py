"""Load rule manifests and expose the resulting rule catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Sequence

import yaml

from ..models import IssueSeverity, RuleKey


class RuleDefinitionError(RuntimeError):
    """Raised when rule manifests cannot be loaded or parsed."""


@dataclass(slots=True)
class RuleDefinition:
    """A single rule that issues can be raised against."""

    key: str
    name: str = ""
    description: str = ""
    severity: IssueSeverity = IssueSeverity.MEDIUM
    enabled: bool = True


@dataclass(slots=True)
class RuleRepository:
    """Rules of one report source registered for one language."""

    key: str
    language: str
    name: str = ""
    rules: Dict[str, RuleDefinition] = field(default_factory=dict)

    def rule(self, rule_key: str) -> RuleDefinition | None:
        return self.rules.get(rule_key)


@dataclass(slots=True)
class _ManifestRepository:
    key: str
    name: str = ""
    languages: List[str] = field(default_factory=list)
    rules: Dict[str, RuleDefinition] = field(default_factory=dict)


def repository_key(language: str, report_source: str) -> str:
    """Return the repository key for rules of ``report_source`` on ``language``."""

    return f"{language.lower()}-{report_source}"


class RuleCatalog:
    """Lookup of registered rules by :class:`RuleKey`."""

    def __init__(self, repositories: Sequence[RuleRepository] = ()) -> None:
        self._repositories: Dict[str, RuleRepository] = {repo.key: repo for repo in repositories}

    def repositories(self) -> List[RuleRepository]:
        return list(self._repositories.values())

    def repository(self, key: str) -> RuleRepository | None:
        return self._repositories.get(key)

    def find(self, rule_key: RuleKey) -> RuleDefinition | None:
        repository = self._repositories.get(rule_key.repository)
        if repository is None:
            return None
        return repository.rule(rule_key.rule)

    def __contains__(self, rule_key: object) -> bool:
        return isinstance(rule_key, RuleKey) and self.find(rule_key) is not None


_DEFAULT_MANIFEST = Path(__file__).resolve().parent / "manifests" / "barlint.yaml"


class RulesDefinition:
    """Build a :class:`RuleCatalog` from YAML rule manifests."""

    def __init__(self, default_manifests: Sequence[Path | str] | None = None) -> None:
        manifest_paths: List[Path]
        if default_manifests is None:
            manifest_paths = []
            if _DEFAULT_MANIFEST.exists():
                manifest_paths.append(_DEFAULT_MANIFEST)
        else:
            manifest_paths = [Path(path) for path in default_manifests]

        self._default_manifests = manifest_paths

    # ------------------------------------------------------------------
    def define(self, manifests: Sequence[Path | str] | None = None) -> RuleCatalog:
        """Merge the default and supplied manifests into a catalog of enabled rules."""

        manifest_paths = list(self._default_manifests)
        if manifests:
            manifest_paths.extend(Path(path) for path in manifests)

        merged: MutableMapping[str, _ManifestRepository] = {}
        for manifest_path in manifest_paths:
            data = self._load_manifest(manifest_path)
            self._merge(merged, data, manifest_path)

        repositories: List[RuleRepository] = []
        for source in merged.values():
            enabled = {key: rule for key, rule in source.rules.items() if rule.enabled}
            for language in source.languages:
                repositories.append(
                    RuleRepository(
                        key=repository_key(language, source.key),
                        language=language,
                        name=source.name,
                        rules=dict(enabled),
                    )
                )

        return RuleCatalog(repositories)

    # ------------------------------------------------------------------
    def _merge(
        self,
        merged: MutableMapping[str, _ManifestRepository],
        data: Mapping[str, Any],
        path: Path,
    ) -> None:
        key = str(data.get("repository") or "").strip()
        if not key:
            raise RuleDefinitionError(f"Rule manifest does not declare a repository: {path}")

        source = merged.get(key, _ManifestRepository(key=key))
        if data.get("name"):
            source.name = str(data["name"])

        languages = data.get("languages")
        if isinstance(languages, str):
            languages = [languages]
        if isinstance(languages, list):
            for language in languages:
                normalized = str(language).strip().lower()
                if normalized and normalized not in source.languages:
                    source.languages.append(normalized)

        for rule_config in data.get("rules", []) or []:
            if not isinstance(rule_config, Mapping):
                continue
            rule_key = str(rule_config.get("key") or "").strip()
            if not rule_key:
                continue

            rule = source.rules.get(rule_key, RuleDefinition(key=rule_key))
            if rule_config.get("name"):
                rule.name = str(rule_config["name"])
            if rule_config.get("description"):
                rule.description = str(rule_config["description"])
            if "enabled" in rule_config:
                rule.enabled = bool(rule_config["enabled"])

            severity = rule_config.get("severity")
            if isinstance(severity, str):
                try:
                    rule.severity = IssueSeverity(severity.strip().lower())
                except ValueError as exc:
                    raise RuleDefinitionError(
                        f"Unknown severity '{severity}' for rule {rule_key} in {path}"
                    ) from exc

            source.rules[rule_key] = rule

        merged[key] = source

    def _load_manifest(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise RuleDefinitionError(f"Rule manifest not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise RuleDefinitionError(f"Failed to read rule manifest {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise RuleDefinitionError(f"Invalid YAML in rule manifest {path}") from exc

        if not isinstance(data, Mapping):
            raise RuleDefinitionError(f"Rule manifest must be a mapping: {path}")

        return dict(data)

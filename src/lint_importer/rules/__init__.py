"""Rule catalog definitions."""

from .rules_definition import (
    RuleCatalog,
    RuleDefinition,
    RuleDefinitionError,
    RuleRepository,
    RulesDefinition,
    repository_key,
)

__all__ = [
    "RuleCatalog",
    "RuleDefinition",
    "RuleDefinitionError",
    "RuleRepository",
    "RulesDefinition",
    "repository_key",
]

"""Entity extraction service - classify text with an ordered rule table."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator

from ...config import BUILTIN_RULES
from ...exceptions import ConfigurationError, ValidationError
from ..entities.extraction import ExtractedGroup
from ..value_objects.config import LensConfig
from ..value_objects.rules import EntityRule

logger = logging.getLogger(__name__)


class EntityRuleRegistry:
    """Ordered, keyed collection of entity rules.

    Order decides the order of extracted groups. Registering an existing
    key replaces that rule in place; new keys are appended.
    """

    def __init__(self, rules: Iterable[EntityRule] = ()):
        self._rules: dict[str, EntityRule] = {}
        for rule in rules:
            self.register(rule)

    def __iter__(self) -> Iterator[EntityRule]:
        return iter(list(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    @property
    def keys(self) -> list[str]:
        return list(self._rules)

    def get(self, key: str) -> EntityRule | None:
        return self._rules.get(key)

    def register(self, rule: EntityRule) -> None:
        """Add a rule, or replace the rule with the same key."""
        if rule.key in self._rules:
            logger.debug(f"Replacing entity rule '{rule.key}'")
        self._rules[rule.key] = rule

    def unregister(self, key: str) -> EntityRule | None:
        """Remove a rule by key. Unknown keys are ignored."""
        return self._rules.pop(key, None)

    def copy(self) -> EntityRuleRegistry:
        return EntityRuleRegistry(self)

    @classmethod
    def builtin(cls) -> EntityRuleRegistry:
        """Registry with phones, emails, urls and dates, in that order."""
        return cls(
            EntityRule(
                key=preset.key,
                icon=preset.icon,
                title=preset.title,
                pattern=preset.pattern,
                ignore_case=preset.ignore_case,
            )
            for preset in BUILTIN_RULES
        )

    @classmethod
    def from_file(cls, filepath: Path | str) -> EntityRuleRegistry:
        """Load rules from a JSON file.

        Expected shape: ``{"rules": [{"key", "icon", "title", "pattern",
        "ignore_case"}, ...]}``.

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise ConfigurationError(f"Rules file not found: {filepath}", config_key="rules_file")

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read rules file {filepath}: {e}",
                config_key="rules_file"
            ) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Rules file is not valid JSON: {filepath}: {e}",
                config_key="rules_file"
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get('rules'), list):
            raise ConfigurationError(
                f"Rules file must contain a 'rules' list: {filepath}",
                config_key="rules_file"
            )

        try:
            rules = [EntityRule.from_dict(item) for item in data['rules']]
        except ValidationError as e:
            raise ConfigurationError(f"{filepath}: {e.message}", config_key="rules_file") from e

        logger.debug(f"Loaded {len(rules)} entity rule(s) from {filepath}")
        return cls(rules)

    def to_file(self, filepath: Path | str) -> None:
        """Save rules to a JSON file."""
        filepath = Path(filepath)
        data = {'rules': [rule.to_dict() for rule in self]}

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)


def build_registry(config: LensConfig) -> EntityRuleRegistry:
    """Built-in rules, then rules from ``config.rules_file``, minus disabled keys."""
    registry = EntityRuleRegistry.builtin()

    if config.rules_file is not None:
        for rule in EntityRuleRegistry.from_file(config.rules_file):
            registry.register(rule)

    for key in config.disabled_rules:
        if registry.unregister(key) is None:
            logger.warning(f"Cannot disable unknown entity rule '{key}'")

    return registry


def unique_in_order(values: Iterable[str]) -> list[str]:
    """Drop repeated values, keeping each at its first position."""
    return list(dict.fromkeys(values))


def extract_entities(
    text: str,
    registry: EntityRuleRegistry | None = None
) -> list[ExtractedGroup]:
    """Run every rule over the text.

    Rules are independent: the same substring can land in several groups.
    Rules without matches produce no group at all.

    Args:
        text: Full recognized text
        registry: Rules to apply (built-in rules if omitted)

    Returns:
        One group per matching rule, in registry order
    """
    if registry is None:
        registry = EntityRuleRegistry.builtin()

    groups: list[ExtractedGroup] = []
    for rule in registry:
        matches = unique_in_order(rule.iter_matches(text))
        if not matches:
            continue
        groups.append(ExtractedGroup(rule=rule, matches=tuple(matches)))
        logger.debug(f"Rule '{rule.key}': {len(matches)} unique match(es)")

    return groups

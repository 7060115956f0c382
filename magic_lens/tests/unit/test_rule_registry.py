"""Unit tests for entity rules and the rule registry."""

import json

import pytest
from magic_lens.domain.services.entity_extraction import EntityRuleRegistry, build_registry
from magic_lens.domain.value_objects.config import LensConfig
from magic_lens.domain.value_objects.rules import EntityRule
from magic_lens.exceptions import ConfigurationError, ValidationError


class TestEntityRule:
    """Tests for EntityRule class."""

    def test_matches_left_to_right(self):
        rule = EntityRule(key="nums", icon="", title="Numbers", pattern=r"\d+")
        assert list(rule.iter_matches("a1 b22 c333")) == ["1", "22", "333"]

    def test_whole_match_even_with_groups(self):
        rule = EntityRule(key="kv", icon="", title="KV", pattern=r"(\w+)=(\w+)")
        assert list(rule.iter_matches("a=1 b=2")) == ["a=1", "b=2"]

    def test_empty_matches_skipped(self):
        rule = EntityRule(key="opt", icon="", title="Opt", pattern=r"x*")
        assert list(rule.iter_matches("abxxc")) == ["xx"]

    def test_ignore_case(self):
        rule = EntityRule(key="w", icon="", title="W", pattern="hello", ignore_case=True)
        assert list(rule.iter_matches("Hello HELLO")) == ["Hello", "HELLO"]

    def test_invalid_pattern(self):
        with pytest.raises(ValidationError) as exc_info:
            EntityRule(key="bad", icon="", title="Bad", pattern="(")
        assert exc_info.value.field == "pattern"

    def test_empty_key(self):
        with pytest.raises(ValidationError):
            EntityRule(key="", icon="", title="", pattern="x")

    def test_from_dict_defaults(self):
        rule = EntityRule.from_dict({"key": "zips", "pattern": r"\b\d{5}\b"})
        assert rule.title == "Zips"
        assert rule.icon == ""
        assert rule.ignore_case is False

    def test_from_dict_missing_pattern(self):
        with pytest.raises(ValidationError):
            EntityRule.from_dict({"key": "zips"})

    @pytest.mark.parametrize("data", ["x", ["key", "pattern"], None])
    def test_from_dict_not_a_mapping(self, data):
        with pytest.raises(ValidationError) as exc_info:
            EntityRule.from_dict(data)
        assert exc_info.value.field == "rules"


class TestEntityRuleRegistry:
    """Tests for EntityRuleRegistry class."""

    def test_builtin_order(self):
        assert EntityRuleRegistry.builtin().keys == ["phones", "emails", "urls", "dates"]

    def test_register_appends(self):
        registry = EntityRuleRegistry.builtin()
        registry.register(EntityRule(key="zips", icon="", title="Zip", pattern=r"\d{5}"))
        assert registry.keys[-1] == "zips"
        assert len(registry) == 5

    def test_register_replaces_in_place(self):
        registry = EntityRuleRegistry.builtin()
        registry.register(EntityRule(key="emails", icon="@", title="Mail", pattern=r"\S+@\S+"))
        assert registry.keys == ["phones", "emails", "urls", "dates"]
        assert registry.get("emails").title == "Mail"

    def test_unregister(self):
        registry = EntityRuleRegistry.builtin()
        assert registry.unregister("urls") is not None
        assert "urls" not in registry
        assert registry.unregister("urls") is None

    def test_copy_is_independent(self):
        registry = EntityRuleRegistry.builtin()
        clone = registry.copy()
        clone.unregister("phones")
        assert "phones" in registry

    def test_file_roundtrip(self, tmp_path):
        path = tmp_path / "rules.json"
        EntityRuleRegistry.builtin().to_file(path)

        loaded = EntityRuleRegistry.from_file(path)
        assert loaded.keys == ["phones", "emails", "urls", "dates"]
        assert loaded.get("dates").ignore_case is True

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(ConfigurationError):
            EntityRuleRegistry.from_file(tmp_path / "nope.json")

    def test_from_file_directory(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            EntityRuleRegistry.from_file(tmp_path)
        assert exc_info.value.config_key == "rules_file"

    def test_from_file_not_utf8(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_bytes(b"\xff\xfe\x00{")
        with pytest.raises(ConfigurationError):
            EntityRuleRegistry.from_file(path)

    @pytest.mark.parametrize("content", [
        "{not json",
        json.dumps([]),
        json.dumps({"rules": {}}),
        json.dumps({"rules": ["not-a-rule"]}),
        json.dumps({"rules": [42]}),
        json.dumps({"rules": [{"key": "bad", "pattern": "("}]}),
    ])
    def test_from_file_malformed(self, tmp_path, content):
        path = tmp_path / "rules.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            EntityRuleRegistry.from_file(path)
        assert exc_info.value.config_key == "rules_file"


class TestBuildRegistry:
    """Tests for build_registry."""

    def test_defaults(self):
        assert build_registry(LensConfig()).keys == ["phones", "emails", "urls", "dates"]

    def test_extra_rules_and_disabled(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"rules": [
            {"key": "zips", "icon": "\N{ROUND PUSHPIN}", "title": "ZIP Codes", "pattern": r"\b\d{5}\b"},
            {"key": "phones", "title": "Phones", "pattern": r"\d{3}-\d{4}"},
        ]}), encoding="utf-8")

        registry = build_registry(LensConfig(rules_file=path, disabled_rules=["urls"]))

        assert registry.keys == ["phones", "emails", "dates", "zips"]
        assert registry.get("phones").title == "Phones"

    def test_unknown_disabled_key_ignored(self, caplog):
        registry = build_registry(LensConfig(disabled_rules=["nope"]))
        assert len(registry) == 4
        assert "nope" in caplog.text

"""Unit tests for entity extraction."""

import pytest
from magic_lens.domain.services.entity_extraction import (
    EntityRuleRegistry, extract_entities, unique_in_order
)
from magic_lens.domain.value_objects.rules import EntityRule


def as_mapping(groups):
    return {group.key: list(group.matches) for group in groups}


def test_mixed_text():
    text = "Call 555-123-4567 or visit http://example.com on 12/25/2024"
    groups = extract_entities(text)

    assert [g.key for g in groups] == ["phones", "urls", "dates"]
    assert as_mapping(groups) == {
        "phones": ["555-123-4567"],
        "urls": ["http://example.com"],
        "dates": ["12/25/2024"],
    }


def test_only_matching_rules_produce_groups():
    groups = extract_entities("Call 555-123-4567")
    assert as_mapping(groups) == {"phones": ["555-123-4567"]}


def test_group_order_follows_registry_not_text():
    text = "12/25/2024 http://example.com 555-123-4567"
    assert [g.key for g in extract_entities(text)] == ["phones", "urls", "dates"]


def test_duplicates_removed_in_first_seen_order():
    text = "555-987-6543, 555-123-4567 and again 555-987-6543"
    groups = extract_entities(text)
    assert as_mapping(groups)["phones"] == ["555-987-6543", "555-123-4567"]


def test_duplicate_emails_keep_first_occurrence():
    groups = as_mapping(extract_entities("a@x.com, b@y.org, again a@x.com"))
    assert groups["emails"] == ["a@x.com", "b@y.org"]


def test_no_matches():
    assert extract_entities("") == []
    assert extract_entities("nothing to see here") == []


def test_email_also_counts_as_link():
    groups = as_mapping(extract_entities("Mail jane.doe@example.org today"))
    assert groups["emails"] == ["jane.doe@example.org"]
    assert "jane.doe@example.org" in groups["urls"]


def test_dates_match_month_names_any_case():
    groups = as_mapping(extract_entities("Due JANUARY 15, 2024 or Mar 3rd 2025"))
    assert groups["dates"] == ["JANUARY 15, 2024", "Mar 3rd 2025"]


def test_idempotent():
    text = "Call 555-123-4567 or visit http://example.com on 12/25/2024"
    assert extract_entities(text) == extract_entities(text)


def test_headings():
    groups = extract_entities("Call 555-123-4567")
    assert groups[0].heading == "\N{TELEPHONE RECEIVER} Phone Numbers"
    assert len(groups[0]) == 1


def test_custom_registry():
    registry = EntityRuleRegistry([
        EntityRule(key="tags", icon="#", title="Tags", pattern=r"#\w+"),
    ])
    groups = extract_entities("see #python and #qt and #python", registry)
    assert as_mapping(groups) == {"tags": ["#python", "#qt"]}


def test_ascii_digits_only():
    # Arabic-Indic digits are not \d under ASCII semantics
    assert extract_entities("٥٥٥-١٢٣-٤٥٦٧") == []


@pytest.mark.parametrize("text, expected", [
    ("Tel 555\u00a0123\u00a04567", "555\u00a0123\u00a04567"),
    ("Call +1\u2009555\u2009123\u20094567", "+1\u2009555\u2009123\u20094567"),
    ("Fax 555\u3000123-4567", "555\u3000123-4567"),
])
def test_phone_separators_include_unicode_spaces(text, expected):
    assert as_mapping(extract_entities(text))["phones"] == [expected]


@pytest.mark.parametrize("values, expected", [
    ([], []),
    (["a", "b", "a", "c", "b"], ["a", "b", "c"]),
    (["x", "x", "x"], ["x"]),
])
def test_unique_in_order(values, expected):
    assert unique_in_order(values) == expected


def test_group_to_dict():
    group = extract_entities("Call 555-123-4567")[0]
    assert group.to_dict() == {
        "key": "phones",
        "title": "Phone Numbers",
        "icon": "\N{TELEPHONE RECEIVER}",
        "matches": ["555-123-4567"],
    }

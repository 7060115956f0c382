"""Extracted entity groups."""

from __future__ import annotations

from dataclasses import dataclass

from ..value_objects.rules import EntityRule


@dataclass(frozen=True, slots=True)
class ExtractedGroup:
    """Unique matches of one rule, in order of first appearance."""
    rule: EntityRule
    matches: tuple[str, ...]

    @property
    def key(self) -> str:
        return self.rule.key

    @property
    def heading(self) -> str:
        """Panel heading: icon followed by title."""
        return f"{self.rule.icon} {self.rule.title}".strip()

    def __len__(self) -> int:
        return len(self.matches)

    def to_dict(self) -> dict[str, object]:
        return {
            "key": self.rule.key,
            "title": self.rule.title,
            "icon": self.rule.icon,
            "matches": list(self.matches),
        }

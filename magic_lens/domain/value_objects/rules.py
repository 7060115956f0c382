"""Entity rule value object."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from ...exceptions import ValidationError


@dataclass(frozen=True, slots=True)
class EntityRule:
    """A named regular-expression rule classifying text into one entity kind.

    Patterns use ASCII semantics for ``\\d``, ``\\s`` and ``\\b``.
    """
    key: str
    icon: str
    title: str
    pattern: str
    ignore_case: bool = False
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.key:
            raise ValidationError("Rule key cannot be empty", field="key")

        flags = re.ASCII
        if self.ignore_case:
            flags |= re.IGNORECASE
        try:
            compiled = re.compile(self.pattern, flags)
        except re.error as e:
            raise ValidationError(
                f"Invalid regex pattern for rule '{self.key}': {e}",
                field="pattern"
            ) from e
        object.__setattr__(self, "_regex", compiled)

    def iter_matches(self, text: str) -> Iterator[str]:
        """Yield every whole match of the pattern, left to right."""
        for match in self._regex.finditer(text):
            value = match.group(0)
            if value:
                yield value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EntityRule:
        """Create from a JSON-style mapping."""
        if not isinstance(data, Mapping):
            raise ValidationError(
                f"Rule must be an object, got {type(data).__name__}",
                field="rules"
            )
        try:
            key = str(data["key"])
            pattern = str(data["pattern"])
        except KeyError as e:
            raise ValidationError(f"Rule is missing field {e}", field=str(e)) from e
        return cls(
            key=key,
            icon=str(data.get("icon", "")),
            title=str(data.get("title", key.title())),
            pattern=pattern,
            ignore_case=bool(data.get("ignore_case", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "icon": self.icon,
            "title": self.title,
            "pattern": self.pattern,
            "ignore_case": self.ignore_case,
        }

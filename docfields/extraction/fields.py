"""Extracted field model and the rule table entry type.

Every rule carries a fixed confidence. Confidence never depends on how
well a match looks, which keeps extraction deterministic and auditable.
"""

import re
from dataclasses import dataclass

# Shared pattern vocabulary for monetary amounts.
CURRENCY_PATTERN = r"(?:\$|€|£|USD|EUR|GBP)"
NUMBER_PATTERN = r"(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2}(?!\d))?"
AMOUNT_PATTERN = rf"{CURRENCY_PATTERN}?\s*{NUMBER_PATTERN}"


@dataclass(frozen=True)
class ExtractedField:
    """A named, confidence-scored value extracted from document text."""

    name: str
    value: str
    confidence: float
    source: str


@dataclass(frozen=True)
class FieldRule:
    """A static extraction rule: ``(pattern, field name, confidence)``.

    Attributes:
        name: Field name emitted for each match.
        pattern: Compiled regular expression.
        confidence: Fixed confidence attached to every emitted field.
        source: Rule identifier recorded on emitted fields.
        group: Capture group holding the value (0 for the whole match).
    """

    name: str
    pattern: re.Pattern[str]
    confidence: float
    source: str
    group: int | str = 0

    def _to_field(self, match: re.Match[str]) -> ExtractedField | None:
        value = (match.group(self.group) or "").strip()
        if not value:
            return None
        return ExtractedField(
            name=self.name,
            value=value,
            confidence=self.confidence,
            source=self.source,
        )

    def find_all(self, text: str) -> list[ExtractedField]:
        """Emit one field per non-empty match, in text order."""
        results: list[ExtractedField] = []
        for match in self.pattern.finditer(text):
            extracted = self._to_field(match)
            if extracted is not None:
                results.append(extracted)
        return results

    def find_first(self, text: str) -> ExtractedField | None:
        """Emit a field for the first non-empty match only."""
        for match in self.pattern.finditer(text):
            extracted = self._to_field(match)
            if extracted is not None:
                return extracted
        return None


def apply_rules(
    rules: tuple[FieldRule, ...], text: str, fields: list[ExtractedField]
) -> int:
    """Run every rule against ``text`` and append all matches to ``fields``.

    Returns:
        Number of fields appended.
    """
    added = 0
    for rule in rules:
        found = rule.find_all(text)
        fields.extend(found)
        added += len(found)
    return added

"""Category-independent extraction of dates and labeled amounts.

These rules run for every document regardless of its category and
append to the shared field list. Every match is kept; choosing a
representative value is left to the consumer.
"""

import re

from docfields.utils.logger import get_logger

from .fields import AMOUNT_PATTERN, ExtractedField, FieldRule, apply_rules

logger = get_logger(__name__)

DATE_FIELD = "Date"
DATE_CONFIDENCE = 0.80

DATE_RULES: tuple[FieldRule, ...] = (
    # Day-first or month-first numeric: 31/03/2024, 03-31-24
    FieldRule(
        DATE_FIELD,
        re.compile(r"\d{1,2}[/.\-]\d{1,2}[/.\-]\d{2,4}"),
        DATE_CONFIDENCE,
        "date.numeric",
    ),
    # ISO-like: 2024-03-31, 2024/3/1
    FieldRule(
        DATE_FIELD,
        re.compile(r"\d{4}[/.\-]\d{1,2}[/.\-]\d{1,2}"),
        DATE_CONFIDENCE,
        "date.iso",
    ),
    # Textual month: March 31, 2025 / Mar 31 2025
    FieldRule(
        DATE_FIELD,
        re.compile(
            r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"
            r" \d{1,2},? \d{4}",
            re.IGNORECASE,
        ),
        DATE_CONFIDENCE,
        "date.textual",
    ),
)

# Values are the whole match, label included. "total" also fires inside
# "subtotal"; both candidates are kept.
AMOUNT_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "TotalAmount",
        re.compile(rf"total\s*:?\s*{AMOUNT_PATTERN}", re.IGNORECASE),
        0.90,
        "amount.total",
    ),
    FieldRule(
        "SubtotalAmount",
        re.compile(rf"subtotal\s*:?\s*{AMOUNT_PATTERN}", re.IGNORECASE),
        0.85,
        "amount.subtotal",
    ),
    FieldRule(
        "TaxAmount",
        re.compile(rf"(?:tax|vat|gst)\s*:?\s*{AMOUNT_PATTERN}", re.IGNORECASE),
        0.85,
        "amount.tax",
    ),
)


def extract_dates(text: str, fields: list[ExtractedField]) -> None:
    """Append a ``Date`` field for every date-shaped match in ``text``."""
    found = apply_rules(DATE_RULES, text, fields)
    logger.debug("Found %d date candidates", found)


def extract_amounts(text: str, fields: list[ExtractedField]) -> None:
    """Append total, subtotal and tax fields for labeled amounts."""
    found = apply_rules(AMOUNT_RULES, text, fields)
    logger.debug("Found %d labeled amounts", found)


def extract_common_fields(text: str) -> list[ExtractedField]:
    """Run all category-independent extractors.

    Args:
        text: Normalized document text.

    Returns:
        Date fields followed by amount fields, in rule order.
    """
    fields: list[ExtractedField] = []
    extract_dates(text, fields)
    extract_amounts(text, fields)
    return fields

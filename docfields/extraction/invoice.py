"""Invoice field extraction with ordered fallback chains.

Total amount and vendor name are resolved by chains of independent
matchers. Each matcher returns a candidate or ``None``; the first
accepted candidate is final and later matchers are never consulted.
"""

import re
from collections.abc import Callable

from docfields.utils.config import ExtractionConfig
from docfields.utils.logger import get_logger

from .common import DATE_FIELD
from .fields import CURRENCY_PATTERN, NUMBER_PATTERN, ExtractedField, FieldRule

logger = get_logger(__name__)

Matcher = Callable[[str], str | None]

INVOICE_CONFIDENCE = 0.85
VENDOR_TABLE_SCAN_CONFIDENCE = 0.80

INVOICE_NUMBER_RULE = FieldRule(
    "InvoiceNumber", re.compile(r"NV-\d{4}"), INVOICE_CONFIDENCE, "invoice.number"
)
INVOICE_DATE_RULE = FieldRule(
    "InvoiceDate",
    re.compile(r"\b20\d{2}-\d{2}-\d{2}\b"),
    INVOICE_CONFIDENCE,
    "invoice.date",
)

_TOTAL_TABLE = re.compile(rf"TotalAmount\s+({NUMBER_PATTERN})")
_BARE_DECIMAL = re.compile(r"(?<![\d,.])(\d{3,4}\.\d{2})(?!\d)")
_TOTAL_LABEL = re.compile(
    rf"Total\s*Amount\s*:?\s*{CURRENCY_PATTERN}?\s*({NUMBER_PATTERN})",
    re.IGNORECASE,
)

# Value runs until the next CamelCase label (e.g. "InvoiceDate") or end of line.
_VENDOR_LABEL = re.compile(
    r"VendorName[ \t]*:?[ \t]*(.+?)(?=[ \t]+[A-Z][a-z]+[A-Z][A-Za-z]*\b|[ \t]*$)",
    re.MULTILINE,
)
_VENDOR_SUFFIX = re.compile(
    r"\d\s+([A-Za-z][A-Za-z&.,' \-]*?\b"
    r"(?:Ltd|LLC|Inc|Corp|Pvt|MNC|Limited|GmbH|Co)\b\.?)",
    re.IGNORECASE,
)
_NUMERIC_ONLY = re.compile(r"[\d\s.,\-]+")


def _first_group(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if match is None:
        return None
    return match.group(1).strip() or None


def total_from_table(text: str) -> str | None:
    """Match a table cell such as ``TotalAmount 1875.50``."""
    return _first_group(_TOTAL_TABLE, text)


def total_from_bare_decimal(text: str) -> str | None:
    """Match a bare three- or four-digit decimal such as ``1875.50``."""
    return _first_group(_BARE_DECIMAL, text)


def total_from_label(text: str) -> str | None:
    """Match a number directly after a ``Total Amount`` label."""
    return _first_group(_TOTAL_LABEL, text)


TOTAL_AMOUNT_CHAIN: tuple[tuple[str, Matcher], ...] = (
    ("invoice.total.table", total_from_table),
    ("invoice.total.bare_decimal", total_from_bare_decimal),
    ("invoice.total.label", total_from_label),
)


def known_vendor_matcher(vendors: list[str]) -> Matcher:
    """Build a matcher that finds the first configured vendor literal.

    Vendors are tried in configuration order; the text as it appears in
    the document is returned.
    """
    patterns = [
        re.compile(rf"(?<![A-Za-z0-9]){re.escape(v)}(?![A-Za-z0-9])", re.IGNORECASE)
        for v in vendors
        if v.strip()
    ]

    def match_known_vendor(text: str) -> str | None:
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                return match.group(0)
        return None

    return match_known_vendor


def vendor_from_label(text: str) -> str | None:
    """Match the text following a ``VendorName`` label."""
    return _first_group(_VENDOR_LABEL, text)


def vendor_from_company_suffix(text: str) -> str | None:
    """Match a company name ending in a legal suffix, following a digit."""
    return _first_group(_VENDOR_SUFFIX, text)


def vendor_chain(config: ExtractionConfig) -> tuple[tuple[str, Matcher], ...]:
    """Build the ordered vendor-name matchers for ``config``."""
    return (
        ("invoice.vendor.known", known_vendor_matcher(config.known_vendors)),
        ("invoice.vendor.label", vendor_from_label),
        ("invoice.vendor.suffix", vendor_from_company_suffix),
    )


def is_numeric(value: str) -> bool:
    """Return whether ``value`` holds only digits and number punctuation."""
    return bool(_NUMERIC_ONLY.fullmatch(value))


def first_accepted(
    chain: tuple[tuple[str, Matcher], ...],
    text: str,
    accept: Callable[[str], bool] | None = None,
) -> tuple[str, str] | None:
    """Run a fallback chain and return the first accepted candidate.

    Args:
        chain: Ordered ``(source, matcher)`` pairs.
        text: Text handed unchanged to every matcher.
        accept: Optional predicate; rejected candidates fall through to
            the next matcher.

    Returns:
        ``(source, value)`` of the winning matcher, or ``None``.
    """
    for source, matcher in chain:
        candidate = matcher(text)
        if candidate is None:
            continue
        if accept is not None and not accept(candidate):
            logger.debug("Rejected candidate %r from %s", candidate, source)
            continue
        return source, candidate
    return None


def vendor_from_table_scan(text: str) -> str | None:
    """Take the line after the first line containing ``VendorName``.

    The next line is used only when it is non-empty, does not start
    with ``Invoice`` and is not purely numeric.
    """
    lines = text.splitlines()
    for index, line in enumerate(lines):
        if "VendorName" not in line:
            continue
        if index + 1 >= len(lines):
            return None
        candidate = lines[index + 1].strip()
        if not candidate or candidate.startswith("Invoice") or is_numeric(candidate):
            return None
        return candidate
    return None


def extract_total_amount(text: str) -> ExtractedField | None:
    winner = first_accepted(TOTAL_AMOUNT_CHAIN, text)
    if winner is None:
        return None
    source, value = winner
    return ExtractedField("TotalAmount", value, INVOICE_CONFIDENCE, source)


def extract_vendor_name(
    text: str, config: ExtractionConfig
) -> ExtractedField | None:
    """Resolve the vendor name through the vendor chain, then a table scan."""

    def accept(candidate: str) -> bool:
        return len(candidate) >= config.min_vendor_length and not is_numeric(
            candidate
        )

    winner = first_accepted(vendor_chain(config), text, accept)
    if winner is not None:
        source, value = winner
        return ExtractedField("VendorName", value, INVOICE_CONFIDENCE, source)

    scanned = vendor_from_table_scan(text)
    if scanned is not None:
        return ExtractedField(
            "VendorName",
            scanned,
            VENDOR_TABLE_SCAN_CONFIDENCE,
            "invoice.vendor.table_scan",
        )
    return None


def extract_invoice_fields(
    text: str, fields: list[ExtractedField], config: ExtractionConfig
) -> None:
    """Extract invoice-specific fields into ``fields``.

    Generic ``Date`` fields are removed first; the invoice date rule
    supersedes them.
    """
    fields[:] = [f for f in fields if f.name != DATE_FIELD]

    candidates = (
        INVOICE_NUMBER_RULE.find_first(text),
        INVOICE_DATE_RULE.find_first(text),
        extract_total_amount(text),
        extract_vendor_name(text, config),
    )
    for candidate in candidates:
        if candidate is not None:
            fields.append(candidate)

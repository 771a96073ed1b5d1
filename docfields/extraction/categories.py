"""Category-specific field extraction and dispatch.

Exactly one extractor runs per document, selected by the category the
classifier assigned. ``Unknown`` documents get no category fields.
"""

import re
from collections.abc import Callable

from docfields.classification.classifier import DocumentCategory
from docfields.utils.config import ExtractionConfig
from docfields.utils.logger import get_logger

from .fields import ExtractedField, FieldRule, apply_rules
from .invoice import extract_invoice_fields

logger = get_logger(__name__)

CategoryExtractor = Callable[[str, list[ExtractedField], ExtractionConfig], None]


def identifier_pattern(label: str, markers: str) -> re.Pattern[str]:
    """Compile a ``<label> [marker] [:] <identifier>`` pattern.

    After an explicit marker such as ``no``, ``number`` or ``#`` any
    identifier is accepted. A bare label needs an identifier containing
    a digit, so "Account Summary" does not read as account "Summary".

    Args:
        label: Regex for the field label.
        markers: Alternation of word markers; ``#`` is always allowed.
    """
    return re.compile(
        rf"\b(?:{label})\s*"
        rf"(?:(?:(?:{markers})\b\.?|#)\s*:?\s*|:?\s*(?=[A-Za-z0-9\-]*\d))"
        r"([A-Za-z0-9\-]+)",
        re.IGNORECASE,
    )


RECEIPT_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "ReceiptNumber",
        identifier_pattern("receipt", "number|no|id"),
        0.90,
        "receipt.number",
        group=1,
    ),
    # Deliberately broad: the leading name-like run of every line.
    FieldRule(
        "MerchantName",
        re.compile(r"^[ \t]*([A-Za-z][A-Za-z0-9 .,&'\-]*)", re.MULTILINE),
        0.60,
        "receipt.merchant",
        group=1,
    ),
    FieldRule(
        "PaymentMethod",
        re.compile(
            r"\b(?:paid|payment|method)\s*(?:by|via|:)?\s*"
            r"([A-Za-z]+\s*card|cash|check|paypal|venmo)\b",
            re.IGNORECASE,
        ),
        0.80,
        "receipt.payment_method",
        group=1,
    ),
)

STATEMENT_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "AccountNumber",
        identifier_pattern("account", "number|no"),
        0.90,
        "statement.account_number",
        group=1,
    ),
    FieldRule(
        "StatementPeriod",
        re.compile(
            r"\b(?:statement|billing)\s*period\s*:?\s*(.+?)\s*$",
            re.IGNORECASE | re.MULTILINE,
        ),
        0.85,
        "statement.period",
        group=1,
    ),
)

PURCHASE_ORDER_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "PurchaseOrderNumber",
        identifier_pattern(r"purchase\s*order|p\.?o\.?", "number|no"),
        0.90,
        "purchase_order.number",
        group=1,
    ),
    FieldRule(
        "DeliveryDate",
        re.compile(
            r"\b(?:delivery|ship)\s*date\s*:?\s*(.+?)\s*$",
            re.IGNORECASE | re.MULTILINE,
        ),
        0.85,
        "purchase_order.delivery_date",
        group=1,
    ),
)


def extract_receipt_fields(
    text: str, fields: list[ExtractedField], config: ExtractionConfig
) -> None:
    apply_rules(RECEIPT_RULES, text, fields)


def extract_statement_fields(
    text: str, fields: list[ExtractedField], config: ExtractionConfig
) -> None:
    apply_rules(STATEMENT_RULES, text, fields)


def extract_purchase_order_fields(
    text: str, fields: list[ExtractedField], config: ExtractionConfig
) -> None:
    apply_rules(PURCHASE_ORDER_RULES, text, fields)


CATEGORY_EXTRACTORS: dict[DocumentCategory, CategoryExtractor] = {
    DocumentCategory.INVOICE: extract_invoice_fields,
    DocumentCategory.RECEIPT: extract_receipt_fields,
    DocumentCategory.STATEMENT: extract_statement_fields,
    DocumentCategory.PURCHASE_ORDER: extract_purchase_order_fields,
}


def extract_category_fields(
    text: str,
    category: DocumentCategory,
    fields: list[ExtractedField],
    config: ExtractionConfig,
) -> None:
    """Run the extractor registered for ``category`` against ``text``.

    Args:
        text: Normalized document text.
        category: Category assigned by the classifier.
        fields: Field list to extend; the invoice extractor may also
            drop generic date fields from it.
        config: Extraction settings.
    """
    extractor = CATEGORY_EXTRACTORS.get(category)
    if extractor is None:
        logger.debug("No category extractor for %s", category)
        return
    before = len(fields)
    extractor(text, fields, config)
    logger.debug(
        "%s extractor left %d fields (was %d)", category, len(fields), before
    )

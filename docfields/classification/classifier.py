"""Keyword-based document classification.

Rules are evaluated in a fixed priority order and the first matching
rule decides the category. A statement that mentions "invoice" is
therefore an invoice.
"""

from dataclasses import dataclass
from enum import StrEnum

from docfields.utils.logger import get_logger

logger = get_logger(__name__)


class DocumentCategory(StrEnum):
    """Coarse document type driving which extraction rules apply."""

    INVOICE = "Invoice"
    RECEIPT = "Receipt"
    STATEMENT = "Statement"
    PURCHASE_ORDER = "PurchaseOrder"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ClassificationRule:
    """A category with keyword groups that must all be satisfied.

    Each group is satisfied when any one of its keywords occurs in the
    lower-cased text.
    """

    category: DocumentCategory
    keyword_groups: tuple[tuple[str, ...], ...]

    def matches(self, lowered: str) -> bool:
        """Return whether every keyword group occurs in ``lowered``."""
        return all(
            any(keyword in lowered for keyword in group)
            for group in self.keyword_groups
        )


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(DocumentCategory.INVOICE, (("invoice", "bill to"),)),
    ClassificationRule(
        DocumentCategory.RECEIPT, (("receipt", "payment received"),)
    ),
    ClassificationRule(
        DocumentCategory.STATEMENT, (("statement", "account summary"),)
    ),
    ClassificationRule(
        DocumentCategory.PURCHASE_ORDER,
        (("order",), ("purchase", "confirmation")),
    ),
)


def classify(normalized: str) -> DocumentCategory:
    """Assign a document category from normalized text.

    Args:
        normalized: Output of :func:`~docfields.preprocessing.normalizer.normalize`.

    Returns:
        The category of the first matching rule, or ``UNKNOWN``.
    """
    lowered = normalized.lower()
    for rule in CLASSIFICATION_RULES:
        if rule.matches(lowered):
            logger.debug("Classified document as %s", rule.category)
            return rule.category
    return DocumentCategory.UNKNOWN

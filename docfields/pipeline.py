"""Extraction orchestrator.

Runs normalization, classification, common extraction and category
extraction in one forward pass and wraps the result in an immutable
outcome. Faults never escape to the caller; they become a failure
outcome with no partial fields.
"""

from dataclasses import dataclass

from docfields.classification.classifier import DocumentCategory, classify
from docfields.extraction.categories import extract_category_fields
from docfields.extraction.common import extract_common_fields
from docfields.extraction.fields import ExtractedField
from docfields.ocr.models import OCRResult
from docfields.preprocessing.normalizer import normalize
from docfields.utils.config import ExtractionConfig
from docfields.utils.logger import get_logger

logger = get_logger(__name__)

OCR_FAILED_REASON = "OCR processing failed, cannot extract structured data"
TEXT_PROCESSING_FAILED_PREFIX = "Text processing failed: "


@dataclass(frozen=True)
class ExtractionSuccess:
    """Structured record for a successfully processed document."""

    category: DocumentCategory
    fields: tuple[ExtractedField, ...]
    normalized_text: str
    source_name: str = "document"

    @property
    def is_successful(self) -> bool:
        return True


@dataclass(frozen=True)
class ExtractionFailure:
    """Outcome for a document that could not be processed."""

    reason: str
    source_name: str = "document"

    @property
    def is_successful(self) -> bool:
        return False


ExtractionOutcome = ExtractionSuccess | ExtractionFailure


class TextProcessor:
    """Turns raw OCR text into a categorized, field-level record.

    Holds only read-only configuration, so one instance can serve
    concurrent callers.

    Args:
        config: Extraction settings. Defaults are used when ``None``.
    """

    def __init__(self, config: ExtractionConfig | None = None) -> None:
        self.config = config or ExtractionConfig()

    def process(
        self,
        raw_text: str | None,
        ocr_succeeded: bool = True,
        source_name: str = "document",
    ) -> ExtractionOutcome:
        """Extract a structured record from raw OCR text.

        Args:
            raw_text: Text returned by the OCR provider; may be empty.
            ocr_succeeded: Whether the OCR provider reported success.
            source_name: Label used in logs and carried on the outcome.

        Returns:
            ``ExtractionSuccess`` with all field candidates, or
            ``ExtractionFailure`` with the reason.
        """
        if not ocr_succeeded:
            logger.warning(
                "Cannot process text, OCR was not successful: %s", source_name
            )
            return ExtractionFailure(OCR_FAILED_REASON, source_name)

        try:
            logger.info("Starting text processing for %s", source_name)
            normalized = normalize(raw_text)
            category = classify(normalized)
            fields = extract_common_fields(normalized)
            extract_category_fields(normalized, category, fields, self.config)
        except Exception as exc:
            logger.exception("Error processing text for %s", source_name)
            return ExtractionFailure(
                f"{TEXT_PROCESSING_FAILED_PREFIX}{exc}", source_name
            )

        logger.info(
            "Processed %s as %s with %d fields",
            source_name,
            category,
            len(fields),
        )
        return ExtractionSuccess(
            category=category,
            fields=tuple(fields),
            normalized_text=normalized,
            source_name=source_name,
        )

    def process_ocr_result(self, ocr_result: OCRResult) -> ExtractionOutcome:
        """Extract a structured record from an OCR provider result."""
        if not ocr_result.success and ocr_result.error:
            logger.debug(
                "OCR error for %s: %s", ocr_result.source_file, ocr_result.error
            )
        return self.process(
            ocr_result.text,
            ocr_succeeded=ocr_result.success,
            source_name=ocr_result.source_file,
        )


def extract_document(
    raw_text: str | None, ocr_succeeded: bool = True
) -> ExtractionOutcome:
    """Process one document with default settings."""
    return TextProcessor().process(raw_text, ocr_succeeded)

"""Data types exchanged with the upstream OCR provider.

The provider converts a scanned document into raw text, optionally with
word-level geometry and confidence. Only the text and the success flag
feed the extraction pipeline; the rest is carried for callers.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box for a detected element."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class OCRWord:
    """A single word or line recognized by OCR with position and confidence."""

    text: str
    bbox: BoundingBox | None = None
    confidence: float = 0.0
    page: int = 1


@dataclass(frozen=True)
class OCRResult:
    """Complete OCR output for one document.

    ``success`` is ``False`` when the provider could not read the
    document; ``error`` then holds its message and ``text`` is usually
    empty.
    """

    text: str
    words: list[OCRWord] = field(default_factory=list)
    confidence: float = 0.0
    success: bool = True
    error: str | None = None
    source_file: str = "document"

    @property
    def page_count(self) -> int:
        """Number of distinct pages covered by the recognized words."""
        return len({w.page for w in self.words})

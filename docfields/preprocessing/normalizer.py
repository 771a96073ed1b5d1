"""Canonicalization of raw OCR text.

OCR output carries ragged spacing, control characters and mixed line
endings. Everything downstream pattern-matches against the normalized
form produced here.
"""

import re

_WHITESPACE_RUN = re.compile(r"\s+")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\r\n]")


def normalize(raw: str | None) -> str:
    """Normalize raw OCR text into its canonical form.

    Steps run in a fixed order: whitespace runs collapse to one space,
    characters outside printable ASCII (other than CR/LF) are dropped
    and the spaces around them collapsed again, line endings become
    ``\\n``, and the result is trimmed.

    Args:
        raw: Raw OCR text, possibly empty or ``None``.

    Returns:
        Normalized text; ``""`` for empty input.
    """
    if not raw:
        return ""

    text = _WHITESPACE_RUN.sub(" ", raw)
    text = _NON_PRINTABLE.sub("", text)
    # A dropped character may leave two spaces side by side.
    text = _WHITESPACE_RUN.sub(" ", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.strip()

"""Alternate-option PDF decode using pdfplumber.

Second structural strategy.  Instead of merging characters into layout
lines, every word item is emitted separately (tight horizontal tolerance,
no blank-char merging, content-stream order) and joined by single spaces.
The output is structurally different from the standard decode and is
sometimes more complete on PDFs whose generator splits text into many small
runs.  Because pdfplumber parses with pdfminer rather than MuPDF, a file one
library rejects may still be readable by the other.
"""

from __future__ import annotations

import io
import logging

import pdfplumber

logger = logging.getLogger(__name__)

# Horizontal gap (pt) above which adjacent chars are separate words
_X_TOLERANCE = 1.5


def decode_alternate(document: bytes) -> str:
    """Extract every word item with whitespace normalised and no merging.

    Args:
        document: Raw PDF bytes.

    Returns:
        Words joined with single spaces, pages joined with newlines.

    Raises:
        Exception: Whatever pdfplumber / pdfminer raises for malformed or
            encrypted input.
    """
    page_texts: list[str] = []

    with pdfplumber.open(io.BytesIO(document)) as pdf:
        for page in pdf.pages:
            words = page.extract_words(
                x_tolerance=_X_TOLERANCE,
                keep_blank_chars=False,
                use_text_flow=True,
            )
            if words:
                page_texts.append(" ".join(word["text"] for word in words))

        logger.debug(
            "pdfplumber decoded %d word runs from %d pages",
            sum(len(t.split(" ")) for t in page_texts),
            len(pdf.pages),
        )

    return "\n".join(page_texts)

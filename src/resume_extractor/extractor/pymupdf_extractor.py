"""Standard whole-document decode using PyMuPDF.

Opens the PDF bytes in memory and concatenates each page's plain text with
PyMuPDF's default extraction settings.  This is the first strategy the
orchestrator runs and the preferred one on ties.

Also provides ``inspect_document``, used when every strategy has failed to
tell a corrupted file from an encrypted or image-only one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pymupdf

from resume_extractor.extractor.types import EncryptedDocumentError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentInfo:
    """Structural facts about a PDF, gathered without extracting text."""

    openable: bool
    encrypted: bool = False
    page_count: int = 0
    error: str | None = None


def open_pdf(document: bytes) -> pymupdf.Document:
    """Open *document* bytes as a PDF, raising on anything PyMuPDF rejects."""
    return pymupdf.open(stream=document, filetype="pdf")


def decode_standard(document: bytes) -> str:
    """Extract plain text from every page with default settings.

    Args:
        document: Raw PDF bytes.

    Returns:
        Page texts joined with newlines (empty if the PDF has no text layer).

    Raises:
        EncryptedDocumentError: The PDF needs a password.
        Exception: Whatever PyMuPDF raises for malformed input.
    """
    with open_pdf(document) as doc:
        if doc.needs_pass:
            raise EncryptedDocumentError("encrypted")

        page_texts = [page.get_text() for page in doc]
        text = "\n".join(t for t in page_texts if t and t.strip())

        logger.debug(
            "PyMuPDF decoded %d chars from %d pages", len(text), doc.page_count
        )
        return text


def inspect_document(document: bytes) -> DocumentInfo:
    """Report whether *document* opens, is encrypted, and how many pages it has.

    Never raises; an unopenable document is reported with ``openable=False``.
    """
    try:
        with open_pdf(document) as doc:
            # Page tree is unreadable until authenticated
            locked = bool(doc.needs_pass)
            return DocumentInfo(
                openable=True,
                encrypted=locked or bool(doc.is_encrypted),
                page_count=0 if locked else doc.page_count,
            )
    except Exception as e:
        logger.debug("PyMuPDF could not open document: %s", e)
        return DocumentInfo(openable=False, error=str(e))

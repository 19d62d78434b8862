"""Optical character recognition behind a single-method capability interface.

Two backends implement :class:`OcrClient`:

- :class:`OcrSpaceClient` -- posts the base64-encoded PDF to the OCR.space
  HTTP API (orientation detection, document engine 2) with a bounded httpx
  timeout.  Used when an API key is configured.
- :class:`TesseractClient` -- renders pages with PyMuPDF and runs local
  Tesseract via pytesseract.  Opt-in with ``OCR_PROVIDER=tesseract``.

``ocr_extract`` wraps any client and never raises: timeouts, HTTP errors and
OCR processing errors are logged and reported as an empty string.  No
retries are performed here; retry policy belongs to the caller.
"""

from __future__ import annotations

import base64
import io
import logging
from typing import Protocol, runtime_checkable

import httpx
import pymupdf

from resume_extractor.config.settings import OcrSettings
from resume_extractor.extractor.types import OcrError

logger = logging.getLogger(__name__)

__all__ = [
    "OcrClient",
    "OcrSpaceClient",
    "TesseractClient",
    "build_ocr_client",
    "ocr_extract",
]


@runtime_checkable
class OcrClient(Protocol):
    """Anything that can turn PDF bytes into recognised text."""

    def recognize(self, document: bytes) -> str:
        """Return the recognised text, raising on failure."""
        ...


class OcrSpaceClient:
    """Client for the OCR.space ``/parse/image`` endpoint.

    Args:
        settings: OCR configuration (endpoint, key, language, timeout).
        client: Optional pre-built httpx client (tests inject a
            ``MockTransport``); one is created per call otherwise.
    """

    def __init__(self, settings: OcrSettings, client: httpx.Client | None = None) -> None:
        self._settings = settings
        self._client = client

    def _form_fields(self, document: bytes) -> dict[str, str]:
        encoded = base64.b64encode(document).decode("ascii")
        return {
            "base64Image": f"data:application/pdf;base64,{encoded}",
            "language": self._settings.language,
            "isOverlayRequired": "false",
            "detectOrientation": str(self._settings.detect_orientation).lower(),
            "scale": str(self._settings.scale).lower(),
            "OCREngine": str(self._settings.engine),
            "filetype": "PDF",
        }

    def _post(self, client: httpx.Client, document: bytes) -> httpx.Response:
        return client.post(
            self._settings.endpoint,
            headers={"apikey": self._settings.api_key},
            data=self._form_fields(document),
            timeout=httpx.Timeout(self._settings.timeout_seconds),
        )

    def recognize(self, document: bytes) -> str:
        if self._client is not None:
            response = self._post(self._client, document)
        else:
            with httpx.Client() as client:
                response = self._post(client, document)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise OcrError(
                f"OCR service returned HTTP {e.response.status_code}"
            ) from e
        payload = response.json()

        if payload.get("IsErroredOnProcessing"):
            message = payload.get("ErrorMessage") or "unknown OCR error"
            if isinstance(message, list):
                message = "; ".join(str(m) for m in message)
            raise OcrError(f"OCR processing failed: {message}")

        results = payload.get("ParsedResults") or []
        if not results:
            raise OcrError("No parsed results from OCR service")

        text = "\n".join(
            (result.get("ParsedText") or "").strip() for result in results
        ).strip()

        logger.info(
            "OCR.space returned %d chars from %d page results (exit code %s)",
            len(text),
            len(results),
            payload.get("OCRExitCode"),
        )
        return text


class TesseractClient:
    """Local OCR: PyMuPDF pixmap rendering + pytesseract.

    Args:
        settings: OCR configuration (dpi, language, tesseract_cmd, page cap,
            per-page timeout).
    """

    def __init__(self, settings: OcrSettings) -> None:
        self._settings = settings

    def recognize(self, document: bytes) -> str:
        import pytesseract
        from PIL import Image

        if self._settings.tesseract_cmd != "tesseract":
            pytesseract.pytesseract.tesseract_cmd = self._settings.tesseract_cmd

        all_pages_text: list[str] = []
        with pymupdf.open(stream=document, filetype="pdf") as doc:
            if doc.page_count > self._settings.tesseract_max_pages:
                raise OcrError(
                    f"too_many_pages ({doc.page_count} > "
                    f"{self._settings.tesseract_max_pages})"
                )

            for page in doc:
                pix = page.get_pixmap(dpi=self._settings.tesseract_dpi)
                img = Image.open(io.BytesIO(pix.tobytes("png")))
                text = pytesseract.image_to_string(
                    img,
                    lang=self._settings.language,
                    timeout=self._settings.timeout_seconds,
                )
                if text and text.strip():
                    all_pages_text.append(text.strip())

        text = "\n".join(all_pages_text)
        logger.info("Tesseract OCR extracted %d chars", len(text))
        return text


def build_ocr_client(settings: OcrSettings | None) -> OcrClient | None:
    """Pick the OCR backend from configuration.

    Returns None when OCR is not configured; the orchestrator then skips the
    optical strategy instead of failing.
    """
    if settings is None or settings.provider == "none":
        return None
    if settings.provider == "tesseract":
        return TesseractClient(settings)
    if not settings.api_key:
        if settings.provider == "ocr_space":
            logger.warning("OCR provider 'ocr_space' selected but no API key set")
        return None
    return OcrSpaceClient(settings)


def ocr_extract(document: bytes, client: OcrClient) -> str:
    """Run *client* over *document*, returning "" on any failure.

    Args:
        document: Raw PDF bytes.
        client: OCR backend.

    Returns:
        Recognised text, or an empty string on timeout, HTTP failure or OCR
        processing error.
    """
    try:
        return client.recognize(document) or ""
    except httpx.TimeoutException as e:
        logger.warning("OCR request timed out: %s", e)
    except httpx.HTTPError as e:
        logger.warning("OCR request failed: %s", e)
    except Exception as e:
        logger.warning("OCR extraction failed: %s", e)
    return ""

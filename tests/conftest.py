"""Shared fixtures: in-memory PDFs, default settings, stub OCR backends."""

from __future__ import annotations

import logging

import pymupdf
import pytest

from resume_extractor.config.settings import ExtractionSettings

RESUME_LINES = [
    "Jane Doe",
    "email: jane@acme.com  phone: 555-123-4567",
    "Senior Software Engineer with 5 years experience in Python and SQL.",
    "Education: BSc Computer Science, State University, 2016.",
    "Skills: Python, Django, PostgreSQL, Docker, Kubernetes.",
    "Work history: Acme Corp (2019 - present), Initech (2016 - 2019).",
]


def build_pdf(lines: list[str] | None = None, **save_options) -> bytes:
    """Render *lines* onto a single page; no lines gives a blank page."""
    doc = pymupdf.open()
    page = doc.new_page()
    y = 72
    for line in lines or []:
        page.insert_text((72, y), line, fontsize=11)
        y += 16
    data = doc.tobytes(**save_options)
    doc.close()
    return data


class StubOcrClient:
    """OCR backend returning canned text and counting calls."""

    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls = 0

    def recognize(self, document: bytes) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def settings() -> ExtractionSettings:
    return ExtractionSettings(
        structural_threshold=40,
        ocr_threshold=30,
        manual_threshold=25,
        high_bucket_cutoff=70,
        medium_bucket_cutoff=40,
        min_text_length=20,
        ocr_weight=1.2,
    )


@pytest.fixture
def resume_pdf() -> bytes:
    return build_pdf(RESUME_LINES)


@pytest.fixture
def blank_pdf() -> bytes:
    return build_pdf()


@pytest.fixture
def encrypted_pdf() -> bytes:
    return build_pdf(
        RESUME_LINES,
        encryption=pymupdf.PDF_ENCRYPT_AES_256,
        owner_pw="owner-secret",
        user_pw="user-secret",
    )


@pytest.fixture
def resume_pdf_deflated() -> bytes:
    return build_pdf(RESUME_LINES, deflate=True)


@pytest.fixture
def restore_root_logging():
    """Undo ``setup_logging`` so later tests keep pytest's own capture."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def no_configured_ocr(monkeypatch):
    """Tests opt into OCR explicitly; a local OCR_API_KEY must not reach the network."""
    monkeypatch.setenv("OCR_PROVIDER", "none")

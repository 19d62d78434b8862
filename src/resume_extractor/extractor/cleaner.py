"""Normalisation of raw extracted text into printable, collapsed plain text.

Every strategy's output passes through ``clean`` before scoring, so the
quality assessor and the downstream consumer always see the same shape of
text: printable ASCII only, single spaces, no PDF syntax residue.

``clean`` is idempotent and total: it accepts str, bytes or None and never
raises.
"""

from __future__ import annotations

import re

# Anything outside printable ASCII becomes a space (keeps word boundaries)
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E]")
_WHITESPACE = re.compile(r"\s+")

_STREAM_OPEN = re.compile(r"\bstream\b")
_STREAM_CLOSE = re.compile(r"\bendstream\b")

_ARTIFACT_PATTERNS = [
    # Object structure
    r"\b\d+\s+\d+\s+obj\b",
    r"\b\d+\s+\d+\s+R\b",
    r"\bendobj\b",
    r"\bendstream\b",
    r"\bstartxref\b",
    r"\bxref\b",
    r"\btrailer\s*<<",
    r"%PDF-\d\.\d",
    r"%%EOF",
    # Name tokens at the start of a word (/Type, /FlateDecode, ...)
    r"(?<!\S)/[A-Z][A-Za-z0-9]*\b",
    # Generator signatures
    r"\bMicrosoft\s+Word\s+-\s+\S+\.docx?\b",
    r"\bSkia/PDF(?:\s+m\d+)?",
    r"\b(?:Mac\s+OS\s+X\s+[\d.]+\s+)?Quartz\s+PDFContext\b",
    r"\bGPL\s+Ghostscript(?:\s+[\d.]+)?",
    r"\biText\s+[\d.]+(?:\s+\S*itextpdf\S*)?",
    r"\bwkhtmltopdf(?:\s+[\d.]+)?",
    r"\bAdobe\s+PDF\s+Library\s+[\d.]+",
    r"\bAcrobat\s+Distiller\s+[\d.]+(?:\s+\(Windows\))?",
]
_ARTIFACTS = re.compile("|".join(_ARTIFACT_PATTERNS))


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text)


def _drop_stream_bodies(text: str) -> str:
    """Blank out every ``stream ... endstream`` span in one linear pass."""
    pieces: list[str] = []
    pos = 0
    while True:
        start = _STREAM_OPEN.search(text, pos)
        if start is None:
            break
        end = _STREAM_CLOSE.search(text, start.end())
        if end is None:
            break
        pieces.append(text[pos:start.start()])
        pieces.append(" ")
        pos = end.end()
    pieces.append(text[pos:])
    return "".join(pieces)


def clean(raw: str | bytes | None) -> str:
    """Return *raw* as printable, whitespace-collapsed text without PDF residue.

    Bytes are decoded as Latin-1 so arbitrary (non-UTF-8) input maps one byte
    to one character.  Artifact removal is repeated until nothing more
    matches, so ``clean(clean(x)) == clean(x)`` for every input.
    """
    if not raw:
        return ""
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("latin-1")

    text = _collapse(_NON_PRINTABLE.sub(" ", raw))

    while True:
        stripped = _collapse(_ARTIFACTS.sub(" ", _drop_stream_bodies(text)))
        if stripped == text:
            break
        text = stripped

    return text.strip()

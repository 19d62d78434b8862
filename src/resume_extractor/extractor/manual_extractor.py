"""Manual pattern scraper over raw PDF text-drawing operators.

Last-resort structural strategy that needs no PDF parser at all.  The
document bytes are read as Latin-1 text (plus the inflated body of every
zlib-compressed stream) and literal text is recovered with regular
expressions that recognise:

- ``(string) Tj`` / ``'`` / ``"``   single-string draw operators
- ``[ ... ] TJ``                    array draw operator (kerned pieces)
- strings inside ``BT ... ET``      text objects

Hex strings (``<48656C6C6F>``) are decoded byte by byte, or as UTF-16BE when
they carry two-byte codes.  Emails, phone numbers, date ranges and
years-of-experience phrases that appear outside any draw operator (link
annotations, form fields) are harvested too.  Fragments are deduplicated as
an ordered set; if they overflow the output cap, the most relevant ones
(contact details, résumé vocabulary) are kept in document order.

Every scan is linear in the document size: text objects and streams are
walked opener by opener instead of with unbounded lazy patterns.
"""

from __future__ import annotations

import logging
import re
import zlib

logger = logging.getLogger(__name__)

# Literal string with at most one level of unescaped nested parentheses
_LITERAL = r"\((?:\\.|[^\\()]|\((?:\\.|[^\\()])*\))*\)"
_HEX = r"(?<!<)<[0-9A-Fa-f\s]+>(?!>)"
_STRING_TOKEN = re.compile(rf"{_LITERAL}|{_HEX}", re.DOTALL)

_SHOW_TEXT = re.compile(
    rf"\[(?P<array>(?:{_LITERAL}|{_HEX}|[^\[\]()<>])*)\]\s*TJ"
    rf"|(?P<string>{_LITERAL}|{_HEX})\s*(?:Tj|'|\")",
    re.DOTALL,
)
_ARRAY_ITEM = re.compile(rf"{_LITERAL}|{_HEX}|-?\d*\.?\d+", re.DOTALL)
_TEXT_OBJECT_START = re.compile(r"\bBT\b")
_TEXT_OBJECT_END = re.compile(r"\bET\b")
_STREAM_START = re.compile(rb"stream\r?\n")
_STREAM_END = re.compile(rb"\r?\n?endstream")

_ESCAPE = re.compile(r"\\([nrtbf()\\]|[0-7]{1,3}|\r\n|\n|\r)")
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "(": "(",
    ")": ")",
    "\\": "\\",
}

_ALNUM = re.compile(r"[A-Za-z0-9]")
_SYNTAX_FRAGMENT = re.compile(
    r"\b(?:obj|endobj|endstream|startxref|xref|FlateDecode|ASCII85Decode"
    r"|BaseFont|FontDescriptor|FontFile\d?)\b|/(?:Type|Subtype|Filter|Length)\b"
)
_WHITESPACE = re.compile(r"\s+")

# TJ offsets at or below this (thousandths of an em) read as a word gap
_WORD_GAP = -200

# Contact and timeline details worth keeping even when no draw operator
# carries them (link annotations, form fields, metadata)
_HARVEST_PATTERNS = [
    re.compile(r"(?<![A-Za-z0-9._%+-])[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"),
    re.compile(r"(?<![\d.])(?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]\d{3}[-.\s]\d{4}(?!\d)"),
    re.compile(r"\b(?:19|20)\d{2}\s*-\s*(?:(?:19|20)\d{2}|Present|Current)\b"),
    re.compile(r"\b\d{1,2}\+?\s+years?\s+(?:of\s+)?experience\b", re.IGNORECASE),
]

_PHONE = re.compile(r"\d{3}[-.\s]?\d{3}[-.\s]?\d{4}")
_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")
_CAPITALIZED_WORD = re.compile(r"\b[A-Z][a-z]{2,}\b")
_RELEVANCE_KEYWORDS = (
    "experience", "education", "skills", "work", "university", "college",
    "developer", "engineer", "manager", "analyst", "consultant", "designer",
    "bachelor", "master", "degree", "certification", "diploma",
    "javascript", "python", "java", "react", "angular", "node", "sql",
    "project", "team", "lead", "senior", "junior", "intern",
)


def _unescape_literal(body: str) -> str:
    def replace(match: re.Match) -> str:
        token = match.group(1)
        if token in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[token]
        if token[0] in "\r\n":
            return ""  # line continuation
        code = int(token, 8)
        return chr(code) if 32 <= code <= 126 else " "

    return _ESCAPE.sub(replace, body)


def _decode_hex(body: str) -> str:
    digits = _WHITESPACE.sub("", body)
    if len(digits) % 2:
        digits += "0"
    data = bytes.fromhex(digits)
    if data[:2] == b"\xfe\xff":
        return data[2:].decode("utf-16-be", errors="replace")
    if len(data) >= 2 and len(data) % 2 == 0 and not any(data[0::2]):
        return data.decode("utf-16-be", errors="replace")
    return data.decode("latin-1")


def _decode_string(token: str) -> str:
    """Decode one ``( ... )`` or ``< ... >`` string token."""
    if token.startswith("("):
        return _unescape_literal(token[1:-1])
    return _decode_hex(token[1:-1])


def _decode_array(body: str) -> str:
    pieces: list[str] = []
    for item in _ARRAY_ITEM.finditer(body):
        token = item.group(0)
        if token[0] in "(<":
            pieces.append(_decode_string(token))
        elif float(token) <= _WORD_GAP:
            pieces.append(" ")
    return "".join(pieces)


def _delimited(
    content: str | bytes,
    opener: re.Pattern,
    closer: re.Pattern,
    limit: int,
) -> list[str | bytes]:
    """Bodies between each *opener* and the nearest following *closer*.

    Scanning stops at the first opener with no closer after it, so the walk
    is linear in ``len(content)`` however many unterminated openers follow.
    """
    bodies = []
    pos = 0
    while len(bodies) < limit:
        start = opener.search(content, pos)
        if start is None:
            break
        end = closer.search(content, start.end())
        if end is None:
            break
        bodies.append(content[start.end():end.start()])
        pos = end.end()
    return bodies


def _inflate_streams(data: bytes, max_streams: int) -> list[str]:
    """Decompress zlib-encoded stream bodies, skipping anything that fails."""
    inflated: list[str] = []
    for body in _delimited(data, _STREAM_START, _STREAM_END, max_streams):
        if not body[:1] == b"\x78":  # zlib header
            continue
        try:
            inflated.append(zlib.decompressobj().decompress(body).decode("latin-1"))
        except zlib.error:
            continue
    return inflated


def _is_text_fragment(fragment: str) -> bool:
    return (
        len(fragment) >= 2
        and _ALNUM.search(fragment) is not None
        and _SYNTAX_FRAGMENT.search(fragment) is None
    )


def _scrape(content: str, max_text_objects: int) -> list[str]:
    fragments: list[str] = []

    for match in _SHOW_TEXT.finditer(content):
        if match.group("array") is not None:
            fragments.append(_decode_array(match.group("array")))
        else:
            fragments.append(_decode_string(match.group("string")))

    for block in _delimited(content, _TEXT_OBJECT_START, _TEXT_OBJECT_END, max_text_objects):
        # Draw operators were collected above; pick up any remaining strings
        remainder = _SHOW_TEXT.sub(" ", block)
        for token in _STRING_TOKEN.finditer(remainder):
            fragments.append(_decode_string(token.group(0)))

    return fragments


def _harvest(content: str) -> list[str]:
    return [
        match.group(0)
        for pattern in _HARVEST_PATTERNS
        for match in pattern.finditer(content)
    ]


def _relevance(fragment: str) -> int:
    """Rank a fragment for keeping under the output cap.

    Longer fragments, contact details, résumé vocabulary, years and
    capitalised words all push a fragment up.
    """
    score = len(fragment)
    lowered = fragment.lower()
    if "@" in fragment:
        score += 300
    if _PHONE.search(fragment):
        score += 250
    score += 100 * sum(1 for keyword in _RELEVANCE_KEYWORDS if keyword in lowered)
    if _YEAR.search(fragment):
        score += 80
    score += 20 * len(_CAPITALIZED_WORD.findall(fragment))
    return score


def _fit(fragments: list[str], max_chars: int) -> list[str]:
    """Keep the most relevant fragments that fit in *max_chars*, in document order."""
    if sum(len(f) + 1 for f in fragments) - 1 <= max_chars:
        return fragments

    ranked = sorted(range(len(fragments)), key=lambda i: (-_relevance(fragments[i]), i))
    chosen: list[int] = []
    used = -1  # no separator before the first fragment
    for idx in ranked:
        size = len(fragments[idx]) + 1
        if used + size > max_chars:
            continue
        chosen.append(idx)
        used += size

    if not chosen:
        return [fragments[ranked[0]][:max_chars]]
    return [fragments[idx] for idx in sorted(chosen)]


def scrape_text_operators(
    document: bytes,
    max_chars: int = 15_000,
    max_streams: int = 50,
    max_text_objects: int = 500,
) -> str:
    """Recover literal text from raw PDF operators without a PDF parser.

    Fragments come from draw operators and text objects, plus emails, phone
    numbers, date ranges and years-of-experience phrases found anywhere in
    the document that the operators did not already yield.  When everything
    does not fit in *max_chars*, the most relevant fragments are kept.

    Args:
        document: Raw PDF bytes (any bytes are accepted).
        max_chars: Cap on the returned text length.
        max_streams: Maximum number of compressed streams to inflate.
        max_text_objects: Maximum number of BT/ET blocks to scan per source.

    Returns:
        Unique fragments in first-seen order joined by spaces (may be empty).
    """
    if not document:
        return ""

    sources = [document.decode("latin-1")]
    sources.extend(_inflate_streams(document, max_streams))

    unique: dict[str, None] = {}
    for content in sources:
        for fragment in _scrape(content, max_text_objects):
            fragment = _WHITESPACE.sub(" ", fragment).strip()
            if _is_text_fragment(fragment):
                unique.setdefault(fragment, None)

    recovered = " ".join(unique)
    harvested = 0
    for content in sources:
        for match in _harvest(content):
            match = _WHITESPACE.sub(" ", match).strip()
            if match not in recovered and match not in unique:
                unique[match] = None
                harvested += 1

    text = " ".join(_fit(list(unique), max_chars))
    logger.debug(
        "Manual scraper recovered %d unique fragments (%d harvested, %d chars) "
        "from %d sources",
        len(unique),
        harvested,
        len(text),
        len(sources),
    )
    return text

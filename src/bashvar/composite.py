"""Composite decoding for indexed (``-a``) and associative (``-A``) arrays."""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterator

from .model import VMapping, VSequence, VText
from .scalar import decode_scalar

logger = logging.getLogger(__name__)


_BARE_WORD_RE = re.compile(r"[^\s)]+")
_LEADING_DIGITS_RE = re.compile(r"\+?([0-9]+)", re.ASCII)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def strip_wrapper(text: str) -> str:
    """Remove one matching pair of surrounding single or double quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


def to_index(key: str) -> int:
    """Convert a subscript to an array index using its leading digits.

    Anything without leading digits, including a negative number, is 0.
    """
    m = _LEADING_DIGITS_RE.match(key)
    if m is None:
        return 0
    try:
        return int(m.group(1))
    except ValueError:
        # more digits than int() will convert; far beyond any usable index
        return sys.maxsize


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def _read_word(body: str, pos: int) -> tuple[str | None, int]:
    """Read one shell word starting at *pos*.

    Returns ``(word, end)``; *word* is ``None`` when nothing could be read.
    Quoted words that never close are read as bare words instead.
    """
    n = len(body)
    if pos >= n:
        return None, pos

    ch = body[pos]
    if ch == '"':
        i = pos + 1
        while i < n:
            c = body[i]
            if c == "\\":
                i += 2
                continue
            if c == '"':
                return body[pos:i + 1], i + 1
            i += 1
    elif ch == "'":
        close = body.find("'", pos + 1)
        if close >= 0:
            return body[pos:close + 1], close + 1

    m = _BARE_WORD_RE.match(body, pos)
    if m is None:
        return None, pos
    return m.group(), m.end()


def tokenize_pairs(body: str) -> Iterator[tuple[str, str]]:
    """Yield raw ``(key, value)`` tokens from ``[KEY]=VALUE [KEY]=VALUE ...``.

    Malformed pairs are skipped; scanning carries on after them.
    """
    pos = 0
    while True:
        start = body.find("[", pos)
        if start < 0:
            return

        close = body.find("]", start + 1)
        if close < 0:
            logger.debug("unterminated subscript at offset %d", start)
            return

        if body[close + 1:close + 2] != "=":
            logger.debug("subscript at offset %d is not followed by '='", start)
            pos = close + 1
            continue

        value, end = _read_word(body, close + 2)
        if value is None:
            logger.debug("subscript at offset %d has no value", start)
            pos = close + 1
            continue

        yield body[start + 1:close], value
        pos = end


# ---------------------------------------------------------------------------
# decode_composite
# ---------------------------------------------------------------------------

def decode_composite(
    raw: str,
    associative: bool,
    max_index: int | None = None,
) -> VSequence | VMapping:
    """Decode an array value tail such as ``'([0]="a" [1]="b")'``.

    Returns an empty container when the body is not wrapped in parens.
    Indexed elements above *max_index*, when given, are skipped.
    """
    result: VSequence | VMapping = VMapping() if associative else VSequence()

    text = strip_wrapper(raw.strip()).strip()
    if not (text.startswith("(") and text.endswith(")")):
        logger.debug("array value %r is not parenthesised", raw)
        return result

    body = text[1:-1].strip()
    for raw_key, raw_value in tokenize_pairs(body):
        key = decode_scalar(strip_wrapper(raw_key.strip()))
        value = VText(decode_scalar(raw_value))

        if associative:
            result.assign(key, value)
            continue

        index = to_index(key)
        if max_index is not None and index > max_index:
            logger.debug("array index %d exceeds limit %d, skipping", index, max_index)
            continue
        try:
            result.assign(index, value)
        except (MemoryError, OverflowError):
            logger.debug("array index %d cannot be allocated, skipping", index)

    return result

"""Scalar decoding: quoting styles, backslash escapes and integers."""

from __future__ import annotations

import logging
import re

from .model import VInteger, VText

logger = logging.getLogger(__name__)


_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_INTEGER_RE = re.compile(r"\s*([+-]?[0-9]+)\s*", re.ASCII)

ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "f": "\f",
    "b": "\b",
    "a": "\a",
    "\\": "\\",
    '"': '"',
}


def decode_escapes(text: str) -> str:
    r"""Replace each backslash escape in *text*.

    Known escapes map through ``ESCAPES``; any other ``\X`` becomes ``X``.
    A lone trailing backslash is kept as-is.
    """
    return _ESCAPE_RE.sub(lambda m: ESCAPES.get(m.group(1), m.group(1)), text)


def decode_scalar(raw: str) -> str:
    """Decode a single value token according to its quoting style.

    - ``$'...'``  → ANSI-C quoted, escapes decoded
    - ``"..."``   → double quoted, escapes decoded
    - ``'...'``   → single quoted, returned verbatim
    - otherwise   → unquoted, returned verbatim
    """
    raw = raw.strip()
    if len(raw) >= 3 and raw.startswith("$'") and raw.endswith("'"):
        return decode_escapes(raw[2:-1])
    if len(raw) >= 2 and raw[0] == raw[-1] == '"':
        return decode_escapes(raw[1:-1])
    if len(raw) >= 2 and raw[0] == raw[-1] == "'":
        return raw[1:-1]
    return raw


def parse_integer(text: str) -> int | None:
    """Parse base-10 *text* with optional sign; ``None`` if it is not one."""
    m = _INTEGER_RE.fullmatch(text)
    if m is None:
        return None
    try:
        return int(m.group(1))
    except ValueError:
        return None


def decode_integer(raw: str) -> VInteger | VText:
    """Decode an ``-i`` value, falling back to text when it is not numeric."""
    text = decode_scalar(raw)
    number = parse_integer(text)
    if number is None:
        logger.debug("integer value %r is not numeric, keeping text", text)
        return VText(text)
    return VInteger(number)

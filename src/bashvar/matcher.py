"""Line matcher: recognises ``declare`` lines and splits them apart."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)


# declare [-flags] NAME=VALUE-TAIL
_DECLARE_RE = re.compile(
    r"declare\s+(?:(-[A-Za-z-]+)\s+)?([A-Za-z_][A-Za-z0-9_]*)=(.*)",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class Declaration:
    flags: frozenset[str]
    name: str
    raw: str


def parse_flags(token: str | None) -> frozenset[str]:
    """Return the attribute letters of a flag token (``-aA`` → {a, A}).

    Dashes carry no meaning, so ``--`` yields the empty set.
    """
    if not token:
        return frozenset()
    return frozenset(ch for ch in token if ch != "-")


def is_function_declaration(flags: frozenset[str]) -> bool:
    """``f`` without ``a`` or ``i`` marks a function, which is never a variable."""
    return "f" in flags and not ("a" in flags or "i" in flags)


def match_declaration(line: str) -> Declaration | None:
    """Match one stripped line against the declaration grammar.

    Returns ``None`` for anything that is not a variable declaration,
    including function declarations.
    """
    m = _DECLARE_RE.fullmatch(line)
    if m is None:
        return None

    flags = parse_flags(m.group(1))
    if is_function_declaration(flags):
        logger.debug("skipping function declaration %r", m.group(2))
        return None

    return Declaration(flags=flags, name=m.group(2), raw=m.group(3))

"""Parse entry point: turns ``declare -p`` output into typed values."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import IO

from .composite import decode_composite
from .matcher import match_declaration
from .model import Value, VText
from .scalar import decode_integer, decode_scalar

logger = logging.getLogger(__name__)


class Strategy(Enum):
    Scalar = auto()
    Integer = auto()
    Indexed = auto()
    Associative = auto()


def strategy_for(flags: frozenset[str]) -> Strategy:
    """Select how a declaration's value is decoded from its flag set.

    ``A`` wins over ``a``, and either array flag wins over ``i``.
    """
    if "A" in flags:
        return Strategy.Associative
    if "a" in flags:
        return Strategy.Indexed
    if "i" in flags:
        return Strategy.Integer
    return Strategy.Scalar


def _decode(strategy: Strategy, raw: str, max_index: int | None) -> Value:
    if strategy is Strategy.Associative:
        return decode_composite(raw, associative=True, max_index=max_index)
    if strategy is Strategy.Indexed:
        return decode_composite(raw, associative=False, max_index=max_index)
    if strategy is Strategy.Integer:
        return decode_integer(raw)
    return VText(decode_scalar(raw))


def parse(
    text: str | bytes | None,
    *,
    max_index: int | None = None,
) -> dict[str, Value]:
    """Parse the output of ``declare -p`` into a name → Value mapping.

    Lines that are not variable declarations are skipped. Later
    declarations of a name replace earlier ones. Never raises for any
    string input; malformed values degrade to a fallback instead.

    Example::

        parse('declare -i COUNT="42"')   # → {"COUNT": VInteger(42)}
    """
    result: dict[str, Value] = {}
    if text is None:
        return result
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8", errors="replace")
    if not text.strip():
        return result

    for lineno, line in enumerate(text.split("\n"), 1):
        line = line.strip()
        if not line:
            continue

        decl = match_declaration(line)
        if decl is None:
            logger.debug("line %d is not a variable declaration", lineno)
            continue

        result[decl.name] = _decode(strategy_for(decl.flags), decl.raw, max_index)

    return result


def load(fp: IO, *, max_index: int | None = None) -> dict[str, Value]:
    """Read an open text or binary stream and parse its contents."""
    return parse(fp.read(), max_index=max_index)

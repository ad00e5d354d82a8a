"""Data model for parsed shell variables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# ---------------------------------------------------------------------------
# Absent — singleton for unassigned array slots
# ---------------------------------------------------------------------------

class _AbsentType:
    """Sentinel stored in a sequence slot that was never assigned."""

    _instance: _AbsentType | None = None

    def __new__(cls) -> _AbsentType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Absent"

    def __bool__(self) -> bool:
        return False


Absent = _AbsentType()


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class VText:
    value: str


@dataclass(slots=True)
class VInteger:
    value: int


@dataclass(slots=True)
class VSequence:
    """Indexed array. Slots never assigned hold ``Absent``."""

    items: list[VText | _AbsentType] = field(default_factory=list)

    def assign(self, index: int, value: VText) -> None:
        """Store *value* at *index*, padding any gap with ``Absent``."""
        if index >= len(self.items):
            self.items.extend([Absent] * (index + 1 - len(self.items)))
        self.items[index] = value


@dataclass(slots=True)
class VMapping:
    """Associative array."""

    entries: dict[str, VText] = field(default_factory=dict)

    def assign(self, key: str, value: VText) -> None:
        self.entries[key] = value


Value = Union[VText, VInteger, VSequence, VMapping]


# ---------------------------------------------------------------------------
# Conversion to plain Python data
# ---------------------------------------------------------------------------

def to_python(value: Value | _AbsentType | dict[str, Value]):
    """Convert a Value (or a whole result mapping) to built-in types.

    - VText → ``str``
    - VInteger → ``int``
    - VSequence → ``list`` with ``None`` for ``Absent`` slots
    - VMapping → ``dict``
    - dict of name → Value → dict of name → converted value
    """
    if isinstance(value, VText):
        return value.value
    if isinstance(value, VInteger):
        return value.value
    if isinstance(value, VSequence):
        return [None if item is Absent else item.value for item in value.items]
    if isinstance(value, VMapping):
        return {k: v.value for k, v in value.entries.items()}
    if isinstance(value, dict):
        return {k: to_python(v) for k, v in value.items()}
    if value is Absent:
        return None
    raise TypeError(f"not a bashvar value: {value!r}")

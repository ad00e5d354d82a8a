"""bashvar — parse ``declare -p`` output into typed Python values."""

__version__ = "0.1.0"

from .model import (
    Absent,
    Value,
    VInteger,
    VMapping,
    VSequence,
    VText,
    to_python,
)
from .parser import Strategy, load, parse

__all__ = [
    "parse",
    "load",
    "Strategy",
    "Absent",
    "Value",
    "VInteger",
    "VMapping",
    "VSequence",
    "VText",
    "to_python",
]

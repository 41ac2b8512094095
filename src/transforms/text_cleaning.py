"""Whitespace and control-character stripping rules.

Two character classes exist because free-text codes and free-text
names need different treatment: codes lose every whitespace and
control character, while names only lose line breaks so internal
spaces survive.
"""

from __future__ import annotations

import enum
import re

_SPACE_CHARACTERS = " \t"


class CharacterClass(enum.Enum):
    """Character classes removed by :func:`strip_characters`."""

    ALL_WHITESPACE = re.compile(r"[\s\x00-\x1f\x7f]+")
    LINE_BREAKS = re.compile(r"[\r\n]+")


def strip_characters(value: str | None, character_class: CharacterClass) -> str | None:
    """Remove every run of characters in ``character_class``.

    Args:
        value: Raw text, possibly ``None``.
        character_class: Class of characters to delete.

    Returns:
        Cleaned text, or ``None`` when input is ``None``.
    """
    if value is None:
        return None
    return character_class.value.sub("", value)


def trim_spaces(value: str | None) -> str | None:
    """Trim leading and trailing spaces and tabs, keeping line breaks."""
    if value is None:
        return None
    return value.strip(_SPACE_CHARACTERS)


def normalize_code(value: str | None) -> str | None:
    """Trim and upper-case a short code for table lookup."""
    trimmed = trim_spaces(value)
    return trimmed.upper() if trimmed is not None else None


def has_unwanted_spaces(value: str | None) -> bool:
    """Return whether ``value`` carries leading or trailing whitespace."""
    if value is None:
        return False
    return value != value.strip()

"""
Character classification helpers.

Only Han characters are candidates for correction; punctuation, digits
and Latin letters are never flagged or substituted.
"""

from __future__ import annotations

import re

# CJK Unified Ideographs (basic block) and Extension A
HANZI_PATTERN = re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff]+")


def is_hanzi(token: str | None) -> bool:
    """
    Check whether every character of a token is a Han character.

    Args:
        token: Token to check. None and "" are not eligible.

    Returns:
        True if the token is non-empty and entirely Han characters.

    Example:
        >>> is_hanzi("买")
        True
        >>> is_hanzi("，")
        False
    """
    if not token:
        return False
    return HANZI_PATTERN.fullmatch(token) is not None


def split_characters(text: str) -> list[str]:
    """Split text into single-character tokens."""
    return list(text)

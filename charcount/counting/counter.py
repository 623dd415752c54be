"""Whitespace-aware character counting.

A "character" is any code point that is not Unicode whitespace, so tabs,
newlines, runs of spaces and exotic separators (U+3000, U+00A0, ...) never
contribute to the count.
"""


def count_chars(text: str) -> int:
    """Return the number of non-whitespace characters in *text*."""
    return sum(1 for ch in text if not ch.isspace())


def count_whitespace(text: str) -> int:
    """Return the number of whitespace characters in *text*."""
    return sum(1 for ch in text if ch.isspace())

"""Tokenizer shared by the reference scanner and its tests.

A token is a maximal run of letters, digits, underscores, colons and hyphens.
Everything else (whitespace, quotes, angle brackets, parentheses, dots,
slashes, ``#``) separates tokens. Matching is case-sensitive and ASCII-only.
"""

import re
from collections.abc import Iterator

from sundrop.constants import TOKEN_SEPARATOR_PATTERN

TOKEN_SEPARATOR = re.compile(TOKEN_SEPARATOR_PATTERN)


def split_tokens(text: str) -> list[str]:
    """Split text on separator runs, keeping empty edge tokens.

    Args:
        text: Raw text

    Returns:
        The split result; leading or trailing separators produce empty strings.
    """
    return TOKEN_SEPARATOR.split(text)


def iter_tokens(text: str) -> Iterator[str]:
    """Yield the non-empty tokens of text from left to right.

    Args:
        text: Raw text

    Yields:
        Candidate identifiers.
    """
    for token in TOKEN_SEPARATOR.split(text):
        if token:
            yield token


def tokenize(text: str) -> list[str]:
    """Return the non-empty tokens of text.

    >>> tokenize('<use href="#icon-arrow"></use>')
    ['use', 'href', 'icon-arrow', 'use']
    """
    return list(iter_tokens(text))

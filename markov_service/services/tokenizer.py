"""
Tokenizer for the Markov chain engine.

Splits raw text into word runs and single-character punctuation tokens.
Also provides the inverse join.
"""
from __future__ import annotations

import unicodedata
from typing import Iterable, List


def is_punctuation(char: str) -> bool:
    """True for any character in a Unicode punctuation category (Pc, Pd, Ps, Pe, Pi, Pf, Po)."""
    return unicodedata.category(char).startswith("P")


def tokenize(
    text: str,
    case_sensitive: bool = False,
    preserve_whitespace: bool = True,
) -> List[str]:
    """
    Turn text into an ordered list of tokens.

    Args:
        text: Raw input text
        case_sensitive: If False, the whole text is lower-cased first
        preserve_whitespace: Emit whitespace other than the plain space as its
            own token before the final filter. Whitespace-only tokens are
            always dropped, so the result never contains whitespace.

    Returns:
        List of tokens (empty for empty input)
    """
    if not text:
        return []

    if not case_sensitive:
        text = text.lower()

    tokens: List[str] = []
    current: List[str] = []

    def flush():
        if current:
            tokens.append("".join(current))
            current.clear()

    for char in text:
        if char.isspace():
            flush()
            if preserve_whitespace and char != " ":
                tokens.append(char)
        elif is_punctuation(char):
            flush()
            tokens.append(char)
        else:
            current.append(char)

    flush()
    return [token for token in tokens if token.strip()]


def detokenize(tokens: Iterable[str]) -> str:
    """Join tokens with single spaces, without a space before punctuation."""
    parts: List[str] = []
    for i, token in enumerate(tokens):
        if i > 0 and not (token and is_punctuation(token[0])):
            parts.append(" ")
        parts.append(token)
    return "".join(parts)

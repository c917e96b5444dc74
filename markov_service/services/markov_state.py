"""
Chain state: an immutable, ordered tuple of tokens.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

KEY_SEPARATOR = " "


@dataclass(frozen=True, init=False)
class MarkovState:
    """
    Fixed-length token window used as a dictionary key.

    Equality and hashing follow the token tuple, so two states built from
    the same tokens in the same order are interchangeable.
    """

    tokens: Tuple[str, ...]

    def __init__(self, tokens: Iterable[str]):
        if tokens is None:
            raise TypeError("tokens must not be None")
        object.__setattr__(self, "tokens", tuple(tokens))

    @property
    def order(self) -> int:
        return len(self.tokens)

    def advance(self, token: str) -> "MarkovState":
        """Drop the first token and append `token`."""
        return MarkovState(self.tokens[1:] + (token,))

    @property
    def key(self) -> str:
        """Textual key used by the persisted format."""
        return KEY_SEPARATOR.join(self.tokens)

    @classmethod
    def from_key(cls, key: str) -> "MarkovState":
        return cls(key.split(KEY_SEPARATOR))

    def __str__(self) -> str:
        return self.key

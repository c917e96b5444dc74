"""
Per-state transition table: observed next tokens with occurrence counts.
"""
from __future__ import annotations

import random
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple


class StateTransitions:
    """
    Multiset of next tokens observed after one state.

    Keeps a running total so that `total_count == sum(counts)` after every
    insertion. Entries keep insertion order, which sampling relies on.
    """

    def __init__(self):
        self._transitions: Dict[str, int] = {}
        self._total_count = 0

    @property
    def transitions(self) -> Mapping[str, int]:
        """Read-only view of token -> count."""
        return MappingProxyType(self._transitions)

    @property
    def total_count(self) -> int:
        return self._total_count

    def __len__(self) -> int:
        return len(self._transitions)

    def __contains__(self, token: str) -> bool:
        return token in self._transitions

    def add_transition(self, next_token: Optional[str]):
        """Record one occurrence of `next_token`."""
        if next_token is None:
            return
        self._transitions[next_token] = self._transitions.get(next_token, 0) + 1
        self._total_count += 1

    def probability(self, next_token: str) -> float:
        if self._total_count == 0:
            return 0.0
        return self._transitions.get(next_token, 0) / self._total_count

    def probabilities(self) -> List[Tuple[str, float]]:
        """(token, probability) pairs in insertion order."""
        return [(token, self.probability(token)) for token in self._transitions]

    def select_random_transition(
        self,
        rng: random.Random,
        min_probability: float = 0.0,
    ) -> Optional[str]:
        """
        Weighted draw of the next token.

        Only tokens whose probability is at least `min_probability` take part;
        each is picked proportionally to its count.

        Args:
            rng: Random source (advanced by one draw)
            min_probability: Filter threshold in [0, 1]

        Returns:
            Selected token, or None if no transition passes the filter
        """
        if self._total_count == 0:
            return None

        valid = [
            (token, count)
            for token, count in self._transitions.items()
            if count / self._total_count >= min_probability
        ]
        if not valid:
            return None

        draw = rng.randrange(sum(count for _, count in valid))
        cumulative = 0
        for token, count in valid:
            cumulative += count
            if draw < cumulative:
                return token

        return valid[-1][0]

    def __repr__(self) -> str:
        return f"StateTransitions(total={self._total_count}, transitions={self._transitions!r})"

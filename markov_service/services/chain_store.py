"""
Chain store: state -> transition table plus the recorded starting states.
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .markov_state import MarkovState
from .transitions import StateTransitions


class ChainStore:
    """
    In-memory Markov chain.

    One StateTransitions per distinct state, and an append-only list of the
    states that opened a training sequence (duplicates kept, in order).
    """

    def __init__(self):
        self._chain: Dict[MarkovState, StateTransitions] = {}
        self._starting_states: List[MarkovState] = []

    def __len__(self) -> int:
        return len(self._chain)

    def __contains__(self, state: MarkovState) -> bool:
        return state in self._chain

    def __iter__(self) -> Iterator[MarkovState]:
        return iter(self._chain)

    def is_empty(self) -> bool:
        return not self._chain

    @property
    def starting_states(self) -> Tuple[MarkovState, ...]:
        return tuple(self._starting_states)

    def get(self, state: MarkovState) -> Optional[StateTransitions]:
        return self._chain.get(state)

    def items(self) -> Iterator[Tuple[MarkovState, StateTransitions]]:
        return iter(self._chain.items())

    def first_state(self) -> Optional[MarkovState]:
        """Earliest inserted state, or None when empty."""
        return next(iter(self._chain), None)

    def add_transition(self, state: MarkovState, next_token: str, count: int = 1):
        """Record `count` occurrences of state -> next_token."""
        transitions = self._chain.get(state)
        if transitions is None:
            transitions = StateTransitions()
            self._chain[state] = transitions
        for _ in range(count):
            transitions.add_transition(next_token)

    def add_starting_state(self, state: MarkovState):
        self._starting_states.append(state)

    def clear(self):
        self._chain.clear()
        self._starting_states.clear()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainStore):
            return NotImplemented
        if self._starting_states != other._starting_states:
            return False
        if self._chain.keys() != other._chain.keys():
            return False
        return all(
            dict(table.transitions) == dict(other._chain[state].transitions)
            for state, table in self._chain.items()
        )

    __hash__ = None  # type: ignore[assignment]

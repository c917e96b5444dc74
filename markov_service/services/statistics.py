"""
Read-only statistics over a trained chain.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List

from .chain_store import ChainStore


@dataclass
class StateInfo:
    """Summary of one state."""
    state: str
    transition_count: int
    next_tokens: int


@dataclass
class MarkovStatistics:
    """Aggregate figures for a chain."""
    state_count: int = 0
    starting_state_count: int = 0
    total_transitions: int = 0
    average_transitions_per_state: float = 0.0
    order: int = 0
    most_common_states: List[StateInfo] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


def compute_statistics(store: ChainStore, order: int, top_n: int = 10) -> MarkovStatistics:
    """
    Aggregate a chain.

    Args:
        store: Chain to summarize
        order: Engine order, reported as-is
        top_n: Number of busiest states to list
    """
    totals = list(store.items())
    total_transitions = sum(t.total_count for _, t in totals)

    ranked = sorted(totals, key=lambda item: item[1].total_count, reverse=True)
    return MarkovStatistics(
        state_count=len(store),
        starting_state_count=len(store.starting_states),
        total_transitions=total_transitions,
        average_transitions_per_state=total_transitions / len(totals) if totals else 0.0,
        order=order,
        most_common_states=[
            StateInfo(
                state=state.key,
                transition_count=transitions.total_count,
                next_tokens=len(transitions),
            )
            for state, transitions in ranked[:top_n]
        ],
    )

"""
Generation engine: weighted random walk over a trained chain.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from .chain_store import ChainStore
from .errors import NotTrainedError
from .markov_config import MarkovConfig
from .markov_state import MarkovState
from .tokenizer import detokenize, tokenize

logger = logging.getLogger(__name__)

# Chance of stopping right after a sentence-ending token
SENTENCE_STOP_PROBABILITY = 0.3


def select_initial_state(
    store: ChainStore,
    config: MarkovConfig,
    start_with: Optional[str] = None,
) -> Optional[MarkovState]:
    """
    Pick the state the walk starts from.

    Uses the first `order` tokens of `start_with` when they form a known
    state; otherwise a uniformly drawn starting state; otherwise the first
    state in the store. None only when the store is empty.
    """
    if start_with:
        start_tokens = tokenize(start_with, config.case_sensitive, config.preserve_whitespace)
        if len(start_tokens) >= config.order:
            state = MarkovState(start_tokens[: config.order])
            if state in store:
                return state
            logger.debug(f"[Markov] Seed '{state.key}' not in chain, using a random start")

    starting_states = store.starting_states
    if starting_states:
        return starting_states[config.rng.randrange(len(starting_states))]
    return store.first_state()


def generate_tokens(
    store: ChainStore,
    config: MarkovConfig,
    max_length: int = 100,
    start_with: Optional[str] = None,
) -> List[str]:
    """
    Walk the chain and return the produced tokens (seed tokens included).

    Args:
        store: Trained chain
        config: Engine configuration (randomness, enders, limits)
        max_length: Requested token bound, capped by config.max_generation_length
        start_with: Optional text whose first tokens select the initial state

    Raises:
        NotTrainedError: store is empty
    """
    if store.is_empty():
        raise NotTrainedError("The chain has not been trained")

    max_length = min(max_length, config.max_generation_length)

    state = select_initial_state(store, config, start_with)
    if state is None:
        return []

    output = list(state.tokens)
    enders = config.sentence_enders

    while len(output) < max_length:
        transitions = store.get(state)
        if transitions is None:
            break

        next_token = transitions.select_random_transition(
            config.rng, config.min_probability_threshold
        )
        if next_token is None:
            break

        output.append(next_token)
        state = state.advance(next_token)

        if next_token in enders and config.rng.random() < SENTENCE_STOP_PROBABILITY:
            break

    logger.debug(f"[Markov] Generated {len(output)} tokens")
    return output


def generate(
    store: ChainStore,
    config: MarkovConfig,
    max_length: int = 100,
    start_with: Optional[str] = None,
) -> str:
    """Generate one detokenized text."""
    return detokenize(generate_tokens(store, config, max_length, start_with))


def generate_many(
    store: ChainStore,
    config: MarkovConfig,
    count: int,
    max_length: int = 100,
    start_with: Optional[str] = None,
) -> Iterator[str]:
    """Lazily yield `count` independently generated texts."""
    for _ in range(count):
        yield generate(store, config, max_length, start_with)

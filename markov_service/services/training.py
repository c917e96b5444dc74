"""
Training pipeline: sliding-window state -> next-token observations.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .chain_store import ChainStore
from .errors import InvalidInputError
from .markov_config import MarkovConfig
from .markov_state import MarkovState
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def train_tokens(store: ChainStore, tokens: Sequence[str], order: int) -> int:
    """
    Feed an already tokenized sequence into the store.

    The first window of the sequence is recorded as a starting state.

    Returns:
        Number of transitions observed
    """
    observed = 0
    for i in range(len(tokens) - order):
        state = MarkovState(tokens[i : i + order])
        if i == 0:
            store.add_starting_state(state)
        store.add_transition(state, tokens[i + order])
        observed += 1
    return observed


def train(store: ChainStore, text: str, config: MarkovConfig) -> int:
    """
    Tokenize `text` and add its transitions to `store`.

    Raises:
        InvalidInputError: empty text, or fewer than order + 1 tokens
    """
    if not text:
        raise InvalidInputError("Training text must not be empty")

    tokens = tokenize(text, config.case_sensitive, config.preserve_whitespace)
    if len(tokens) < config.order + 1:
        raise InvalidInputError(
            f"Training text must contain at least {config.order + 1} tokens, got {len(tokens)}"
        )

    observed = train_tokens(store, tokens, config.order)
    logger.info(
        f"[Markov] Trained on {len(tokens)} tokens: {observed} transitions, "
        f"{len(store)} states total"
    )
    return observed


def train_batch(store: ChainStore, texts: Iterable[str], config: MarkovConfig) -> int:
    """
    Train on every non-blank text in order.

    Blank entries are skipped. An error on one text propagates; texts trained
    before it stay in the store.

    Returns:
        Number of texts trained
    """
    if texts is None:
        raise InvalidInputError("Batch of texts must not be None")

    trained = 0
    skipped = 0
    for text in texts:
        if not text or text.isspace():
            skipped += 1
            continue
        train(store, text, config)
        trained += 1

    if skipped:
        logger.debug(f"[Markov] Skipped {skipped} blank texts in batch")
    return trained

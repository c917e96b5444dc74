"""
Persisted chain format.

A JSON document with three keys:
    order            integer >= 1
    states           {"tok tok": {"next": count, ...}, ...}
    starting_states  ["tok tok", ...] (duplicates and order preserved)
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping

from .chain_store import ChainStore
from .errors import SchemaMismatchError
from .markov_state import MarkovState
from .text_source import PathLike, read_all_text, write_all_text

logger = logging.getLogger(__name__)


def dump_chain(store: ChainStore, order: int) -> Dict[str, Any]:
    """Serialize the store into the persisted document structure."""
    return {
        "order": order,
        "states": {
            state.key: dict(transitions.transitions)
            for state, transitions in store.items()
        },
        "starting_states": [state.key for state in store.starting_states],
    }


def _check_order(data: Any, expected_order: int):
    if not isinstance(data, Mapping):
        raise SchemaMismatchError("Persisted chain must be a JSON object")
    order = data.get("order")
    if isinstance(order, bool) or not isinstance(order, int):
        raise SchemaMismatchError(f"Persisted chain has invalid order: {order!r}")
    if order != expected_order:
        raise SchemaMismatchError(
            f"Persisted chain order ({order}) does not match configured order ({expected_order})"
        )


def _state_from_key(key: str, expected_order: int) -> MarkovState:
    state = MarkovState.from_key(key)
    if state.order != expected_order:
        raise SchemaMismatchError(
            f"State '{key}' has {state.order} tokens, expected {expected_order}"
        )
    return state


def load_chain(data: Mapping[str, Any], expected_order: int) -> ChainStore:
    """
    Rebuild a store from a persisted document.

    Each (token, count) pair is replayed as `count` insertions so the
    per-state totals are recomputed rather than trusted.

    Raises:
        SchemaMismatchError: order differs from `expected_order` or the
            document is malformed
    """
    _check_order(data, expected_order)

    states = data.get("states", {})
    starting_states = data.get("starting_states", [])
    if not isinstance(states, Mapping) or not isinstance(starting_states, list):
        raise SchemaMismatchError("Persisted chain has malformed 'states' or 'starting_states'")

    store = ChainStore()
    for key, transitions in states.items():
        if not isinstance(transitions, Mapping):
            raise SchemaMismatchError(f"Transitions for state '{key}' must be an object")
        state = _state_from_key(key, expected_order)
        for token, count in transitions.items():
            if isinstance(count, bool) or not isinstance(count, int) or count < 1:
                raise SchemaMismatchError(
                    f"Invalid count {count!r} for '{key}' -> '{token}'"
                )
            store.add_transition(state, token, count)

    for key in starting_states:
        if not isinstance(key, str):
            raise SchemaMismatchError(f"Starting state must be a string, got {key!r}")
        store.add_starting_state(_state_from_key(key, expected_order))

    return store


def peek_order(text: str, default: int) -> int:
    """Order declared by a persisted document, or `default` if it has no usable one."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return default
    order = data.get("order") if isinstance(data, Mapping) else None
    if isinstance(order, bool) or not isinstance(order, int) or order < 1:
        return default
    return order


def to_json(store: ChainStore, order: int, indent: int = 2) -> str:
    return json.dumps(dump_chain(store, order), ensure_ascii=False, indent=indent)


def from_json(text: str, expected_order: int) -> ChainStore:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaMismatchError(f"Persisted chain is not valid JSON: {e}") from e
    return load_chain(data, expected_order)


def save_to_file(store: ChainStore, order: int, path: PathLike):
    write_all_text(path, to_json(store, order))
    logger.info(f"[Markov] Saved {len(store)} states to {path}")


def load_from_file(path: PathLike, expected_order: int) -> ChainStore:
    store = from_json(read_all_text(path), expected_order)
    logger.info(f"[Markov] Loaded {len(store)} states from {path}")
    return store

"""
Markov chain text generator (CPU-only).
Fixed order per instance, weighted sampling with a probability floor,
soft stop on sentence enders. Training: from text or files; persistence: JSON.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from . import generation, persistence, training
from .chain_store import ChainStore
from .errors import InvalidConfigurationError, InvalidInputError
from .markov_config import MarkovConfig
from .markov_state import MarkovState
from .statistics import MarkovStatistics, compute_statistics
from .text_source import PathLike, read_all_text, read_all_text_async, write_all_text_async

logger = logging.getLogger(__name__)


class MarkovTextGenerator:
    """
    Markov chain engine.

    Owns one configuration and one chain store. Not thread-safe: callers
    sharing an instance across threads must serialize access themselves.
    """

    def __init__(self, config: Optional[MarkovConfig] = None):
        """
        Initialize an empty chain.

        Args:
            config: Engine configuration (defaults to MarkovConfig())

        Raises:
            InvalidConfigurationError: order < 1, max length < 1 or threshold outside [0, 1]
        """
        self._config = config or MarkovConfig()
        self._validate_config(self._config)
        self._store = ChainStore()

    @staticmethod
    def _validate_config(config: MarkovConfig):
        if isinstance(config.order, bool) or not isinstance(config.order, int) or config.order < 1:
            raise InvalidConfigurationError(f"Order must be at least 1, got {config.order!r}")
        if config.max_generation_length < 1:
            raise InvalidConfigurationError(
                f"max_generation_length must be at least 1, got {config.max_generation_length}"
            )
        if not 0.0 <= config.min_probability_threshold <= 1.0:
            raise InvalidConfigurationError(
                f"min_probability_threshold must be within [0, 1], got {config.min_probability_threshold}"
            )

    @property
    def config(self) -> MarkovConfig:
        return self._config

    @property
    def store(self) -> ChainStore:
        return self._store

    @property
    def order(self) -> int:
        return self._config.order

    @property
    def state_count(self) -> int:
        return len(self._store)

    @property
    def starting_state_count(self) -> int:
        return len(self._store.starting_states)

    # --- training ---
    def train(self, text: str) -> int:
        """Train on one text. Returns the number of transitions observed."""
        return training.train(self._store, text, self._config)

    def train_batch(self, texts: Iterable[str]) -> int:
        """Train on each non-blank text. Returns the number of texts trained."""
        return training.train_batch(self._store, texts, self._config)

    def train_from_file(self, path: PathLike) -> int:
        return self.train(read_all_text(path))

    async def train_from_file_async(self, path: PathLike) -> int:
        text = await read_all_text_async(path)
        return self.train(text)

    # --- generation ---
    def generate_text(self, max_length: int = 100, start_with: Optional[str] = None) -> str:
        """
        Generate text from the trained chain.

        Args:
            max_length: Maximum number of tokens (capped by the config)
            start_with: Optional text whose first `order` tokens pick the initial state

        Returns:
            Generated text ("" if no initial state is available)

        Raises:
            NotTrainedError: nothing has been trained or loaded
        """
        return generation.generate(self._store, self._config, max_length, start_with)

    def generate_texts(
        self,
        count: int,
        max_length: int = 100,
        start_with: Optional[str] = None,
    ) -> Iterator[str]:
        """Lazily generate `count` independent texts."""
        return generation.generate_many(self._store, self._config, count, max_length, start_with)

    def get_next_token_probabilities(self, state_tokens: Sequence[str]) -> List[Tuple[str, float]]:
        """
        Next-token distribution for a state, most likely first.

        Raises:
            InvalidInputError: state_tokens does not hold exactly `order` tokens
        """
        if state_tokens is None or len(state_tokens) != self.order:
            raise InvalidInputError(f"State must contain exactly {self.order} tokens")

        transitions = self._store.get(MarkovState(state_tokens))
        if transitions is None:
            return []
        return sorted(transitions.probabilities(), key=lambda p: p[1], reverse=True)

    def get_statistics(self, top_n: int = 10) -> MarkovStatistics:
        return compute_statistics(self._store, self.order, top_n)

    # --- persistence ---
    def to_dict(self) -> Dict[str, Any]:
        return persistence.dump_chain(self._store, self.order)

    def load_dict(self, data: Dict[str, Any]) -> "MarkovTextGenerator":
        """Replace the chain with a persisted one (order must match)."""
        self._store = persistence.load_chain(data, self.order)
        return self

    def to_json(self) -> str:
        return persistence.to_json(self._store, self.order)

    def load_json(self, text: str) -> "MarkovTextGenerator":
        self._store = persistence.from_json(text, self.order)
        return self

    def save_to_file(self, path: PathLike):
        persistence.save_to_file(self._store, self.order, path)

    def load_from_file(self, path: PathLike) -> "MarkovTextGenerator":
        self._store = persistence.load_from_file(path, self.order)
        return self

    async def save_to_file_async(self, path: PathLike):
        await write_all_text_async(path, self.to_json())
        logger.info(f"[Markov] Saved {self.state_count} states to {path}")

    async def load_from_file_async(self, path: PathLike) -> "MarkovTextGenerator":
        text = await read_all_text_async(path)
        self.load_json(text)
        logger.info(f"[Markov] Loaded {self.state_count} states from {path}")
        return self

    def clear(self):
        """Drop every trained state and starting state."""
        self._store.clear()


def create_markov_generator(text: str, order: int = 2) -> MarkovTextGenerator:
    """Build a generator with default settings and train it on `text`."""
    generator = MarkovTextGenerator(MarkovConfig(order=order))
    generator.train(text)
    return generator


def generate_markov_text(text: str, length: int = 100, order: int = 2) -> str:
    """Train on `text` and generate once."""
    return create_markov_generator(text, order).generate_text(length)


# Singleton instance
_MARKOV_GENERATOR: Optional[MarkovTextGenerator] = None


def get_markov_generator() -> MarkovTextGenerator:
    """Get or create the process-wide generator configured from settings."""
    global _MARKOV_GENERATOR
    if _MARKOV_GENERATOR is None:
        from markov_service.config import settings

        _MARKOV_GENERATOR = MarkovTextGenerator(MarkovConfig.from_settings(settings))
    return _MARKOV_GENERATOR

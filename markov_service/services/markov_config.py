"""
Engine configuration for the Markov chain text generator.
Immutable for the lifetime of an engine instance.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

DEFAULT_SENTENCE_ENDERS: Tuple[str, ...] = (".", "!", "?")


@dataclass(frozen=True)
class MarkovConfig:
    """
    Settings fixed at engine construction.

    Args:
        order: Number of preceding tokens forming a state
        case_sensitive: Keep original casing when tokenizing
        preserve_whitespace: Passed to the tokenizer; whitespace never survives tokenization
        sentence_enders: Tokens that may stop generation early
        max_generation_length: Hard cap on generated tokens
        min_probability_threshold: Transitions below this probability are never sampled
        rng: Randomness source shared by every draw of the engine
    """

    order: int = 2
    case_sensitive: bool = False
    preserve_whitespace: bool = True
    sentence_enders: Tuple[str, ...] = DEFAULT_SENTENCE_ENDERS
    max_generation_length: int = 1000
    min_probability_threshold: float = 0.0
    rng: random.Random = field(default_factory=random.Random, compare=False, repr=False)

    def __post_init__(self):
        # Accept any iterable of enders but store an immutable tuple
        object.__setattr__(self, "sentence_enders", tuple(self.sentence_enders))

    @classmethod
    def seeded(cls, seed: int, **kwargs: Any) -> "MarkovConfig":
        """Config with a deterministic random source."""
        return cls(rng=random.Random(seed), **kwargs)

    @classmethod
    def from_settings(cls, settings: Any, **overrides: Any) -> "MarkovConfig":
        """
        Build a config from process settings.

        Args:
            settings: Object exposing the MARKOV_* settings fields
            **overrides: Field values taking precedence over settings
        """
        seed: Optional[int] = getattr(settings, "MARKOV_SEED", None)
        values = {
            "order": settings.MARKOV_ORDER,
            "case_sensitive": settings.MARKOV_CASE_SENSITIVE,
            "preserve_whitespace": settings.MARKOV_PRESERVE_WHITESPACE,
            "sentence_enders": tuple(settings.MARKOV_SENTENCE_ENDERS),
            "max_generation_length": settings.MARKOV_MAX_GENERATION_LENGTH,
            "min_probability_threshold": settings.MARKOV_MIN_PROBABILITY,
            "rng": random.Random(seed) if seed is not None else random.Random(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

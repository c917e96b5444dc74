"""
Shared pytest fixtures for Markov chain tests.
"""
import random
from pathlib import Path
from typing import List

import pytest

from markov_service.services.markov import MarkovTextGenerator
from markov_service.services.markov_config import MarkovConfig


CAT_TEXT = "the cat sat. the cat ran."

# a -> b -> c -> a ... with no branching, so every walk is predictable
CYCLE_TEXT = "a b c a b c a b c"


class StubRandom(random.Random):
    """Random source returning scripted draws."""

    def __init__(self, draws=(), floats=()):
        super().__init__(0)
        self.draws: List[int] = list(draws)
        self.floats: List[float] = list(floats)
        self.randrange_calls: List[tuple] = []

    def randrange(self, *args, **kwargs):
        self.randrange_calls.append(args)
        return self.draws.pop(0) if self.draws else 0

    def random(self):
        return self.floats.pop(0) if self.floats else 0.99


@pytest.fixture
def sample_corpus() -> List[str]:
    """Sample text corpus for chain training."""
    return [
        "Hello friend, how are you today?",
        "The universe is full of amazing wonders.",
        "I love exploring new planets and stars!",
        "Would you like to play a game together?",
        "The stars are beautiful tonight.",
        "Friends always support each other.",
        "The universe is vast and the stars are bright.",
    ]


@pytest.fixture
def seeded_config() -> MarkovConfig:
    """Order-2 config with a fixed random seed."""
    return MarkovConfig.seeded(42)


@pytest.fixture
def cat_generator() -> MarkovTextGenerator:
    """Generator trained on the two-sentence cat text."""
    generator = MarkovTextGenerator(MarkovConfig.seeded(7))
    generator.train(CAT_TEXT)
    return generator


@pytest.fixture
def corpus_generator(sample_corpus) -> MarkovTextGenerator:
    """Generator trained on the sample corpus."""
    generator = MarkovTextGenerator(MarkovConfig.seeded(42))
    generator.train_batch(sample_corpus)
    return generator


@pytest.fixture
def corpus_file(tmp_path, sample_corpus) -> Path:
    """Temporary UTF-8 text file holding the sample corpus."""
    file_path = tmp_path / "corpus.txt"
    file_path.write_text("\n".join(sample_corpus), encoding="utf-8")
    return file_path


@pytest.fixture
def cycle_generator() -> MarkovTextGenerator:
    """Order-1 generator trained on a branch-free a -> b -> c cycle."""
    generator = MarkovTextGenerator(MarkovConfig.seeded(1, order=1))
    generator.train(CYCLE_TEXT)
    return generator


@pytest.fixture
def stub_random():
    """Factory for scripted random sources."""
    return StubRandom

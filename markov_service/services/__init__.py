"""
Markov chain engine services.
"""

from .errors import (
    InvalidConfigurationError,
    InvalidInputError,
    MarkovError,
    NotFoundError,
    NotTrainedError,
    SchemaMismatchError,
)
from .markov import (
    MarkovTextGenerator,
    create_markov_generator,
    generate_markov_text,
    get_markov_generator,
)
from .markov_config import MarkovConfig
from .markov_state import MarkovState
from .statistics import MarkovStatistics, StateInfo
from .transitions import StateTransitions

__all__ = [
    "MarkovError",
    "InvalidConfigurationError",
    "InvalidInputError",
    "NotTrainedError",
    "SchemaMismatchError",
    "NotFoundError",
    "MarkovConfig",
    "MarkovState",
    "StateTransitions",
    "MarkovStatistics",
    "StateInfo",
    "MarkovTextGenerator",
    "create_markov_generator",
    "generate_markov_text",
    "get_markov_generator",
]

"""
Typed failures raised by the Markov chain engine.
"""
from __future__ import annotations


class MarkovError(Exception):
    """Base class for all engine errors."""

    code = "MARKOV_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidConfigurationError(MarkovError, ValueError):
    """Engine configuration is unusable (e.g. order < 1)."""

    code = "INVALID_CONFIGURATION"


class InvalidInputError(MarkovError, ValueError):
    """Training text or query arguments are unusable."""

    code = "INVALID_INPUT"


class NotTrainedError(MarkovError):
    """Generation attempted on an empty chain."""

    code = "NOT_TRAINED"


class SchemaMismatchError(MarkovError):
    """Persisted chain does not match the engine (order) or is malformed."""

    code = "SCHEMA_MISMATCH"


class NotFoundError(MarkovError, FileNotFoundError):
    """Referenced file does not exist."""

    code = "NOT_FOUND"

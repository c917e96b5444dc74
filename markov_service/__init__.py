"""
Markov chain text service.
CPU-only token-transition model with an HTTP and command-line surface.
"""

__version__ = "1.0.0"
